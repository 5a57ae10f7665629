"""Typed exceptions and error handling decorator."""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

from rich.console import Console
from rich.markup import escape

F = TypeVar("F", bound=Callable[..., Any])

err_console = Console(stderr=True, emoji=False, highlight=False)


class BuilderOpsError(Exception):
    """Base exception for builder-ops."""

    exit_code: int = 1


class ConfigurationError(BuilderOpsError):
    """The deployment document cannot be located or parsed."""

    exit_code = 6


class ValidationError(BuilderOpsError):
    """The deployment document holds an invalid value or combination."""

    exit_code = 7

    def __init__(self, message: str = "", field: str | None = None) -> None:
        self.field = field
        super().__init__(message or "Validation error")


class DocumentSchemaError(ValidationError):
    """A key has the wrong type or is not part of the document schema."""


class InvalidModeCombination(ValidationError):
    """Both ``standalone`` and ``members`` are set."""


class InvalidExpectedCount(ValidationError):
    """Automatic cluster with fewer than two expected nodes."""


class InvalidMembers(ValidationError):
    """An explicit cluster member entry is blank."""


class MissingCredentials(ValidationError):
    """Admin ``key_id`` or ``secret_key`` is empty."""


class MissingCertificates(ValidationError):
    """SSL is enabled but the certificate files cannot be located."""


class InvalidBucketName(ValidationError):
    """``bucket_name`` does not follow S3 bucket naming rules."""


class InvocationError(BuilderOpsError):
    """The instance lister could not complete its query."""


class MissingArgument(InvocationError):
    """No environment tag value was supplied."""

    exit_code = 2


class ProviderError(InvocationError):
    """The cloud provider rejected or failed the query.

    The message is the provider's own diagnostic text, unmodified.
    """

    exit_code = 3


def error_handler(func: F) -> F:
    """Decorator that catches BuilderOpsError and prints user-friendly messages."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except BuilderOpsError as exc:
            # Provider text may contain brackets; print it literally and unwrapped
            err_console.print(f"[bold red]Error:[/] {escape(str(exc))}", soft_wrap=True)
            raise SystemExit(exc.exit_code)
        except ValueError as exc:
            err_console.print(f"[bold red]Error:[/] {escape(str(exc))}", soft_wrap=True)
            raise SystemExit(1)

    return wrapper  # type: ignore[return-value]
