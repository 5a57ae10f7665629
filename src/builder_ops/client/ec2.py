"""EC2 instance lister."""

from __future__ import annotations

from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from builder_ops.client.errors import MissingArgument, ProviderError
from builder_ops.config.constants import DEFAULT_REGION, ENVIRONMENT_TAG, RUNNING_STATE


def build_filters(environment: str) -> list[dict[str, Any]]:
    """Filters selecting running instances tagged with *environment*."""
    return [
        {"Name": f"tag:{ENVIRONMENT_TAG}", "Values": [environment]},
        {"Name": "instance-state-name", "Values": [RUNNING_STATE]},
    ]


class InstanceLister:
    """Lists running instances of one environment in a single region.

    Region and credential profile are explicit; an EC2 client can be
    injected, otherwise one is created from a boto3 session on first use.
    """

    def __init__(
        self,
        client: Any | None = None,
        *,
        region: str = DEFAULT_REGION,
        profile: str | None = None,
    ) -> None:
        self.region = region
        self.profile = profile
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            try:
                session = boto3.session.Session(
                    profile_name=self.profile, region_name=self.region,
                )
                self._client = session.client("ec2")
            except BotoCoreError as exc:
                raise ProviderError(str(exc)) from exc
        return self._client

    def list_instances(self, environment: str | None) -> dict[str, Any]:
        """Issue one DescribeInstances query and return the response body."""
        if environment is None or not environment.strip():
            raise MissingArgument(
                "An environment tag value is required, e.g. 'list-instances prod'"
            )
        try:
            response: dict[str, Any] = self.client.describe_instances(
                Filters=build_filters(environment),
            )
        except (ClientError, BotoCoreError) as exc:
            raise ProviderError(str(exc)) from exc
        response.pop("ResponseMetadata", None)
        return response


def summarize(response: dict[str, Any]) -> list[list[str]]:
    """Flatten reservations into table rows."""
    rows = []
    for reservation in response.get("Reservations", []):
        for inst in reservation.get("Instances", []):
            tags = {t.get("Key"): t.get("Value") for t in inst.get("Tags", [])}
            rows.append([
                inst.get("InstanceId", ""),
                tags.get("Name", ""),
                inst.get("InstanceType", ""),
                inst.get("State", {}).get("Name", ""),
                inst.get("PrivateIpAddress", ""),
                inst.get("PublicIpAddress", ""),
            ])
    return rows
