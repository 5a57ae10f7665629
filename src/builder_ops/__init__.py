"""Operator utilities for the Builder Minio artifact store and EC2 fleet."""

__version__ = "0.1.0"
