"""Integrations with external services."""

from integrations.ecr_client import ECRScanClient, build_ecr_client

__all__ = [
    "ECRScanClient",
    "build_ecr_client",
]
