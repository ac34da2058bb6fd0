"""
Amazon ECR image scanning client.

Implements the ScanClient interface on top of boto3, translating ECR
responses into domain models and ECR errors into the gate's exception
hierarchy.
"""

import logging
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from constants import (
    ECR_SCAN_ALREADY_REQUESTED,
    ECR_SCAN_NOT_FOUND,
    STATUS_POLL_PAGE_SIZE,
)
from core.exceptions import TransientFetchException
from core.models import FindingRecord, FindingsPage, ScanSnapshot
from core.scanner_interface import ScanClient

logger = logging.getLogger(__name__)


def build_ecr_client(region: Optional[str] = None, proxy: Optional[str] = None):
    """
    Create a boto3 ECR client.

    Args:
        region: AWS region (defaults to the environment/profile region)
        proxy: HTTP(S) proxy URL for all ECR requests

    Returns:
        botocore ECR client
    """
    config = None
    if proxy:
        logger.debug(f"Using proxy {proxy} for ECR requests")
        config = Config(proxies={"http": proxy, "https": proxy})
    session = boto3.Session(region_name=region)
    return session.client("ecr", config=config)


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


def _parse_basic_finding(finding: dict) -> FindingRecord:
    """Convert a basic-scanning finding into a FindingRecord."""
    attributes = {
        attribute.get("key"): attribute.get("value")
        for attribute in finding.get("attributes", [])
    }
    score = attributes.get("CVSS3_SCORE") or attributes.get("CVSS2_SCORE")
    return FindingRecord(
        vulnerability_id=finding.get("name", ""),
        severity=finding.get("severity", ""),
        package_name=attributes.get("package_name"),
        package_version=attributes.get("package_version"),
        score=float(score) if score else None,
        description=finding.get("description"),
        uri=finding.get("uri"),
    )


def _parse_enhanced_finding(finding: dict) -> FindingRecord:
    """Convert an enhanced-scanning (Amazon Inspector) finding into a FindingRecord."""
    details = finding.get("packageVulnerabilityDetails", {})
    packages = details.get("vulnerablePackages") or [{}]
    return FindingRecord(
        vulnerability_id=details.get("vulnerabilityId", ""),
        severity=finding.get("severity", ""),
        package_name=packages[0].get("name"),
        package_version=packages[0].get("version"),
        score=finding.get("score"),
        description=finding.get("description") or finding.get("title"),
        uri=details.get("sourceUrl"),
    )


class ECRScanClient(ScanClient):
    """
    ECR image scan client.

    Only ScanNotFoundException is read as "no scan yet"; every other
    error is raised as TransientFetchException without retrying.
    """

    def __init__(self, client=None, registry_id: Optional[str] = None):
        """
        Initialize ECR scan client.

        Args:
            client: botocore ECR client (built from the environment if omitted)
            registry_id: AWS account ID owning the registry (optional)
        """
        self.client = client or build_ecr_client()
        self.registry_id = registry_id

    def name(self) -> str:
        """Return service name."""
        return "ecr"

    def _request(self, repository: str, tag: str, **kwargs) -> dict:
        request = {"repositoryName": repository, "imageId": {"imageTag": tag}}
        if self.registry_id:
            request["registryId"] = self.registry_id
        request.update(kwargs)
        return request

    def start_scan(self, repository: str, tag: str) -> None:
        """Request a basic scan of an image."""
        try:
            response = self.client.start_image_scan(**self._request(repository, tag))
            status = response.get("imageScanStatus", {}).get("status")
            logger.debug(f"StartImageScan accepted for {repository}:{tag} (status: {status})")
        except ClientError as e:
            if _error_code(e) in ECR_SCAN_ALREADY_REQUESTED:
                logger.info(f"Scan of {repository}:{tag} was already requested ({_error_code(e)})")
                return
            raise TransientFetchException(self.name(), "StartImageScan", str(e))
        except BotoCoreError as e:
            raise TransientFetchException(self.name(), "StartImageScan", str(e))

    def _describe(self, operation: str, request: dict) -> Optional[dict]:
        try:
            return self.client.describe_image_scan_findings(**request)
        except ClientError as e:
            if _error_code(e) == ECR_SCAN_NOT_FOUND:
                return None
            raise TransientFetchException(self.name(), operation, str(e))
        except BotoCoreError as e:
            raise TransientFetchException(self.name(), operation, str(e))

    def get_scan_snapshot(self, repository: str, tag: str) -> Optional[ScanSnapshot]:
        """Fetch scan status and summary counts."""
        response = self._describe(
            "DescribeImageScanFindings",
            self._request(repository, tag, maxResults=STATUS_POLL_PAGE_SIZE),
        )
        if response is None:
            logger.debug(f"No scan found for {repository}:{tag}")
            return None

        status = response.get("imageScanStatus", {})
        findings = response.get("imageScanFindings", {})
        return ScanSnapshot(
            status=status.get("status", ""),
            description=status.get("description"),
            severity_counts=dict(findings.get("findingSeverityCounts", {})),
            image_digest=response.get("imageId", {}).get("imageDigest"),
            completed_at=findings.get("imageScanCompletedAt"),
        )

    def list_findings_page(
        self,
        repository: str,
        tag: str,
        next_token: Optional[str],
        max_results: int,
    ) -> FindingsPage:
        """Fetch one page of basic and enhanced findings."""
        kwargs = {"maxResults": max_results}
        if next_token:
            kwargs["nextToken"] = next_token
        response = self._describe(
            "DescribeImageScanFindings", self._request(repository, tag, **kwargs)
        )
        if response is None:
            raise TransientFetchException(
                self.name(),
                "DescribeImageScanFindings",
                f"scan for {repository}:{tag} disappeared while listing findings",
            )

        findings = response.get("imageScanFindings", {})
        records = [_parse_basic_finding(f) for f in findings.get("findings", [])]
        records.extend(_parse_enhanced_finding(f) for f in findings.get("enhancedFindings", []))
        return FindingsPage(findings=records, next_token=response.get("nextToken"))


__all__ = ["ECRScanClient", "build_ecr_client"]
