"""
Tests for the ECR scan client, using botocore's Stubber for wire-level responses.
"""

from datetime import datetime, timezone
from unittest.mock import Mock

import botocore.session
import pytest
from botocore.exceptions import EndpointConnectionError
from botocore.stub import Stubber

from core.exceptions import TransientFetchException
from core.models import Severity
from integrations.ecr_client import ECRScanClient

IMAGE_ID = {"imageTag": "1.0"}


@pytest.fixture
def ecr():
    """Real botocore ECR client with dummy credentials."""
    session = botocore.session.get_session()
    return session.create_client(
        "ecr",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def stubber(ecr):
    """Activated stubber for the ECR client."""
    with Stubber(ecr) as stub:
        yield stub
        stub.assert_no_pending_responses()


@pytest.fixture
def client(ecr):
    """ECR scan client wrapping the stubbed botocore client."""
    return ECRScanClient(ecr)


def describe_params(**extra):
    params = {"repositoryName": "myorg/app", "imageId": IMAGE_ID}
    params.update(extra)
    return params


class TestGetScanSnapshot:
    """Tests for status/summary polling."""

    def test_complete_snapshot(self, client, stubber):
        """Test a completed scan is converted to a snapshot."""
        completed = datetime(2024, 5, 1, tzinfo=timezone.utc)
        stubber.add_response(
            "describe_image_scan_findings",
            {
                "repositoryName": "myorg/app",
                "imageId": {"imageDigest": "sha256:abc123", "imageTag": "1.0"},
                "imageScanStatus": {"status": "COMPLETE", "description": "The scan was completed successfully."},
                "imageScanFindings": {
                    "imageScanCompletedAt": completed,
                    "findingSeverityCounts": {"HIGH": 1, "MEDIUM": 2},
                },
            },
            describe_params(maxResults=1),
        )

        snapshot = client.get_scan_snapshot("myorg/app", "1.0")

        assert snapshot.status == "COMPLETE"
        assert snapshot.severity_counts == {"HIGH": 1, "MEDIUM": 2}
        assert snapshot.image_digest == "sha256:abc123"
        assert snapshot.completed_at == completed

    def test_in_progress_without_counts(self, client, stubber):
        """Test a running scan has empty summary counts."""
        stubber.add_response(
            "describe_image_scan_findings",
            {"imageScanStatus": {"status": "IN_PROGRESS"}},
            describe_params(maxResults=1),
        )

        snapshot = client.get_scan_snapshot("myorg/app", "1.0")

        assert snapshot.status == "IN_PROGRESS"
        assert snapshot.severity_counts == {}

    def test_scan_not_found_returns_none(self, client, stubber):
        """Test only ScanNotFoundException means "no scan yet"."""
        stubber.add_client_error(
            "describe_image_scan_findings",
            service_error_code="ScanNotFoundException",
            service_message="Image scan does not exist",
            expected_params=describe_params(maxResults=1),
        )

        assert client.get_scan_snapshot("myorg/app", "1.0") is None

    @pytest.mark.parametrize("code", ["RepositoryNotFoundException", "ImageNotFoundException", "ThrottlingException"])
    def test_other_errors_raise(self, client, stubber, code):
        """Test every other error is fatal, not treated as "not found"."""
        stubber.add_client_error(
            "describe_image_scan_findings",
            service_error_code=code,
            expected_params=describe_params(maxResults=1),
        )

        with pytest.raises(TransientFetchException) as exc:
            client.get_scan_snapshot("myorg/app", "1.0")

        assert exc.value.operation == "DescribeImageScanFindings"
        assert code in str(exc.value)

    def test_registry_id_is_sent(self, ecr, stubber):
        """Test the registry ID is included when configured."""
        stubber.add_response(
            "describe_image_scan_findings",
            {"imageScanStatus": {"status": "COMPLETE"}},
            describe_params(maxResults=1, registryId="123456789012"),
        )

        ECRScanClient(ecr, registry_id="123456789012").get_scan_snapshot("myorg/app", "1.0")

    def test_transport_error_raises(self):
        """Test connection errors are translated."""
        ecr = Mock()
        ecr.describe_image_scan_findings.side_effect = EndpointConnectionError(endpoint_url="https://ecr")

        with pytest.raises(TransientFetchException):
            ECRScanClient(ecr).get_scan_snapshot("myorg/app", "1.0")


class TestStartScan:
    """Tests for scan requests."""

    def test_start_scan(self, client, stubber):
        """Test a scan request is sent for the tag."""
        stubber.add_response(
            "start_image_scan",
            {"repositoryName": "myorg/app", "imageId": IMAGE_ID, "imageScanStatus": {"status": "IN_PROGRESS"}},
            {"repositoryName": "myorg/app", "imageId": IMAGE_ID},
        )

        client.start_scan("myorg/app", "1.0")

    def test_already_requested_is_success(self, client, stubber):
        """Test a quota error for an already-scanned image is not fatal."""
        stubber.add_client_error(
            "start_image_scan",
            service_error_code="LimitExceededException",
            expected_params={"repositoryName": "myorg/app", "imageId": IMAGE_ID},
        )

        client.start_scan("myorg/app", "1.0")

    def test_unsupported_image_raises(self, client, stubber):
        """Test other start errors are fatal."""
        stubber.add_client_error(
            "start_image_scan",
            service_error_code="UnsupportedImageTypeException",
            expected_params={"repositoryName": "myorg/app", "imageId": IMAGE_ID},
        )

        with pytest.raises(TransientFetchException, match="StartImageScan"):
            client.start_scan("myorg/app", "1.0")


class TestListFindingsPage:
    """Tests for finding pagination."""

    def test_basic_findings(self, client, stubber):
        """Test basic scan findings are converted with their attributes."""
        stubber.add_response(
            "describe_image_scan_findings",
            {
                "imageScanStatus": {"status": "COMPLETE"},
                "imageScanFindings": {
                    "findings": [
                        {
                            "name": "CVE-2023-0001",
                            "description": "Buffer overflow",
                            "uri": "https://security-tracker.debian.org/tracker/CVE-2023-0001",
                            "severity": "HIGH",
                            "attributes": [
                                {"key": "package_name", "value": "openssl"},
                                {"key": "package_version", "value": "3.0.1"},
                                {"key": "CVSS2_SCORE", "value": "7.5"},
                            ],
                        },
                    ],
                },
                "nextToken": "page-2",
            },
            describe_params(maxResults=1000),
        )

        page = client.list_findings_page("myorg/app", "1.0", None, 1000)

        assert page.next_token == "page-2"
        assert len(page.findings) == 1
        finding = page.findings[0]
        assert finding.vulnerability_id == "CVE-2023-0001"
        assert finding.level is Severity.HIGH
        assert finding.package_name == "openssl"
        assert finding.package_version == "3.0.1"
        assert finding.score == 7.5

    def test_enhanced_findings_and_cursor(self, client, stubber):
        """Test Inspector findings are converted and the cursor is forwarded."""
        stubber.add_response(
            "describe_image_scan_findings",
            {
                "imageScanStatus": {"status": "ACTIVE"},
                "imageScanFindings": {
                    "enhancedFindings": [
                        {
                            "description": "Prototype pollution",
                            "severity": "UNTRIAGED",
                            "score": 5.3,
                            "packageVulnerabilityDetails": {
                                "vulnerabilityId": "GHSA-xxxx-yyyy",
                                "sourceUrl": "https://github.com/advisories/GHSA-xxxx-yyyy",
                                "vulnerablePackages": [{"name": "lodash", "version": "4.17.20"}],
                            },
                        },
                    ],
                },
            },
            describe_params(maxResults=1000, nextToken="page-2"),
        )

        page = client.list_findings_page("myorg/app", "1.0", "page-2", 1000)

        assert page.next_token is None
        finding = page.findings[0]
        assert finding.vulnerability_id == "GHSA-xxxx-yyyy"
        assert finding.level is Severity.INDETERMINATE
        assert finding.package_name == "lodash"
        assert finding.score == 5.3

    def test_scan_missing_while_listing(self, client, stubber):
        """Test a scan that vanishes mid-listing is an error."""
        stubber.add_client_error(
            "describe_image_scan_findings",
            service_error_code="ScanNotFoundException",
            expected_params=describe_params(maxResults=1000),
        )

        with pytest.raises(TransientFetchException, match="disappeared"):
            client.list_findings_page("myorg/app", "1.0", None, 1000)
