"""
Scan client interface for remote image scanning services.

Defines the contract the gate consumes to request scans, observe their
progress and enumerate findings, so that the ECR adapter can be swapped
for a fake in tests or another registry's scanner.
"""

from abc import ABC, abstractmethod
from typing import Optional

from core.models import FindingsPage, ScanSnapshot


class ScanClient(ABC):
    """
    Abstract base class for remote image scan services.

    Implementations translate service errors into TransientFetchException,
    except for the specific "scan not found" signal which
    get_scan_snapshot reports by returning None.
    """

    @abstractmethod
    def name(self) -> str:
        """
        Return the service name.

        Returns:
            Service identifier (e.g., "ecr")
        """
        pass

    @abstractmethod
    def start_scan(self, repository: str, tag: str) -> None:
        """
        Request a scan of an image.

        A response meaning the scan was already requested is treated
        as success.

        Args:
            repository: Repository name
            tag: Image tag

        Raises:
            TransientFetchException: If the request fails
        """
        pass

    @abstractmethod
    def get_scan_snapshot(self, repository: str, tag: str) -> Optional[ScanSnapshot]:
        """
        Fetch the current scan status and summary counts.

        Args:
            repository: Repository name
            tag: Image tag

        Returns:
            ScanSnapshot, or None if no scan exists for the image

        Raises:
            TransientFetchException: If the request fails for any other reason
        """
        pass

    @abstractmethod
    def list_findings_page(
        self,
        repository: str,
        tag: str,
        next_token: Optional[str],
        max_results: int,
    ) -> FindingsPage:
        """
        Fetch one page of findings for a completed scan.

        Args:
            repository: Repository name
            tag: Image tag
            next_token: Cursor from the previous page, None for the first page
            max_results: Maximum findings to return

        Returns:
            FindingsPage with the records and the next cursor

        Raises:
            TransientFetchException: If the request fails
        """
        pass


__all__ = [
    "ScanClient",
]
