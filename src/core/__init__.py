"""Core scan orchestration and decision logic."""

from core.models import (
    FindingRecord,
    ScanReport,
    ScanSnapshot,
    ScanState,
    Severity,
    SeverityCounts,
    Verdict,
)
from core.config import GateConfig
from core.orchestrator import ScanGate
from core.poller import ScanPoller

__all__ = [
    "FindingRecord",
    "ScanReport",
    "ScanSnapshot",
    "ScanState",
    "Severity",
    "SeverityCounts",
    "Verdict",
    "GateConfig",
    "ScanGate",
    "ScanPoller",
]
