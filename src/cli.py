"""
Command-line interface for ECR Scan Gate.

Scans an ECR image (or reuses an existing scan), prints the findings per
severity and exits non-zero when unignored vulnerabilities reach the fail
threshold. Every flag falls back to the matching GitHub Actions INPUT_*
environment variable so the tool runs unchanged as an action step.
"""

import argparse
import logging
import os
import re
import signal
import sys
from pathlib import Path
from typing import Optional

from botocore.exceptions import BotoCoreError

from common import OUTPUT_CONFIGS
from constants import (
    DEFAULT_FAIL_THRESHOLD,
    DEFAULT_MISSED_IGNORE_POLICY,
    DEFAULT_TIMEOUT_SECONDS,
    EXIT_CANCELLED,
    EXIT_CONFIGURATION_ERROR,
    EXIT_FAILURE,
    EXIT_OK,
    POLL_INTERVAL_SECONDS,
)
from core.cancellation import CancellationToken
from core.config import GateConfig
from core.exceptions import (
    ConfigurationException,
    ScanCancelledException,
    ScanGateException,
    ThresholdExceededException,
)
from core.models import ScanReport
from core.orchestrator import ScanGate
from core.threshold import enforce_verdict
from integrations.ecr_client import ECRScanClient, build_ecr_client
from outputs.actions import write_action_outputs, write_step_summary
from outputs.summary import log_report
from utils.logging_helpers import log_error_section, log_info_header

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Read a GitHub Actions input, treating empty strings as unset."""
    value = os.environ.get(name)
    return value if value else default


def parse_output_types(value: Optional[str]) -> set[str]:
    """
    Parse the comma-separated report types.

    Args:
        value: e.g. "json,html"; None or empty means no report files

    Returns:
        Set of report types

    Raises:
        ValueError: If any type is unknown
    """
    if not value:
        return set()

    requested = {item.strip() for item in value.split(",") if item.strip()}
    invalid = sorted(requested - OUTPUT_CONFIGS.keys())
    if invalid:
        raise ValueError(
            f"Invalid output type(s): {', '.join(invalid)}. "
            f"Valid types: {', '.join(OUTPUT_CONFIGS)}"
        )
    return requested


def parse_args(args: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="ECR Scan Gate - fail builds on container image vulnerabilities",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    image_group = parser.add_argument_group("image")
    gate_group = parser.add_argument_group("gate options")
    aws_group = parser.add_argument_group("AWS options")
    io_group = parser.add_argument_group("output")

    image_group.add_argument("--repository", default=_env("INPUT_REPOSITORY"), help="ECR repository, e.g. myorg/myimage.")
    image_group.add_argument("--tag", default=_env("INPUT_TAG"), help="Image tag to scan.")

    gate_group.add_argument(
        "--fail-threshold",
        default=_env("INPUT_FAIL_THRESHOLD", DEFAULT_FAIL_THRESHOLD),
        help="Fail on vulnerabilities at or above this severity: critical, high, medium, low, informational.",
    )
    gate_group.add_argument(
        "--ignore-list",
        action="append",
        default=None,
        help="Vulnerability IDs to ignore (comma, space or newline separated; may be repeated).",
    )
    gate_group.add_argument(
        "--missed-ignore-policy",
        default=_env("INPUT_ERROR_MISSED_IGNORES", DEFAULT_MISSED_IGNORE_POLICY),
        help="What to do when an ignored ID is not found: error or warn.",
    )
    gate_group.add_argument("--poll-interval", type=float, default=POLL_INTERVAL_SECONDS, help="Seconds between scan status polls.")
    gate_group.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT_SECONDS, help="Give up waiting after this many seconds (0 waits forever).")

    aws_group.add_argument("--registry-id", default=_env("INPUT_REGISTRY_ID"), help="AWS account ID owning the registry.")
    aws_group.add_argument("--region", default=_env("AWS_REGION"), help="AWS region.")
    aws_group.add_argument(
        "--proxy",
        default=_env("INPUT_PROXY") or _env("HTTPS_PROXY") or _env("https_proxy"),
        help="HTTP(S) proxy for ECR requests.",
    )

    io_group.add_argument("-o", "--output", type=str, default=_env("INPUT_OUTPUT"), help="Report types (comma-separated): json, html, xlsx.")
    io_group.add_argument("--output-dir", type=Path, default=Path("."), help="Directory for report files.")
    io_group.add_argument("--findings-details", action="store_true", help="Always fetch the full finding list.")

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging.")

    parsed = parser.parse_args(args)
    if parsed.ignore_list is None:
        parsed.ignore_list = [_env("INPUT_IGNORE_LIST", "")]
    return parsed


def build_config(args: argparse.Namespace, output_types: set[str]) -> GateConfig:
    """
    Build and validate the gate configuration.

    Raises:
        ConfigurationException: If any value is invalid
    """
    needs_findings = args.findings_details or any(
        OUTPUT_CONFIGS[t]["generator"].requires_findings for t in output_types
    )
    return GateConfig(
        repository=args.repository,
        tag=args.tag,
        fail_threshold=args.fail_threshold,
        ignore_list=args.ignore_list,
        missed_ignore_policy=args.missed_ignore_policy,
        registry_id=args.registry_id,
        region=args.region,
        proxy=args.proxy,
        poll_interval=args.poll_interval,
        timeout=args.timeout,
        fetch_findings=needs_findings,
    ).validate()


def report_filename(report: ScanReport, suffix: str) -> str:
    """
    Build a filesystem-safe report file name.

    Examples:
        >>> report_filename(report, "scan.json")  # myorg/app:1.0
        'myorg_app_1.0_scan.json'
    """
    stem = re.sub(r"[^A-Za-z0-9._-]+", "_", f"{report.repository}_{report.tag}")
    return f"{stem}_{suffix}"


def write_reports(report: ScanReport, output_types: set[str], output_dir: Path) -> list[Path]:
    """Generate the requested report files."""
    written = []
    if not output_types:
        return written

    output_dir.mkdir(parents=True, exist_ok=True)
    for output_type in sorted(output_types):
        config = OUTPUT_CONFIGS[output_type]
        path = output_dir / report_filename(report, config["file_suffix"])
        config["generator"]().generate(report, path)
        written.append(path)
    return written


def _install_signal_handlers(token: CancellationToken) -> dict:
    """Route SIGTERM/SIGINT to the token; returns the previous handlers."""
    def handler(signum, frame):
        token.cancel(f"received {signal.Signals(signum).name}")

    return {sig: signal.signal(sig, handler) for sig in (signal.SIGTERM, signal.SIGINT)}


def _restore_signal_handlers(previous: dict) -> None:
    for sig, handler in previous.items():
        signal.signal(sig, handler)


def run(args: argparse.Namespace, client_factory=None) -> int:
    """
    Run the gate and return the process exit code.

    Args:
        args: Parsed command-line arguments
        client_factory: Callable building a ScanClient from a GateConfig
            (defaults to a boto3-backed ECRScanClient)
    """
    try:
        output_types = parse_output_types(args.output)
        config = build_config(args, output_types)
    except (ValueError, ConfigurationException) as e:
        log_error_section("Invalid configuration.", [str(e)], logger=logger)
        return EXIT_CONFIGURATION_ERROR

    log_info_header(f"ECR Scan Gate - {config.repository}:{config.tag}", logger=logger)

    try:
        if client_factory:
            client = client_factory(config)
        else:
            client = ECRScanClient(
                build_ecr_client(region=config.region, proxy=config.proxy),
                registry_id=config.registry_id,
            )
    except BotoCoreError as e:
        log_error_section("Could not create the ECR client.", [str(e)], logger=logger)
        return EXIT_CONFIGURATION_ERROR

    token = CancellationToken(timeout=config.timeout)
    previous_handlers = _install_signal_handlers(token)

    try:
        report = ScanGate(client, config, cancel_token=token).run()
        log_report(report)
        write_action_outputs(report)
        write_step_summary(report)
        for path in write_reports(report, output_types, args.output_dir):
            logger.info(f"Report written: {path}")
        enforce_verdict(report.verdict)
    except ThresholdExceededException as e:
        logger.error(str(e))
        return EXIT_FAILURE
    except ScanCancelledException as e:
        log_error_section("Stopped waiting for the image scan.", [str(e)], logger=logger)
        return EXIT_CANCELLED
    except ScanGateException as e:
        log_error_section("Image scan gate failed.", [str(e)], logger=logger)
        return EXIT_FAILURE
    finally:
        _restore_signal_handlers(previous_handlers)

    return EXIT_OK


def main():
    """Main entry point."""
    args = parse_args()
    setup_logging(args.verbose)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
