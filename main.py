#!/usr/bin/env python3
"""
Relayhub Shipment Uploader - Main Entry Point.

Submits the customs declaration and invoice of every shipment folder
below one or more root directories to the Relayhub job-order API.

Usage:
    Command Line:
        python main.py exports/2025-07
        python main.py exports/2025-07 exports/2025-08 --start-index 120
        python main.py exports/2025-07 --dry-run --report

    Python:
        from main import run_upload
        summaries = run_upload(["exports/2025-07"], dry_run=True)

Version: 1.0.0
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import ConfigurationManager, get_config
from relayhub_uploader.utils.logger import setup_logger_from_config, get_logger, log_banner
from relayhub_uploader.utils.exceptions import OutputError, UploaderError
from relayhub_uploader.pipeline import Orchestrator, RunSummary
from relayhub_uploader.output_handler import ReportExporter


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Argument list; defaults to sys.argv[1:].

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Upload shipment declaration/invoice pairs to Relayhub",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Upload every shipment folder of a directory:
        python main.py exports/2025-07

    Build payloads without sending, and write an Excel report:
        python main.py exports/2025-07 --dry-run --report

The bearer token is read from RELAYHUB_TOKEN (environment or .env).
        """
    )

    parser.add_argument(
        "roots",
        nargs="*",
        help="Directories holding one folder per shipment "
             "(default: input.default_directory, else the working directory)"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    # Numbering
    parser.add_argument(
        "--start-index",
        type=int,
        default=None,
        help="First object ID of this run (default: id_allocator.start_index)"
    )

    parser.add_argument(
        "--pad-width",
        type=int,
        default=None,
        help="Zero-pad width of object IDs (default: id_allocator.pad_width)"
    )

    # Document toggles
    invoice_group = parser.add_mutually_exclusive_group()
    invoice_group.add_argument(
        "--enable-invoice",
        dest="invoice_enabled",
        action="store_true",
        default=None,
        help="Send invoice documents"
    )
    invoice_group.add_argument(
        "--disable-invoice",
        dest="invoice_enabled",
        action="store_false",
        help="Do not send invoice documents"
    )

    declaration_group = parser.add_mutually_exclusive_group()
    declaration_group.add_argument(
        "--enable-declaration",
        dest="declaration_enabled",
        action="store_true",
        default=None,
        help="Send declaration documents"
    )
    declaration_group.add_argument(
        "--disable-declaration",
        dest="declaration_enabled",
        action="store_false",
        help="Do not send declaration documents"
    )

    # Processing options
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Build payloads and allocate IDs without sending anything"
    )

    parser.add_argument(
        "--report",
        nargs="?",
        const="",
        default=None,
        metavar="PATH",
        help="Write an Excel run report (optionally to PATH)"
    )

    # Logging options
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Initialize configuration and logging.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Initialized configuration manager.
    """
    config = ConfigurationManager(args.config)

    logger = setup_logger_from_config()

    if args.debug:
        logger.setLevel(logging.DEBUG)
        for handler in logger.handlers:
            handler.setLevel(logging.DEBUG)
    elif args.quiet:
        logger.setLevel(logging.WARNING)

    log_banner(logger, "RELAYHUB SHIPMENT UPLOADER")
    logger.info(f"Version: {config.get('project.version', '1.0.0')}")

    return config


def resolve_roots(roots: Optional[List[str]]) -> List[str]:
    """
    Determine the root directories to scan.

    Explicit roots win; otherwise input.default_directory is used, and
    when that is empty the current working directory.

    Args:
        roots: Roots given on the command line.

    Returns:
        Non-empty list of root directories.
    """
    if roots:
        return list(roots)

    default_directory = get_config("input.default_directory")
    if default_directory:
        return [default_directory]
    return [os.getcwd()]


def write_report(
    summaries: List[RunSummary],
    report_path: Optional[str] = None
) -> Optional[str]:
    """
    Write the Excel run report.

    The uploads have already happened at this point, so a failed report
    is logged and does not fail the run.

    Args:
        summaries: Run summaries to export.
        report_path: Target file, or an existing directory (or a path
            ending in a separator) that receives the default filename.
            None or "" uses the configured output directory.

    Returns:
        Path of the written report, or None if it could not be written.
    """
    logger = get_logger(__name__)
    exporter = ReportExporter()

    try:
        if not report_path:
            return exporter.export(summaries)

        target = Path(report_path)
        if target.is_dir() or report_path.endswith((os.sep, "/")):
            return exporter.export(summaries, output_dir=str(target))
        return exporter.export(
            summaries,
            filename=target.name,
            output_dir=str(target.parent)
        )
    except OutputError as e:
        logger.error(f"Run report not written: {e}")
        return None


def run_upload(
    roots: List[str],
    config_path: Optional[str] = None,
    dry_run: bool = False,
    start_index: Optional[int] = None,
    pad_width: Optional[int] = None,
    invoice_enabled: Optional[bool] = None,
    declaration_enabled: Optional[bool] = None,
    report_path: Optional[str] = None
) -> List[RunSummary]:
    """
    Run the upload pipeline over one or more root directories.

    One ID allocator is shared by all roots, so reference numbers stay
    unique across the whole invocation.

    Args:
        roots: Directories holding one folder per shipment.
        config_path: Optional custom configuration file path.
        dry_run: Build payloads without sending them.
        start_index: Override config for the first object ID.
        pad_width: Override config for the ID pad width.
        invoice_enabled: Override config for invoice documents.
        declaration_enabled: Override config for declaration documents.
        report_path: Write an Excel report; "" uses the default filename.

    Returns:
        One RunSummary per root, in the order given.

    Raises:
        ConfigurationError: If a live run has no bearer token.
        PayloadError: If the additional data template is invalid.
    """
    logger = get_logger(__name__)
    ConfigurationManager(config_path)

    orchestrator = Orchestrator.from_config(
        dry_run=dry_run,
        start_index=start_index,
        pad_width=pad_width,
        invoice_enabled=invoice_enabled,
        declaration_enabled=declaration_enabled
    )

    if dry_run:
        logger.info("Dry run: nothing will be sent")

    summaries = []
    try:
        for root in roots:
            logger.info(f"Reading folders from: {root}")
            summaries.append(orchestrator.run(root))
    finally:
        if orchestrator.client is not None:
            orchestrator.client.close()

    if report_path is not None or get_config("output.report.enabled", False):
        write_report(summaries, report_path)

    return summaries


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Folder failures do not change the exit code; they are reported in
    the log and the optional run report.

    Returns:
        Exit code (0 when the run completed, non-zero for startup errors).
    """
    try:
        args = parse_arguments(argv)

        initialize_system(args)
        logger = get_logger(__name__)

        summaries = run_upload(
            roots=resolve_roots(args.roots),
            config_path=args.config,
            dry_run=args.dry_run,
            start_index=args.start_index,
            pad_width=args.pad_width,
            invoice_enabled=args.invoice_enabled,
            declaration_enabled=args.declaration_enabled,
            report_path=args.report
        )

        log_banner(
            logger,
            f"Upload complete. Processed "
            f"{sum(s.total_folders for s in summaries)} folders "
            f"in {len(summaries)} root(s)."
        )

        return 0

    except UploaderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
