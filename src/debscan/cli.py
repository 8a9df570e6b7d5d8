"""Command-line interface for the scanner."""

import argparse
import json
import logging
import sys
from pathlib import Path

from debscan import __version__
from debscan.config import Config
from debscan.core.archive import ArchiveError
from debscan.core.record import build_record_from_file
from debscan.core.scan import scan_directory
from debscan.parsers import MalformedStanzaError
from debscan.reporting import results_to_json, write_json_output


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="debscan",
        description="Build package index records from a directory of .deb archives",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Scan command (default behavior)
    scan_parser = subparsers.add_parser("scan", help="Scan a directory of package archives")
    scan_parser.add_argument(
        "directory",
        nargs="?",
        type=Path,
        default=None,
        help="Directory holding the archives (default: $PACKAGES_DIR or cwd)",
    )
    scan_parser.add_argument(
        "-e",
        "--extension",
        default=None,
        help="File name suffix of package archives (default: .deb)",
    )
    scan_parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=None,
        help="Number of parallel scan workers",
    )
    scan_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write JSON results to this file instead of stdout",
    )
    scan_parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat malformed control stanzas as errors",
    )
    scan_parser.add_argument(
        "--validate-only",
        action="store_true",
        help="Only validate configuration, don't scan",
    )

    # Show command
    show_parser = subparsers.add_parser("show", help="Print the record of a single archive")
    show_parser.add_argument("file", type=Path, help="Package archive to read")
    show_parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat malformed control stanzas as errors",
    )

    return parser.parse_args(args)


def run_scan(config: Config) -> int:
    """Run a directory scan and emit the results.

    Args:
        config: Scan configuration.

    Returns:
        Exit code (0 for success).
    """
    logger = logging.getLogger(__name__)

    try:
        results = scan_directory(
            config.packages_dir,
            extension=config.extension,
            jobs=config.jobs,
            strict=config.strict,
        )

        if config.output:
            output_path = write_json_output(results, config.output, config.packages_dir)
            logger.info(f"Results written to {output_path}")
        else:
            print(results_to_json(results, config.packages_dir))

        stats = results.stats()
        logger.info(f"Archives: {stats['indexed']} indexed, {stats['failed']} failed")
        for failure in results.failures:
            logger.info(f"  - {failure.path}: {failure.kind}")

        if results.failures and not results.records:
            return 1
        return 0

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as e:
        logger.exception(f"Scan failed: {e}")
        return 1


def run_show(path: Path, strict: bool = False) -> int:
    """Print the record of a single archive.

    Args:
        path: Path to the archive.
        strict: Treat malformed control stanzas as errors.

    Returns:
        Exit code (0 for success).
    """
    logger = logging.getLogger(__name__)

    try:
        record = build_record_from_file(path, strict=strict)
    except (ArchiveError, MalformedStanzaError, OSError) as e:
        logger.error(f"Cannot read {path}: {e}")
        return 1

    print(json.dumps(record.to_dict(), indent=2))
    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parsed = parse_args(args)
    setup_logging(parsed.verbose)

    logger = logging.getLogger(__name__)

    if parsed.command == "show":
        return run_show(parsed.file, strict=parsed.strict)

    # Handle scan command or default (no subcommand)
    # Build configuration from args and environment
    config_kwargs = {}
    if getattr(parsed, "directory", None):
        config_kwargs["packages_dir"] = parsed.directory
    if getattr(parsed, "extension", None):
        config_kwargs["extension"] = parsed.extension
    if getattr(parsed, "jobs", None) is not None:
        config_kwargs["jobs"] = parsed.jobs
    if getattr(parsed, "output", None):
        config_kwargs["output"] = parsed.output
    if getattr(parsed, "strict", False):
        config_kwargs["strict"] = True

    try:
        config = Config(**config_kwargs)
    except Exception as e:
        logger.error(f"Failed to create configuration: {e}")
        return 1

    # Validate configuration
    errors = config.validate()
    if errors:
        logger.error("Configuration validation failed:")
        for error in errors:
            logger.error(f"  - {error}")
        return 1

    if getattr(parsed, "validate_only", False):
        logger.info("Configuration is valid")
        logger.info(f"  Directory: {config.packages_dir}")
        logger.info(f"  Extension: {config.extension}")
        logger.info(f"  Jobs: {config.jobs}")
        return 0

    logger.info(f"Starting scan of {config.packages_dir}")
    return run_scan(config)


if __name__ == "__main__":
    sys.exit(main())
