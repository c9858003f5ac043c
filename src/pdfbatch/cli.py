"""Command-line interface for pdfbatch."""

import argparse
import sys
from pathlib import Path

from pdfbatch import __version__
from pdfbatch.config import ServerConfig, load_server_config
from pdfbatch.constants import DEFAULT_SERVER_CONFIG, LOG_FILENAME
from pdfbatch.exceptions import ConfigError
from pdfbatch.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pdfb",
        description="Run a single-action PDF batch job packaged as a zip archive.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pdfb job.zip                                  Process a job with ./serverconfig.yaml
  pdfb -c /etc/pdfbatch/serverconfig.yaml job.zip
                                                Use another server config
  pdfb -o ./results -w /tmp/pdfbatch job.zip    Override output and work dirs
""",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="store_true",
        help="Show version information and exit",
    )

    parser.add_argument(
        "-c",
        "--server-config",
        type=Path,
        help=f"Path to the YAML server configuration (default: ./{DEFAULT_SERVER_CONFIG})",
    )

    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output directory for result archives (overrides config)",
    )

    parser.add_argument(
        "-w",
        "--work-dir",
        type=Path,
        help="Directory for job workspaces (overrides config)",
    )

    parser.add_argument(
        "archive",
        nargs="?",
        type=Path,
        help="Job archive (.zip) to process",
    )

    # Logging options
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for verbose, -vv for debug)",
    )

    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress all output except errors",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        help="Write logs to file (default: pdfbatch.log in the configured log_dir)",
    )

    return parser


def resolve_server_config(path: Path | None) -> ServerConfig:
    """Load the server config; a missing default file means built-in defaults."""
    if path is None:
        default = Path(DEFAULT_SERVER_CONFIG)
        if not default.exists():
            return ServerConfig()
        path = default
    return load_server_config(path)


def main(args: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    setup_logging(verbosity=parsed.verbose, quiet=parsed.quiet)

    if parsed.version:
        logger.info("pdfbatch %s", __version__)
        return 0

    if not parsed.archive:
        parser.print_usage(sys.stderr)
        logger.error("No input file given")
        return 1

    if not parsed.archive.is_file():
        logger.error("Input file does not exist: %s", parsed.archive)
        return 1

    try:
        server_config = resolve_server_config(parsed.server_config)
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        return 1
    except FileNotFoundError as e:
        logger.error("File not found: %s", e)
        return 1

    dirs = server_config.directories
    if parsed.output:
        dirs.out_dir = parsed.output
    if parsed.work_dir:
        dirs.work_dir = parsed.work_dir

    setup_logging(
        verbosity=parsed.verbose,
        quiet=parsed.quiet,
        log_file=parsed.log_file or dirs.log_dir / LOG_FILENAME,
    )

    from pdfbatch.processor import run_job

    try:
        return run_job(parsed.archive, server_config)
    except OSError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
