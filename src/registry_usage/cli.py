"""
registry-usage CLI entry point.

Reports storage used by each image in a Google Artifact Registry
Docker repository.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from registry_usage import __version__
from registry_usage.core.types import (
    DEFAULT_ENDPOINT,
    DEFAULT_PAGE_SIZE,
    DEFAULT_TIMEOUT,
    build_config,
)
from registry_usage.exceptions import ConfigurationError, RegistryUsageError
from registry_usage.report import run_report
from registry_usage.utils.units import DEFAULT_UNIT, DisplayUnit

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="registry-usage",
        description="Report storage used per image in an Artifact Registry repository",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v info, -vv debug)",
    )

    repo_group = parser.add_argument_group("repository")
    repo_group.add_argument(
        "--project",
        type=str,
        default="",
        help="Project containing the Artifact Registry",
    )
    repo_group.add_argument(
        "--location",
        type=str,
        default="",
        help="Location of the Artifact Registry (e.g., us-central1)",
    )
    repo_group.add_argument(
        "--repository",
        "--repo",
        dest="repository",
        type=str,
        default="",
        help="Repository containing the Docker images",
    )

    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--format",
        type=str,
        default=DEFAULT_UNIT.value,
        help=(
            "Output unit: "
            + ", ".join(unit.value for unit in DisplayUnit)
            + f" (default: {DEFAULT_UNIT.value})"
        ),
    )

    filter_group = parser.add_argument_group("filters")
    filter_group.add_argument(
        "--include-images",
        type=str,
        default="",
        help="Only count images whose name matches this regex",
    )
    filter_group.add_argument(
        "--exclude-images",
        type=str,
        default="",
        help="Skip images whose name matches this regex",
    )
    filter_group.add_argument(
        "--include-tags",
        type=str,
        default="",
        help="Only count versions with at least one tag matching this regex",
    )
    filter_group.add_argument(
        "--exclude-tags",
        type=str,
        default="",
        help="Skip versions with any tag matching this regex",
    )

    api_group = parser.add_argument_group("api")
    api_group.add_argument(
        "--page-size",
        type=str,
        default=str(DEFAULT_PAGE_SIZE),
        help=f"Images requested per listing page (default: {DEFAULT_PAGE_SIZE})",
    )
    api_group.add_argument(
        "--timeout",
        type=str,
        default=str(DEFAULT_TIMEOUT),
        help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT})",
    )
    api_group.add_argument(
        "--endpoint",
        type=str,
        default=DEFAULT_ENDPOINT,
        help="Artifact Registry API base URL",
    )
    api_group.add_argument(
        "--access-token",
        type=str,
        default="",
        help="OAuth access token (default: Application Default Credentials)",
    )

    return parser


def parse_int_option(option: str, value: str) -> int:
    """Parse a numeric option, raising ConfigurationError on bad input."""
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{option} must be an integer: {value!r}") from e


def configure_logging(verbose: int) -> None:
    """Configure logging to stderr based on verbosity."""
    if verbose > 1:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    try:
        config = build_config(
            project=args.project,
            location=args.location,
            repository=args.repository,
            format=args.format,
            include_images=args.include_images,
            exclude_images=args.exclude_images,
            include_tags=args.include_tags,
            exclude_tags=args.exclude_tags,
            page_size=parse_int_option("--page-size", args.page_size),
            timeout=parse_int_option("--timeout", args.timeout),
            endpoint=args.endpoint,
            access_token=args.access_token,
        )
        logger.info("Reporting in %s", config.unit.suffix)

        asyncio.run(run_report(config))

    except RegistryUsageError as e:
        logger.error("%s", e)
        return 1

    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
