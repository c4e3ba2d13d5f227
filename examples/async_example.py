"""Example usage of the async Artifact Registry usage report."""

import asyncio
import logging
import sys

# Add parent directory to path
sys.path.insert(0, "src")

from registry_usage import (
    ArtifactRegistryClient,
    RegistryUsageError,
    aggregate,
    build_config,
    render_report,
    run_report,
    sort_totals,
)

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def main():
    """Print the usage report for one repository."""
    try:
        config = build_config(
            "my-project",
            "us-central1",
            "docker",
            format="mib",
            exclude_tags="^dev-",
        )
        totals = await run_report(config)
        logger.info(f"Found {len(totals)} images")

    except RegistryUsageError as e:
        logger.error(f"Report failed: {e}")


async def tagged_only():
    """Collect records first, then report only tagged versions."""
    config = build_config("my-project", "us-central1", "docker", include_tags=".")

    async with ArtifactRegistryClient(timeout=config.timeout) as client:
        records = [
            record async for record in client.list_docker_images(config.parent)
        ]

    logger.info(f"Fetched {len(records)} image versions")
    totals = sort_totals(aggregate(records, config.filters))
    for line in render_report(totals, config.unit):
        print(line)


if __name__ == "__main__":
    asyncio.run(main())
    asyncio.run(tagged_only())
