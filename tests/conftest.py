"""Test configuration and fixtures."""

import os

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestServer

from registry_usage.core.types import build_config
from registry_usage.models import ImageRecord
from tests.helpers import DIGEST_A, DIGEST_B, DIGEST_C, FakeArtifactRegistry

INTEGRATION_ENV = ("GAR_PROJECT", "GAR_LOCATION", "GAR_REPOSITORY")


@pytest.fixture
def records():
    """Image versions across three images, listed in registry order."""
    return [
        ImageRecord(f"repo/app@{DIGEST_A}", frozenset({"v1", "latest"}), 3000),
        ImageRecord(f"repo/base@{DIGEST_A}", frozenset({"v1"}), 1000),
        ImageRecord(f"repo/app@{DIGEST_B}", frozenset({"v0"}), 2000),
        ImageRecord(f"repo/tools@{DIGEST_C}", frozenset(), 500),
        ImageRecord(f"repo/base@{DIGEST_B}", frozenset({"dev-1"}), 1500),
    ]


@pytest.fixture
def config():
    """Report configuration for a test repository."""
    return build_config("proj", "us-central1", "docker", format="bytes")


@pytest_asyncio.fixture
async def fake_registry():
    """Serve a FakeArtifactRegistry on a local port."""
    registry = FakeArtifactRegistry()
    server = TestServer(registry.app())
    await server.start_server()
    registry.endpoint = str(server.make_url("/v1"))
    yield registry
    await server.close()


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test requiring a real Artifact Registry",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless a repository is configured."""
    skip_integration = pytest.mark.skip(
        reason="Set GAR_PROJECT, GAR_LOCATION and GAR_REPOSITORY to run"
    )

    for item in items:
        if "integration" in item.keywords and not all(
            os.getenv(name) for name in INTEGRATION_ENV
        ):
            item.add_marker(skip_integration)
