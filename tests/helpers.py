"""Test helpers: a fake Artifact Registry API and sample image data."""

import asyncio
from typing import Any

from aiohttp import web

from registry_usage.exceptions import SourceError
from registry_usage.models import ImageRecord

DIGEST_A = "sha256:" + "a" * 64
DIGEST_B = "sha256:" + "b" * 64
DIGEST_C = "sha256:" + "c" * 64


def docker_image(uri: str, size: int, tags: list[str] | None = None) -> dict[str, Any]:
    """Build a DockerImage JSON resource as returned by the listing API."""
    item: dict[str, Any] = {
        "name": f"projects/p/locations/l/repositories/r/dockerImages/{uri}",
        "uri": uri,
        "imageSizeBytes": str(size),
        "mediaType": "application/vnd.docker.distribution.manifest.v2+json",
    }
    if tags is not None:
        item["tags"] = tags
    return item


class FakeArtifactRegistry:
    """In-process stand-in for the dockerImages listing endpoint.

    Pages are served in order; ``nextPageToken`` is the index of the next page.
    """

    def __init__(self, pages: list[list[dict[str, Any]]] | None = None) -> None:
        self.pages = pages if pages is not None else [[]]
        self.status = 200
        self.delay = 0.0
        self.raw_body: str | None = None
        self.requests: list[dict[str, Any]] = []
        self.endpoint = ""

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/v1/{parent:.+}/dockerImages", self.handle)
        return app

    async def handle(self, request: web.Request) -> web.Response:
        self.requests.append(
            {
                "parent": request.match_info["parent"],
                "query": dict(request.query),
                "authorization": request.headers.get("Authorization"),
            }
        )

        if self.delay:
            await asyncio.sleep(self.delay)

        if self.status != 200:
            return web.json_response(
                {"error": {"code": self.status, "message": "permission denied"}},
                status=self.status,
            )

        if self.raw_body is not None:
            return web.Response(text=self.raw_body, content_type="application/json")

        index = int(request.query.get("pageToken", "0"))
        body: dict[str, Any] = {}
        if self.pages[index]:
            body["dockerImages"] = self.pages[index]
        if index + 1 < len(self.pages):
            body["nextPageToken"] = str(index + 1)
        return web.json_response(body)


class StaticClient:
    """Record source yielding fixed records, optionally failing after them."""

    def __init__(self, records: list[ImageRecord], error: Exception | None = None):
        self.records = records
        self.error = error
        self.entered = False
        self.closed = False
        self.calls: list[tuple[str, int]] = []

    async def __aenter__(self) -> "StaticClient":
        self.entered = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.closed = True

    async def list_docker_images(self, parent: str, page_size: int = 1000):
        self.calls.append((parent, page_size))
        for record in self.records:
            yield record
        if self.error is not None:
            raise self.error


def failing_client(records: list[ImageRecord]) -> StaticClient:
    """Client whose stream breaks after yielding records."""
    return StaticClient(records, SourceError("Failed to list docker images: HTTP 503"))
