"""Google Artifact Registry async client implementation."""

import asyncio
import logging
from typing import Any, AsyncIterator, Dict, Optional

import aiohttp
import google.auth
import google.auth.exceptions
import google.auth.transport.requests

from ..exceptions import SourceError
from ..models import ImageRecord
from .types import DEFAULT_ENDPOINT, DEFAULT_PAGE_SIZE

logger = logging.getLogger(__name__)

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"


def parse_docker_image(item: Dict[str, Any]) -> ImageRecord:
    """Convert a DockerImage JSON resource into an ImageRecord.

    Args:
        item: One entry of the ``dockerImages`` list

    Returns:
        ImageRecord for the entry

    Raises:
        SourceError: If the entry is not an object, or uri, tags or
            imageSizeBytes is missing or malformed
    """
    if not isinstance(item, dict):
        raise SourceError(f"Docker image entry must be a JSON object: {item!r}")

    uri = item.get("uri")
    if not isinstance(uri, str):
        raise SourceError(f"Docker image entry without uri: {item!r}")

    # int64 fields are encoded as JSON strings
    raw_size = item.get("imageSizeBytes", "0")
    try:
        size_bytes = int(raw_size)
    except (TypeError, ValueError) as e:
        raise SourceError(f"Invalid imageSizeBytes for {uri}: {raw_size!r}") from e

    if size_bytes < 0:
        raise SourceError(f"Negative imageSizeBytes for {uri}: {size_bytes}")

    tags = item.get("tags") or []
    if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
        raise SourceError(f"Invalid tags for {uri}: {tags!r}")

    return ImageRecord(
        uri=uri,
        tags=frozenset(tags),
        size_bytes=size_bytes,
        name=item.get("name"),
        media_type=item.get("mediaType"),
    )


class ArtifactRegistryClient:
    """Async client for listing Docker images in an Artifact Registry repository."""

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: int = 30,
        access_token: Optional[str] = None,
        credentials: Optional[Any] = None,
        connector: Optional[aiohttp.TCPConnector] = None,
    ) -> None:
        """Initialize the Artifact Registry client.

        Args:
            endpoint: API base URL (e.g., https://artifactregistry.googleapis.com/v1)
            timeout: Request timeout in seconds
            access_token: Static OAuth token; skips credential lookup when set
            credentials: google-auth credentials; Application Default
                Credentials are loaded when neither this nor access_token is given
            connector: aiohttp connector for connection pooling
        """
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self.access_token = access_token
        self.credentials = credentials
        self.connector = connector
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "ArtifactRegistryClient":
        """Enter async context manager."""
        if not self.session:
            self.session = aiohttp.ClientSession(
                connector=self.connector,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        await self.close()

    async def close(self) -> None:
        """Close the client session."""
        if self.session and not self.session.closed:
            await self.session.close()

    async def get_access_token(self) -> str:
        """Return a bearer token for the Artifact Registry API.

        Returns:
            OAuth access token

        Raises:
            SourceError: If credentials cannot be found or refreshed
        """
        if self.access_token:
            return self.access_token

        loop = asyncio.get_event_loop()
        try:
            if self.credentials is None:
                self.credentials, _ = await loop.run_in_executor(
                    None, lambda: google.auth.default(scopes=[CLOUD_PLATFORM_SCOPE])
                )

            if not self.credentials.valid:
                logger.debug("Refreshing Google credentials")
                request = google.auth.transport.requests.Request()
                await loop.run_in_executor(None, self.credentials.refresh, request)

        except google.auth.exceptions.GoogleAuthError as e:
            raise SourceError(f"Failed to obtain Google credentials: {e}") from e

        return self.credentials.token

    async def _get_page(
        self, parent: str, page_size: int, page_token: Optional[str]
    ) -> Dict[str, Any]:
        """Fetch one page of the dockerImages listing."""
        url = f"{self.endpoint}/{parent}/dockerImages"
        params = {"pageSize": str(page_size)}
        if page_token:
            params["pageToken"] = page_token

        token = await self.get_access_token()
        headers = {"Authorization": f"Bearer {token}", "Accept": "application/json"}

        try:
            async with self.session.get(url, params=params, headers=headers) as resp:
                if resp.status >= 400:
                    body = await resp.text()
                    raise SourceError(
                        f"Failed to list docker images: HTTP {resp.status}: "
                        f"{body.strip()}"
                    )
                data = await resp.json()

        except aiohttp.ClientError as e:
            raise SourceError(f"Failed to list docker images: {e}") from e
        except asyncio.TimeoutError as e:
            raise SourceError(
                f"Timed out listing docker images after {self.timeout}s"
            ) from e
        except ValueError as e:
            raise SourceError(f"Invalid JSON in docker images response: {e}") from e

        if not isinstance(data, dict):
            raise SourceError("Docker images response must be a JSON object")

        return data

    async def list_docker_images(
        self, parent: str, page_size: int = DEFAULT_PAGE_SIZE
    ) -> AsyncIterator[ImageRecord]:
        """List every Docker image version in a repository.

        Pages are fetched lazily; the next page is only requested once the
        previous one has been consumed.

        Args:
            parent: Repository resource name
                (projects/{project}/locations/{location}/repositories/{repository})
            page_size: Images requested per page

        Yields:
            ImageRecord for each image version

        Raises:
            SourceError: If a request fails or a response is malformed
        """
        page_token: Optional[str] = None
        page = 0

        while True:
            data = await self._get_page(parent, page_size, page_token)
            items = data.get("dockerImages", [])
            if not isinstance(items, list):
                raise SourceError(
                    f"dockerImages must be a JSON array, got {type(items).__name__}"
                )
            page += 1
            logger.debug("Fetched page %d of %s: %d images", page, parent, len(items))

            for item in items:
                yield parse_docker_image(item)

            page_token = data.get("nextPageToken")
            if not page_token:
                break
