"""Configuration types for a usage report run."""

from dataclasses import dataclass, field
from typing import Optional

from ..exceptions import ConfigurationError
from ..utils.filters import FilterSet, compile_filters
from ..utils.units import DEFAULT_UNIT, DisplayUnit, parse_unit

DEFAULT_ENDPOINT = "https://artifactregistry.googleapis.com/v1"
DEFAULT_PAGE_SIZE = 1000
DEFAULT_TIMEOUT = 30


@dataclass(frozen=True)
class ReportConfig:
    """Everything a report run needs, passed explicitly to the pipeline."""

    project: str
    location: str
    repository: str
    unit: DisplayUnit = DEFAULT_UNIT
    filters: FilterSet = field(default_factory=FilterSet)
    page_size: int = DEFAULT_PAGE_SIZE
    timeout: int = DEFAULT_TIMEOUT
    endpoint: str = DEFAULT_ENDPOINT
    access_token: Optional[str] = None

    def __post_init__(self) -> None:
        missing = [
            option
            for option, value in (
                ("--project", self.project),
                ("--location", self.location),
                ("--repository", self.repository),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(f"{', '.join(missing)} must be set")

        if self.page_size <= 0:
            raise ConfigurationError(f"page size must be positive: {self.page_size}")

        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive: {self.timeout}")

    @property
    def parent(self) -> str:
        """Full Artifact Registry repository resource name."""
        return (
            f"projects/{self.project}/locations/{self.location}"
            f"/repositories/{self.repository}"
        )


def build_config(
    project: str | None,
    location: str | None,
    repository: str | None,
    format: str = DEFAULT_UNIT.value,
    include_images: str | None = None,
    exclude_images: str | None = None,
    include_tags: str | None = None,
    exclude_tags: str | None = None,
    page_size: int = DEFAULT_PAGE_SIZE,
    timeout: int = DEFAULT_TIMEOUT,
    endpoint: str = DEFAULT_ENDPOINT,
    access_token: str | None = None,
) -> ReportConfig:
    """Validate raw option values and build a ReportConfig.

    Args:
        project: GCP project ID
        location: Repository location (e.g., "us-central1")
        repository: Repository ID
        format: Display unit name
        include_images: Regex an image name must match
        exclude_images: Regex an image name must not match
        include_tags: Regex at least one tag must match
        exclude_tags: Regex no tag may match
        page_size: Images requested per listing page
        timeout: Request timeout in seconds
        endpoint: Artifact Registry API base URL
        access_token: Static OAuth token; Application Default Credentials
            are used when omitted

    Returns:
        Validated, immutable configuration

    Raises:
        ConfigurationError: If identifiers are missing or values are invalid
        PatternCompileError: If a filter is not a valid regular expression
    """
    return ReportConfig(
        project=project or "",
        location=location or "",
        repository=repository or "",
        unit=parse_unit(format),
        filters=compile_filters(
            include_images=include_images,
            exclude_images=exclude_images,
            include_tags=include_tags,
            exclude_tags=exclude_tags,
        ),
        page_size=page_size,
        timeout=timeout,
        endpoint=endpoint.rstrip("/"),
        access_token=access_token or None,
    )
