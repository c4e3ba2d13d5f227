"""Registry Usage - per-image storage report for Google Artifact Registry."""

__version__ = "0.1.0"

from .core.artifact_client import ArtifactRegistryClient
from .core.types import ReportConfig, build_config
from .exceptions import (
    ConfigurationError,
    PatternCompileError,
    RegistryUsageError,
    SourceError,
)
from .models import ImageRecord, ImageTotal
from .report import aggregate, render_report, run_report, sort_totals
from .utils.digest import image_key
from .utils.filters import FilterSet, accept, compile_filters
from .utils.units import DisplayUnit, format_size, parse_unit

__all__ = [
    "ArtifactRegistryClient",
    "ReportConfig",
    "build_config",
    "run_report",
    "aggregate",
    "sort_totals",
    "render_report",
    "image_key",
    "FilterSet",
    "compile_filters",
    "accept",
    "DisplayUnit",
    "format_size",
    "parse_unit",
    "ImageRecord",
    "ImageTotal",
    "RegistryUsageError",
    "ConfigurationError",
    "PatternCompileError",
    "SourceError",
]
