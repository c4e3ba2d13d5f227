"""Data models for image listings and usage totals."""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional


@dataclass(frozen=True)
class ImageRecord:
    """A single image version as reported by the registry listing."""

    uri: str
    tags: FrozenSet[str] = field(default_factory=frozenset)
    size_bytes: int = 0
    name: Optional[str] = None  # Full registry resource name
    media_type: Optional[str] = None


@dataclass(frozen=True)
class ImageTotal:
    """Accumulated size of all accepted versions of one image."""

    name: str
    size_bytes: int
