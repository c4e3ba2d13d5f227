"""Image name and tag filters.

Patterns use ``re.search`` semantics: a pattern matches anywhere in the
image name or tag unless it is anchored with ``^`` or ``$``.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional, Pattern

from ..exceptions import PatternCompileError


@dataclass(frozen=True)
class FilterSet:
    """Compiled include/exclude patterns. ``None`` means no constraint."""

    include_image: Optional[Pattern[str]] = None
    exclude_image: Optional[Pattern[str]] = None
    include_tag: Optional[Pattern[str]] = None
    exclude_tag: Optional[Pattern[str]] = None

    @property
    def is_empty(self) -> bool:
        """True if no pattern is set."""
        return not any(
            (self.include_image, self.exclude_image, self.include_tag, self.exclude_tag)
        )


def compile_pattern(option: str, pattern: str | None) -> Optional[Pattern[str]]:
    """Compile a single filter pattern.

    Args:
        option: Option name used in error messages (e.g., "--exclude-images")
        pattern: Regular expression; None or "" means unset

    Returns:
        Compiled pattern, or None if unset

    Raises:
        PatternCompileError: If the pattern is not a valid regular expression
    """
    if not pattern:
        return None

    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternCompileError(option, pattern, str(e)) from e


def compile_filters(
    include_images: str | None = None,
    exclude_images: str | None = None,
    include_tags: str | None = None,
    exclude_tags: str | None = None,
) -> FilterSet:
    """Compile all four filter patterns into a FilterSet.

    Raises:
        PatternCompileError: If any pattern is invalid
    """
    return FilterSet(
        include_image=compile_pattern("--include-images", include_images),
        exclude_image=compile_pattern("--exclude-images", exclude_images),
        include_tag=compile_pattern("--include-tags", include_tags),
        exclude_tag=compile_pattern("--exclude-tags", exclude_tags),
    )


def matches(pattern: Pattern[str], value: str) -> bool:
    """Check if pattern matches anywhere in value."""
    return pattern.search(value) is not None


def any_tag_matches(pattern: Pattern[str], tags: Iterable[str]) -> bool:
    """Check if pattern matches at least one tag."""
    return any(matches(pattern, tag) for tag in tags)


def is_image_included(name: str, filters: FilterSet) -> bool:
    """Check the image name against include_image."""
    return filters.include_image is None or matches(filters.include_image, name)


def is_image_excluded(name: str, filters: FilterSet) -> bool:
    """Check the image name against exclude_image."""
    return filters.exclude_image is not None and matches(filters.exclude_image, name)


def are_tags_included(tags: Iterable[str], filters: FilterSet) -> bool:
    """Check tags against include_tag. An untagged image never matches."""
    return filters.include_tag is None or any_tag_matches(filters.include_tag, tags)


def are_tags_excluded(tags: Iterable[str], filters: FilterSet) -> bool:
    """Check tags against exclude_tag."""
    return filters.exclude_tag is not None and any_tag_matches(
        filters.exclude_tag, tags
    )


def accept(name: str, tags: Iterable[str], filters: FilterSet) -> bool:
    """Decide whether an image version contributes to the totals.

    Checks run in order and stop at the first failure: include image,
    exclude image, include tag, exclude tag.

    Args:
        name: Image name with the digest stripped
        tags: Tags attached to this version (may be empty)
        filters: Compiled filters

    Returns:
        True if the version passes every configured filter
    """
    if not is_image_included(name, filters):
        return False

    if is_image_excluded(name, filters):
        return False

    tags = tuple(tags)

    if not are_tags_included(tags, filters):
        return False

    return not are_tags_excluded(tags, filters)
