"""Async functional usage report operations."""

import logging
import sys
from collections.abc import AsyncIterable, Iterable
from typing import Optional, TextIO

from .core.artifact_client import ArtifactRegistryClient
from .core.types import ReportConfig
from .models import ImageRecord, ImageTotal
from .utils.digest import image_key
from .utils.filters import FilterSet, accept
from .utils.units import DEFAULT_UNIT, DisplayUnit, format_size

logger = logging.getLogger(__name__)

# Minimum width of the size column
SIZE_COLUMN_WIDTH = 12
TOTAL_LABEL = "."


def accumulate(totals: dict[str, int], record: ImageRecord, filters: FilterSet) -> bool:
    """Add a record's size to its image total if the filters accept it.

    Args:
        totals: Running totals keyed by image name, updated in place
        record: Image version to account for
        filters: Compiled filters

    Returns:
        True if the record was counted
    """
    name = image_key(record.uri)
    if not accept(name, record.tags, filters):
        return False

    totals[name] = totals.get(name, 0) + record.size_bytes
    return True


def aggregate(
    records: Iterable[ImageRecord], filters: FilterSet = FilterSet()
) -> dict[str, int]:
    """Sum accepted record sizes per image name, in first-seen order."""
    totals: dict[str, int] = {}
    for record in records:
        accumulate(totals, record, filters)
    return totals


async def aggregate_stream(
    records: AsyncIterable[ImageRecord], filters: FilterSet = FilterSet()
) -> dict[str, int]:
    """Async variant of aggregate; consumes the stream one record at a time."""
    totals: dict[str, int] = {}
    seen = accepted = 0

    async for record in records:
        seen += 1
        if accumulate(totals, record, filters):
            accepted += 1

    logger.debug("Accepted %d of %d image versions", accepted, seen)
    return totals


def sort_totals(totals: dict[str, int]) -> list[ImageTotal]:
    """Order image totals largest first.

    Equal sizes keep their first-seen order since ``sorted`` is stable.
    """
    return sorted(
        (ImageTotal(name=name, size_bytes=size) for name, size in totals.items()),
        key=lambda total: total.size_bytes,
        reverse=True,
    )


def grand_total(totals: Iterable[ImageTotal]) -> int:
    """Exact byte sum of all image totals."""
    return sum(total.size_bytes for total in totals)


def format_line(size_bytes: int, name: str, unit: DisplayUnit = DEFAULT_UNIT) -> str:
    """Format one report line: padded size, a tab, then the image name."""
    return f"{format_size(size_bytes, unit):<{SIZE_COLUMN_WIDTH}}\t{name}"


def render_report(
    totals: list[ImageTotal], unit: DisplayUnit = DEFAULT_UNIT
) -> list[str]:
    """Render sorted totals followed by the grand total line."""
    lines = [format_line(total.size_bytes, total.name, unit) for total in totals]
    lines.append(format_line(grand_total(totals), TOTAL_LABEL, unit))
    return lines


async def run_report(
    config: ReportConfig,
    client: Optional[ArtifactRegistryClient] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> list[ImageTotal]:
    """저장소의 이미지별 스토리지 사용량을 집계하여 출력합니다.

    전체 이미지 목록을 모두 읽은 뒤에만 보고서를 출력합니다.
    목록 조회 중 오류가 발생하면 아무것도 출력하지 않습니다.

    Args:
        config: 보고서 설정 (저장소 식별자, 필터, 표시 단위)
        client: 사용할 ArtifactRegistryClient (기본값: config로 새로 생성)
        out: 보고서 출력 스트림 (기본값: sys.stdout)
        err: 진단 메시지 출력 스트림 (기본값: sys.stderr)

    Returns:
        list[ImageTotal]: 크기 내림차순으로 정렬된 이미지별 합계

    Raises:
        SourceError: 이미지 목록 조회 실패 시

    Examples:
        config = build_config("my-project", "us-central1", "docker", format="mib")
        totals = await run_report(config)
        print(f"이미지 수: {len(totals)}")
    """
    out = out or sys.stdout
    err = err or sys.stderr

    print(f"Analyzing {config.parent} ...", file=err)

    if client is None:
        client = ArtifactRegistryClient(
            endpoint=config.endpoint,
            timeout=config.timeout,
            access_token=config.access_token,
        )

    async with client:
        records = client.list_docker_images(config.parent, page_size=config.page_size)
        totals = sort_totals(await aggregate_stream(records, config.filters))

    for line in render_report(totals, config.unit):
        print(line, file=out)

    return totals
