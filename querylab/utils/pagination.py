"""페이지네이션 유틸리티 모듈.

Offset/limit pagination helpers.
The total count is resolved from the fetched page when the page itself proves
it, and only otherwise by running a separate count query.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Generic, Sequence, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class OffsetPage(BaseModel, Generic[T]):
    """오프셋 페이지 결과 모델.

    Offset-based page result model.

    Attributes:
        items: 현재 페이지 항목 목록 (Items for the current page)
        total: 전체 항목 수 (Total count across all pages)
        offset: 건너뛴 항목 수 (Number of skipped items, 0-based)
        limit: 페이지 최대 크기 (Maximum page size)
    """

    items: list[T]  # 현재 페이지 항목 목록 (Paginated items)
    total: int  # 전체 항목 수 (Total item count)
    offset: int  # 시작 오프셋 — 0부터 시작 (Start offset, 0-indexed)
    limit: int  # 페이지 최대 크기 (Page size)


async def resolve_total(
    items: Sequence[Any],
    offset: int,
    limit: int,
    count: Callable[[], Awaitable[int]],
) -> int:
    """페이지 결과로 전체 개수를 결정하거나 카운트 쿼리를 실행합니다.

    Resolve the total count for a fetched page.

    A page shorter than ``limit`` is the last page, so the total is
    ``offset + len(items)`` and no count query is needed. An empty page past
    the first can't prove anything (the offset may overshoot), so it still
    falls back to ``count``.

    Args:
        items: 가져온 페이지 항목 (Items of the fetched page)
        offset: 요청 오프셋 (Requested offset)
        limit: 요청 페이지 크기 (Requested page size)
        count: 카운트 쿼리 실행 함수 (Coroutine factory running the count query)

    Returns:
        int: 전체 항목 수 (Total item count)
    """
    fetched: int = len(items)
    if offset == 0 and fetched < limit:
        return fetched
    if 0 < fetched < limit:
        return offset + fetched
    return await count()
