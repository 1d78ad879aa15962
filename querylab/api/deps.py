"""FastAPI 의존성 주입 모듈 — 검색 조건 및 페이지 파라미터.

FastAPI dependency injection module — Search condition and paging parameters.
Collects optional query parameters into a MemberSearchCondition so every
search endpoint accepts the same filter fields.
"""

from typing import Annotated

from fastapi import Path, Query

from querylab.schemas.common import MAX_INT
from querylab.schemas.member import MemberSearchCondition


def get_search_condition(
    username: Annotated[str | None, Query(description="회원 이름 일치")] = None,
    team_name: Annotated[str | None, Query(description="팀 이름 일치")] = None,
    age_goe: Annotated[int | None, Query(ge=0, le=MAX_INT, description="최소 나이 (이상)")] = None,
    age_loe: Annotated[int | None, Query(ge=0, le=MAX_INT, description="최대 나이 (이하)")] = None,
) -> MemberSearchCondition:
    """쿼리 파라미터로 검색 조건을 만듭니다.

    Build a search condition from query parameters. Omitted parameters stay
    None and impose no constraint.
    """
    return MemberSearchCondition(
        username=username,
        team_name=team_name,
        age_goe=age_goe,
        age_loe=age_loe,
    )


SortParam = Annotated[
    str | None,
    Query(description='정렬 키, 예: "username:desc,age" (Sort keys; id breaks ties)'),
]

# 경로 ID 파라미터 — Path identifier within the INTEGER column range
IdPath = Annotated[int, Path(ge=1, le=MAX_INT)]
