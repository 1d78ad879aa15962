"""회원 쿼리 라우터 — 집계, 조인, 서브쿼리, CASE, 프로젝션, 벌크 연산 엔드포인트.

Member Query Router — Aggregation, join, subquery, CASE, projection and
bulk-statement endpoints mounted under /members.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from querylab.database import get_db
from querylab.schemas.common import MAX_INT
from querylab.schemas.member import (
    AgeStatistics,
    BulkResult,
    MemberConstant,
    MemberDto,
    MemberLabel,
    MemberRank,
    MemberResponse,
    MemberTeamPair,
    TeamAverageAge,
    UserDto,
)
from querylab.services.member_query_service import member_query_service

router: APIRouter = APIRouter()

DB = Annotated[AsyncSession, Depends(get_db)]


# ---------------------------------------------------------------------------
# 집계 — Aggregation
# ---------------------------------------------------------------------------
@router.get("/queries/stats", response_model=AgeStatistics)
async def age_statistics(db: DB) -> AgeStatistics:
    """나이 집계 (count/sum/avg/max/min)."""
    return await member_query_service.statistics(db)


@router.get("/queries/team-average-age", response_model=list[TeamAverageAge])
async def team_average_age(db: DB) -> list[TeamAverageAge]:
    """팀별 평균 나이 (Average age per team)."""
    return await member_query_service.average_age_by_team(db)


# ---------------------------------------------------------------------------
# 조인 — Joins
# ---------------------------------------------------------------------------
@router.get("/queries/by-team", response_model=list[MemberResponse])
async def members_of_team(
    db: DB,
    team_name: Annotated[str, Query(description="팀 이름")],
) -> list[MemberResponse]:
    """팀 소속 회원 — 내부 조인 (Inner join on team name)."""
    return await member_query_service.members_of_team(db, team_name)


@router.get("/queries/named-after-teams", response_model=list[MemberResponse])
async def members_named_after_teams(db: DB) -> list[MemberResponse]:
    """이름이 팀 이름과 같은 회원 — 세타 조인 (Theta join)."""
    return await member_query_service.members_named_after_teams(db)


@router.get("/queries/with-team-filter", response_model=list[MemberTeamPair])
async def members_with_team_filter(
    db: DB,
    team_name: Annotated[str, Query(description="ON 절 팀 이름 필터")],
) -> list[MemberTeamPair]:
    """모든 회원 + ON 절로 걸러진 팀 — LEFT JOIN ... ON."""
    return await member_query_service.members_with_team_filter(db, team_name)


@router.get("/queries/with-team-named-like-username", response_model=list[MemberTeamPair])
async def members_with_team_named_like_username(db: DB) -> list[MemberTeamPair]:
    """모든 회원 + 이름이 같은 팀 — 연관관계 없는 LEFT JOIN (Outer theta join)."""
    return await member_query_service.members_with_team_named_like_username(db)


# ---------------------------------------------------------------------------
# 서브쿼리 — Subqueries
# ---------------------------------------------------------------------------
@router.get("/queries/oldest", response_model=list[MemberResponse])
async def oldest_members(db: DB) -> list[MemberResponse]:
    """최고령 회원 (Members with the maximum age)."""
    return await member_query_service.oldest_members(db)


@router.get("/queries/at-or-above-average-age", response_model=list[MemberResponse])
async def members_at_or_above_average_age(db: DB) -> list[MemberResponse]:
    """평균 나이 이상 회원 (Members at or above the average age)."""
    return await member_query_service.members_at_or_above_average_age(db)


@router.get("/queries/age-in", response_model=list[MemberResponse])
async def members_with_age_in_subquery(
    db: DB,
    older_than: Annotated[int, Query(ge=0, le=MAX_INT, description="서브쿼리 나이 하한 (초과)")] = 10,
) -> list[MemberResponse]:
    """IN 서브쿼리 (age IN (SELECT age WHERE age > older_than))."""
    return await member_query_service.members_with_age_in_subquery(db, older_than)


# ---------------------------------------------------------------------------
# CASE / 문자열 / 프로젝션 — CASE, strings, projections
# ---------------------------------------------------------------------------
@router.get("/queries/age-labels", response_model=list[MemberLabel])
async def age_labels(db: DB) -> list[MemberLabel]:
    return await member_query_service.age_labels(db)


@router.get("/queries/age-ranges", response_model=list[MemberLabel])
async def age_ranges(db: DB) -> list[MemberLabel]:
    return await member_query_service.age_ranges(db)


@router.get("/queries/ranked", response_model=list[MemberRank])
async def ranked_by_age_range(db: DB) -> list[MemberRank]:
    return await member_query_service.ranked_by_age_range(db)


@router.get("/queries/username-constant", response_model=list[MemberConstant])
async def username_with_constant(
    db: DB,
    constant: Annotated[str, Query(max_length=100, description="함께 선택할 상수")] = "A",
) -> list[MemberConstant]:
    """이름과 상수 프로젝션 (Username with a constant column)."""
    return await member_query_service.username_with_constant(db, constant)


@router.get("/queries/username-age", response_model=list[str])
async def username_with_age(
    db: DB,
    username: Annotated[str, Query(description="회원 이름")],
) -> list[str]:
    """이름_나이 문자열 (e.g. "member1_10")."""
    return await member_query_service.username_with_age(db, username)


@router.get("/queries/member-dtos", response_model=list[MemberDto])
async def member_dtos(db: DB) -> list[MemberDto]:
    return await member_query_service.member_dtos(db)


@router.get("/queries/user-dtos", response_model=list[UserDto])
async def user_dtos(db: DB) -> list[UserDto]:
    return await member_query_service.user_dtos(db)


# ---------------------------------------------------------------------------
# 벌크 연산 — Bulk statements
# ---------------------------------------------------------------------------
@router.post("/bulk/rename", response_model=BulkResult)
async def bulk_rename(
    db: DB,
    younger_than: Annotated[int, Query(ge=0, le=MAX_INT, description="이 나이 미만 회원 대상")],
    new_name: Annotated[str, Query(min_length=1, description="변경할 이름")],
) -> BulkResult:
    """나이가 younger_than 미만인 회원 이름을 일괄 변경합니다."""
    result: BulkResult = await member_query_service.rename_younger_than(db, younger_than, new_name)
    await db.commit()
    return result


@router.post("/bulk/add-age", response_model=BulkResult)
async def bulk_add_age(
    db: DB,
    amount: Annotated[int, Query(ge=1, le=MAX_INT, description="더할 나이")] = 1,
) -> BulkResult:
    """모든 회원의 나이에 amount를 더합니다."""
    result: BulkResult = await member_query_service.add_age(db, amount)
    await db.commit()
    return result


@router.delete("/bulk", response_model=BulkResult)
async def bulk_delete(
    db: DB,
    older_than: Annotated[int, Query(ge=0, le=MAX_INT, description="이 나이 초과 회원 삭제")],
) -> BulkResult:
    """나이가 older_than 초과인 회원을 일괄 삭제합니다."""
    result: BulkResult = await member_query_service.delete_older_than(db, older_than)
    await db.commit()
    return result
