"""회원 라우터 — 회원 CRUD 및 조건 검색 엔드포인트.

Member Router — CRUD and condition-search endpoints.

Search endpoints:
    - GET /search: 페이지 없는 검색 (Unpaged search; unscoped searches are row-capped)
    - GET /search/page: 오프셋 페이지 검색 + 전체 개수 (Offset page with total count)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from querylab.api.deps import IdPath, SortParam, get_search_condition
from querylab.database import get_db
from querylab.schemas.common import MAX_INT
from querylab.schemas.member import (
    MemberCreate,
    MemberResponse,
    MemberSearchCondition,
    MemberTeamChange,
    MemberTeamDto,
)
from querylab.services.member_service import member_service
from querylab.utils.pagination import OffsetPage

router: APIRouter = APIRouter()


@router.get("/search", response_model=list[MemberTeamDto])
async def search_members(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
    sort: SortParam = None,
) -> list[MemberTeamDto]:
    """조건으로 회원을 검색합니다 (팀 LEFT JOIN 프로젝션).

    Search members by optional conditions; members without a team are
    returned with null team fields.
    """
    return await member_service.search(db, condition, sort=sort)


@router.get("/search/page", response_model=OffsetPage[MemberTeamDto])
async def search_members_page(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
    offset: Annotated[int, Query(ge=0, le=MAX_INT, description="건너뛸 행 수")] = 0,
    limit: Annotated[int, Query(ge=1, le=1000, description="페이지 크기")] = 20,
    sort: SortParam = None,
) -> OffsetPage[MemberTeamDto]:
    """조건 검색 결과를 오프셋 페이지로 조회합니다.

    Paged search returning the slice plus the total match count.
    """
    return await member_service.search_page(
        db, condition, offset=offset, limit=limit, sort=sort
    )


@router.get("", response_model=list[MemberResponse])
async def list_members(
    db: Annotated[AsyncSession, Depends(get_db)],
    username: Annotated[str | None, Query(description="회원 이름 일치")] = None,
) -> list[MemberResponse]:
    """회원 목록을 조회합니다 (List members, optionally by username)."""
    return await member_service.list_members(db, username=username)


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member(
    member_id: IdPath,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """회원을 조회합니다 (Retrieve a member)."""
    return await member_service.get_member(db, member_id)


@router.post("", response_model=MemberResponse, status_code=201)
async def create_member(
    data: MemberCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """새 회원을 생성합니다.

    Create a new member, optionally in an existing team.
    """
    result: MemberResponse = await member_service.create_member(db, data)
    await db.commit()
    return result


@router.put("/{member_id}/team", response_model=MemberResponse)
async def change_member_team(
    member_id: IdPath,
    data: MemberTeamChange,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """회원의 소속 팀을 변경합니다. team_id가 null이면 팀에서 제외.

    Move a member to another team, or out of any team.
    """
    result: MemberResponse = await member_service.change_team(db, member_id, data.team_id)
    await db.commit()
    return result
