"""팀 라우터 — 팀 생성/조회 엔드포인트.

Team Router — Endpoints for creating and reading teams.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from querylab.api.deps import IdPath
from querylab.database import get_db
from querylab.schemas.team import TeamCreate, TeamResponse
from querylab.services.team_service import team_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[TeamResponse])
async def list_teams(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[TeamResponse]:
    """팀 목록을 조회합니다 (List all teams)."""
    return await team_service.list_teams(db)


@router.get("/{team_id}", response_model=TeamResponse)
async def get_team(
    team_id: IdPath,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TeamResponse:
    """팀을 조회합니다 (Retrieve a team)."""
    return await team_service.get_team(db, team_id)


@router.post("", response_model=TeamResponse, status_code=201)
async def create_team(
    data: TeamCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TeamResponse:
    """새 팀을 생성합니다.

    Create a new team. Team names are unique.
    """
    result: TeamResponse = await team_service.create_team(db, data)
    await db.commit()
    return result
