"""팀 서비스 — 팀 생성/조회 비즈니스 로직.

Team Service — Business logic for creating and reading teams.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from querylab.models.team import Team
from querylab.repositories.team_repository import team_repository
from querylab.schemas.team import TeamCreate, TeamResponse
from querylab.utils.exceptions import DuplicateError, NotFoundError


class TeamService:
    """팀 관련 비즈니스 로직을 처리하는 서비스.

    Service handling team business logic.
    """

    async def list_teams(self, db: AsyncSession) -> list[TeamResponse]:
        """전체 팀 목록을 ID 순으로 조회합니다 (List all teams by id)."""
        teams = await team_repository.get_all(db)
        return [TeamResponse.model_validate(t) for t in teams]

    async def get_team(self, db: AsyncSession, team_id: int) -> TeamResponse:
        """팀을 조회합니다.

        Retrieve a single team.

        Raises:
            NotFoundError: 팀을 찾을 수 없을 때 (Team not found)
        """
        team: Team | None = await team_repository.get_by_id(db, team_id)
        if team is None:
            raise NotFoundError("Team not found")
        return TeamResponse.model_validate(team)

    async def create_team(self, db: AsyncSession, data: TeamCreate) -> TeamResponse:
        """새 팀을 생성합니다.

        Create a new team. Team names are unique.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 팀 생성 데이터 (Team creation data)

        Returns:
            TeamResponse: 생성된 팀 (Created team)

        Raises:
            DuplicateError: 같은 이름의 팀이 이미 있을 때 (Team name already taken)
        """
        if await team_repository.exists(db, {"name": data.name}):
            raise DuplicateError("Team name already exists")

        team: Team = await team_repository.create(db, {"name": data.name})
        return TeamResponse.model_validate(team)


# 싱글턴 인스턴스 — Singleton instance
team_service: TeamService = TeamService()
