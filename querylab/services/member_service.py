"""회원 서비스 — 회원 CRUD 및 조건 검색 비즈니스 로직.

Member Service — Business logic for member CRUD and condition search.
Validates search conditions and sort expressions before any query is built,
and guards unscoped searches with a row cap.
"""

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from querylab.config import settings
from querylab.models.member import Member
from querylab.models.team import Team
from querylab.repositories.member_repository import member_repository
from querylab.repositories.team_repository import team_repository
from querylab.schemas.member import (
    MemberCreate,
    MemberResponse,
    MemberSearchCondition,
    MemberTeamDto,
    SortKey,
)
from querylab.utils.exceptions import BadRequestError, InvalidConditionError, NotFoundError
from querylab.utils.pagination import OffsetPage


def parse_sort(expression: str | None) -> list[SortKey]:
    """정렬 표현식을 정렬 키 목록으로 변환합니다.

    Parse a sort expression such as ``"username:desc,age"`` into sort keys.
    Direction defaults to ascending.

    Args:
        expression: 쉼표로 구분된 "필드[:방향]" 목록 (Comma-separated "field[:direction]")

    Returns:
        list[SortKey]: 정렬 키 목록 (Parsed sort keys; empty when expression is blank)

    Raises:
        BadRequestError: 알 수 없는 필드나 방향 (Unknown field or direction)
    """
    if not expression:
        return []

    keys: list[SortKey] = []
    for part in expression.split(","):
        part = part.strip()
        if not part:
            continue
        field, _, direction = part.partition(":")
        try:
            keys.append(SortKey(field=field.strip(), direction=(direction.strip().lower() or "asc")))
        except ValidationError as exc:
            raise BadRequestError(f"Invalid sort key: {part}") from exc
    return keys


def validate_condition(condition: MemberSearchCondition) -> None:
    """검색 조건의 모순을 쿼리 생성 전에 검사합니다.

    Reject conditions that can never match instead of running them as
    empty-result queries.

    Raises:
        InvalidConditionError: age_goe가 age_loe보다 클 때 (Minimum age above maximum age)
    """
    if (
        condition.age_goe is not None
        and condition.age_loe is not None
        and condition.age_goe > condition.age_loe
    ):
        raise InvalidConditionError(
            f"age_goe ({condition.age_goe}) must not exceed age_loe ({condition.age_loe})"
        )


class MemberService:
    """회원 관련 비즈니스 로직을 처리하는 서비스.

    Service handling member business logic.
    """

    async def _get_team_or_404(self, db: AsyncSession, team_id: int) -> Team:
        team: Team | None = await team_repository.get_by_id(db, team_id)
        if team is None:
            raise NotFoundError("Team not found")
        return team

    async def create_member(self, db: AsyncSession, data: MemberCreate) -> MemberResponse:
        """새 회원을 생성합니다.

        Create a new member, optionally in an existing team.

        Raises:
            NotFoundError: 지정한 팀이 없을 때 (Referenced team not found)
        """
        if data.team_id is not None:
            await self._get_team_or_404(db, data.team_id)

        member: Member = await member_repository.create(db, data.model_dump())
        return MemberResponse.model_validate(member)

    async def get_member(self, db: AsyncSession, member_id: int) -> MemberResponse:
        """회원을 조회합니다.

        Raises:
            NotFoundError: 회원을 찾을 수 없을 때 (Member not found)
        """
        member: Member | None = await member_repository.get_by_id(db, member_id)
        if member is None:
            raise NotFoundError("Member not found")
        return MemberResponse.model_validate(member)

    async def list_members(
        self,
        db: AsyncSession,
        username: str | None = None,
    ) -> list[MemberResponse]:
        """회원 목록 — username이 주어지면 이름 일치 회원만."""
        if username is not None:
            members = await member_repository.get_by_username(db, username)
        else:
            members = await member_repository.get_all(db)
        return [MemberResponse.model_validate(m) for m in members]

    async def change_team(
        self,
        db: AsyncSession,
        member_id: int,
        team_id: int | None,
    ) -> MemberResponse:
        """회원의 소속 팀을 변경합니다. team_id가 None이면 팀에서 제외.

        Move a member to another team, or out of any team when team_id is None.

        Raises:
            NotFoundError: 회원 또는 팀이 없을 때 (Member or team not found)
        """
        member: Member | None = await member_repository.get_by_id(db, member_id)
        if member is None:
            raise NotFoundError("Member not found")

        team: Team | None = None
        if team_id is not None:
            team = await self._get_team_or_404(db, team_id)

        member.change_team(team)
        await db.flush()
        return MemberResponse.model_validate(member)

    async def search(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        sort: str | None = None,
    ) -> list[MemberTeamDto]:
        """조건 검색 — 페이지 없이 전체 결과.

        Unpaged condition search. When every condition field is absent the
        result is capped at settings.SEARCH_MAX_ROWS rows.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition)
            sort: 정렬 표현식 (Sort expression, e.g. "username:desc")

        Returns:
            list[MemberTeamDto]: 검색 결과 (Matching rows; empty when none match)

        Raises:
            InvalidConditionError: 모순된 조건 (Contradictory condition)
            BadRequestError: 잘못된 정렬 표현식 (Invalid sort expression)
            StoreUnavailableError: DB 연결 실패 (Store unreachable)
        """
        validate_condition(condition)
        sort_keys: list[SortKey] = parse_sort(sort)

        limit: int | None = settings.SEARCH_MAX_ROWS if condition.is_empty() else None
        return await member_repository.search(db, condition, sort=sort_keys, limit=limit)

    async def search_page(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        offset: int = 0,
        limit: int = 20,
        sort: str | None = None,
    ) -> OffsetPage[MemberTeamDto]:
        """조건 검색 — 오프셋 페이지와 전체 개수.

        Paged condition search returning the slice and the total count.

        Raises:
            InvalidConditionError: 모순된 조건 (Contradictory condition)
            BadRequestError: 잘못된 페이지 파라미터나 정렬 (Bad paging or sort)
        """
        validate_condition(condition)
        if offset < 0 or limit < 1:
            raise BadRequestError("offset must be >= 0 and limit must be >= 1")
        sort_keys: list[SortKey] = parse_sort(sort)

        items, total = await member_repository.search_page(
            db, condition, offset=offset, limit=limit, sort=sort_keys
        )
        return OffsetPage[MemberTeamDto](items=items, total=total, offset=offset, limit=limit)


# 싱글턴 인스턴스 — Singleton instance
member_service: MemberService = MemberService()
