"""회원 레포지토리 — 회원 CRUD 및 동적 조건 검색 쿼리.

Member Repository — CRUD and dynamic-condition search queries for members.
The search path composes a WHERE clause from the present fields of a
MemberSearchCondition, left-joins teams, and projects rows to MemberTeamDto.
"""

from collections.abc import Callable, Sequence
from typing import Any

from sqlalchemy import ColumnElement, Select, and_, func, select, true
from sqlalchemy.ext.asyncio import AsyncSession

from querylab.models.member import Member
from querylab.models.team import Team
from querylab.repositories.base import BaseRepository, execute
from querylab.schemas.member import MemberSearchCondition, MemberTeamDto, SortKey
from querylab.utils.pagination import resolve_total

# 조건 필드 → 조건식 규칙 — 값이 있는 필드만 AND로 결합
# Condition field -> predicate fragment; only present fields are folded with AND
_PREDICATE_RULES: list[tuple[str, Callable[[Any], ColumnElement[bool]]]] = [
    ("username", lambda value: Member.username == value),
    ("team_name", lambda value: Team.name == value),
    ("age_goe", lambda value: Member.age >= value),
    ("age_loe", lambda value: Member.age <= value),
]

# 정렬 가능한 컬럼 — Sortable columns by public field name
_SORT_COLUMNS: dict[str, Any] = {
    "id": Member.id,
    "username": Member.username,
    "age": Member.age,
    "team_name": Team.name,
}


class MemberRepository(BaseRepository[Member]):
    """회원 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the members table.
    """

    def __init__(self) -> None:
        super().__init__(Member)

    async def get_by_username(
        self,
        db: AsyncSession,
        username: str,
    ) -> list[Member]:
        """이름이 일치하는 회원 목록을 조회합니다.

        Retrieve members whose username equals the given value, by id.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            username: 회원 이름 (Username)

        Returns:
            list[Member]: 회원 목록 (List of members)
        """
        query: Select = (
            select(Member).where(Member.username == username).order_by(Member.id)
        )
        result = await execute(db, query)
        return list(result.scalars().all())

    def build_predicate(self, condition: MemberSearchCondition) -> ColumnElement[bool]:
        """검색 조건으로 WHERE 조건식을 조립합니다.

        Compose the WHERE predicate for a search condition. Each present
        field contributes one fragment; absent fields contribute nothing.
        With every field absent the result is ``true()`` and matches all rows.
        Values are bound as parameters, never interpolated.

        The team_name fragment references the teams table, so the statement
        using it must join teams.

        Args:
            condition: 검색 조건 (Search condition)

        Returns:
            ColumnElement[bool]: 조립된 조건식 (Composed predicate)
        """
        fragments: list[ColumnElement[bool]] = []
        for field, rule in _PREDICATE_RULES:
            value: Any = getattr(condition, field)
            if value is not None:
                fragments.append(rule(value))
        return and_(true(), *fragments)

    def _order_by(self, sort: Sequence[SortKey] | None) -> list[Any]:
        """정렬 절 — 요청 정렬 뒤에 ID 오름차순을 붙여 순서를 고정합니다.

        NULL은 방향과 무관하게 항상 마지막 (Nulls always sort last).
        """
        clauses: list[Any] = []
        for key in sort or []:
            column = _SORT_COLUMNS[key.field]
            ordered = column.desc() if key.direction == "desc" else column.asc()
            clauses.append(ordered.nulls_last())
        if not any(key.field == "id" for key in sort or []):
            clauses.append(Member.id.asc())
        return clauses

    def _search_query(
        self,
        condition: MemberSearchCondition,
        sort: Sequence[SortKey] | None,
    ) -> Select:
        """회원 LEFT JOIN 팀 프로젝션 쿼리 (Member LEFT JOIN team projection query)."""
        return (
            select(
                Member.id.label("member_id"),
                Member.username,
                Member.age,
                Team.id.label("team_id"),
                Team.name.label("team_name"),
            )
            .select_from(Member)
            .outerjoin(Member.team)
            .where(self.build_predicate(condition))
            .order_by(*self._order_by(sort))
        )

    async def search(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        sort: Sequence[SortKey] | None = None,
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[MemberTeamDto]:
        """조건에 맞는 회원을 팀과 함께 평면 프로젝션으로 조회합니다.

        Search members matching the condition, left-joined with their team.
        Members without a team are included with team fields set to None.
        No match yields an empty list.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition)
            sort: 정렬 키 목록 (Explicit sort keys; id ascending breaks ties)
            offset: 건너뛸 행 수 (Rows to skip, optional)
            limit: 최대 행 수 (Maximum rows, optional)

        Returns:
            list[MemberTeamDto]: 프로젝션 결과 (Projected rows)

        Raises:
            StoreUnavailableError: DB에 연결할 수 없을 때 (Store cannot be reached)
        """
        query: Select = self._search_query(condition, sort)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        result = await execute(db, query)
        return [MemberTeamDto(**row._mapping) for row in result.all()]

    async def count_matching(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
    ) -> int:
        """조건에 맞는 회원 수를 셉니다.

        Count members matching the condition. Unlike the data query this
        statement joins teams only when team_name is constrained; an inner
        join is enough there because the predicate already rules out
        members without a team.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition)

        Returns:
            int: 일치하는 회원 수 (Number of matching members)
        """
        query: Select = select(func.count(Member.id)).select_from(Member)
        if condition.team_name is not None:
            query = query.join(Member.team)
        query = query.where(self.build_predicate(condition))
        return (await execute(db, query)).scalar() or 0

    async def search_page(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        offset: int,
        limit: int,
        sort: Sequence[SortKey] | None = None,
    ) -> tuple[list[MemberTeamDto], int]:
        """페이지 단위 검색 — 데이터 쿼리와 독립된 카운트 쿼리.

        Paged search. The page comes from the joined data query; the total
        comes from count_matching, which is skipped when the page already
        determines it.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition)
            offset: 시작 오프셋 (Start offset, 0-based)
            limit: 페이지 크기 (Page size)
            sort: 정렬 키 목록 (Explicit sort keys)

        Returns:
            tuple[list[MemberTeamDto], int]: (페이지 항목, 전체 개수)
                                             (Page items, total count)
        """
        items: list[MemberTeamDto] = await self.search(
            db, condition, sort=sort, offset=offset, limit=limit
        )

        async def _count() -> int:
            return await self.count_matching(db, condition)

        total: int = await resolve_total(items, offset, limit, _count)
        return items, total


# 싱글턴 인스턴스 — Singleton instance
member_repository: MemberRepository = MemberRepository()
