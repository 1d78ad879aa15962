"""회원 쿼리 레포지토리 — 집계, 조인, 서브쿼리, CASE, 벌크 연산 쿼리 모음.

Member Query Repository — Aggregation, join, subquery, CASE and bulk queries.
Each method builds one SQLAlchemy statement and returns plain rows or counts;
mapping to response schemas happens in MemberQueryService.
"""

from typing import Any, Sequence

from sqlalchemy import (
    Row,
    Select,
    String,
    and_,
    case,
    cast,
    delete,
    func,
    literal,
    select,
    update,
)
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from querylab.models.member import Member
from querylab.models.team import Team
from querylab.repositories.base import execute


class MemberQueryRepository:
    """회원/팀 테이블 대상 분석 및 벌크 쿼리 레포지토리.

    Repository of read-analytics and bulk statements over members and teams.
    """

    # === 집계 (Aggregation) ===

    async def age_statistics(self, db: AsyncSession) -> Row[Any]:
        """나이 집계 — count, sum, avg, max, min.

        Returns:
            Row: member_count, age_sum, age_avg, age_max, age_min 라벨을 가진 단일 행 (Single labelled row)
        """
        query: Select = select(
            func.count(Member.id).label("member_count"),
            func.sum(Member.age).label("age_sum"),
            func.avg(Member.age).label("age_avg"),
            func.max(Member.age).label("age_max"),
            func.min(Member.age).label("age_min"),
        )
        result = await execute(db, query)
        return result.one()

    async def average_age_by_team(self, db: AsyncSession) -> Sequence[Row[Any]]:
        """팀 이름별 평균 나이 — 내부 조인 후 GROUP BY.

        Average age grouped by team name; team-less members are excluded.
        """
        query: Select = (
            select(Team.name.label("team_name"), func.avg(Member.age).label("avg_age"))
            .select_from(Member)
            .join(Member.team)
            .group_by(Team.name)
            .order_by(Team.name)
        )
        result = await execute(db, query)
        return result.all()

    # === 조인 (Joins) ===

    async def members_of_team(self, db: AsyncSession, team_name: str) -> list[Member]:
        """특정 팀 소속 회원 — 내부 조인 (Members of a team via inner join)."""
        query: Select = (
            select(Member)
            .join(Member.team)
            .where(Team.name == team_name)
            .order_by(Member.id)
        )
        result = await execute(db, query)
        return list(result.scalars().all())

    async def members_named_after_teams(self, db: AsyncSession) -> list[Member]:
        """회원 이름이 팀 이름과 같은 회원 — 연관관계 없는 세타 조인.

        Theta join: members whose username equals any team's name.
        """
        query: Select = (
            select(Member)
            .join(Team, Member.username == Team.name)
            .order_by(Member.id)
        )
        result = await execute(db, query)
        return list(result.scalars().all())

    async def members_with_team_filter(
        self,
        db: AsyncSession,
        team_name: str,
    ) -> Sequence[Row[Any]]:
        """모든 회원과, ON 조건으로 걸러진 팀 — LEFT JOIN ... ON.

        Every member, paired with its team only when that team's name matches.
        The filter lives in the ON clause, so non-matching members keep
        their row with null team columns.
        """
        query: Select = (
            select(Member, Team.id.label("team_id"), Team.name.label("team_name"))
            .outerjoin(Team, and_(Member.team_id == Team.id, Team.name == team_name))
            .order_by(Member.id)
        )
        result = await execute(db, query)
        return result.all()

    async def members_with_team_named_like_username(
        self,
        db: AsyncSession,
    ) -> Sequence[Row[Any]]:
        """모든 회원과, 이름이 회원 이름과 같은 팀 — 연관관계 없는 LEFT JOIN.

        Every member, paired with the team whose name equals the member's
        username. Members with no such team keep their row with null team
        columns.
        """
        query: Select = (
            select(Member, Team.id.label("team_id"), Team.name.label("team_name"))
            .outerjoin(Team, Member.username == Team.name)
            .order_by(Member.id)
        )
        result = await execute(db, query)
        return result.all()

    # === 서브쿼리 (Subqueries) ===

    async def oldest_members(self, db: AsyncSession) -> list[Member]:
        """나이가 가장 많은 회원 — WHERE age = (SELECT max(age))."""
        member_sub = aliased(Member)
        query: Select = (
            select(Member)
            .where(Member.age == select(func.max(member_sub.age)).scalar_subquery())
            .order_by(Member.id)
        )
        result = await execute(db, query)
        return list(result.scalars().all())

    async def members_at_or_above_average_age(self, db: AsyncSession) -> list[Member]:
        """평균 나이 이상 회원 — WHERE age >= (SELECT avg(age))."""
        member_sub = aliased(Member)
        query: Select = (
            select(Member)
            .where(Member.age >= select(func.avg(member_sub.age)).scalar_subquery())
            .order_by(Member.id)
        )
        result = await execute(db, query)
        return list(result.scalars().all())

    async def members_with_age_in_subquery(
        self,
        db: AsyncSession,
        older_than: int,
    ) -> list[Member]:
        """WHERE age IN (SELECT age WHERE age > :older_than)."""
        member_sub = aliased(Member)
        ages = select(member_sub.age).where(member_sub.age > older_than)
        query: Select = select(Member).where(Member.age.in_(ages)).order_by(Member.id)
        result = await execute(db, query)
        return list(result.scalars().all())

    # === CASE / 상수 / 문자열 (CASE, constants, strings) ===

    async def age_labels(self, db: AsyncSession) -> Sequence[Row[Any]]:
        """단순 CASE — 10은 ten, 20은 twenty, 나머지는 other."""
        label = case(
            (Member.age == 10, literal("ten")),
            (Member.age == 20, literal("twenty")),
            else_=literal("other"),
        )
        query: Select = select(Member.username, label.label("label")).order_by(Member.id)
        result = await execute(db, query)
        return result.all()

    async def age_ranges(self, db: AsyncSession) -> Sequence[Row[Any]]:
        """범위 CASE — 0-20, 21-30, other."""
        label = case(
            (Member.age.between(0, 20), literal("0-20")),
            (Member.age.between(21, 30), literal("21-30")),
            else_=literal("other"),
        )
        query: Select = select(Member.username, label.label("label")).order_by(Member.id)
        result = await execute(db, query)
        return result.all()

    async def ranked_by_age_range(self, db: AsyncSession) -> Sequence[Row[Any]]:
        """CASE 순위를 SELECT와 ORDER BY에 함께 사용.

        30세 초과 회원이 먼저, 그 다음 0-20, 21-30은 마지막.
        Rank 2 for 0-20, 1 for 21-30, 3 otherwise; ordered by rank descending.
        """
        rank = case(
            (Member.age.between(0, 20), 2),
            (Member.age.between(21, 30), 1),
            else_=3,
        ).label("rank")
        query: Select = select(Member.username, Member.age, rank).order_by(
            rank.desc(), Member.id
        )
        result = await execute(db, query)
        return result.all()

    async def username_with_constant(
        self,
        db: AsyncSession,
        constant: str,
    ) -> Sequence[Row[Any]]:
        """상수 프로젝션 — 모든 행에 같은 상수 값을 함께 선택.

        Select each username alongside a constant literal.
        """
        query: Select = select(
            Member.username, literal(constant).label("constant")
        ).order_by(Member.id)
        result = await execute(db, query)
        return result.all()

    async def username_with_age(
        self,
        db: AsyncSession,
        username: str,
    ) -> list[str]:
        """이름_나이 문자열 — username || '_' || CAST(age AS VARCHAR)."""
        query: Select = (
            select(Member.username + "_" + cast(Member.age, String))
            .where(Member.username == username)
            .order_by(Member.id)
        )
        result = await execute(db, query)
        return list(result.scalars().all())

    # === 프로젝션 (Projections) ===

    async def username_and_age(self, db: AsyncSession) -> Sequence[Row[Any]]:
        """이름과 나이만 선택하는 튜플 프로젝션 (Tuple projection)."""
        query: Select = select(Member.username, Member.age).order_by(Member.id)
        result = await execute(db, query)
        return result.all()

    async def name_with_max_age(self, db: AsyncSession) -> Sequence[Row[Any]]:
        """username을 name으로, age를 전체 최대 나이 서브쿼리로 매핑.

        Alias username to ``name`` and replace age with the overall maximum
        age from a scalar subquery in the SELECT list.
        """
        member_sub = aliased(Member)
        max_age = select(func.max(member_sub.age)).scalar_subquery()
        query: Select = select(
            Member.username.label("name"), max_age.label("age")
        ).order_by(Member.id)
        result = await execute(db, query)
        return result.all()

    # === 벌크 연산 (Bulk statements) ===

    async def rename_younger_than(
        self,
        db: AsyncSession,
        age: int,
        new_name: str,
    ) -> int:
        """나이가 age 미만인 회원의 이름을 일괄 변경합니다.

        Bulk UPDATE bypassing the session identity map.

        Returns:
            int: 변경된 행 수 (Rows updated)
        """
        stmt = (
            update(Member)
            .where(Member.age < age)
            .values(username=new_name)
            .execution_options(synchronize_session=False)
        )
        result = await execute(db, stmt)
        return result.rowcount

    async def add_age(self, db: AsyncSession, amount: int) -> int:
        """모든 회원의 나이에 amount를 더합니다 (Bulk age increment)."""
        stmt = (
            update(Member)
            .values(age=Member.age + amount)
            .execution_options(synchronize_session=False)
        )
        result = await execute(db, stmt)
        return result.rowcount

    async def delete_older_than(self, db: AsyncSession, age: int) -> int:
        """나이가 age 초과인 회원을 일괄 삭제합니다 (Bulk DELETE)."""
        stmt = (
            delete(Member)
            .where(Member.age > age)
            .execution_options(synchronize_session=False)
        )
        result = await execute(db, stmt)
        return result.rowcount


# 싱글턴 인스턴스 — Singleton instance
member_query_repository: MemberQueryRepository = MemberQueryRepository()
