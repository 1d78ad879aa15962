"""회원 쿼리 서비스 — 집계, 조인, 서브쿼리, CASE, 벌크 연산.

Member Query Service — Maps analytic query rows to response schemas and
runs bulk statements. Bulk UPDATE/DELETE skip the session identity map,
so the session is expired afterwards and later reads see database state.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from querylab.repositories.member_query_repository import member_query_repository
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
from querylab.utils.exceptions import BadRequestError


def _to_pairs(rows) -> list[MemberTeamPair]:
    """(Member, team_id, team_name) 행을 MemberTeamPair로 변환합니다."""
    return [
        MemberTeamPair(
            member=MemberResponse.model_validate(r.Member),
            team_id=r.team_id,
            team_name=r.team_name,
        )
        for r in rows
    ]


class MemberQueryService:
    """회원 분석 쿼리 및 벌크 연산 서비스.

    Service for member analytics and bulk modifications.
    """

    # === 집계 (Aggregation) ===

    async def statistics(self, db: AsyncSession) -> AgeStatistics:
        """나이 집계 — 회원이 없으면 count/sum/avg는 0, max/min은 None."""
        row = await member_query_repository.age_statistics(db)
        return AgeStatistics(
            count=row.member_count or 0,
            sum=row.age_sum or 0,
            avg=float(row.age_avg or 0),
            max=row.age_max,
            min=row.age_min,
        )

    async def average_age_by_team(self, db: AsyncSession) -> list[TeamAverageAge]:
        """팀 이름별 평균 나이 (Average age per team name)."""
        rows = await member_query_repository.average_age_by_team(db)
        return [TeamAverageAge(team_name=r.team_name, avg_age=float(r.avg_age)) for r in rows]

    # === 조인 (Joins) ===

    async def members_of_team(self, db: AsyncSession, team_name: str) -> list[MemberResponse]:
        """팀 소속 회원 (Members of the named team)."""
        members = await member_query_repository.members_of_team(db, team_name)
        return [MemberResponse.model_validate(m) for m in members]

    async def members_named_after_teams(self, db: AsyncSession) -> list[MemberResponse]:
        """이름이 팀 이름과 같은 회원 (Members whose username is a team name)."""
        members = await member_query_repository.members_named_after_teams(db)
        return [MemberResponse.model_validate(m) for m in members]

    async def members_with_team_filter(
        self,
        db: AsyncSession,
        team_name: str,
    ) -> list[MemberTeamPair]:
        """모든 회원과 ON 조건을 만족하는 팀 (Every member with the ON-filtered team)."""
        rows = await member_query_repository.members_with_team_filter(db, team_name)
        return _to_pairs(rows)

    async def members_with_team_named_like_username(
        self,
        db: AsyncSession,
    ) -> list[MemberTeamPair]:
        """모든 회원과 이름이 같은 팀 (Every member with the team named like them)."""
        rows = await member_query_repository.members_with_team_named_like_username(db)
        return _to_pairs(rows)

    # === 서브쿼리 (Subqueries) ===

    async def oldest_members(self, db: AsyncSession) -> list[MemberResponse]:
        members = await member_query_repository.oldest_members(db)
        return [MemberResponse.model_validate(m) for m in members]

    async def members_at_or_above_average_age(self, db: AsyncSession) -> list[MemberResponse]:
        members = await member_query_repository.members_at_or_above_average_age(db)
        return [MemberResponse.model_validate(m) for m in members]

    async def members_with_age_in_subquery(
        self,
        db: AsyncSession,
        older_than: int,
    ) -> list[MemberResponse]:
        members = await member_query_repository.members_with_age_in_subquery(db, older_than)
        return [MemberResponse.model_validate(m) for m in members]

    # === CASE / 문자열 (CASE, strings) ===

    async def age_labels(self, db: AsyncSession) -> list[MemberLabel]:
        rows = await member_query_repository.age_labels(db)
        return [MemberLabel(username=r.username, label=r.label) for r in rows]

    async def age_ranges(self, db: AsyncSession) -> list[MemberLabel]:
        rows = await member_query_repository.age_ranges(db)
        return [MemberLabel(username=r.username, label=r.label) for r in rows]

    async def ranked_by_age_range(self, db: AsyncSession) -> list[MemberRank]:
        rows = await member_query_repository.ranked_by_age_range(db)
        return [MemberRank(username=r.username, age=r.age, rank=r.rank) for r in rows]

    async def username_with_constant(
        self,
        db: AsyncSession,
        constant: str,
    ) -> list[MemberConstant]:
        rows = await member_query_repository.username_with_constant(db, constant)
        return [MemberConstant(username=r.username, constant=r.constant) for r in rows]

    async def username_with_age(self, db: AsyncSession, username: str) -> list[str]:
        """이름_나이 문자열 목록 (e.g. "member1_10")."""
        return await member_query_repository.username_with_age(db, username)

    # === 프로젝션 (Projections) ===

    async def member_dtos(self, db: AsyncSession) -> list[MemberDto]:
        rows = await member_query_repository.username_and_age(db)
        return [MemberDto(username=r.username, age=r.age) for r in rows]

    async def user_dtos(self, db: AsyncSession) -> list[UserDto]:
        """name 별칭과 최대 나이 서브쿼리 프로젝션 (Aliased name, max-age subquery)."""
        rows = await member_query_repository.name_with_max_age(db)
        return [UserDto(name=r.name, age=r.age) for r in rows]

    # === 벌크 연산 (Bulk statements) ===

    async def rename_younger_than(
        self,
        db: AsyncSession,
        age: int,
        new_name: str,
    ) -> BulkResult:
        """나이가 age 미만인 회원 이름 일괄 변경 (Bulk rename)."""
        affected: int = await member_query_repository.rename_younger_than(db, age, new_name)
        db.expire_all()
        return BulkResult(affected=affected)

    async def add_age(self, db: AsyncSession, amount: int) -> BulkResult:
        """모든 회원 나이 일괄 증가 (Bulk age increment).

        Raises:
            BadRequestError: 증가 후 나이가 컬럼 범위를 넘을 때 (Result would overflow the age column)
        """
        stats = await member_query_repository.age_statistics(db)
        if stats.age_max is not None and stats.age_max + amount > MAX_INT:
            raise BadRequestError(f"amount {amount} would push the oldest age past {MAX_INT}")

        affected: int = await member_query_repository.add_age(db, amount)
        db.expire_all()
        return BulkResult(affected=affected)

    async def delete_older_than(self, db: AsyncSession, age: int) -> BulkResult:
        """나이가 age 초과인 회원 일괄 삭제 (Bulk delete)."""
        affected: int = await member_query_repository.delete_older_than(db, age)
        db.expire_all()
        return BulkResult(affected=affected)


# 싱글턴 인스턴스 — Singleton instance
member_query_service: MemberQueryService = MemberQueryService()
