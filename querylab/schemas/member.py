"""회원 관련 Pydantic 요청/응답 스키마 정의.

Member Pydantic request/response schema definitions.
Covers member creation, the optional-field search condition, sort keys,
and the flat projections returned by query endpoints.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict

from querylab.schemas.common import Age, RecordId


# === 회원 (Member) 스키마 ===

class MemberCreate(BaseModel):
    """회원 생성 요청 스키마.

    Member creation request schema.

    Attributes:
        username: 회원 이름 (Username, optional)
        age: 나이 (Age, non-negative)
        team_id: 소속 팀 ID (Team identifier, optional)
    """

    username: str | None = None  # 회원 이름 — NULL 허용 (Nullable username)
    age: Age = 0  # 나이 (Non-negative age)
    team_id: RecordId | None = None  # 소속 팀 ID (Team identifier, optional)


class MemberTeamChange(BaseModel):
    """회원 팀 변경 요청 스키마. team_id가 None이면 팀에서 제외."""

    team_id: RecordId | None = None


class MemberResponse(BaseModel):
    """회원 응답 스키마.

    Member response schema returned from API.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int  # 회원 ID (Member identifier)
    username: str | None  # 회원 이름 (Username)
    age: int  # 나이 (Age)
    team_id: int | None  # 소속 팀 ID (Team identifier)


# === 검색 조건 (Search condition) 스키마 ===

class MemberSearchCondition(BaseModel):
    """회원 검색 조건 — 각 필드는 독립적으로 선택 사항.

    Member search condition. Every field is optional and independent:
    ``None`` means "no constraint", never "match null". Zero and empty
    strings are real values and are filtered on.

    Attributes:
        username: 회원 이름 일치 (Username equality)
        team_name: 팀 이름 일치 (Team name equality)
        age_goe: 최소 나이, 이상 (Minimum age, inclusive)
        age_loe: 최대 나이, 이하 (Maximum age, inclusive)
    """

    username: str | None = None
    team_name: str | None = None
    age_goe: Age | None = None
    age_loe: Age | None = None

    def is_empty(self) -> bool:
        """모든 조건이 비어 있는지 확인합니다 (Whether every field is absent)."""
        return all(value is None for value in self.model_dump().values())


SortField = Literal["id", "username", "age", "team_name"]
SortDirection = Literal["asc", "desc"]


class SortKey(BaseModel):
    """정렬 키 — 필드와 방향.

    Explicit sort key supplied by the caller.
    Parsed from strings like ``"username:desc"`` or ``"age"`` (ascending).
    """

    field: SortField
    direction: SortDirection = "asc"


# === 프로젝션 (Projection) 스키마 ===

class MemberTeamDto(BaseModel):
    """회원-팀 평면 프로젝션.

    Flat member/team projection produced by a left join.
    team_id and team_name are None for members without a team.
    """

    member_id: int
    username: str | None
    age: int
    team_id: int | None = None
    team_name: str | None = None


class MemberDto(BaseModel):
    """회원 이름/나이 프로젝션 (Username and age projection)."""

    username: str | None
    age: int


class UserDto(BaseModel):
    """이름을 name으로 매핑한 프로젝션 (Projection with username aliased to name)."""

    name: str | None
    age: int


class MemberLabel(BaseModel):
    """회원 이름과 계산된 라벨 (Username with a computed label)."""

    username: str | None
    label: str


class MemberConstant(BaseModel):
    """회원 이름과 상수 값 (Username with a constant projected column)."""

    username: str | None
    constant: str


class MemberRank(BaseModel):
    """회원 이름, 나이, CASE 기반 순위 (Username, age and CASE-derived rank)."""

    username: str | None
    age: int
    rank: int


class MemberTeamPair(BaseModel):
    """회원과 (ON 조건을 만족하는) 팀 쌍 — Member with the team matched by the ON clause."""

    member: MemberResponse
    team_id: int | None = None
    team_name: str | None = None


# === 집계 (Aggregation) 스키마 ===

class AgeStatistics(BaseModel):
    """나이 집계 결과 — count/sum/avg/max/min of age."""

    count: int
    sum: int
    avg: float
    max: int | None
    min: int | None


class TeamAverageAge(BaseModel):
    """팀별 평균 나이 (Average age per team)."""

    team_name: str
    avg_age: float


class BulkResult(BaseModel):
    """벌크 연산 결과 — 영향받은 행 수 (Rows affected by a bulk statement)."""

    affected: int
