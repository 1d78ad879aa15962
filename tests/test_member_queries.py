"""회원 쿼리 API 테스트 — 집계, 조인, 서브쿼리, CASE, 프로젝션, 벌크 연산.

Member query endpoint tests over the four-member fixture:
member1(10, teamA), member2(20, teamA), member3(30, teamB), member4(40, teamB).
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from querylab.schemas.common import MAX_INT
from querylab.services.member_query_service import member_query_service
from tests.conftest import add_member

QUERIES_URL = "/api/v1/members/queries"
BULK_URL = "/api/v1/members/bulk"
MEMBERS_URL = "/api/v1/members"


def names(data: list[dict]) -> list[str | None]:
    return [m["username"] for m in data]


class TestAggregation:
    """집계 쿼리 테스트."""

    async def test_statistics(self, client: AsyncClient, members):
        res = await client.get(f"{QUERIES_URL}/stats")
        assert res.status_code == 200
        assert res.json() == {"count": 4, "sum": 100, "avg": 25.0, "max": 40, "min": 10}

    async def test_statistics_empty(self, db: AsyncSession):
        """회원이 없으면 count/sum/avg는 0, max/min은 None."""
        stats = await member_query_service.statistics(db)
        assert stats.count == 0
        assert stats.sum == 0
        assert stats.avg == 0
        assert stats.max is None
        assert stats.min is None

    async def test_team_average_age(self, client: AsyncClient, members):
        res = await client.get(f"{QUERIES_URL}/team-average-age")
        assert res.json() == [
            {"team_name": "teamA", "avg_age": 15.0},
            {"team_name": "teamB", "avg_age": 35.0},
        ]


class TestJoins:
    """조인 쿼리 테스트."""

    async def test_members_of_team(self, client: AsyncClient, members):
        res = await client.get(f"{QUERIES_URL}/by-team", params={"team_name": "teamA"})
        assert names(res.json()) == ["member1", "member2"]

    async def test_members_of_unknown_team(self, client: AsyncClient, members):
        res = await client.get(f"{QUERIES_URL}/by-team", params={"team_name": "teamZ"})
        assert res.json() == []

    async def test_members_named_after_teams(self, client: AsyncClient, db: AsyncSession, members):
        """세타 조인 — 이름이 팀 이름과 같은 회원만."""
        await add_member(db, "teamA", 1)
        await add_member(db, "teamB", 2)
        await add_member(db, "teamC", 3)
        res = await client.get(f"{QUERIES_URL}/named-after-teams")
        assert names(res.json()) == ["teamA", "teamB"]

    async def test_with_team_filter_keeps_every_member(self, client: AsyncClient, members, teams):
        """ON 절 필터 — 모든 회원이 남고, teamB 회원의 팀 필드는 null."""
        res = await client.get(f"{QUERIES_URL}/with-team-filter", params={"team_name": "teamA"})
        data = res.json()
        assert [row["member"]["username"] for row in data] == [
            "member1", "member2", "member3", "member4",
        ]
        assert [row["team_name"] for row in data] == ["teamA", "teamA", None, None]
        assert data[0]["team_id"] == teams["teamA"].id
        assert data[2]["team_id"] is None

    async def test_outer_join_on_unrelated_column(
        self, client: AsyncClient, db: AsyncSession, members, teams
    ):
        """연관관계 없는 LEFT JOIN — 모든 회원, 이름이 같은 팀만 채워짐."""
        await add_member(db, "teamA", 1)
        await add_member(db, "teamB", 2)
        res = await client.get(f"{QUERIES_URL}/with-team-named-like-username")
        assert res.status_code == 200
        data = res.json()
        assert [row["member"]["username"] for row in data] == [
            "member1", "member2", "member3", "member4", "teamA", "teamB",
        ]
        assert [row["team_name"] for row in data] == [None, None, None, None, "teamA", "teamB"]
        assert data[4]["team_id"] == teams["teamA"].id
        assert data[5]["team_id"] == teams["teamB"].id
        assert data[0]["team_id"] is None


class TestSubqueries:
    """서브쿼리 테스트."""

    async def test_oldest(self, client: AsyncClient, members):
        res = await client.get(f"{QUERIES_URL}/oldest")
        assert names(res.json()) == ["member4"]

    async def test_oldest_ties(self, client: AsyncClient, db: AsyncSession, members):
        await add_member(db, "elder", 40)
        res = await client.get(f"{QUERIES_URL}/oldest")
        assert names(res.json()) == ["member4", "elder"]

    async def test_at_or_above_average_age(self, client: AsyncClient, members):
        res = await client.get(f"{QUERIES_URL}/at-or-above-average-age")
        assert names(res.json()) == ["member3", "member4"]

    @pytest.mark.parametrize(
        "older_than, expected",
        [
            (10, ["member2", "member3", "member4"]),
            (30, ["member4"]),
            (40, []),
        ],
    )
    async def test_age_in_subquery(self, client: AsyncClient, members, older_than, expected):
        res = await client.get(f"{QUERIES_URL}/age-in", params={"older_than": older_than})
        assert names(res.json()) == expected


class TestCaseAndProjection:
    """CASE, 문자열 결합, 프로젝션 테스트."""

    async def test_age_labels(self, client: AsyncClient, members):
        res = await client.get(f"{QUERIES_URL}/age-labels")
        assert [row["label"] for row in res.json()] == ["ten", "twenty", "other", "other"]

    async def test_age_ranges(self, client: AsyncClient, members):
        res = await client.get(f"{QUERIES_URL}/age-ranges")
        assert [row["label"] for row in res.json()] == ["0-20", "0-20", "21-30", "other"]

    async def test_ranked_by_age_range(self, client: AsyncClient, members):
        """30 초과 → 0-20 → 21-30 순서."""
        res = await client.get(f"{QUERIES_URL}/ranked")
        data = res.json()
        assert names(data) == ["member4", "member1", "member2", "member3"]
        assert [row["rank"] for row in data] == [3, 2, 2, 1]

    async def test_username_with_constant(self, client: AsyncClient, members):
        res = await client.get(f"{QUERIES_URL}/username-constant")
        data = res.json()
        assert names(data) == ["member1", "member2", "member3", "member4"]
        assert {row["constant"] for row in data} == {"A"}

        res = await client.get(f"{QUERIES_URL}/username-constant", params={"constant": "B"})
        assert res.json()[0] == {"username": "member1", "constant": "B"}

    async def test_username_with_age(self, client: AsyncClient, members):
        res = await client.get(f"{QUERIES_URL}/username-age", params={"username": "member1"})
        assert res.json() == ["member1_10"]

    async def test_member_dtos(self, client: AsyncClient, members):
        res = await client.get(f"{QUERIES_URL}/member-dtos")
        assert res.json()[0] == {"username": "member1", "age": 10}
        assert len(res.json()) == 4

    async def test_user_dtos_use_max_age(self, client: AsyncClient, members):
        """name 별칭 + 모든 행의 나이는 최대 나이."""
        res = await client.get(f"{QUERIES_URL}/user-dtos")
        data = res.json()
        assert [row["name"] for row in data] == ["member1", "member2", "member3", "member4"]
        assert {row["age"] for row in data} == {40}


class TestBulk:
    """벌크 연산 테스트 — 이후 조회는 DB 상태를 반영해야 한다."""

    async def test_bulk_rename(self, client: AsyncClient, members):
        member1_id = members["member1"].id
        res = await client.post(f"{BULK_URL}/rename", params={"younger_than": 28, "new_name": "minor"})
        assert res.status_code == 200
        assert res.json() == {"affected": 2}

        res = await client.get(f"{MEMBERS_URL}/{member1_id}")
        assert res.json()["username"] == "minor"

        res = await client.get(MEMBERS_URL, params={"username": "minor"})
        assert len(res.json()) == 2

    async def test_bulk_add_age(self, client: AsyncClient, members):
        res = await client.post(f"{BULK_URL}/add-age", params={"amount": 1})
        assert res.json() == {"affected": 4}

        res = await client.get(f"{QUERIES_URL}/stats")
        assert res.json()["sum"] == 104
        assert res.json()["min"] == 11

    async def test_bulk_add_age_default_amount(self, client: AsyncClient, members):
        await client.post(f"{BULK_URL}/add-age")
        res = await client.get(f"{QUERIES_URL}/stats")
        assert res.json()["max"] == 41

    async def test_bulk_add_age_overflow_rejected(
        self, client: AsyncClient, db: AsyncSession, members
    ):
        """증가 후 나이가 INTEGER 범위를 넘으면 아무것도 바꾸지 않고 400."""
        await add_member(db, "elder", MAX_INT - 1)
        res = await client.post(f"{BULK_URL}/add-age", params={"amount": 5})
        assert res.status_code == 400

        res = await client.get(f"{QUERIES_URL}/stats")
        assert res.json()["min"] == 10

        res = await client.post(f"{BULK_URL}/add-age", params={"amount": 1})
        assert res.json() == {"affected": 5}

    async def test_bulk_params_beyond_column_range(self, client: AsyncClient):
        huge = 10**20
        res = await client.post(f"{BULK_URL}/add-age", params={"amount": huge})
        assert res.status_code == 422
        res = await client.delete(BULK_URL, params={"older_than": huge})
        assert res.status_code == 422
        res = await client.post(f"{BULK_URL}/rename", params={"younger_than": huge, "new_name": "x"})
        assert res.status_code == 422
        res = await client.get(f"{QUERIES_URL}/age-in", params={"older_than": huge})
        assert res.status_code == 422

    async def test_bulk_delete(self, client: AsyncClient, members):
        res = await client.delete(BULK_URL, params={"older_than": 18})
        assert res.json() == {"affected": 3}

        res = await client.get(MEMBERS_URL)
        assert names(res.json()) == ["member1"]

    async def test_bulk_delete_none(self, client: AsyncClient, members):
        res = await client.delete(BULK_URL, params={"older_than": 100})
        assert res.json() == {"affected": 0}

    async def test_bulk_invalid_params(self, client: AsyncClient):
        res = await client.post(f"{BULK_URL}/add-age", params={"amount": 0})
        assert res.status_code == 422
        res = await client.post(f"{BULK_URL}/rename", params={"younger_than": 10, "new_name": ""})
        assert res.status_code == 422
