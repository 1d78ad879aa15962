"""시드 스크립트 테스트."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

import querylab.seed as seed_module
from querylab.models import Member, Team


async def test_seed_is_idempotent(
    engine: AsyncEngine,
    session_factory: async_sessionmaker[AsyncSession],
    monkeypatch,
):
    monkeypatch.setattr(seed_module, "engine", engine)
    monkeypatch.setattr(seed_module, "async_session", session_factory)

    await seed_module.seed(member_count=6)
    await seed_module.seed(member_count=6)

    async with session_factory() as db:
        teams = (await db.execute(select(Team).order_by(Team.id))).scalars().all()
        assert [t.name for t in teams] == ["teamA", "teamB"]

        total = (await db.execute(select(func.count(Member.id)))).scalar_one()
        assert total == 6

        team_a_ages = (
            await db.execute(
                select(Member.age).join(Member.team).where(Team.name == "teamA").order_by(Member.age)
            )
        ).scalars().all()
        assert team_a_ages == [0, 2, 4]
