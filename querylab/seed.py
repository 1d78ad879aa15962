"""초기 데이터 시드 스크립트 — 팀 2개와 샘플 회원 생성.

Seed script — Creates two teams and a batch of sample members for local runs.
Runs as a module, or at application startup when SEED_ON_STARTUP is set.

Usage:
    python -m querylab.seed

Creates:
    - 2개 팀: teamA, teamB (2 teams)
    - SEED_MEMBER_COUNT명 회원: member0..memberN-1, 나이 = 번호,
      짝수는 teamA, 홀수는 teamB (Members alternating between the teams)
"""

import asyncio

from sqlalchemy import select

from querylab.config import settings
from querylab.database import async_session, engine, Base
from querylab.models import Member, Team


async def seed(member_count: int | None = None) -> None:
    """데이터베이스를 샘플 데이터로 시드합니다.

    Seed the database with sample teams and members.
    Creates tables if they don't exist.

    Idempotent: 팀이 이미 있으면 건너뜁니다 (Skips if any team exists).

    Args:
        member_count: 생성할 회원 수, None이면 설정값 사용
                      (Members to create; defaults to settings.SEED_MEMBER_COUNT)
    """
    count: int = settings.SEED_MEMBER_COUNT if member_count is None else member_count

    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        result = await db.execute(select(Team).limit(1))
        if result.scalar_one_or_none():
            print("Already seeded. Skipping.")
            return

        team_a: Team = Team(name="teamA")
        team_b: Team = Team(name="teamB")
        db.add_all([team_a, team_b])
        await db.flush()  # flush로 team.id 생성 (Flush to generate team ids)

        for i in range(count):
            selected: Team = team_a if i % 2 == 0 else team_b
            db.add(Member(username=f"member{i}", age=i, team_id=selected.id))

        await db.commit()
        print(f"Seeded: teams=teamA/teamB, members={count}")


if __name__ == "__main__":
    asyncio.run(seed())
