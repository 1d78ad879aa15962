"""회원 SQLAlchemy ORM 모델 정의.

Member SQLAlchemy ORM model definition.

Tables:
    - members: 회원 (Members with an optional team reference)
"""

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from querylab.database import Base
from querylab.models.team import Team


class Member(Base):
    """회원 모델 — 이름, 나이, 선택적 팀 소속.

    Member model — Username, age and at most one team.
    A member without a team keeps team_id as NULL.

    Attributes:
        id: 고유 식별자 (Store-assigned integer identifier)
        username: 회원 이름 (Username, nullable)
        age: 나이 (Age, non-negative)
        team_id: 소속 팀 FK (Team foreign key, nullable)

    Relationships:
        team: 소속 팀 (Referenced team, or None)

    Constraints:
        ck_member_age_non_negative: 나이는 0 이상 (Age must be >= 0)
    """

    __tablename__ = "members"

    # 회원 고유 식별자 — Auto-increment primary key, immutable after insert
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 회원 이름 — NULL 허용, 정렬 시 항상 마지막 (Nullable; sorts last)
    username: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    # 나이 — Non-negative age
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # 소속 팀 FK — 팀 삭제 시 NULL로 변경 (SET NULL on team deletion)
    team_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True, index=True
    )

    __table_args__ = (
        CheckConstraint("age >= 0", name="ck_member_age_non_negative"),
    )

    # 관계 — Relationships
    team = relationship("Team", back_populates="members")

    def change_team(self, team: Team | None) -> None:
        """소속 팀을 변경하고 양방향 관계를 맞춥니다.

        Move the member to another team (or none), keeping both sides of the
        relationship consistent in the session.
        """
        self.team = team

    def __repr__(self) -> str:
        return f"Member(id={self.id}, username={self.username}, age={self.age})"
