"""팀 SQLAlchemy ORM 모델 정의.

Team SQLAlchemy ORM model definition.

Tables:
    - teams: 팀 (Teams that members may belong to)
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from querylab.database import Base


class Team(Base):
    """팀 모델 — 회원이 소속될 수 있는 팀.

    Team model — A named group that members may reference.

    Attributes:
        id: 고유 식별자 (Store-assigned integer identifier)
        name: 팀 이름 (Team name)

    Relationships:
        members: 소속 회원 목록 (Members referencing this team)
    """

    __tablename__ = "teams"

    # 팀 고유 식별자 — Auto-increment primary key, immutable after insert
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 팀 이름 — Team display name
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    # 관계 — Relationships
    members = relationship("Member", back_populates="team")

    def __repr__(self) -> str:
        return f"Team(id={self.id}, name={self.name})"
