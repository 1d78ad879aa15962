"""팀 관련 Pydantic 요청/응답 스키마 정의.

Team Pydantic request/response schema definitions.
"""

from pydantic import BaseModel, ConfigDict, Field


class TeamCreate(BaseModel):
    """팀 생성 요청 스키마.

    Team creation request schema.

    Attributes:
        name: 팀 이름 (Team name, unique)
    """

    name: str = Field(min_length=1, max_length=100)  # 팀 이름 (Team name)


class TeamResponse(BaseModel):
    """팀 응답 스키마 (Team response schema)."""

    model_config = ConfigDict(from_attributes=True)

    id: int  # 팀 ID (Team identifier)
    name: str  # 팀 이름 (Team name)
