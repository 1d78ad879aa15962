"""공통 Pydantic 스키마 정의 — 정수 범위 상한.

Common schema definitions shared across member and team APIs.
Integer inputs are bounded by the storage column range so that an
oversized value is rejected with 422 instead of failing in the driver.
"""

from typing import Annotated

from pydantic import Field

# INTEGER 컬럼 최대값 — Largest value an INTEGER column holds (int32)
MAX_INT: int = 2_147_483_647

# 나이 — 0 이상 MAX_INT 이하 (Age within the column range)
Age = Annotated[int, Field(ge=0, le=MAX_INT)]

# 레코드 ID — Record identifier within the column range
RecordId = Annotated[int, Field(ge=1, le=MAX_INT)]
