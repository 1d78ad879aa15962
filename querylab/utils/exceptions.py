"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for common error patterns
so services and repositories can raise them without status codes at each call site.

Usage:
    from querylab.utils.exceptions import NotFoundError, InvalidConditionError
    raise NotFoundError("Member not found")
    raise InvalidConditionError("age_goe must not exceed age_loe")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    Raised when a requested member or team does not exist.
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 중복 리소스 생성 시도 시 사용.

    Raised when a uniqueness rule is violated (e.g. duplicate team name).
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    Raised when request data is invalid beyond what Pydantic validation catches.
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidConditionError(BadRequestError):
    """400 검색 조건 오류 — 서로 모순되는 검색 조건.

    Raised before any query is built when a search condition can never match,
    e.g. a minimum age greater than the maximum age.
    """

    def __init__(self, detail: str = "Invalid search condition") -> None:
        super().__init__(detail=detail)


class StoreUnavailableError(HTTPException):
    """503 Service Unavailable 예외 — 데이터베이스에 연결할 수 없을 때 사용.

    Raised when the backing database cannot be reached. Not retried here;
    reads are safe for the caller to repeat.
    """

    def __init__(self, detail: str = "Record store unavailable") -> None:
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)
