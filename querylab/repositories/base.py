"""기본 CRUD 레포지토리 — 모든 레포지토리의 부모 클래스.

Base CRUD Repository — Parent class for all domain repositories.
Provides generic create/read operations and maps connection failures
to StoreUnavailableError.

Usage:
    class TeamRepository(BaseRepository[Team]):
        def __init__(self) -> None:
            super().__init__(Team)
"""

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import Executable, Result, Select, func, select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from querylab.database import Base
from querylab.utils.exceptions import DuplicateError, StoreUnavailableError

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


async def execute(db: AsyncSession, statement: Executable) -> Result[Any]:
    """문장을 실행하고 연결 실패를 StoreUnavailableError로 변환합니다.

    Execute a statement, translating connection-level failures into
    StoreUnavailableError. Other database errors propagate unchanged.

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        statement: 실행할 SQLAlchemy 문장 (Statement to execute)

    Returns:
        Result: 실행 결과 (Execution result)

    Raises:
        StoreUnavailableError: DB에 연결할 수 없을 때 (Store cannot be reached)
    """
    try:
        return await db.execute(statement)
    except (OperationalError, InterfaceError, OSError) as exc:
        raise StoreUnavailableError() from exc


class BaseRepository(Generic[ModelType]):
    """제네릭 CRUD 레포지토리.

    Generic CRUD repository providing common database operations.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        """레포지토리를 초기화합니다.

        Args:
            model: 이 레포지토리가 관리할 SQLAlchemy 모델 클래스
                   (SQLAlchemy model class this repository manages)
        """
        self.model: type[ModelType] = model

    async def get_by_id(
        self,
        db: AsyncSession,
        record_id: int,
    ) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다.

        Retrieve a single record by its identifier.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 조회할 레코드 ID (Identifier of the record)

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        query: Select = select(self.model).where(self.model.id == record_id)
        result = await execute(db, query)
        return result.scalar_one_or_none()

    async def get_all(
        self,
        db: AsyncSession,
        filters: dict[str, Any] | None = None,
        order_by: Any | None = None,
    ) -> Sequence[ModelType]:
        """조건에 맞는 모든 레코드를 조회합니다.

        Retrieve all records matching the given equality filters.
        Filters whose value is None are skipped.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            filters: 추가 필터 딕셔너리 {'컬럼명': 값}
                     (Additional filter dict {'column_name': value})
            order_by: 정렬 기준 컬럼, 기본은 ID 오름차순
                      (Column to order by; defaults to id ascending)

        Returns:
            Sequence[ModelType]: 조회된 레코드 목록 (List of matching records)
        """
        query: Select = select(self.model)

        # 동적 필터 적용 — Dynamic filter application
        if filters:
            for column_name, value in filters.items():
                if hasattr(self.model, column_name) and value is not None:
                    query = query.where(getattr(self.model, column_name) == value)

        query = query.order_by(order_by if order_by is not None else self.model.id)

        result = await execute(db, query)
        return result.scalars().all()

    async def create(
        self,
        db: AsyncSession,
        obj_data: dict[str, Any],
    ) -> ModelType:
        """새 레코드를 생성합니다.

        Create a new record; the identifier is assigned by the database on flush.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            obj_data: 생성할 레코드의 데이터 딕셔너리
                      (Dictionary of data for the new record)

        Returns:
            ModelType: 생성된 레코드 (The created record)

        Raises:
            DuplicateError: 유니크 제약 위반 (Unique constraint violated on insert)
            StoreUnavailableError: DB 연결 실패 (Store unreachable)
        """
        db_obj: ModelType = self.model(**obj_data)
        db.add(db_obj)
        try:
            await db.flush()
            await db.refresh(db_obj)
        except IntegrityError as exc:
            raise DuplicateError() from exc
        except (OperationalError, InterfaceError, OSError) as exc:
            raise StoreUnavailableError() from exc
        return db_obj

    async def count(self, db: AsyncSession) -> int:
        """전체 레코드 수를 반환합니다 (Total number of records)."""
        query: Select = select(func.count()).select_from(self.model)
        return (await execute(db, query)).scalar() or 0

    async def exists(
        self,
        db: AsyncSession,
        filters: dict[str, Any],
    ) -> bool:
        """주어진 조건에 일치하는 레코드가 존재하는지 확인합니다.

        Check if a record matching the given filters exists.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            filters: 검색 조건 딕셔너리 (Filter criteria dictionary)

        Returns:
            bool: 레코드 존재 여부 (Whether a matching record exists)
        """
        query: Select = select(func.count()).select_from(self.model)
        for column_name, value in filters.items():
            if hasattr(self.model, column_name):
                query = query.where(getattr(self.model, column_name) == value)

        count: int = (await execute(db, query)).scalar() or 0
        return count > 0
