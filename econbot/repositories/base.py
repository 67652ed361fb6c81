from abc import ABC
from typing import TypeVar, Generic, Optional, List, Dict, Any, Type, Callable

from sqlalchemy import Table, insert
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from pydantic import BaseModel

T = TypeVar("T")
SchemaType = TypeVar("SchemaType", bound=BaseModel)


class BaseRepository(Generic[T, SchemaType], ABC):
    """모든 리포지토리의 베이스 클래스 - Pydantic 응답 보장

    리포지토리는 flush까지만 수행하며 커밋/롤백은 서비스 계층의
    트랜잭션(atomic)이 담당합니다.
    """

    def __init__(
        self, model_class: Type[T], schema_class: Type[SchemaType], db: Session
    ):
        self.model_class = model_class
        self.schema_class = schema_class
        self.db = db

    def _to_schema(self, model_instance: Any) -> Optional[SchemaType]:
        """SQLAlchemy 모델을 Pydantic 스키마로 변환"""
        if model_instance is None:
            return None

        # Pydantic v2의 model_validate를 사용하여 from_attributes 활용
        return self.schema_class.model_validate(model_instance)

    def _dialect_insert(self) -> Optional[Callable]:
        """ON CONFLICT 구문을 지원하는 방언별 insert 함수 (미지원 시 None)"""
        dialect_name = self.db.get_bind().dialect.name
        if dialect_name == "postgresql":
            return postgresql.insert
        if dialect_name == "sqlite":
            return sqlite.insert
        return None

    def _insert_if_absent(
        self,
        values: Dict[str, Any],
        index_elements: List[str],
        table: Optional[Table] = None,
    ) -> bool:
        """
        INSERT-IF-ABSENT 원자적 삽입

        check-then-insert 대신 ON CONFLICT DO NOTHING을 사용하여
        동시에 두 요청이 같은 행을 만들려 해도 중복 키 오류가 나지 않습니다.

        Returns:
            bool: 새 행이 삽입되었으면 True
        """
        if table is None:
            table = self.model_class.__table__
        dialect_insert = self._dialect_insert()

        if dialect_insert is not None:
            stmt = (
                dialect_insert(table)
                .values(**values)
                .on_conflict_do_nothing(index_elements=index_elements)
            )
            result = self.db.execute(stmt)
            return result.rowcount > 0

        # fallback: SAVEPOINT 안에서 삽입 후 중복이면 무시
        try:
            with self.db.begin_nested():
                self.db.execute(insert(table).values(**values))
            return True
        except IntegrityError:
            return False

    def get_by_field(self, field_name: str, value: Any) -> Optional[SchemaType]:
        """특정 필드로 조회 - Pydantic 스키마 반환"""
        model_instance = (
            self.db.query(self.model_class)
            .populate_existing()
            .filter(getattr(self.model_class, field_name) == value)
            .first()
        )
        return self._to_schema(model_instance)

    def find_all(
        self,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[SchemaType]:
        """조건에 맞는 모든 레코드 조회 - Pydantic 스키마 리스트 반환"""
        # Core UPDATE 이후에도 최신 값을 읽도록 identity map 갱신
        query = self.db.query(self.model_class).populate_existing()

        if filters:
            for key, value in filters.items():
                if hasattr(self.model_class, key):
                    query = query.filter(getattr(self.model_class, key) == value)

        if order_by and hasattr(self.model_class, order_by):
            query = query.order_by(getattr(self.model_class, order_by))

        if offset:
            query = query.offset(offset)

        if limit:
            query = query.limit(limit)

        return [self._to_schema(instance) for instance in query.all()]

    def create(self, **kwargs) -> SchemaType:
        """새 레코드 생성 (flush만 수행) - Pydantic 스키마 반환"""
        instance = self.model_class(**kwargs)
        self.db.add(instance)
        self.db.flush()
        self.db.refresh(instance)
        return self._to_schema(instance)

