import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from econbot.core.exceptions import StoreFailureError
from econbot.database.connection import SessionLocal

logger = logging.getLogger(__name__)


def get_db():
    db = SessionLocal()
    try:
        yield db
    except Exception:
        if db.in_transaction():
            db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def get_db_context():
    """컨텍스트 매니저를 사용한 데이터베이스 세션 관리"""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """
    하나의 비즈니스 연산을 하나의 트랜잭션으로 묶는다.

    - 정상 종료 시 커밋
    - 비즈니스 예외(EconomyError)는 롤백 후 그대로 전파
    - SQLAlchemyError는 롤백 후 StoreFailureError로 감싸서 전파
    """
    if not db.is_active:
        db.rollback()

    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Transaction rolled back: {str(e)}")
        raise StoreFailureError(
            "Store operation failed", details={"cause": type(e).__name__}
        ) from e
    except Exception:
        db.rollback()
        raise
