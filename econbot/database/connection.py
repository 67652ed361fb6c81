from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from econbot.config import settings


def build_engine(database_url: str, echo: bool = False):
    """DATABASE_URL 기반 엔진 생성 (SQLite는 스레드 체크 해제)"""
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        database_url,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,  # 연결 유효성 검사
        pool_recycle=3600,  # 1시간마다 연결 재생성
        echo=echo,  # 디버그 모드에서 SQL 로깅
    )


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

# expire_on_commit=False: 커밋 이후에도 조회한 모델 속성을 그대로 사용
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False,
)
