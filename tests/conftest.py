import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from econbot.config import Settings
from econbot.models.base import Base

# create_all 대상 테이블 등록
from econbot.models import account, blackjack, giveaway, job, shop  # noqa: F401


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=engine, expire_on_commit=False
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def test_settings():
    return Settings(
        ROB_MAX_STEAL=100,
        ROB_PENALTY=50,
        ROB_SUCCESS_RATE=0.5,
        DEALER_STAND_TOTAL=17,
        BLACKJACK_WIN_MULTIPLIER=2,
        LEADERBOARD_LIMIT=10,
    )
