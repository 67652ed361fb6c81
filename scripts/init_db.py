import logging
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

load_dotenv("econbot/.env")

from econbot.config import settings
from econbot.database.connection import engine
from econbot.logging_config import setup_logging
from econbot.models.base import Base

# create_all이 모든 테이블을 인식하도록 모델 모듈 import
from econbot.models import account, blackjack, giveaway, job, shop  # noqa: F401

logger = logging.getLogger("econbot.scripts.init_db")


def init_db():
    """데이터베이스 초기화"""
    try:
        Base.metadata.create_all(bind=engine)
        logger.info(f"Database initialized successfully: {engine.url.render_as_string(hide_password=True)}")
    except Exception as e:
        logger.error(f"Database initialization failed: {str(e)}")
        raise


if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    init_db()
