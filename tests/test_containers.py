from unittest.mock import patch

import pytest

from econbot.containers import Container
from econbot.logging_config import setup_logging
from econbot.services.giveaway_service import GiveawayService
from econbot.services.ledger_service import LedgerService
from econbot.services.shop_service import ShopService


@pytest.fixture
def container(db):
    container = Container()
    container.repositories.get_db.override(db)
    yield container
    container.repositories.get_db.reset_override()


class TestContainer:
    """DI 컨테이너 구성 테스트"""

    def test_services_share_session(self, container, db):
        # Act
        ledger_service = container.services.ledger_service()
        shop_service = container.services.shop_service()

        # Assert
        assert isinstance(ledger_service, LedgerService)
        assert isinstance(shop_service, ShopService)
        assert ledger_service.db is db
        assert shop_service.db is db

    def test_settings_are_singleton(self, container):
        first = container.services.ledger_service()
        second = container.services.blackjack_service()

        assert first.settings is second.settings

    def test_factory_returns_new_instances(self, container):
        assert isinstance(container.services.giveaway_service(), GiveawayService)
        assert container.services.job_service() is not container.services.job_service()

    def test_resolved_service_works_end_to_end(self, container):
        ledger_service = container.services.ledger_service()

        ledger_service.adjust_wallet("u1", 10)

        assert ledger_service.get_balances("u1").wallet == 10


class TestLoggingConfig:
    def test_setup_logging_sets_level(self):
        with patch("logging.config.dictConfig") as mock_dict_config:
            setup_logging("debug")

        config = mock_dict_config.call_args[0][0]
        assert config["loggers"]["econbot"]["level"] == "DEBUG"
        assert config["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"
