from dependency_injector import containers, providers

from econbot.database.session import get_db
from econbot.services.ledger_service import LedgerService
from econbot.services.job_service import JobService
from econbot.services.blackjack_service import BlackjackService
from econbot.services.shop_service import ShopService
from econbot.services.giveaway_service import GiveawayService
from econbot.config import Settings


class ConfigModule(containers.DeclarativeContainer):
    """Application configuration."""

    config = providers.Singleton(Settings)


class RepositoryModule(containers.DeclarativeContainer):
    """Database session."""

    get_db = providers.Resource(get_db)


class ServiceModule(containers.DeclarativeContainer):
    """Service layer dependencies."""

    config = providers.DependenciesContainer()
    repositories = providers.DependenciesContainer()

    ledger_service = providers.Factory(LedgerService, db=repositories.get_db, settings=config.config)
    job_service = providers.Factory(JobService, db=repositories.get_db)
    blackjack_service = providers.Factory(BlackjackService, db=repositories.get_db, settings=config.config)
    shop_service = providers.Factory(ShopService, db=repositories.get_db)
    giveaway_service = providers.Factory(GiveawayService, db=repositories.get_db)


class Container(containers.DeclarativeContainer):
    """Application container.

    Command handlers resolve one service per user action, e.g.
    ``container.services.ledger_service().transfer(...)``.
    """

    config = providers.Container(ConfigModule)
    repositories = providers.Container(RepositoryModule)
    services = providers.Container(
        ServiceModule, config=config, repositories=repositories
    )
