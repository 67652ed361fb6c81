# Repository layer - Data access with Pydantic responses

from .base import BaseRepository
from .account_repository import AccountRepository
from .job_repository import JobRepository
from .shop_repository import ShopRepository
from .blackjack_repository import BlackjackRepository
from .giveaway_repository import GiveawayRepository

__all__ = [
    "BaseRepository",
    "AccountRepository",
    "JobRepository",
    "ShopRepository",
    "BlackjackRepository",
    "GiveawayRepository",
]
