from .ledger import Balances, TransferResult, RobResult, LeaderboardEntry
from .jobs import JobItem, JobListItem, JobAssignment, CompleteJobResult
from .blackjack import Card, BlackjackGameState, HitResult, StandResult
from .shop import ShopItemResponse, InventoryItem, PurchaseResult, RedeemResult
from .giveaway import GiveawayItem, GiveawayDrawResult
