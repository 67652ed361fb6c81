from typing import Optional, Dict, Any


class EconomyError(Exception):
    """Base exception for economy core errors"""
    def __init__(
        self,
        error_code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.error_code = error_code
        self.message = message
        self.details = details or {}

        super().__init__(message)

    def __str__(self) -> str:  # Ensure str(e) returns the human message
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details
            }
        }

class InvalidAmountError(EconomyError):
    """Non-positive amount, bet or quantity"""
    def __init__(self, message: str = "Amount must be greater than zero", details: Optional[Dict] = None):
        super().__init__(
            error_code="AMOUNT_001",
            message=message,
            details=details
        )

class InsufficientFundsError(EconomyError):
    """Insufficient wallet or bank balance"""
    def __init__(self, message: str = "Insufficient funds", details: Optional[Dict] = None):
        super().__init__(
            error_code="BALANCE_001",
            message=message,
            details=details
        )

class NotAssignedError(EconomyError):
    """User does not hold the job"""
    def __init__(self, message: str = "No active job found", details: Optional[Dict] = None):
        super().__init__(
            error_code="JOB_001",
            message=message,
            details=details
        )

class NoJobsAvailableError(EconomyError):
    """No job left to assign"""
    def __init__(self, message: str = "No available jobs found", details: Optional[Dict] = None):
        super().__init__(
            error_code="JOB_002",
            message=message,
            details=details
        )

class GameNotFoundError(EconomyError):
    """Blackjack game does not exist"""
    def __init__(self, message: str = "Game not found", details: Optional[Dict] = None):
        super().__init__(
            error_code="GAME_001",
            message=message,
            details=details
        )

class GameNotActiveError(EconomyError):
    """Blackjack game already finished"""
    def __init__(self, message: str = "Game is not active", details: Optional[Dict] = None):
        super().__init__(
            error_code="GAME_002",
            message=message,
            details=details
        )

class ItemNotFoundError(EconomyError):
    """Shop item missing or unavailable"""
    def __init__(self, message: str = "Item not found", details: Optional[Dict] = None):
        super().__init__(
            error_code="ITEM_001",
            message=message,
            details=details
        )

class NotOwnedError(EconomyError):
    """User owns none of the item"""
    def __init__(self, message: str = "Item not owned", details: Optional[Dict] = None):
        super().__init__(
            error_code="ITEM_002",
            message=message,
            details=details
        )

class InvalidInputError(EconomyError):
    """Validation errors"""
    def __init__(self, message: str = "Validation failed", details: Optional[Dict] = None):
        super().__init__(
            error_code="VALIDATION_001",
            message=message,
            details=details
        )

class GiveawayNotFoundError(EconomyError):
    """Giveaway does not exist"""
    def __init__(self, message: str = "Giveaway not found", details: Optional[Dict] = None):
        super().__init__(
            error_code="GIVEAWAY_001",
            message=message,
            details=details
        )

class StoreFailureError(EconomyError):
    """Persistence errors (transaction rolled back)"""
    def __init__(self, message: str = "Store operation failed", details: Optional[Dict] = None):
        super().__init__(
            error_code="STORE_001",
            message=message,
            details=details
        )
