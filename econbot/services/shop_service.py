from typing import List
from sqlalchemy.orm import Session

from econbot.repositories.shop_repository import ShopRepository
from econbot.repositories.account_repository import AccountRepository
from econbot.core.exceptions import (
    InsufficientFundsError,
    InvalidAmountError,
    InvalidInputError,
    ItemNotFoundError,
    NotOwnedError,
)
from econbot.database.session import atomic
from econbot.schemas.shop import (
    InventoryItem,
    PurchaseResult,
    RedeemResult,
    ShopItemResponse,
)
import logging

logger = logging.getLogger(__name__)


class ShopService:
    """상점/인벤토리 관련 비즈니스 로직을 담당하는 서비스"""

    def __init__(self, db: Session):
        self.db = db
        self.shop_repo = ShopRepository(db)
        self.account_repo = AccountRepository(db)

    def _require_available_item(self, name: str) -> ShopItemResponse:
        item = self.shop_repo.get_available_item_by_name(name)
        if not item:
            raise ItemNotFoundError(f"Item not found: {name}", details={"name": name})
        return item

    def add_item(
        self, price: int, name: str, description: str, quantity: int = 1
    ) -> ShopItemResponse:
        """상점에 상품 등록 (관리자용)

        Args:
            price: 가격 (> 0)
            name: 상품명 - 판매 중인 상품 사이에서 유일
            description: 상품 설명
            quantity: 1회 구매 시 지급 수량

        Returns:
            ShopItemResponse: 등록된 상품
        """
        name = (name or "").strip()
        description = (description or "").strip()
        if not name or not description:
            raise InvalidInputError("Item name and description are required")
        if price is None or price <= 0:
            raise InvalidInputError(f"Invalid price: {price}", details={"price": price})
        if quantity is None or quantity <= 0:
            raise InvalidInputError(
                f"Invalid quantity: {quantity}", details={"quantity": quantity}
            )

        with atomic(self.db):
            if self.shop_repo.get_available_item_by_name(name):
                raise InvalidInputError(
                    f"Item already exists: {name}", details={"name": name}
                )
            item = self.shop_repo.create_item(
                name=name, description=description, price=price, quantity=quantity
            )

        logger.info(f"Created shop item {item.id}: {name} (price={price}, quantity={quantity})")
        return item

    def get_shop_items(self) -> List[ShopItemResponse]:
        with atomic(self.db):
            items = self.shop_repo.get_shop_items()

        logger.info(f"Retrieved shop catalog with {len(items)} items")
        return items

    def get_shop_item_by_name(self, name: str) -> ShopItemResponse:
        with atomic(self.db):
            return self._require_available_item(name)

    def add_item_to_inventory(
        self, user_id: str, item_id: int, quantity: int = 1
    ) -> InventoryItem:
        """인벤토리에 상품 추가 - 기존 보유분과 합산"""
        if quantity is None or quantity <= 0:
            raise InvalidAmountError(
                f"Quantity must be greater than zero: {quantity}",
                details={"quantity": quantity},
            )

        with atomic(self.db):
            item = self.shop_repo.get_by_field("id", item_id)
            if not item:
                raise ItemNotFoundError(
                    f"Item not found: {item_id}", details={"item_id": item_id}
                )
            owned = self.shop_repo.add_to_inventory(user_id, item_id, quantity)

        logger.info(f"Added {quantity}x item {item_id} to inventory of user {user_id}")
        return InventoryItem(
            item_id=item.id,
            name=item.name,
            description=item.description,
            quantity=owned,
        )

    def purchase(self, user_id: str, item_name: str, quantity: int = 1) -> PurchaseResult:
        """상품 구매

        지갑 차감과 인벤토리 지급이 같은 트랜잭션에서 처리됩니다.
        지급 수량은 quantity × 상품 묶음 수량입니다.
        """
        if quantity is None or quantity <= 0:
            raise InvalidAmountError(
                f"Quantity must be greater than zero: {quantity}",
                details={"quantity": quantity},
            )

        with atomic(self.db):
            item = self._require_available_item(item_name)
            total_cost = item.price * quantity

            self.account_repo.ensure_account(user_id)
            if not self.account_repo.debit_wallet(user_id, total_cost):
                available = self.account_repo.get_wallet(user_id)
                logger.warning(
                    f"Purchase of {item_name} rejected for user {user_id}: "
                    f"required {total_cost}, available {available}"
                )
                raise InsufficientFundsError(
                    f"Insufficient funds. Required: {total_cost}, Available: {available}",
                    details={"required": total_cost, "available": available},
                )

            units_added = quantity * item.quantity
            owned_after = self.shop_repo.add_to_inventory(user_id, item.id, units_added)
            wallet_after = self.account_repo.get_wallet(user_id)

        logger.info(
            f"User {user_id} purchased {quantity}x {item_name} for {total_cost}"
        )
        return PurchaseResult(
            item=item,
            purchased=quantity,
            units_added=units_added,
            total_cost=total_cost,
            owned_after=owned_after,
            wallet_after=wallet_after,
        )

    def redeem(self, user_id: str, item_name: str) -> RedeemResult:
        """보유 상품 1개 사용

        Raises:
            ItemNotFoundError: 판매 중인 상품이 아님
            NotOwnedError: 보유 수량 없음
        """
        with atomic(self.db):
            item = self._require_available_item(item_name)
            remaining = self.shop_repo.consume_one(user_id, item.id)
            if remaining is None:
                raise NotOwnedError(
                    f"You don't have any {item.name}.",
                    details={"user_id": user_id, "item": item.name},
                )

        logger.info(f"User {user_id} redeemed {item.name}, remaining {remaining}")
        return RedeemResult(item_name=item.name, remaining=remaining, last_used=remaining == 0)

    def remove_item(self, name: str) -> None:
        """상품 판매 중지 (soft delete) - 보유분은 유지"""
        with atomic(self.db):
            if self.shop_repo.soft_delete_by_name(name) == 0:
                raise ItemNotFoundError(f"Item not found: {name}", details={"name": name})

        logger.info(f"Removed shop item {name}")

    def get_inventory(self, user_id: str) -> List[InventoryItem]:
        with atomic(self.db):
            return self.shop_repo.get_inventory(user_id)
