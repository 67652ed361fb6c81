from typing import List, Optional

from sqlalchemy import and_, asc, delete, select, update
from sqlalchemy.orm import Session

from econbot.models.shop import InventoryEntry, ShopItem
from econbot.schemas.shop import InventoryItem, ShopItemResponse
from econbot.repositories.base import BaseRepository


class ShopRepository(BaseRepository[ShopItem, ShopItemResponse]):
    """상점 리포지토리 - 상품 카탈로그 및 인벤토리 관리"""

    def __init__(self, db: Session):
        super().__init__(ShopItem, ShopItemResponse, db)

    def create_item(
        self, name: str, description: str, price: int, quantity: int = 1
    ) -> ShopItemResponse:
        """새 상품 생성 (관리자용)"""
        return self.create(
            name=name,
            description=description,
            price=price,
            quantity=quantity,
            is_available=True,
        )

    def get_shop_items(self) -> List[ShopItemResponse]:
        """판매 중인 상품 목록"""
        return self.find_all(filters={"is_available": True}, order_by="id")

    def get_available_item_by_name(self, name: str) -> Optional[ShopItemResponse]:
        model_instance = (
            self.db.query(ShopItem)
            .populate_existing()
            .filter(and_(ShopItem.name == name, ShopItem.is_available.is_(True)))
            .first()
        )
        return self._to_schema(model_instance)

    def soft_delete_by_name(self, name: str) -> int:
        """판매 중지 (is_available = False) - 인벤토리는 건드리지 않음"""
        result = self.db.execute(
            update(ShopItem)
            .where(and_(ShopItem.name == name, ShopItem.is_available.is_(True)))
            .values(is_available=False)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def get_inventory_quantity(self, user_id: str, item_id: int) -> int:
        quantity = self.db.execute(
            select(InventoryEntry.quantity).where(
                and_(InventoryEntry.user_id == user_id, InventoryEntry.item_id == item_id)
            )
        ).scalar()
        return quantity or 0

    def add_to_inventory(self, user_id: str, item_id: int, quantity: int = 1) -> int:
        """
        인벤토리 UPSERT - 기존 행이 있으면 수량을 합산

        Returns:
            int: 반영 후 보유 수량
        """
        dialect_insert = self._dialect_insert()

        if dialect_insert is not None:
            stmt = dialect_insert(InventoryEntry.__table__).values(
                user_id=user_id, item_id=item_id, quantity=quantity
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["user_id", "item_id"],
                set_={"quantity": InventoryEntry.__table__.c.quantity + stmt.excluded.quantity},
            )
            self.db.execute(stmt)
        elif (
            self.db.execute(
                update(InventoryEntry)
                .where(
                    and_(
                        InventoryEntry.user_id == user_id,
                        InventoryEntry.item_id == item_id,
                    )
                )
                .values(quantity=InventoryEntry.quantity + quantity)
                .execution_options(synchronize_session=False)
            ).rowcount
            == 0
        ):
            self._insert_if_absent(
                {"user_id": user_id, "item_id": item_id, "quantity": quantity},
                index_elements=["user_id", "item_id"],
                table=InventoryEntry.__table__,
            )

        return self.get_inventory_quantity(user_id, item_id)

    def consume_one(self, user_id: str, item_id: int) -> Optional[int]:
        """
        보유 수량 1 차감, 0이 되면 행 삭제

        Returns:
            Optional[int]: 남은 수량 (보유하지 않았으면 None)
        """
        owned = and_(InventoryEntry.user_id == user_id, InventoryEntry.item_id == item_id)
        updated = self.db.execute(
            update(InventoryEntry)
            .where(and_(owned, InventoryEntry.quantity > 0))
            .values(quantity=InventoryEntry.quantity - 1)
            .execution_options(synchronize_session=False)
        ).rowcount
        if updated == 0:
            return None

        remaining = self.get_inventory_quantity(user_id, item_id)
        if remaining <= 0:
            self.db.execute(
                delete(InventoryEntry)
                .where(owned)
                .execution_options(synchronize_session=False)
            )
            return 0
        return remaining

    def get_inventory(self, user_id: str) -> List[InventoryItem]:
        """사용자 인벤토리 (상품 정보 조인)"""
        rows = self.db.execute(
            select(
                InventoryEntry.item_id,
                ShopItem.name,
                ShopItem.description,
                InventoryEntry.quantity,
            )
            .join(ShopItem, ShopItem.id == InventoryEntry.item_id)
            .where(InventoryEntry.user_id == user_id)
            .order_by(asc(ShopItem.name))
        ).all()

        return [
            InventoryItem(
                item_id=row.item_id,
                name=row.name,
                description=row.description,
                quantity=row.quantity,
            )
            for row in rows
        ]
