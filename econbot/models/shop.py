from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Index, Integer, Text, text, true
from sqlalchemy.orm import Mapped, mapped_column

from econbot.models.base import BaseModel


class ShopItem(BaseModel):
    __tablename__ = "shop_items"
    __table_args__ = (
        # 이름은 판매 중인 상품 사이에서만 유일 (soft-delete된 이름은 재사용 가능)
        Index(
            "uq_shop_items_available_name",
            "name",
            unique=True,
            sqlite_where=text("is_available = 1"),
            postgresql_where=text("is_available"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    # 1회 구매 시 지급되는 수량 (묶음 단위)
    quantity: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1, server_default="1"
    )
    is_available: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )


class InventoryEntry(BaseModel):
    __tablename__ = "inventory"

    user_id: Mapped[str] = mapped_column(Text, primary_key=True)
    item_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("shop_items.id"), primary_key=True
    )
    quantity: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1, server_default="1"
    )
