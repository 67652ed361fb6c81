from pydantic import BaseModel, Field
from typing import Optional


class ShopItemResponse(BaseModel):
    """상점 상품"""

    id: int = Field(..., description="상품 ID")
    name: str = Field(..., description="상품명")
    description: Optional[str] = Field(None, description="상품 설명")
    price: int = Field(..., description="가격")
    quantity: int = Field(..., description="1회 구매 시 지급 수량")
    is_available: bool = Field(..., description="판매 여부")

    class Config:
        from_attributes = True


class InventoryItem(BaseModel):
    """인벤토리 항목 (상품 정보 포함)"""

    item_id: int = Field(..., description="상품 ID")
    name: str = Field(..., description="상품명")
    description: Optional[str] = Field(None, description="상품 설명")
    quantity: int = Field(..., ge=0, description="보유 수량")


class PurchaseResult(BaseModel):
    """구매 결과"""

    item: ShopItemResponse = Field(..., description="구매한 상품")
    purchased: int = Field(..., gt=0, description="구매 횟수")
    units_added: int = Field(..., description="인벤토리에 추가된 수량")
    total_cost: int = Field(..., description="총 결제 금액")
    owned_after: int = Field(..., description="구매 후 보유 수량")
    wallet_after: int = Field(..., description="구매 후 지갑 잔액")


class RedeemResult(BaseModel):
    """사용 결과"""

    item_name: str = Field(..., description="상품명")
    remaining: int = Field(..., ge=0, description="남은 수량")
    last_used: bool = Field(..., description="마지막 한 개를 사용했는지 여부")
