import pytest

from econbot.core.exceptions import (
    InsufficientFundsError,
    InvalidAmountError,
    InvalidInputError,
    ItemNotFoundError,
    NotOwnedError,
)
from econbot.services.ledger_service import LedgerService
from econbot.services.shop_service import ShopService


@pytest.fixture
def shop_service(db):
    return ShopService(db)


@pytest.fixture
def ledger(db):
    return LedgerService(db)


@pytest.fixture
def potion(shop_service):
    return shop_service.add_item(price=25, name="Potion", description="Restores health")


class TestAddItem:
    """상품 등록 테스트"""

    def test_add_item(self, shop_service):
        # Act
        item = shop_service.add_item(price=10, name=" Cookie ", description="Tasty", quantity=3)

        # Assert
        assert item.name == "Cookie"
        assert item.quantity == 3
        assert item.is_available is True
        assert [i.name for i in shop_service.get_shop_items()] == ["Cookie"]

    @pytest.mark.parametrize(
        "price, name, description, quantity",
        [
            (0, "Cookie", "Tasty", 1),
            (-5, "Cookie", "Tasty", 1),
            (10, "   ", "Tasty", 1),
            (10, "Cookie", "", 1),
            (10, "Cookie", "Tasty", 0),
        ],
    )
    def test_invalid_item_rejected(self, shop_service, price, name, description, quantity):
        with pytest.raises(InvalidInputError):
            shop_service.add_item(price, name, description, quantity)

        assert shop_service.get_shop_items() == []

    def test_duplicate_available_name_rejected(self, shop_service, potion):
        with pytest.raises(InvalidInputError):
            shop_service.add_item(price=5, name="Potion", description="Again")

    def test_name_reusable_after_removal(self, shop_service, potion):
        """판매 중지된 상품명은 다시 등록 가능"""
        shop_service.remove_item("Potion")

        item = shop_service.add_item(price=30, name="Potion", description="New formula")

        assert item.id != potion.id
        assert shop_service.get_shop_item_by_name("Potion").price == 30


class TestInventory:
    """인벤토리 테스트"""

    def test_add_item_to_inventory_sums(self, shop_service, potion):
        # Act
        shop_service.add_item_to_inventory("u1", potion.id)
        result = shop_service.add_item_to_inventory("u1", potion.id, 2)

        # Assert
        assert result.quantity == 3
        inventory = shop_service.get_inventory("u1")
        assert len(inventory) == 1
        assert inventory[0].name == "Potion"
        assert inventory[0].quantity == 3

    def test_add_unknown_item_to_inventory(self, shop_service):
        with pytest.raises(ItemNotFoundError):
            shop_service.add_item_to_inventory("u1", 42)

    def test_add_non_positive_quantity(self, shop_service, potion):
        with pytest.raises(InvalidAmountError):
            shop_service.add_item_to_inventory("u1", potion.id, 0)


class TestPurchase:
    """구매 테스트"""

    def test_purchase_debits_and_grants_bundle(self, shop_service, ledger):
        # Arrange
        ledger.adjust_wallet("u1", 100)
        shop_service.add_item(price=20, name="Arrows", description="Bundle", quantity=5)

        # Act
        result = shop_service.purchase("u1", "Arrows", 2)

        # Assert
        assert result.total_cost == 40
        assert result.units_added == 10
        assert result.owned_after == 10
        assert result.wallet_after == 60
        assert ledger.get_balances("u1").wallet == 60

    def test_purchase_insufficient_funds(self, shop_service, ledger, potion):
        """잔액 부족 시 지갑과 인벤토리 모두 변경 없음"""
        ledger.adjust_wallet("u1", 40)

        with pytest.raises(InsufficientFundsError):
            shop_service.purchase("u1", "Potion", 2)

        assert ledger.get_balances("u1").wallet == 40
        assert shop_service.get_inventory("u1") == []

    def test_purchase_unknown_item(self, shop_service, ledger):
        ledger.adjust_wallet("u1", 40)

        with pytest.raises(ItemNotFoundError):
            shop_service.purchase("u1", "Nothing")

    def test_purchase_removed_item(self, shop_service, ledger, potion):
        ledger.adjust_wallet("u1", 100)
        shop_service.remove_item("Potion")

        with pytest.raises(ItemNotFoundError):
            shop_service.purchase("u1", "Potion")

        assert ledger.get_balances("u1").wallet == 100


class TestRedeem:
    """사용 테스트"""

    def test_redeem_last_unit_removes_row(self, shop_service, potion):
        # Arrange
        shop_service.add_item_to_inventory("u1", potion.id, 1)

        # Act
        result = shop_service.redeem("u1", "Potion")

        # Assert
        assert result.remaining == 0
        assert result.last_used is True
        assert shop_service.get_inventory("u1") == []

    def test_redeem_decrements(self, shop_service, potion):
        shop_service.add_item_to_inventory("u1", potion.id, 3)

        result = shop_service.redeem("u1", "Potion")

        assert result.remaining == 2
        assert result.last_used is False
        assert shop_service.get_inventory("u1")[0].quantity == 2

    def test_redeem_not_owned(self, shop_service, potion):
        with pytest.raises(NotOwnedError) as exc_info:
            shop_service.redeem("u1", "Potion")

        assert exc_info.value.error_code == "ITEM_002"

    def test_redeem_unknown_item(self, shop_service):
        with pytest.raises(ItemNotFoundError):
            shop_service.redeem("u1", "Ghost")


class TestRemoveItem:
    def test_remove_keeps_holdings(self, shop_service, potion):
        """판매 중지해도 보유분은 유지"""
        shop_service.add_item_to_inventory("u1", potion.id, 2)

        shop_service.remove_item("Potion")

        assert shop_service.get_shop_items() == []
        assert shop_service.get_inventory("u1")[0].quantity == 2
        with pytest.raises(ItemNotFoundError):
            shop_service.get_shop_item_by_name("Potion")

    def test_remove_unknown_item(self, shop_service):
        with pytest.raises(ItemNotFoundError):
            shop_service.remove_item("Ghost")
