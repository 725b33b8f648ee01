from decimal import Decimal

import pytest

from dinerdesk.catalog import Catalog, CatalogValidationError, next_id
from dinerdesk.data import default_menu
from dinerdesk.models import MenuItem
from dinerdesk.ordering import OrderBuilder


def _item(item_id: int, name: str = "Dish") -> MenuItem:
    return MenuItem(id=item_id, category="Mains", name=name, price=Decimal("1"))


def test_next_id_is_max_plus_one():
    assert next_id([_item(1), _item(3)]) == 4
    assert next_id([]) == 1


def test_add_item_normalizes_fields():
    catalog = Catalog([_item(1), _item(3)])

    item = catalog.add_item("Drinks", "  Lemonade ", "3.20", notes=" fresh ")

    assert item.id == 4
    assert item.name == "Lemonade"
    assert item.notes == "fresh"
    assert item.price == Decimal("3.20")
    assert catalog.get(4) == item


@pytest.mark.parametrize(
    "category, name, price",
    [
        ("Mains", "", "4"),
        ("Mains", "   ", "4"),
        ("Brunch", "Eggs", "4"),
        ("Mains", "Eggs", ""),
        ("Mains", "Eggs", "abc"),
        ("Mains", "Eggs", "-1"),
    ],
)
def test_add_item_rejects_bad_fields(category, name, price):
    catalog = Catalog([_item(1)])

    with pytest.raises(CatalogValidationError):
        catalog.add_item(category, name, price)

    assert [item.id for item in catalog] == [1]


def test_free_items_are_allowed():
    catalog = Catalog()
    assert catalog.add_item("Drinks", "Tap water", "0").price == Decimal("0")


def test_deleted_ids_are_not_reused():
    catalog = Catalog([_item(1), _item(2)])

    assert catalog.delete_item(2) is True
    added = catalog.add_item("Mains", "Stew", "8")

    assert added.id == 3


def test_edit_item_keeps_image_unless_replaced():
    catalog = Catalog([MenuItem(id=1, category="Mains", name="Stew", price=Decimal("8"), image="data:image/png;base64,AA==")])

    edited = catalog.edit_item(1, "Mains", "Beef Stew", "8.50", notes="slow cooked")

    assert edited.name == "Beef Stew"
    assert edited.price == Decimal("8.50")
    assert edited.image == "data:image/png;base64,AA=="
    assert catalog.get(1) == edited


def test_edit_and_delete_unknown_ids_are_noops():
    catalog = Catalog([_item(1)])

    assert catalog.edit_item(9, "Mains", "Ghost", "1") is None
    assert catalog.delete_item(9) is False
    assert [item.id for item in catalog] == [1]


def test_edit_validates_before_touching_the_item():
    catalog = Catalog([_item(1, "Stew")])

    with pytest.raises(CatalogValidationError):
        catalog.edit_item(1, "Mains", "", "1")

    assert catalog.get(1).name == "Stew"


def test_delete_does_not_touch_copied_order_lines():
    catalog = Catalog([_item(1, "Stew")])
    order = OrderBuilder()
    order.add(catalog.get(1))

    catalog.delete_item(1)

    assert order.lines[0].name == "Stew"
    assert order.lines[0].id == 1


def test_by_category_follows_category_order():
    catalog = Catalog(default_menu())
    grouped = catalog.by_category()

    assert list(grouped) == ["Starters", "Mains", "Desserts", "Drinks"]
    assert catalog.ordered()[0].name == "Bruschetta"
    assert len(catalog.ordered()) == len(catalog)
