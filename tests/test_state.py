import asyncio
import json

import pytest
from PIL import Image

from dinerdesk.catalog import CatalogValidationError
from dinerdesk.images import ImageLoadError
from dinerdesk.kitchen import EmptyOrderError
from dinerdesk.models import GalleryImage, TicketStatus
from dinerdesk.persistence import ImportFormatError, load_state
from dinerdesk.qr import InvalidTableError
from dinerdesk.state import Controller


def test_catalog_changes_are_saved(controller, store):
    item = controller.add_menu_item("Drinks", "Iced Tea", "3.00")
    controller.edit_menu_item(item.id, "Drinks", "Iced Lemon Tea", "3.40")
    controller.delete_menu_item(1)

    names = [entry.name for entry in load_state(store).menu]
    assert "Iced Lemon Tea" in names
    assert "Bruschetta" not in names


def test_invalid_menu_item_changes_nothing(controller, store):
    before = list(controller.state.catalog)

    with pytest.raises(CatalogValidationError):
        controller.add_menu_item("Drinks", "", "1")

    assert list(controller.state.catalog) == before
    assert load_state(store).menu == before


def test_order_flow_submits_ticket_for_selected_table(controller, store):
    controller.select_table(4)
    controller.add_to_order(1)
    controller.add_to_order(3)
    controller.change_qty(1, 1)

    ticket = controller.submit_order()

    assert ticket.table == 4
    assert [(line.id, line.qty) for line in ticket.items] == [(1, 1), (3, 2)]
    assert len(controller.state.order) == 0
    assert load_state(store).tickets[0].id == ticket.id


def test_add_to_order_unknown_item_is_ignored(controller):
    assert controller.add_to_order(999) is None
    assert len(controller.state.order) == 0


def test_empty_submit_leaves_queue_alone(controller, store):
    with pytest.raises(EmptyOrderError):
        controller.submit_order()

    assert len(controller.state.kitchen) == 0
    assert load_state(store).tickets == []


def test_select_table_rejects_out_of_range(controller):
    with pytest.raises(InvalidTableError):
        controller.select_table(0)
    assert controller.state.table == 1


def test_mark_done_is_saved(controller, store):
    controller.add_to_order(2)
    ticket = controller.submit_order()

    controller.mark_done(ticket.id)

    assert load_state(store).tickets[0].status is TicketStatus.DONE


def test_tickets_survive_a_restart_but_the_order_does_not(controller, store, clock):
    controller.add_to_order(1)
    controller.submit_order()
    controller.add_to_order(2)

    restarted = Controller(store, clock=clock)

    assert len(restarted.state.kitchen) == 1
    assert len(restarted.state.order) == 0


def test_deleting_menu_item_keeps_ticket_snapshot(controller):
    controller.add_to_order(1)
    ticket = controller.submit_order()

    controller.delete_menu_item(1)

    assert controller.state.kitchen.get(ticket.id).items[0].name == "Bruschetta"


def test_export_then_import_menu_only_keeps_gallery(controller, tmp_path):
    controller.state.gallery.append(GalleryImage(id=5, src="data:image/png;base64,AA=="))
    target = controller.export_to(tmp_path / "out" / "export.json")
    assert set(json.loads(target.read_text(encoding="utf-8"))) == {"menu", "gallery"}

    replaced = controller.apply_import(json.dumps({"menu": [{"id": 7, "category": "Drinks", "name": "Cola", "price": 2.5}]}))

    assert replaced == ["menu"]
    assert [item.name for item in controller.state.catalog] == ["Cola"]
    assert [image.id for image in controller.state.gallery] == [5]


def test_malformed_import_changes_nothing(controller):
    before = list(controller.state.catalog)

    with pytest.raises(ImportFormatError):
        controller.apply_import("{nope")

    assert list(controller.state.catalog) == before


def test_import_with_invalid_menu_entry_changes_nothing(controller, store):
    before = list(controller.state.catalog)
    text = json.dumps({"menu": [
        {"id": 1, "category": "Drinks", "name": "Tea", "price": 2},
        {"id": 2, "category": "Drinks", "name": "", "price": -3},
    ]})

    with pytest.raises(ImportFormatError):
        controller.apply_import(text)

    assert list(controller.state.catalog) == before
    assert load_state(store).menu == before


def test_import_from_file_runs_async(controller, tmp_path):
    source = tmp_path / "import.json"
    source.write_text(json.dumps({"gallery": [{"id": 9, "src": "data:x"}]}), encoding="utf-8")

    replaced = asyncio.run(controller.import_from(source))

    assert replaced == ["gallery"]
    assert controller.state.gallery == [GalleryImage(id=9, src="data:x")]
    assert asyncio.run(controller.import_from("")) == []


def test_gallery_images_are_added_and_deleted(controller, store, tmp_path):
    picture = tmp_path / "room.png"
    Image.new("RGB", (8, 8), color=(10, 120, 10)).save(picture, format="PNG")

    image = asyncio.run(controller.add_gallery_image(picture))

    assert image.src.startswith("data:image/png;base64,")
    assert load_state(store).gallery == [image]
    assert controller.delete_gallery_image(image.id) is True
    assert controller.delete_gallery_image(image.id) is False
    assert load_state(store).gallery == []


def test_failed_image_read_changes_nothing(controller, tmp_path):
    with pytest.raises(ImageLoadError):
        asyncio.run(controller.attach_item_image(1, tmp_path / "missing.png"))

    assert controller.state.catalog.get(1).image is None
    assert asyncio.run(controller.add_gallery_image(None)) is None
    assert controller.state.gallery == []


def test_attach_item_image_sets_image(controller, store, tmp_path):
    picture = tmp_path / "dish.png"
    Image.new("RGB", (8, 8)).save(picture, format="PNG")

    item = asyncio.run(controller.attach_item_image(3, picture))

    assert item.image.startswith("data:image/png;base64,")
    assert [entry.image is not None for entry in load_state(store).menu if entry.id == 3] == [True]
