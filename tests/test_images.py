import base64
import io

import pytest
from PIL import Image

from dinerdesk.images import ImageLoadError, data_url_summary, encode_image_file


def _write_png(path, size=(40, 20)):
    Image.new("RGB", size, color=(200, 40, 40)).save(path, format="PNG")
    return path


def test_encode_image_returns_png_data_url(tmp_path):
    src = encode_image_file(_write_png(tmp_path / "dish.png"))

    header, payload = src.split(",", 1)
    assert header == "data:image/png;base64"
    with Image.open(io.BytesIO(base64.b64decode(payload))) as img:
        assert img.size == (40, 20)


def test_large_images_are_shrunk(tmp_path):
    src = encode_image_file(_write_png(tmp_path / "big.png", size=(1000, 500)), max_edge_px=100)

    payload = src.split(",", 1)[1]
    with Image.open(io.BytesIO(base64.b64decode(payload))) as img:
        assert img.size == (100, 50)


@pytest.mark.parametrize("path", [None, "", "   "])
def test_no_file_chosen_is_ignored(path):
    assert encode_image_file(path) is None


def test_missing_and_non_image_files_raise(tmp_path):
    with pytest.raises(ImageLoadError):
        encode_image_file(tmp_path / "nope.png")

    text_file = tmp_path / "notes.txt"
    text_file.write_text("not a picture", encoding="utf-8")
    with pytest.raises(ImageLoadError):
        encode_image_file(text_file)


def test_data_url_summary():
    assert data_url_summary(None) == "no image"
    assert data_url_summary("data:image/png;base64," + "A" * 4096).startswith("image/png, 3 KB")
