"""Turn picture files into inline data URLs for menu items and the gallery."""

from __future__ import annotations

import base64
import io
import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from dinerdesk.config import IMAGE_MAX_EDGE_PX

logger = logging.getLogger(__name__)

_KEEP_FORMATS = {"PNG", "JPEG", "GIF", "WEBP"}


class ImageLoadError(ValueError):
    """The chosen file could not be read as a picture."""


def encode_image_file(path: str | Path | None, max_edge_px: int = IMAGE_MAX_EDGE_PX) -> str | None:
    """
    Read a picture and return it as a `data:` URL.

    Returns None when no file was chosen. Pictures larger than `max_edge_px`
    on either side are shrunk, keeping the aspect ratio.
    """
    if path is None or not str(path).strip():
        return None

    source = Path(str(path).strip()).expanduser()
    try:
        with Image.open(source) as img:
            img.load()
            fmt = img.format if img.format in _KEEP_FORMATS else "PNG"
            if max(img.size) > max_edge_px:
                img.thumbnail((max_edge_px, max_edge_px))
            if fmt == "JPEG" and img.mode not in {"RGB", "L"}:
                img = img.convert("RGB")
            buffer = io.BytesIO()
            img.save(buffer, format=fmt)
    except FileNotFoundError as exc:
        raise ImageLoadError(f"File not found: {source}") from exc
    except (UnidentifiedImageError, OSError) as exc:
        raise ImageLoadError(f"Not a readable image: {source}") from exc

    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    logger.info("image_encoded path=%s format=%s bytes=%s", source, fmt, len(buffer.getvalue()))
    return f"data:image/{fmt.lower()};base64,{encoded}"


def data_url_summary(src: str | None) -> str:
    """Short human label for a stored data URL."""
    if not src:
        return "no image"
    header, _, payload = src.partition(",")
    mime = header.removeprefix("data:").split(";")[0] or "image"
    size_kb = len(payload) * 3 // 4 // 1024
    return f"{mime}, {size_kb} KB"
