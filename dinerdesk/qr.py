"""Table numbers, public menu links and delegated QR image URLs."""

from __future__ import annotations

from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from dinerdesk.config import QR_ENDPOINT, QR_SIZE_PX, TABLE_COUNT


class InvalidTableError(ValueError):
    """Table number outside 1..TABLE_COUNT."""


def table_numbers() -> list[int]:
    return list(range(1, TABLE_COUNT + 1))


def validate_table(table: int) -> int:
    if isinstance(table, bool) or not isinstance(table, int):
        raise InvalidTableError(f"Table must be a number, got {table!r}.")
    if not (1 <= table <= TABLE_COUNT):
        raise InvalidTableError(f"Table must be between 1 and {TABLE_COUNT}.")
    return table


def menu_url_for(table: int, base_url: str) -> str:
    """Base URL without query or fragment, plus `?table=<n>`."""
    parts = urlsplit(base_url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode({"table": table}), ""))


def qr_url_for(table: int, base_url: str, size_px: int = QR_SIZE_PX) -> str:
    """Image URL on the external QR renderer that encodes the table's menu link."""
    query = urlencode({"size": f"{size_px}x{size_px}", "data": menu_url_for(table, base_url)})
    return f"{QR_ENDPOINT}?{query}"


def table_from_url(url: str) -> int | None:
    """Read a valid `table` parameter from a menu link, if any."""
    values = parse_qs(urlsplit(url).query).get("table", [])
    if not values:
        return None
    raw = values[0].strip()
    if not raw.isdigit():
        return None
    table = int(raw)
    if not (1 <= table <= TABLE_COUNT):
        return None
    return table
