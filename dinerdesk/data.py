"""Static category and default menu data."""

from __future__ import annotations

from dinerdesk.constant import CATEGORIES, CATEGORY_BADGES, CATEGORY_STYLES
from dinerdesk.constant import DEFAULT_MENU as _DEFAULT_MENU_RAW
from dinerdesk.models import MenuItem

__all__ = [
    "CATEGORIES",
    "badge_for_category",
    "default_menu",
    "style_for_category",
]


def default_menu() -> list[MenuItem]:
    """Fresh copy of the built-in catalog."""
    return [MenuItem.from_dict(dict(raw)) for raw in _DEFAULT_MENU_RAW]


def badge_for_category(category: str) -> str:
    """Get the two-letter tag for a category."""
    badge = CATEGORY_BADGES.get(category)
    if badge is None:
        return category[:2].upper()
    return badge


def style_for_category(category: str) -> str:
    return CATEGORY_STYLES.get(category, "bold #ffffff on #555555")
