"""Editable static category and default menu configuration."""

from __future__ import annotations

CATEGORIES: list[str] = ["Starters", "Mains", "Desserts", "Drinks"]

CATEGORY_BADGES: dict[str, str] = {
    "Starters": "ST",
    "Mains": "MN",
    "Desserts": "DS",
    "Drinks": "DR",
}

CATEGORY_STYLES: dict[str, str] = {
    "Starters": "bold #0b1f0f on #5fbf72",
    "Mains": "bold #ffffff on #b23a48",
    "Desserts": "bold #ffffff on #8a4fbf",
    "Drinks": "bold #ffffff on #2f6db5",
}

# Seed catalog used on first start and whenever the stored menu is unreadable.
DEFAULT_MENU: list[dict[str, str | int | float]] = [
    {"id": 1, "category": "Starters", "name": "Bruschetta", "price": 5.50, "notes": "Tomato, basil, garlic"},
    {"id": 2, "category": "Starters", "name": "Soup of the Day", "price": 4.90, "notes": ""},
    {"id": 3, "category": "Mains", "name": "Margherita Pizza", "price": 9.95, "notes": "Mozzarella, basil"},
    {"id": 4, "category": "Mains", "name": "Grilled Salmon", "price": 16.50, "notes": "Lemon butter"},
    {"id": 5, "category": "Mains", "name": "Beef Burger", "price": 12.00, "notes": "Fries included"},
    {"id": 6, "category": "Desserts", "name": "Tiramisu", "price": 6.00, "notes": ""},
    {"id": 7, "category": "Desserts", "name": "Panna Cotta", "price": 5.50, "notes": "Berry coulis"},
    {"id": 8, "category": "Drinks", "name": "Espresso", "price": 2.20, "notes": ""},
    {"id": 9, "category": "Drinks", "name": "Sparkling Water", "price": 2.50, "notes": "50cl"},
]
