from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from dinerdesk.models import MenuItem
from dinerdesk.persistence import SlotStore
from dinerdesk.state import Controller


class StepClock:
    """Deterministic clock; advances by `step_ms` on every call."""

    def __init__(self, start: datetime | None = None, step_ms: int = 1000) -> None:
        self.now = start or datetime(2026, 3, 14, 12, 0, 0, tzinfo=timezone.utc)
        self.step = timedelta(milliseconds=step_ms)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def store(tmp_path) -> SlotStore:
    slot_store = SlotStore(tmp_path / "dinerdesk.db")
    slot_store.bootstrap_schema()
    return slot_store


@pytest.fixture
def controller(store, clock) -> Controller:
    return Controller(store, clock=clock)


@pytest.fixture
def bruschetta() -> MenuItem:
    return MenuItem(id=1, category="Starters", name="Bruschetta", price=Decimal("5.50"))


@pytest.fixture
def pizza() -> MenuItem:
    return MenuItem(id=3, category="Mains", name="Margherita Pizza", price=Decimal("9.95"), notes="Mozzarella")
