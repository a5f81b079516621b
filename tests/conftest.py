from datetime import date

import pytest

from culink_shop import settings
from culink_shop.ledger import Ledger


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep tests away from a developer's .env: no webhook, logs under tmp."""
    monkeypatch.setattr(settings, "WEBHOOK_URL", None)
    monkeypatch.setattr(settings, "LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr(settings, "DEFAULT_TOP_N", 5)
    monkeypatch.setattr(settings, "CURRENCY_LABEL", "Ksh")


@pytest.fixture
def ledger():
    return Ledger()


@pytest.fixture
def seeded_ledger():
    return Ledger.seeded()


@pytest.fixture
def day():
    return date(2025, 3, 14)


@pytest.fixture
def stocked_ledger():
    """A small inventory with plenty of stock for sales scenarios."""
    ledger = Ledger()
    ledger.add_item("Widget", 50, 100)
    ledger.add_item("Gadget", 50, 300)
    ledger.add_item("Cable", 50, 50)
    return ledger
