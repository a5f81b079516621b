"""Tests for the import and dashboard pipelines and webhook publishing."""

from unittest.mock import Mock

import pytest
import requests

from culink_shop import data_handler, settings
from culink_shop.pipelines.dashboard import DashboardPipeline
from culink_shop.pipelines.item_import import ItemImportPipeline
from culink_shop.schemas import DashboardSummary


PASTE = """Item\tQty\tCost
1\tMem card 8GB\t2\t750
2\tPower bank\t4\t1500
3\tBroken row
"""


# --------------------------------------------------------------------
# ITEM IMPORT
# --------------------------------------------------------------------
def test_import_pipeline_applies_valid_rows(seeded_ledger):
    pipeline = ItemImportPipeline(seeded_ledger, PASTE, first_row_header=True)

    applied = pipeline.run()

    assert applied == 2
    assert seeded_ledger.find_item("mem card 8gb").quantity_remaining == 6
    assert seeded_ledger.find_item("Power bank").unit_cost == 1500
    assert [line.raw_line for line in pipeline.rejected] == ["3\tBroken row"]


def test_import_pipeline_uses_header_setting(monkeypatch, ledger):
    monkeypatch.setattr(settings, "FIRST_ROW_HEADER", False)

    pipeline = ItemImportPipeline(ledger, "Widget,5,100")

    assert pipeline.run() == 1
    assert ledger.find_item("Widget").quantity_remaining == 5


def test_import_pipeline_test_mode_leaves_ledger_alone(ledger):
    pipeline = ItemImportPipeline(ledger, "Widget,5,100", first_row_header=False, test_mode=True)

    assert pipeline.run() == 0
    assert ledger.items == ()


def test_import_pipeline_with_nothing_to_parse(ledger):
    assert ItemImportPipeline(ledger, "Item,Qty,Cost", first_row_header=True).run() is None


# --------------------------------------------------------------------
# DASHBOARD
# --------------------------------------------------------------------
def test_dashboard_pipeline_builds_summary(seeded_ledger, day):
    seeded_ledger.record_sale("Oraimo earphones", 3, sold_on=day, unit_price_override=350)
    seeded_ledger.record_sale("Mem card 2gb", 1, sold_on=day)

    summary = DashboardPipeline(seeded_ledger, day, day).run()

    assert summary.revenue == 1550
    assert summary.transactions == 2
    assert summary.distinct_items == 2
    assert summary.top_by_quantity[0].item_name == "Oraimo earphones"
    assert summary.inventory_worth == seeded_ledger.inventory_worth()


def test_dashboard_pipeline_empty_range(seeded_ledger, day):
    summary = DashboardPipeline(seeded_ledger, day, day).run()

    assert summary.revenue == 0
    assert summary.top_by_quantity == []


def test_dashboard_pipeline_posts_when_requested(monkeypatch, seeded_ledger, day):
    post = Mock(return_value=True)
    monkeypatch.setattr(data_handler, "post_to_webhook", post)

    DashboardPipeline(seeded_ledger, day, day, post=True).run()
    DashboardPipeline(seeded_ledger, day, day, post=True, test_mode=True).run()

    assert post.call_count == 1


# --------------------------------------------------------------------
# WEBHOOK
# --------------------------------------------------------------------
@pytest.fixture
def summary(day):
    return DashboardSummary(start=day, end=day, revenue=1200.0, transactions=2)


def test_post_skipped_without_url(monkeypatch, summary):
    post = Mock()
    monkeypatch.setattr(requests, "post", post)

    assert data_handler.post_to_webhook(summary) is False
    post.assert_not_called()


def test_post_sends_summary(monkeypatch, summary):
    monkeypatch.setattr(settings, "WEBHOOK_URL", "https://hooks.example.test/shop")
    response = Mock()
    post = Mock(return_value=response)
    monkeypatch.setattr(requests, "post", post)

    assert data_handler.post_to_webhook(summary) is True

    url = post.call_args.args[0]
    payload = post.call_args.kwargs["json"]
    assert url == "https://hooks.example.test/shop"
    assert payload["currency"] == "Ksh"
    assert payload["reportData"]["revenue"] == 1200.0
    assert payload["reportData"]["start"] == "2025-03-14"
    response.raise_for_status.assert_called_once()


def test_post_failure_is_logged_not_raised(monkeypatch, summary):
    monkeypatch.setattr(settings, "WEBHOOK_URL", "https://hooks.example.test/shop")
    monkeypatch.setattr(
        requests, "post", Mock(side_effect=requests.exceptions.ConnectionError("down"))
    )

    assert data_handler.post_to_webhook(summary) is False
