"""Command-line driver tests. Each run starts from the seeded inventory."""

from datetime import date
from unittest.mock import Mock

import pytest

import main
from culink_shop import data_handler


def test_inventory_command(caplog):
    caplog.set_level("INFO")

    assert main.main(["inventory", "--search", "mem"]) == 0

    assert "Inventory (3 item(s))" in caplog.text
    assert "Mem card 8GB" in caplog.text
    assert "Oraimo" not in caplog.text


def test_sell_command(caplog):
    caplog.set_level("INFO")

    assert main.main(["sell", "oraimo earphones", "2", "--price", "350"]) == 0
    assert "Recorded: Oraimo earphones x2 @ Ksh 350" in caplog.text


def test_sell_command_insufficient_stock(caplog):
    assert main.main(["sell", "Mem card 2gb", "5"]) == 1
    assert "Insufficient stock. Available: 2." in caplog.text


def test_import_command(tmp_path, caplog):
    caplog.set_level("INFO")
    paste = tmp_path / "paste.txt"
    paste.write_text("USB hub,2,1200\nBad,0,1\n", encoding="utf-8")

    assert main.main(["import", str(paste), "--no-header"]) == 1
    assert "USB hub" in caplog.text
    assert "Quantity must be a positive integer." in caplog.text


def test_dashboard_command(monkeypatch):
    post = Mock(return_value=True)
    monkeypatch.setattr(data_handler, "post_to_webhook", post)

    assert main.main(["dashboard", "--preset", "month", "--post"]) == 0
    summary = post.call_args.args[0]
    assert summary.end == date.today()
    assert summary.start == date.today().replace(day=1)
    assert summary.transactions == 0


def test_dashboard_explicit_range():
    args = main.build_parser().parse_args(
        ["dashboard", "--start", "2025-03-01", "--end", "2025-03-14"]
    )
    assert main._resolve_range(args) == (date(2025, 3, 1), date(2025, 3, 14))


def test_unknown_command_exits():
    with pytest.raises(SystemExit):
        main.main(["refund"])


def test_header_flag_overrides_env_default(monkeypatch):
    monkeypatch.setattr(main.settings, "FIRST_ROW_HEADER", False)
    parser = main.build_parser()

    assert parser.parse_args(["import", "x.txt"]).first_row_header is False
    assert parser.parse_args(["import", "x.txt", "--header"]).first_row_header is True
    assert parser.parse_args(["import", "x.txt", "--no-header"]).first_row_header is False


def test_import_command_with_header(monkeypatch, tmp_path):
    monkeypatch.setattr(main.settings, "FIRST_ROW_HEADER", False)
    paste = tmp_path / "paste.txt"
    paste.write_text("Item,Qty,Cost\nUSB hub,2,1200\n", encoding="utf-8")

    assert main.main(["import", str(paste), "--header"]) == 0


@pytest.mark.parametrize(
    "argv",
    [
        ["sell", "Mem card 2gb", "1", "--date", "14/03/2025"],
        ["dashboard", "--start", "yesterday"],
    ],
)
def test_bad_dates_are_usage_errors(argv, capsys):
    with pytest.raises(SystemExit) as exc:
        main.main(argv)

    assert exc.value.code == 2
    assert "expected a YYYY-MM-DD date" in capsys.readouterr().err


def test_sell_command_with_date(caplog):
    caplog.set_level("INFO")

    assert main.main(["sell", "Mem card 2gb", "1", "--date", "2025-03-14"]) == 0
