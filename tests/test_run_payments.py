"""End-to-end tests for the command line entry point."""
import json

import pytest

from run_payments import main


@pytest.fixture
def input_files(tmp_path):
    orders = tmp_path / "orders.json"
    orders.write_text(
        json.dumps(
            [
                {"id": "ORDER1", "value": "100.00", "promotions": ["mZysk"]},
                {"id": "ORDER2", "value": "200.00", "promotions": ["BosBankrut"]},
                {"id": "ORDER3", "value": "150.00", "promotions": ["mZysk", "BosBankrut"]},
                {"id": "ORDER4", "value": "50.00"},
            ]
        ),
        encoding="utf-8",
    )
    methods = tmp_path / "paymentmethods.json"
    methods.write_text(
        json.dumps(
            [
                {"id": "PUNKTY", "discount": "15", "limit": "100.00"},
                {"id": "mZysk", "discount": "10", "limit": "180.00"},
                {"id": "BosBankrut", "discount": "5", "limit": "200.00"},
            ]
        ),
        encoding="utf-8",
    )
    return str(orders), str(methods)


def test_prints_usage_per_method(input_files, capsys):
    assert main(list(input_files)) == 0

    assert capsys.readouterr().out.splitlines() == [
        "PUNKTY 100.00",
        "mZysk 165.00",
        "BosBankrut 190.00",
    ]


def test_missing_arguments_is_usage_error(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])

    assert exc.value.code == 2


def test_unreadable_file_exits_non_zero(input_files, tmp_path, capsys):
    _, methods = input_files

    assert main([str(tmp_path / "nope.json"), methods]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "File loading error" in captured.err


@pytest.mark.parametrize(
    "content",
    [
        b'[{"id": "ORDER\xff", "value": "10.00"}]',
        b'[{"id": "ORDER1", "value": 1e40}]',
    ],
)
def test_malformed_orders_file_exits_non_zero(input_files, tmp_path, capsys, content):
    _, methods = input_files
    orders = tmp_path / "bad_orders.json"
    orders.write_bytes(content)

    assert main([str(orders), methods]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "File loading error" in captured.err
