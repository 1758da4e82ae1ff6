"""Tests for the scalar column values and formatting primitives."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

import pytest
from qbiif_schemas import (
    Account,
    Amount,
    BooleanValue,
    Date,
    DocNumber,
    InvalidValueError,
    Memo,
    MissingRequiredFieldError,
    Name,
    PaymentTerms,
    TransactionEffect,
    TxnType,
    escape_column,
    export_columns,
    render_in_order,
    strip_quotes,
)


def test_memo_escapes_inner_quotes() -> None:
    assert Memo('He said "hi"').render() == '"He said \\"hi\\""'


def test_escape_column_strips_one_pair_of_outer_quotes() -> None:
    assert strip_quotes('"quoted"') == "quoted"
    assert escape_column('"Acme"') == '"Acme"'
    assert escape_column('"wrapped "inner" text"') == '"wrapped \\"inner\\" text"'
    assert escape_column("") == '""'


def test_unpaired_outer_quotes_are_kept_and_escaped() -> None:
    assert strip_quotes('say "hi"') == 'say "hi"'
    assert strip_quotes('"open') == '"open'
    assert strip_quotes('"') == '"'
    assert escape_column('12" pipe') == '"12\\" pipe"'
    assert escape_column('"open') == '"\\"open"'


def test_string_values_reject_none_and_empty() -> None:
    with pytest.raises(InvalidValueError) as excinfo:
        Account(None)
    assert excinfo.value.field == "Account"

    with pytest.raises(InvalidValueError):
        Name("")


def test_empty_sentinel_renders_blank_quotes() -> None:
    assert Name.EMPTY.is_empty
    assert Name.EMPTY.render() == '""'
    assert not Name("Acme").is_empty


def test_values_compare_by_type_and_text() -> None:
    assert Name("Acme") == Name("Acme")
    assert Name("Acme") != Account("Acme")
    assert sorted([Name("b"), Name("a")]) == [Name("a"), Name("b")]
    assert len({Name("Acme"), Name("Acme")}) == 1


def test_doc_number_longer_than_fifteen_characters_is_rejected() -> None:
    assert DocNumber("123456789012345").render() == '"123456789012345"'
    with pytest.raises(InvalidValueError) as excinfo:
        DocNumber("1234567890123456")
    assert "15" in excinfo.value.reason


def test_amount_renders_two_decimals() -> None:
    assert Amount(Decimal("34.68")).render() == "34.68"
    assert Amount(-325).render() == "-325.00"
    assert Amount("18.6").render() == "18.60"
    assert Amount(0.1).value == Decimal("0.1")
    assert Amount(Decimal("1234567.891")).render() == "1234567.89"


def test_amount_renders_values_beyond_default_decimal_precision() -> None:
    assert Amount(Decimal("1E+30")).render() == "1" + "0" * 30 + ".00"
    assert Amount(Decimal("-123456789012345678901234567890.125")).render() == (
        "-123456789012345678901234567890.12"
    )


@pytest.mark.parametrize("zero", [-0.0, Decimal("-0"), Decimal("-0.00")])
def test_negative_zero_is_stored_as_zero(zero: object) -> None:
    amount = Amount(zero)
    assert amount.render() == "0.00"
    assert amount.effect is TransactionEffect.NONE
    assert Amount.ZERO.negate().render() == "0.00"


def test_amount_effect_follows_sign() -> None:
    assert Amount(1).effect is TransactionEffect.DEBIT
    assert Amount(-1).effect is TransactionEffect.CREDIT
    assert Amount.ZERO.effect is TransactionEffect.NONE
    assert Amount("5.25").negate() == Amount("-5.25")


@pytest.mark.parametrize("bad", [True, Decimal("NaN"), float("inf"), "abc"])
def test_amount_rejects_non_numbers(bad: object) -> None:
    with pytest.raises(InvalidValueError):
        Amount(bad)


def test_date_renders_without_leading_zeros() -> None:
    assert Date(dt.date(2014, 1, 6)).render() == '"1/6/2014"'
    assert Date.parse("01/06/2014") == Date(dt.date(2014, 1, 6))
    assert Date.EMPTY.render() == '""'


def test_date_parse_rejects_other_formats() -> None:
    with pytest.raises(InvalidValueError):
        Date.parse("2014-01-06")


def test_boolean_renders_y_n_or_blank() -> None:
    assert BooleanValue.TRUE.render() == "Y"
    assert BooleanValue.FALSE.render() == "N"
    assert BooleanValue.EMPTY.render() == ""
    with pytest.raises(InvalidValueError):
        BooleanValue("yes")


def test_transaction_type_renders_quoted_code() -> None:
    assert TxnType.GENERAL_JOURNAL.render() == '"GENERAL JOURNAL"'
    assert TxnType.CREDIT_CARD_REFUND.value == "CCARD REFUND"
    assert PaymentTerms.NET_30.render() == '"Net 30"'


def test_export_columns_reports_first_missing_column() -> None:
    with pytest.raises(MissingRequiredFieldError) as excinfo:
        export_columns(("SPL",), [Name("a"), None, None], names=("A", "B", "C"))
    assert excinfo.value.column_index == 2
    assert excinfo.value.column_name == "B"


def test_export_columns_joins_prefix_columns_and_suffix_with_tabs() -> None:
    row = export_columns(("CUST",), [Name("Acme")], suffix=("",))
    assert row == 'CUST\t"Acme"\t'


def test_render_in_order_keeps_positions_on_a_thread_pool() -> None:
    nodes = [Name(f"name {index}") for index in range(50)]
    sequential = render_in_order(nodes)
    assert render_in_order(nodes, max_workers=8) == sequential
    assert sequential[3] == '"name 3"'
