"""Tests for the transaction builders."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from pathlib import Path

import pytest
from qbiif_core import (
    CustomerPaymentBuilder,
    GeneralJournalBuilder,
    IifFile,
    PaymentDepositBuilder,
    SplitLine,
    TransactionLine,
    VendorBillBuilder,
    VendorPaymentBuilder,
)
from qbiif_schemas import (
    Account,
    Amount,
    BooleanValue,
    Date,
    ExportSettings,
    InvalidValueError,
    Name,
    OutOfBalanceError,
    PaymentMethod,
    PaymentTerms,
    TxnType,
)

REPO_ROOT = Path(__file__).resolve().parents[3]
EXAMPLES_DIR = REPO_ROOT / "examples"


def _customer_payment() -> CustomerPaymentBuilder:
    return (
        CustomerPaymentBuilder()
        .set_customer("Contoso, Inc.")
        .set_amount(Decimal("34.68"))
        .set_date(dt.date(2014, 1, 6))
        .set_payment_method(PaymentMethod.CHECK)
        .set_memo("Check #8675309")
        .set_deposit_to("Undeposited Funds")
    )


def test_customer_payment_debits_deposit_and_credits_receivables() -> None:
    transaction = _customer_payment().build()

    assert len(transaction.lines) == 2
    deposit, receivable = transaction.lines
    assert isinstance(deposit, TransactionLine)
    assert isinstance(receivable, SplitLine)
    assert deposit.account == Account("Undeposited Funds")
    assert deposit.amount == Amount(Decimal("34.68"))
    assert receivable.account == Account("Accounts Receivable")
    assert receivable.amount == Amount(Decimal("-34.68"))
    assert all(line.txn_type is TxnType.PAYMENT for line in transaction.lines)
    assert transaction.is_balanced()


def test_customer_payment_matches_golden_example() -> None:
    iif = IifFile()
    iif.add_customer_name(Name("Contoso, Inc."))
    iif.add_transaction(_customer_payment().build())

    expected = (EXAMPLES_DIR / "customer_payment.iif").read_text(encoding="utf-8")
    assert iif.render() == expected


def test_receivables_account_comes_from_settings() -> None:
    settings = ExportSettings(accounts_receivable="A/R")
    builder = _customer_payment()
    builder.settings = settings
    assert builder.build().lines[1].account == Account("A/R")


def test_customer_payment_requires_inputs() -> None:
    with pytest.raises(InvalidValueError) as excinfo:
        CustomerPaymentBuilder().set_customer("Contoso").build()
    assert excinfo.value.field == "amount"


def test_negative_payment_amounts_are_rejected() -> None:
    with pytest.raises(InvalidValueError):
        CustomerPaymentBuilder().set_amount("-1")
    with pytest.raises(InvalidValueError):
        VendorPaymentBuilder().set_amount(-1)
    with pytest.raises(InvalidValueError):
        PaymentDepositBuilder().add_payment("Contoso", "Undeposited Funds", "-5")


def test_vendor_payment_matches_golden_example() -> None:
    transaction = (
        VendorPaymentBuilder()
        .set_vendor(Name("Contoso, Inc."))
        .set_amount("34.68")
        .set_date("1/6/2014")
        .set_memo("Payment for Invoice #8675309")
        .set_charge_to_account("Checking Account")
        .build()
    )
    check = transaction.lines[0]
    assert isinstance(check, TransactionLine)
    assert check.needs_to_be_printed == BooleanValue.TRUE

    iif = IifFile()
    iif.add_vendor_name(Name("Contoso, Inc."))
    iif.add_transaction(transaction)
    expected = (EXAMPLES_DIR / "vendor_payment.iif").read_text(encoding="utf-8")
    assert iif.render() == expected


def test_vendor_payment_with_check_number_is_not_flagged_to_print() -> None:
    transaction = (
        VendorPaymentBuilder()
        .set_vendor("Contoso, Inc.")
        .set_amount(100)
        .set_date("1/6/2014")
        .set_reference_number("1042")
        .set_charge_to_account("Checking Account")
        .build()
    )
    check = transaction.lines[0]
    assert isinstance(check, TransactionLine)
    assert check.needs_to_be_printed == BooleanValue.FALSE
    assert transaction.lines[1].account == Account("Accounts Payable")
    assert transaction.lines[1].amount == Amount(100)


def test_vendor_bill_matches_golden_example() -> None:
    builder = (
        VendorBillBuilder()
        .set_vendor("Contoso, Inc.")
        .set_date("1/6/2014")
        .set_due_date("2/6/2014")
        .set_terms(PaymentTerms.NET_30)
        .set_reference_number("8675309")
        .set_memo("Thank you for your business!")
        .add_line_item("Widget Expense", 250, "Lenny", "Widget 1", "Reimbursable")
        .add_line_item("Widget Expense", 75, "Carl", "Widget 2", "Reimbursable")
    )
    assert builder.line_item_total == Decimal("325")
    transaction = builder.build()
    bill = transaction.lines[0]
    assert isinstance(bill, TransactionLine)
    assert bill.due_date == Date(dt.date(2014, 2, 6))

    iif = IifFile()
    iif.add_vendor_name(Name("Contoso, Inc."))
    iif.add_customer_name(Name("Lenny"))
    iif.add_customer_name(Name("Carl"))
    iif.add_transaction(transaction)
    expected = (EXAMPLES_DIR / "vendor_bill.iif").read_text(encoding="utf-8")
    assert iif.render() == expected


def test_deposit_with_cash_back_balances() -> None:
    transaction = (
        PaymentDepositBuilder()
        .set_deposit_to("Checking")
        .set_date("1/6/2014")
        .set_memo("Deposit")
        .add_payment("Contoso, Inc.", "Undeposited Funds", "100.00", check_number="1001")
        .add_payment(
            "Fabrikam",
            "Undeposited Funds",
            "50.00",
            payment_method=PaymentMethod.CASH,
        )
        .set_cash_back("Petty Cash", "20.00", "Change fund")
        .build()
    )

    deposit, cash_back, *payments = transaction.lines
    assert deposit.account == Account("Checking")
    assert deposit.amount == Amount(Decimal("130.00"))
    assert cash_back.account == Account("Petty Cash")
    assert cash_back.amount == Amount(Decimal("20.00"))
    assert [line.amount for line in payments] == [
        Amount(Decimal("-100.00")),
        Amount(Decimal("-50.00")),
    ]
    assert all(line.txn_type is TxnType.DEPOSIT for line in transaction.lines)
    assert transaction.is_balanced()


def test_deposit_without_cash_back() -> None:
    transaction = (
        PaymentDepositBuilder()
        .set_deposit_to("Checking")
        .set_date("1/6/2014")
        .add_payment("Contoso, Inc.", "Undeposited Funds", "42.10")
        .build()
    )
    assert len(transaction) == 2
    assert transaction.lines[0].amount == Amount(Decimal("42.10"))


def test_cash_back_cannot_exceed_payments() -> None:
    builder = (
        PaymentDepositBuilder()
        .set_deposit_to("Checking")
        .set_date("1/6/2014")
        .add_payment("Contoso, Inc.", "Undeposited Funds", "10")
        .set_cash_back("Petty Cash", "10.01")
    )
    with pytest.raises(InvalidValueError) as excinfo:
        builder.build()
    assert excinfo.value.field == "cash_back_amount"


def test_partial_cash_back_is_rejected() -> None:
    builder = (
        PaymentDepositBuilder()
        .set_deposit_to("Checking")
        .set_date("1/6/2014")
        .add_payment("Contoso, Inc.", "Undeposited Funds", "10")
    )
    builder.cash_back_account = Account("Petty Cash")
    with pytest.raises(InvalidValueError) as excinfo:
        builder.build()
    assert excinfo.value.field == "cash_back_amount"


def test_general_journal_checks_balance_unless_asked_not_to() -> None:
    builder = (
        GeneralJournalBuilder()
        .set_date("1/6/2014")
        .add_line("Checking", "10")
        .add_line("Sales Income", "-9")
    )
    with pytest.raises(OutOfBalanceError):
        builder.build()

    draft = builder.build(must_balance=False)
    assert draft.balance_discrepancy() == Decimal("1")


def test_general_journal_requires_a_date() -> None:
    with pytest.raises(InvalidValueError) as excinfo:
        GeneralJournalBuilder().add_line("Checking", "1").build()
    assert excinfo.value.field == "date"
