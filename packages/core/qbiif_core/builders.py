"""Fluent builders for the common QuickBooks transaction shapes.

Each builder collects the inputs of one kind of transaction, lays out the
debit and credit lines, and returns a balanced ``Transaction``. Setters
accept either value objects (``Account("Checking")``) or plain values
(``"Checking"``), and return the builder so calls can be chained.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Any, Optional, TypeVar, cast

from qbiif_schemas import (
    Account,
    Amount,
    BooleanValue,
    Date,
    DocNumber,
    ExportSettings,
    InvalidValueError,
    Memo,
    Name,
    PaymentMethod,
    PaymentTerms,
    TxnClass,
    TxnType,
)

from .lines import DataLine, SplitLine, TransactionLine
from .logging_setup import get_logger
from .money import compare_money
from .transaction import Transaction

_logger = get_logger("qbiif.builders")

ValueT = TypeVar("ValueT")


def _coerce(value_type: type[ValueT], value: Any, field: str) -> ValueT:
    if value is None:
        raise InvalidValueError(field, "cannot be None")
    if isinstance(value, value_type):
        return value
    if value_type is Date and isinstance(value, str):
        return Date.parse(value)  # type: ignore[return-value]
    return value_type(value)  # type: ignore[call-arg]


def _coerce_optional(value_type: type[ValueT], value: Any, field: str) -> ValueT:
    if value is None:
        return value_type.EMPTY  # type: ignore[attr-defined]
    return _coerce(value_type, value, field)


def _require(value: Optional[ValueT], field: str) -> ValueT:
    if value is None:
        raise InvalidValueError(field, "must be set before building")
    return value


def _non_negative(amount: Amount, field: str) -> Amount:
    if amount.value < 0:
        raise InvalidValueError(field, "must be a positive number")
    return amount


DateInput = Date | dt.date | str
AmountInput = Amount | Decimal | int | float | str


class AbstractTransactionBuilder:
    """Shared line layout for the concrete builders."""

    TRANSACTION_TYPE: TxnType

    def __init__(self, settings: Optional[ExportSettings] = None) -> None:
        self.settings = settings or ExportSettings()

    @property
    def accounts_receivable(self) -> Account:
        return Account(self.settings.accounts_receivable)

    @property
    def accounts_payable(self) -> Account:
        return Account(self.settings.accounts_payable)

    @staticmethod
    def _add_line(
        lines: list[DataLine],
        account: Account,
        amount: Amount,
        name: Name = Name.EMPTY,
        memo: Memo = Memo.EMPTY,
        txn_class: TxnClass = TxnClass.EMPTY,
        doc_number: DocNumber = DocNumber.EMPTY,
    ) -> DataLine:
        """Append a header line if ``lines`` is empty, a split line otherwise."""
        line_type = TransactionLine if not lines else SplitLine
        new_line = line_type(
            account=account,
            amount=amount,
            name=name,
            memo=memo,
            txn_class=txn_class,
            doc_number=doc_number,
        )
        lines.append(new_line)
        return new_line

    def _finish(self, transaction: Transaction, must_balance: bool = True) -> Transaction:
        if must_balance:
            transaction.ensure_balanced()
        _logger.debug(
            "Built %s transaction with %d line(s)",
            self.TRANSACTION_TYPE.value,
            len(transaction),
        )
        return transaction


class GeneralJournalBuilder(AbstractTransactionBuilder):
    """A general journal entry with any number of lines."""

    TRANSACTION_TYPE = TxnType.GENERAL_JOURNAL

    def __init__(self, settings: Optional[ExportSettings] = None) -> None:
        super().__init__(settings)
        self.date: Optional[Date] = None
        self.entry_number: Optional[DocNumber] = None
        self._journal_lines: list[DataLine] = []

    def set_date(self, date: DateInput) -> GeneralJournalBuilder:
        self.date = _coerce(Date, date, "date")
        return self

    def set_entry_number(self, entry_number: DocNumber | str) -> GeneralJournalBuilder:
        self.entry_number = _coerce(DocNumber, entry_number, "entry_number")
        return self

    def add_line(
        self,
        account: Account | str,
        amount: AmountInput,
        name: Name | str | None = None,
        memo: Memo | str | None = None,
        txn_class: TxnClass | str | None = None,
    ) -> GeneralJournalBuilder:
        self._add_line(
            self._journal_lines,
            _coerce(Account, account, "account"),
            _coerce(Amount, amount, "amount"),
            _coerce_optional(Name, name, "name"),
            _coerce_optional(Memo, memo, "memo"),
            _coerce_optional(TxnClass, txn_class, "txn_class"),
        )
        return self

    def build(self, must_balance: bool = True) -> Transaction:
        """Build the entry; ``must_balance=False`` allows work in progress."""
        date = _require(self.date, "date")
        transaction = Transaction()
        for line in self._journal_lines:
            line.txn_type = self.TRANSACTION_TYPE
            line.date = date
            if self.entry_number is not None:
                line.doc_number = self.entry_number
            transaction.add_line(line)
        return self._finish(transaction, must_balance)


class CustomerPaymentBuilder(AbstractTransactionBuilder):
    """A customer payment received against Accounts Receivable."""

    TRANSACTION_TYPE = TxnType.PAYMENT

    def __init__(self, settings: Optional[ExportSettings] = None) -> None:
        super().__init__(settings)
        self.customer: Optional[Name] = None
        self.amount: Optional[Amount] = None
        self.date: Optional[Date] = None
        self.payment_method: PaymentMethod = PaymentMethod.EMPTY
        self.reference_number: DocNumber = DocNumber.EMPTY
        self.memo: Memo = Memo.EMPTY
        self.deposit_to: Optional[Account] = None

    def set_customer(self, customer: Name | str) -> CustomerPaymentBuilder:
        self.customer = _coerce(Name, customer, "customer")
        return self

    def set_amount(self, amount: AmountInput) -> CustomerPaymentBuilder:
        self.amount = _non_negative(_coerce(Amount, amount, "amount"), "amount")
        return self

    def set_date(self, date: DateInput) -> CustomerPaymentBuilder:
        self.date = _coerce(Date, date, "date")
        return self

    def set_payment_method(
        self, payment_method: PaymentMethod | str
    ) -> CustomerPaymentBuilder:
        self.payment_method = _coerce(PaymentMethod, payment_method, "payment_method")
        return self

    def set_reference_number(
        self, reference_number: DocNumber | str
    ) -> CustomerPaymentBuilder:
        self.reference_number = _coerce(DocNumber, reference_number, "reference_number")
        return self

    def set_memo(self, memo: Memo | str) -> CustomerPaymentBuilder:
        self.memo = _coerce(Memo, memo, "memo")
        return self

    def set_deposit_to(self, deposit_to: Account | str) -> CustomerPaymentBuilder:
        self.deposit_to = _coerce(Account, deposit_to, "deposit_to")
        return self

    def build(self) -> Transaction:
        customer = _require(self.customer, "customer")
        amount = _require(self.amount, "amount")
        date = _require(self.date, "date")
        deposit_to = _require(self.deposit_to, "deposit_to")

        lines: list[DataLine] = []
        # Debit the deposit account, credit Accounts Receivable.
        self._add_line(lines, deposit_to, amount, customer, self.memo)
        self._add_line(
            lines, self.accounts_receivable, amount.negate(), customer, self.memo
        )

        transaction = Transaction()
        for line in lines:
            line.txn_type = self.TRANSACTION_TYPE
            line.date = date
            line.doc_number = self.reference_number
            line.payment_method = self.payment_method
            transaction.add_line(line)
        return self._finish(transaction)


class VendorPaymentBuilder(AbstractTransactionBuilder):
    """A check paying down Accounts Payable for one vendor."""

    TRANSACTION_TYPE = TxnType.CHECK

    def __init__(self, settings: Optional[ExportSettings] = None) -> None:
        super().__init__(settings)
        self.vendor: Optional[Name] = None
        self.amount: Optional[Amount] = None
        self.reference_number: DocNumber = DocNumber.EMPTY
        self.date: Optional[Date] = None
        self.charge_to_account: Optional[Account] = None
        self.memo: Memo = Memo.EMPTY

    def set_vendor(self, vendor: Name | str) -> VendorPaymentBuilder:
        self.vendor = _coerce(Name, vendor, "vendor")
        return self

    def set_amount(self, amount: AmountInput) -> VendorPaymentBuilder:
        self.amount = _non_negative(_coerce(Amount, amount, "amount"), "amount")
        return self

    def set_reference_number(
        self, reference_number: DocNumber | str
    ) -> VendorPaymentBuilder:
        self.reference_number = _coerce(DocNumber, reference_number, "reference_number")
        return self

    def set_date(self, date: DateInput) -> VendorPaymentBuilder:
        self.date = _coerce(Date, date, "date")
        return self

    def set_charge_to_account(self, account: Account | str) -> VendorPaymentBuilder:
        self.charge_to_account = _coerce(Account, account, "charge_to_account")
        return self

    def set_memo(self, memo: Memo | str) -> VendorPaymentBuilder:
        self.memo = _coerce(Memo, memo, "memo")
        return self

    def build(self) -> Transaction:
        vendor = _require(self.vendor, "vendor")
        amount = _require(self.amount, "amount")
        date = _require(self.date, "date")
        charge_to = _require(self.charge_to_account, "charge_to_account")

        lines: list[DataLine] = []
        # Credit the account the check is drawn on.
        check_line = cast(
            TransactionLine,
            self._add_line(lines, charge_to, amount.negate(), vendor),
        )
        check_line.txn_type = self.TRANSACTION_TYPE
        if self.reference_number.is_empty:
            check_line.needs_to_be_printed = BooleanValue.TRUE
        else:
            check_line.needs_to_be_printed = BooleanValue.FALSE
        # Debit Accounts Payable for the vendor.
        self._add_line(lines, self.accounts_payable, amount, vendor)

        transaction = Transaction()
        for line in lines:
            line.txn_type = self.TRANSACTION_TYPE
            line.date = date
            line.doc_number = self.reference_number
            line.memo = self.memo
            transaction.add_line(line)
        return self._finish(transaction)


class VendorBillBuilder(AbstractTransactionBuilder):
    """A vendor bill: Accounts Payable credited for the sum of its line items."""

    TRANSACTION_TYPE = TxnType.BILL

    def __init__(self, settings: Optional[ExportSettings] = None) -> None:
        super().__init__(settings)
        self.vendor: Optional[Name] = None
        self.date: Optional[Date] = None
        self.due_date: Date = Date.EMPTY
        self.terms: PaymentTerms = PaymentTerms.EMPTY
        self.reference_number: DocNumber = DocNumber.EMPTY
        self.memo: Memo = Memo.EMPTY
        self.line_item_total = Decimal(0)
        self._line_items: list[SplitLine] = []

    def set_vendor(self, vendor: Name | str) -> VendorBillBuilder:
        self.vendor = _coerce(Name, vendor, "vendor")
        return self

    def set_date(self, date: DateInput) -> VendorBillBuilder:
        self.date = _coerce(Date, date, "date")
        return self

    def set_due_date(self, due_date: DateInput) -> VendorBillBuilder:
        self.due_date = _coerce(Date, due_date, "due_date")
        return self

    def set_terms(self, terms: PaymentTerms | str) -> VendorBillBuilder:
        self.terms = _coerce(PaymentTerms, terms, "terms")
        return self

    def set_reference_number(
        self, reference_number: DocNumber | str
    ) -> VendorBillBuilder:
        self.reference_number = _coerce(DocNumber, reference_number, "reference_number")
        return self

    def set_memo(self, memo: Memo | str) -> VendorBillBuilder:
        self.memo = _coerce(Memo, memo, "memo")
        return self

    def add_line_item(
        self,
        account: Account | str,
        amount: AmountInput,
        customer_or_job: Name | str | None = None,
        memo: Memo | str | None = None,
        txn_class: TxnClass | str | None = None,
    ) -> VendorBillBuilder:
        item_amount = _coerce(Amount, amount, "amount")
        self._line_items.append(
            SplitLine(
                txn_type=self.TRANSACTION_TYPE,
                account=_coerce(Account, account, "account"),
                amount=item_amount,
                name=_coerce_optional(Name, customer_or_job, "customer_or_job"),
                memo=_coerce_optional(Memo, memo, "memo"),
                txn_class=_coerce_optional(TxnClass, txn_class, "txn_class"),
            )
        )
        self.line_item_total += item_amount.value
        return self

    def build(self) -> Transaction:
        vendor = _require(self.vendor, "vendor")
        date = _require(self.date, "date")

        bill_line = TransactionLine(
            txn_type=self.TRANSACTION_TYPE,
            account=self.accounts_payable,
            amount=Amount(-self.line_item_total),
            name=vendor,
            memo=self.memo,
            due_date=self.due_date,
            terms=self.terms,
        )

        transaction = Transaction()
        for line in [bill_line, *self._line_items]:
            line.doc_number = self.reference_number
            line.date = date
            transaction.add_line(line)
        return self._finish(transaction)


class PaymentDepositBuilder(AbstractTransactionBuilder):
    """A bank deposit of received payments, with optional cash back."""

    TRANSACTION_TYPE = TxnType.DEPOSIT

    def __init__(self, settings: Optional[ExportSettings] = None) -> None:
        super().__init__(settings)
        self.deposit_to: Optional[Account] = None
        self.date: Optional[Date] = None
        self.memo: Memo = Memo.EMPTY
        self.cash_back_account: Optional[Account] = None
        self.cash_back_memo: Optional[Memo] = None
        self.cash_back_amount: Optional[Amount] = None
        self.payment_total = Decimal(0)
        self._payment_lines: list[SplitLine] = []

    @property
    def has_cash_back(self) -> bool:
        return self.cash_back_account is not None

    def set_deposit_to(self, deposit_to: Account | str) -> PaymentDepositBuilder:
        self.deposit_to = _coerce(Account, deposit_to, "deposit_to")
        return self

    def set_date(self, date: DateInput) -> PaymentDepositBuilder:
        self.date = _coerce(Date, date, "date")
        return self

    def set_memo(self, memo: Memo | str) -> PaymentDepositBuilder:
        self.memo = _coerce(Memo, memo, "memo")
        return self

    def set_cash_back(
        self,
        account: Account | str,
        amount: AmountInput,
        memo: Memo | str | None = None,
    ) -> PaymentDepositBuilder:
        self.cash_back_account = _coerce(Account, account, "cash_back_account")
        self.cash_back_amount = _coerce(Amount, amount, "cash_back_amount")
        self.cash_back_memo = None if memo is None else _coerce(Memo, memo, "cash_back_memo")
        return self

    def add_payment(
        self,
        received_from: Name | str,
        from_account: Account | str,
        amount: AmountInput,
        memo: Memo | str | None = None,
        check_number: DocNumber | str | None = None,
        payment_method: PaymentMethod | str | None = None,
        txn_class: TxnClass | str | None = None,
    ) -> PaymentDepositBuilder:
        payment = _non_negative(_coerce(Amount, amount, "amount"), "amount")
        self._payment_lines.append(
            SplitLine(
                name=_coerce(Name, received_from, "received_from"),
                account=_coerce(Account, from_account, "from_account"),
                amount=payment.negate(),
                memo=_coerce_optional(Memo, memo, "memo"),
                doc_number=_coerce_optional(DocNumber, check_number, "check_number"),
                payment_method=_coerce_optional(
                    PaymentMethod, payment_method, "payment_method"
                ),
                txn_class=_coerce_optional(TxnClass, txn_class, "txn_class"),
            )
        )
        self.payment_total += payment.value
        return self

    def _ensure_ready_to_build(self) -> tuple[Account, Date]:
        deposit_to = _require(self.deposit_to, "deposit_to")
        date = _require(self.date, "date")
        cash_back = {
            "cash_back_account": self.cash_back_account,
            "cash_back_amount": self.cash_back_amount,
        }
        if self.cash_back_memo is not None:
            cash_back["cash_back_memo"] = self.cash_back_memo
        unset = [field for field, value in cash_back.items() if value is None]
        if unset and len(unset) != len(cash_back):
            raise InvalidValueError(
                unset[0],
                "must be set when any of " + ", ".join(cash_back) + " is set",
            )
        if (
            self.cash_back_amount is not None
            and compare_money(self.cash_back_amount, self.payment_total) > 0
        ):
            raise InvalidValueError(
                "cash_back_amount", "cannot exceed the total of the payments"
            )
        return deposit_to, date

    def build(self) -> Transaction:
        deposit_to, date = self._ensure_ready_to_build()

        lines: list[DataLine] = []
        deposit_total = self.payment_total
        if self.has_cash_back and self.cash_back_amount is not None:
            deposit_total -= self.cash_back_amount.value
        self._add_line(lines, deposit_to, Amount(deposit_total), memo=self.memo)
        if self.has_cash_back and self.cash_back_amount is not None:
            self._add_line(
                lines,
                self.cash_back_account,  # type: ignore[arg-type]
                self.cash_back_amount,
                memo=self.cash_back_memo or Memo.EMPTY,
            )
        lines.extend(self._payment_lines)

        transaction = Transaction()
        for line in lines:
            line.txn_type = self.TRANSACTION_TYPE
            line.date = date
            transaction.add_line(line)
        return self._finish(transaction)


__all__ = [
    "AbstractTransactionBuilder",
    "CustomerPaymentBuilder",
    "GeneralJournalBuilder",
    "PaymentDepositBuilder",
    "VendorBillBuilder",
    "VendorPaymentBuilder",
]
