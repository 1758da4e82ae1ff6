"""Data rows of an IIF file: transaction, split and name lines."""

from __future__ import annotations

import copy
from typing import Any, ClassVar, Optional

from qbiif_schemas import (
    Account,
    Amount,
    BooleanValue,
    Date,
    DocNumber,
    IllegalFieldForTransactionTypeError,
    InvalidValueError,
    Memo,
    Name,
    PaymentMethod,
    PaymentTerms,
    Renderable,
    TxnClass,
    TxnIdentifier,
    TxnType,
    export_columns,
)

from .exportable import SPLIT_COLUMNS, TRANSACTION_COLUMNS, Exportable

PRINTABLE_TYPES = frozenset(
    {TxnType.CHECK, TxnType.INVOICE, TxnType.CREDIT_MEMO, TxnType.CASH_SALE}
)
RECEIVABLE_TYPES = frozenset({TxnType.BILL, TxnType.INVOICE})


def _check_instance(field: str, value: Any, expected: type) -> Any:
    if value is None:
        raise InvalidValueError(field, "cannot be None")
    if not isinstance(value, expected):
        raise InvalidValueError(
            field,
            f"must be a {expected.__name__}, not {type(value).__name__}",
        )
    return value


class _Column:
    """A typed column of a data line.

    Unset required columns read as ``None``; optional columns read as their
    ``EMPTY`` sentinel. Assigning ``None`` is always rejected.
    """

    def __init__(self, value_type: type, default: Any = None) -> None:
        self.value_type = value_type
        self.default = default
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, obj: Any, objtype: type | None = None) -> Any:
        if obj is None:
            return self
        return obj.__dict__.get(self.name, self.default)

    def __set__(self, obj: Any, value: Any) -> None:
        obj.__dict__[self.name] = _check_instance(self.name, value, self.value_type)


class DataLine(Exportable):
    """One ledger row of a transaction.

    ``txn_type``, ``date``, ``account`` and ``amount`` are required before
    the row can be rendered; every other column defaults to an empty value.
    """

    line_type: ClassVar[str]
    column_names: ClassVar[tuple[str, ...]]

    txn_id = _Column(TxnIdentifier, TxnIdentifier.EMPTY)
    date = _Column(Date)
    account = _Column(Account)
    name = _Column(Name, Name.EMPTY)
    txn_class = _Column(TxnClass, TxnClass.EMPTY)
    amount = _Column(Amount)
    doc_number = _Column(DocNumber, DocNumber.EMPTY)
    payment_method = _Column(PaymentMethod, PaymentMethod.EMPTY)
    memo = _Column(Memo, Memo.EMPTY)

    def __init__(
        self,
        *,
        txn_type: Optional[TxnType] = None,
        date: Optional[Date] = None,
        account: Optional[Account] = None,
        amount: Optional[Amount] = None,
        name: Optional[Name] = None,
        memo: Optional[Memo] = None,
        txn_class: Optional[TxnClass] = None,
        doc_number: Optional[DocNumber] = None,
        payment_method: Optional[PaymentMethod] = None,
        txn_id: Optional[TxnIdentifier] = None,
    ) -> None:
        self._txn_type: Optional[TxnType] = None
        supplied = {
            "txn_type": txn_type,
            "date": date,
            "account": account,
            "amount": amount,
            "name": name,
            "memo": memo,
            "txn_class": txn_class,
            "doc_number": doc_number,
            "payment_method": payment_method,
            "txn_id": txn_id,
        }
        for field, value in supplied.items():
            if value is not None:
                setattr(self, field, value)

    @property
    def txn_type(self) -> Optional[TxnType]:
        return self._txn_type

    @txn_type.setter
    def txn_type(self, value: TxnType) -> None:
        _check_instance("txn_type", value, TxnType)
        self._check_type_change(value)
        self._txn_type = value

    def _check_type_change(self, new_type: TxnType) -> None:
        pass

    def columns(self) -> list[Optional[Renderable]]:
        return [
            self.doc_number,
            self.txn_id,
            self.txn_type,
            self.date,
            self.account,
            self.name,
            self.txn_class,
            self.amount,
            self.payment_method,
            self.memo,
        ]

    def render(self) -> str:
        return export_columns(
            (self.line_type,), self.columns(), names=self.column_names
        )

    def clone(self) -> DataLine:
        return copy.copy(self)

    def __repr__(self) -> str:
        type_code = self.txn_type.value if self.txn_type else None
        return (
            f"{type(self).__name__}(txn_type={type_code!r}, "
            f"account={self.account!r}, amount={self.amount!r})"
        )


class TransactionLine(DataLine):
    """The first row of a transaction.

    Besides the split columns it carries the to-print flag, the due date and
    the payment terms, each legal only for certain transaction types.
    """

    line_type = "TRNS"
    column_names = TRANSACTION_COLUMNS

    def __init__(
        self,
        *,
        needs_to_be_printed: Optional[BooleanValue] = None,
        due_date: Optional[Date] = None,
        terms: Optional[PaymentTerms] = None,
        **columns: Any,
    ) -> None:
        self._needs_to_be_printed = BooleanValue.EMPTY
        self._due_date = Date.EMPTY
        self._terms = PaymentTerms.EMPTY
        super().__init__(**columns)
        if needs_to_be_printed is not None:
            self.needs_to_be_printed = needs_to_be_printed
        if due_date is not None:
            self.due_date = due_date
        if terms is not None:
            self.terms = terms

    @property
    def is_printable(self) -> bool:
        return self.txn_type in PRINTABLE_TYPES

    @property
    def is_receivable(self) -> bool:
        return self.txn_type in RECEIVABLE_TYPES

    @property
    def has_type_specific_fields(self) -> bool:
        return not (
            self._needs_to_be_printed.is_empty
            and self._due_date.is_empty
            and self._terms.is_empty
        )

    @property
    def needs_to_be_printed(self) -> BooleanValue:
        return self._needs_to_be_printed

    @needs_to_be_printed.setter
    def needs_to_be_printed(self, value: BooleanValue) -> None:
        _check_instance("needs_to_be_printed", value, BooleanValue)
        if not value.is_empty and not self.is_printable:
            raise IllegalFieldForTransactionTypeError(
                "needs_to_be_printed",
                self.txn_type,
                "Whether a transaction needs printing can only be set on a "
                "check, invoice, credit memo, or cash sale transaction.",
            )
        self._needs_to_be_printed = value

    @property
    def due_date(self) -> Date:
        return self._due_date

    @due_date.setter
    def due_date(self, value: Date) -> None:
        _check_instance("due_date", value, Date)
        if not value.is_empty and not self.is_receivable:
            raise IllegalFieldForTransactionTypeError(
                "due_date",
                self.txn_type,
                "A due date can only be set on a bill or invoice transaction.",
            )
        self._due_date = value

    @property
    def terms(self) -> PaymentTerms:
        return self._terms

    @terms.setter
    def terms(self, value: PaymentTerms) -> None:
        _check_instance("terms", value, PaymentTerms)
        if not value.is_empty and not self.is_receivable:
            raise IllegalFieldForTransactionTypeError(
                "terms",
                self.txn_type,
                "Payment terms can only be set on a bill or invoice transaction.",
            )
        self._terms = value

    def _check_type_change(self, new_type: TxnType) -> None:
        if new_type is not self.txn_type and self.has_type_specific_fields:
            raise IllegalFieldForTransactionTypeError(
                "txn_type",
                self.txn_type,
                "The transaction type cannot be changed when type-specific "
                "fields are populated.",
            )

    def columns(self) -> list[Optional[Renderable]]:
        return [
            self.doc_number,
            self.txn_id,
            self.txn_type,
            self.date,
            self.account,
            self.name,
            self.txn_class,
            self.amount,
            self.payment_method,
            self.needs_to_be_printed,
            self.due_date,
            self.terms,
            self.memo,
        ]

    def clone(self) -> TransactionLine:
        return copy.copy(self)


class SplitLine(DataLine):
    """Any row of a transaction after the first."""

    line_type = "SPL"
    column_names = SPLIT_COLUMNS

    def clone(self) -> SplitLine:
        return copy.copy(self)


class NameLine(Exportable):
    """A row of a customer, vendor or other-name table."""

    def __init__(self, line_type: str, name: Name) -> None:
        self.line_type = line_type
        self.name = _check_instance("name", name, Name)

    def render(self) -> str:
        return export_columns((self.line_type,), [self.name], names=("NAME",))

    def __repr__(self) -> str:
        return f"NameLine({self.line_type!r}, {self.name.value!r})"


__all__ = [
    "DataLine",
    "NameLine",
    "PRINTABLE_TYPES",
    "RECEIVABLE_TYPES",
    "SplitLine",
    "TransactionLine",
]
