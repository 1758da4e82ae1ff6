"""Typed scalar values that make up the columns of an IIF row."""

from __future__ import annotations

import datetime as dt
from decimal import ROUND_HALF_EVEN, Decimal, localcontext
from enum import Enum
from typing import Any, ClassVar, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    StrictBool,
    ValidationError,
    field_validator,
)

from .columns import escape_column
from .errors import InvalidValueError

_CENTS = Decimal("0.01")
DATE_FORMAT = "%m/%d/%Y"


def quantize_cents(value: Decimal, rounding: str = ROUND_HALF_EVEN) -> Decimal:
    """Round ``value`` to cents with enough precision for any magnitude."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(_CENTS, rounding=rounding)


class FrozenModel(BaseModel):
    """Base model with shared configuration settings."""

    model_config = ConfigDict(extra="forbid", frozen=True)


def _reason(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "value is invalid"
    message = str(errors[0].get("msg", "is invalid"))
    return "value " + message.removeprefix("Value error, ")


class ScalarValue(FrozenModel):
    """One validated, immutable column value.

    Values are built positionally, e.g. ``Account("Checking")``. Validation
    failures surface as ``InvalidValueError`` naming the value type; the
    underlying pydantic error is chained as the cause.
    """

    def __init__(self, value: Any) -> None:
        label = type(self).__name__
        if value is None:
            raise InvalidValueError(label, "value cannot be None")
        try:
            super().__init__(value=value)
        except ValidationError as exc:
            raise InvalidValueError(label, _reason(exc)) from exc

    @property
    def is_empty(self) -> bool:
        return False

    def render(self) -> str:
        raise NotImplementedError


class StringValue(ScalarValue):
    """A non-empty piece of text, rendered as a quoted IIF column."""

    value: str

    EMPTY: ClassVar[StringValue]

    @field_validator("value")
    @classmethod
    def _reject_empty(cls, value: str) -> str:
        if value == "":
            raise ValueError("cannot be empty")
        return value

    @classmethod
    def _sentinel(cls) -> Any:
        return cls.model_construct(value="")

    @property
    def is_empty(self) -> bool:
        return self.value == ""

    def render(self) -> str:
        return escape_column(self.value)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, StringValue):
            return NotImplemented
        return self.value < other.value

    def __str__(self) -> str:
        return self.value


class Account(StringValue):
    """An account from the chart of accounts."""


class Name(StringValue):
    """A customer, vendor, employee or other name."""


class Memo(StringValue):
    pass


class TxnClass(StringValue):
    """A QuickBooks class used to categorise a line."""


class TxnIdentifier(StringValue):
    pass


class PaymentMethod(StringValue):
    CASH: ClassVar[PaymentMethod]
    CHECK: ClassVar[PaymentMethod]
    E_CHECK: ClassVar[PaymentMethod]
    ACH_TRANSFER: ClassVar[PaymentMethod]
    WIRE_TRANSFER: ClassVar[PaymentMethod]
    AMEX: ClassVar[PaymentMethod]
    DISCOVER: ClassVar[PaymentMethod]
    MASTERCARD: ClassVar[PaymentMethod]
    VISA: ClassVar[PaymentMethod]
    DEBIT_CARD: ClassVar[PaymentMethod]
    GIFT_CARD: ClassVar[PaymentMethod]


class PaymentTerms(StringValue):
    UPON_RECEIPT: ClassVar[PaymentTerms]
    NET_7: ClassVar[PaymentTerms]
    NET_15: ClassVar[PaymentTerms]
    NET_30: ClassVar[PaymentTerms]
    NET_60: ClassVar[PaymentTerms]


class DocNumber(StringValue):
    """Document, reference or check number; at most 15 characters."""

    MAX_LENGTH: ClassVar[int] = 15

    @field_validator("value")
    @classmethod
    def _limit_length(cls, value: str) -> str:
        if len(value) > cls.MAX_LENGTH:
            raise ValueError(
                f"cannot be longer than {cls.MAX_LENGTH} characters "
                f"(was given `{value}`)"
            )
        return value


class TransactionEffect(Enum):
    """Which side of the ledger an amount lands on."""

    DEBIT = 1
    NONE = 0
    CREDIT = -1


class Amount(ScalarValue):
    """A monetary value; positive amounts debit, negative amounts credit.

    The value is stored exactly as given and only rounded to cents when
    rendered.
    """

    value: Decimal

    ZERO: ClassVar[Amount]

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("must be a number, not a boolean")
        if isinstance(value, float):
            return Decimal(repr(value))
        return value

    @field_validator("value")
    @classmethod
    def _require_finite(cls, value: Decimal) -> Decimal:
        if not value.is_finite():
            raise ValueError("must be a finite number")
        if value.is_zero():
            return value.copy_abs()
        return value

    @property
    def effect(self) -> TransactionEffect:
        if self.value > 0:
            return TransactionEffect.DEBIT
        if self.value < 0:
            return TransactionEffect.CREDIT
        return TransactionEffect.NONE

    def negate(self) -> Amount:
        return Amount(-self.value)

    def render(self) -> str:
        return format(quantize_cents(self.value), "f")

    def __str__(self) -> str:
        return self.render()


class Date(ScalarValue):
    """A calendar date rendered as ``M/D/YYYY``."""

    value: Optional[dt.date]

    EMPTY: ClassVar[Date]

    @classmethod
    def parse(cls, text: str) -> Date:
        try:
            parsed = dt.datetime.strptime(text.strip(), DATE_FORMAT).date()
        except (AttributeError, ValueError) as exc:
            raise InvalidValueError(
                cls.__name__, f"value `{text}` is not a M/D/YYYY date"
            ) from exc
        return cls(parsed)

    @property
    def is_empty(self) -> bool:
        return self.value is None

    def render(self) -> str:
        return escape_column(str(self))

    def __str__(self) -> str:
        if self.value is None:
            return ""
        day = self.value
        return f"{day.month}/{day.day}/{day.year:04d}"


class BooleanValue(ScalarValue):
    """A yes/no flag rendered as ``Y`` or ``N``; ``EMPTY`` renders blank."""

    value: Optional[StrictBool]

    EMPTY: ClassVar[BooleanValue]
    TRUE: ClassVar[BooleanValue]
    FALSE: ClassVar[BooleanValue]

    @property
    def is_empty(self) -> bool:
        return self.value is None

    def render(self) -> str:
        if self.value is None:
            return ""
        return "Y" if self.value else "N"


class TxnType(str, Enum):
    """Transaction types, valued by their QuickBooks codes."""

    BEGIN_BALANCE_CHECK = "BEGINBALCHECK"
    BILL = "BILL"
    BILL_REFUND = "BILL REFUND"
    CASH_REFUND = "CASH REFUND"
    CASH_SALE = "CASH SALE"
    CREDIT_CARD_REFUND = "CCARD REFUND"
    CHECK = "CHECK"
    CREDIT_CARD = "CREDIT CARD"
    CREDIT_MEMO = "CREDIT MEMO"
    DEPOSIT = "DEPOSIT"
    ESTIMATE = "ESTIMATES"
    GENERAL_JOURNAL = "GENERAL JOURNAL"
    INVOICE = "INVOICE"
    PAYMENT = "PAYMENT"
    PURCHASE_ORDER = "PURCHORD"
    TRANSFER = "TRANSFER"

    def render(self) -> str:
        return escape_column(self.value)


for _string_type in (
    StringValue,
    Account,
    Name,
    Memo,
    TxnClass,
    TxnIdentifier,
    PaymentMethod,
    PaymentTerms,
    DocNumber,
):
    _string_type.EMPTY = _string_type._sentinel()

Amount.ZERO = Amount(Decimal("0"))
Date.EMPTY = Date.model_construct(value=None)
BooleanValue.EMPTY = BooleanValue.model_construct(value=None)
BooleanValue.TRUE = BooleanValue(True)
BooleanValue.FALSE = BooleanValue(False)

PaymentMethod.CASH = PaymentMethod("Cash")
PaymentMethod.CHECK = PaymentMethod("Check")
PaymentMethod.E_CHECK = PaymentMethod("E-Check")
PaymentMethod.ACH_TRANSFER = PaymentMethod("ACH Transfer")
PaymentMethod.WIRE_TRANSFER = PaymentMethod("Wire Transfer")
PaymentMethod.AMEX = PaymentMethod("American Express")
PaymentMethod.DISCOVER = PaymentMethod("Discover")
PaymentMethod.MASTERCARD = PaymentMethod("MasterCard")
PaymentMethod.VISA = PaymentMethod("Visa")
PaymentMethod.DEBIT_CARD = PaymentMethod("Debit Card")
PaymentMethod.GIFT_CARD = PaymentMethod("Gift Card")

PaymentTerms.UPON_RECEIPT = PaymentTerms("Due on receipt")
PaymentTerms.NET_7 = PaymentTerms("Net 7")
PaymentTerms.NET_15 = PaymentTerms("Net 15")
PaymentTerms.NET_30 = PaymentTerms("Net 30")
PaymentTerms.NET_60 = PaymentTerms("Net 60")


__all__ = [
    "Account",
    "Amount",
    "BooleanValue",
    "DATE_FORMAT",
    "Date",
    "DocNumber",
    "FrozenModel",
    "Memo",
    "Name",
    "PaymentMethod",
    "PaymentTerms",
    "ScalarValue",
    "StringValue",
    "TransactionEffect",
    "TxnClass",
    "TxnIdentifier",
    "TxnType",
    "quantize_cents",
]
