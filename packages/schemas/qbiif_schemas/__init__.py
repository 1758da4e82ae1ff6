"""Shared value types, errors and column formatting for IIF export."""

from .columns import (
    Renderable,
    escape_column,
    export_columns,
    join_columns,
    join_lines,
    render_in_order,
    strip_quotes,
)
from .errors import (
    DuplicateNameAcrossTablesError,
    IifError,
    IllegalFieldForTransactionTypeError,
    InvalidValueError,
    MissingRequiredFieldError,
    OutOfBalanceError,
)
from .settings import ExportSettings
from .values import (
    Account,
    Amount,
    BooleanValue,
    Date,
    DocNumber,
    FrozenModel,
    Memo,
    Name,
    PaymentMethod,
    PaymentTerms,
    ScalarValue,
    StringValue,
    TransactionEffect,
    TxnClass,
    TxnIdentifier,
    TxnType,
    quantize_cents,
)

__all__ = [
    "Account",
    "Amount",
    "BooleanValue",
    "Date",
    "DocNumber",
    "DuplicateNameAcrossTablesError",
    "ExportSettings",
    "FrozenModel",
    "IifError",
    "IllegalFieldForTransactionTypeError",
    "InvalidValueError",
    "Memo",
    "MissingRequiredFieldError",
    "Name",
    "OutOfBalanceError",
    "PaymentMethod",
    "PaymentTerms",
    "Renderable",
    "ScalarValue",
    "StringValue",
    "TransactionEffect",
    "TxnClass",
    "TxnIdentifier",
    "TxnType",
    "escape_column",
    "export_columns",
    "join_columns",
    "join_lines",
    "quantize_cents",
    "render_in_order",
    "strip_quotes",
]
