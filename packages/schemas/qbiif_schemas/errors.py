"""Error taxonomy shared by the IIF value types and export pipeline."""

from __future__ import annotations

from decimal import Decimal


class IifError(Exception):
    """Base exception for every IIF modelling or export failure."""


class InvalidValueError(IifError, ValueError):
    """Raised when a value or column rejects its input."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field} {reason}")
        self.field = field
        self.reason = reason


class MissingRequiredFieldError(IifError, ValueError):
    """Raised when a row is rendered with a required column unset."""

    def __init__(self, column_index: int, column_name: str | None = None) -> None:
        label = f" ({column_name})" if column_name else ""
        super().__init__(
            "Not all required IIF columns contain a value: column "
            f"{column_index}{label} is unset"
        )
        self.column_index = column_index
        self.column_name = column_name


class IllegalFieldForTransactionTypeError(IifError, ValueError):
    """Raised when a type-specific column conflicts with the transaction type."""

    def __init__(self, field: str, txn_type: object, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.txn_type = txn_type


class OutOfBalanceError(IifError, RuntimeError):
    """Raised when debits and credits of a transaction differ at export time."""

    def __init__(
        self,
        debit_total: Decimal,
        credit_total: Decimal,
        discrepancy: Decimal,
        report: str = "",
    ) -> None:
        message = (
            "Transaction is not in balance "
            f"(debits: {debit_total}, credits: {credit_total}, "
            f"discrepancy: {discrepancy})"
        )
        if report:
            message = f"{message}\n{report}"
        super().__init__(message)
        self.debit_total = debit_total
        self.credit_total = credit_total
        self.discrepancy = discrepancy
        self.report = report


class DuplicateNameAcrossTablesError(IifError, ValueError):
    """Raised when a name is added to more than one name table of a file."""

    def __init__(self, name: str, existing_table: str) -> None:
        super().__init__(
            f"The name `{name}` already appears in the {existing_table} table; "
            "a name may appear in only one of the customer, vendor, or other "
            "name tables"
        )
        self.name = name
        self.existing_table = existing_table


__all__ = [
    "DuplicateNameAcrossTablesError",
    "IifError",
    "IllegalFieldForTransactionTypeError",
    "InvalidValueError",
    "MissingRequiredFieldError",
    "OutOfBalanceError",
]
