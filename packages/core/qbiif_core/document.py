"""IIF documents: transactions, optionally preceded by name tables."""

from __future__ import annotations

from typing import Optional, Sequence

from qbiif_schemas import (
    DuplicateNameAcrossTablesError,
    ExportSettings,
    InvalidValueError,
    Name,
)

from .exportable import (
    CompositeExportableList,
    Exportable,
    FileHeader,
    HeaderLine,
    HeaderType,
)
from .lines import NameLine
from .logging_setup import get_logger
from .transaction import Transaction

_logger = get_logger("qbiif.document")

CUSTOMER_TABLE = "customer"
VENDOR_TABLE = "vendor"
OTHER_NAME_TABLE = "other name"

_TABLE_ROWS: dict[str, tuple[HeaderType, str]] = {
    CUSTOMER_TABLE: (HeaderType.CUSTOMER, "CUST"),
    VENDOR_TABLE: (HeaderType.VENDOR, "VEND"),
    OTHER_NAME_TABLE: (HeaderType.OTHER_NAME, "OTHERNAME"),
}


class TransactionFile(CompositeExportableList):
    """A file of transactions under a single schema header.

    Transactions are copied on the way in and rendered in insertion order.
    The rendered text ends with a newline; QuickBooks skips the last
    transaction of a file without one.
    """

    def __init__(self, settings: Optional[ExportSettings] = None) -> None:
        super().__init__()
        self.settings = settings or ExportSettings()
        self.max_workers = self.settings.render_workers

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return tuple(
            transaction.clone()  # type: ignore[attr-defined]
            for transaction in self._exportables
        )

    def add_transaction(self, transaction: Transaction) -> None:
        if not isinstance(transaction, Transaction):
            raise InvalidValueError(
                "transaction",
                f"must be a Transaction, not {type(transaction).__name__}",
            )
        self._exportables.append(transaction.clone())
        _logger.debug(
            "Added transaction with %d line(s) to IIF file", len(transaction)
        )

    def child_exportables(self) -> Sequence[Exportable]:
        return [FileHeader(), *super().child_exportables()]

    def render(self) -> str:
        return super().render() + "\n"


class IifFile(TransactionFile):
    """A complete IIF document with customer, vendor and other-name tables.

    A name may appear in only one of the tables; adding it to the same table
    twice is a no-op. Tables render before the transactions, each sorted by
    name, and empty tables are left out.
    """

    def __init__(self, settings: Optional[ExportSettings] = None) -> None:
        super().__init__(settings)
        self._names: dict[str, set[Name]] = {table: set() for table in _TABLE_ROWS}

    @property
    def customer_names(self) -> frozenset[Name]:
        return frozenset(self._names[CUSTOMER_TABLE])

    @property
    def vendor_names(self) -> frozenset[Name]:
        return frozenset(self._names[VENDOR_TABLE])

    @property
    def other_names(self) -> frozenset[Name]:
        return frozenset(self._names[OTHER_NAME_TABLE])

    def add_customer_name(self, name: Name) -> None:
        self._add_name(CUSTOMER_TABLE, name)

    def add_vendor_name(self, name: Name) -> None:
        self._add_name(VENDOR_TABLE, name)

    def add_other_name(self, name: Name) -> None:
        self._add_name(OTHER_NAME_TABLE, name)

    def _add_name(self, table: str, name: Name) -> None:
        if name is None or not isinstance(name, Name):
            raise InvalidValueError(f"{table} name", "must be a Name")
        if name.is_empty:
            raise InvalidValueError(f"{table} name", "cannot be empty")
        for other_table, names in self._names.items():
            if other_table != table and name in names:
                raise DuplicateNameAcrossTablesError(name.value, other_table)
        self._names[table].add(name)

    def _name_section(self, table: str) -> list[Exportable]:
        names = self._names[table]
        if not names:
            return []
        header_type, line_type = _TABLE_ROWS[table]
        section: list[Exportable] = [HeaderLine(header_type)]
        section.extend(NameLine(line_type, name) for name in sorted(names))
        return section

    def child_exportables(self) -> Sequence[Exportable]:
        children: list[Exportable] = []
        for table in _TABLE_ROWS:
            children.extend(self._name_section(table))
        children.extend(super().child_exportables())
        return children

    def render(self) -> str:
        _logger.debug(
            "Rendering IIF file: %d transaction(s), %d customer(s), "
            "%d vendor(s), %d other name(s)",
            len(self._exportables),
            len(self._names[CUSTOMER_TABLE]),
            len(self._names[VENDOR_TABLE]),
            len(self._names[OTHER_NAME_TABLE]),
        )
        return super().render()


__all__ = ["IifFile", "TransactionFile"]
