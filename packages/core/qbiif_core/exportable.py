"""The rendering tree: nodes that flatten themselves into IIF text."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterable, Sequence

from qbiif_schemas import join_columns, join_lines, render_in_order

TRANSACTION_COLUMNS: tuple[str, ...] = (
    "DOCNUM",
    "TRNSID",
    "TRNSTYPE",
    "DATE",
    "ACCNT",
    "NAME",
    "CLASS",
    "AMOUNT",
    "PAYMETH",
    "TOPRINT",
    "DUEDATE",
    "TERMS",
    "MEMO",
)

SPLIT_COLUMNS: tuple[str, ...] = (
    "DOCNUM",
    "SPLID",
    "TRNSTYPE",
    "DATE",
    "ACCNT",
    "NAME",
    "CLASS",
    "AMOUNT",
    "PAYMETH",
    "MEMO",
)


class Exportable(ABC):
    """A node of the export tree."""

    @abstractmethod
    def render(self) -> str:
        """Return the IIF text of this node, without a trailing newline."""


class CompositeExportable(Exportable):
    """A node whose text is its children's text, one per line.

    Children are independent, so with ``max_workers`` above one they are
    rendered on a thread pool; output order always follows
    ``child_exportables()``.
    """

    max_workers: int | None = None

    @abstractmethod
    def child_exportables(self) -> Sequence[Exportable]:
        """Return the ordered children to render."""

    def render(self) -> str:
        return join_lines(render_in_order(self.child_exportables(), self.max_workers))


class CompositeExportableList(CompositeExportable):
    """A composite backed by a stored list of children."""

    def __init__(self, exportables: Iterable[Exportable] = ()) -> None:
        self._exportables: list[Exportable] = list(exportables)

    @property
    def exportables(self) -> tuple[Exportable, ...]:
        return tuple(self._exportables)

    def child_exportables(self) -> Sequence[Exportable]:
        return list(self._exportables)


class HeaderType(Enum):
    """Fixed schema rows that declare the columns of the rows below them."""

    TRANSACTION = ("!TRNS", *TRANSACTION_COLUMNS)
    TRANSACTION_SPLIT = ("!SPL", *SPLIT_COLUMNS)
    TRANSACTION_TERMINATION = ("!ENDTRNS", "")
    CUSTOMER = ("!CUST", "NAME")
    VENDOR = ("!VEND", "NAME")
    OTHER_NAME = ("!OTHERNAME", "NAME")

    @property
    def columns(self) -> tuple[str, ...]:
        return self.value


class HeaderLine(Exportable):
    def __init__(self, header_type: HeaderType) -> None:
        self.header_type = header_type

    def render(self) -> str:
        return join_columns(self.header_type.columns)

    def __repr__(self) -> str:
        return f"HeaderLine({self.header_type.name})"


class TransactionHeader(CompositeExportable):
    """The ``!TRNS`` / ``!SPL`` / ``!ENDTRNS`` schema block."""

    def child_exportables(self) -> Sequence[Exportable]:
        return [
            HeaderLine(HeaderType.TRANSACTION),
            HeaderLine(HeaderType.TRANSACTION_SPLIT),
            HeaderLine(HeaderType.TRANSACTION_TERMINATION),
        ]


FileHeader = TransactionHeader


class TransactionTerminationLine(Exportable):
    """The ``ENDTRNS`` row closing every transaction."""

    def render(self) -> str:
        return join_columns(("ENDTRNS", ""))


__all__ = [
    "CompositeExportable",
    "CompositeExportableList",
    "Exportable",
    "FileHeader",
    "HeaderLine",
    "HeaderType",
    "SPLIT_COLUMNS",
    "TRANSACTION_COLUMNS",
    "TransactionHeader",
    "TransactionTerminationLine",
]
