"""Transactions: ordered data lines under a debit/credit balance invariant."""

from __future__ import annotations

from decimal import MAX_PREC, Decimal, localcontext
from typing import Iterable, Sequence

from qbiif_schemas import InvalidValueError, OutOfBalanceError, TransactionEffect

from .exportable import CompositeExportable, Exportable, TransactionTerminationLine
from .lines import DataLine
from .logging_setup import get_logger
from .report import transaction_report

_logger = get_logger("qbiif.transaction")


class Transaction(CompositeExportable):
    """An ordered list of data lines; the first is conventionally the header.

    Balance is not enforced while lines are being added. It is checked when
    the transaction is rendered, where an imbalance raises
    ``OutOfBalanceError``.
    """

    def __init__(self, lines: Iterable[DataLine] = ()) -> None:
        self._lines: list[DataLine] = []
        for line in lines:
            self.add_line(line)

    @property
    def lines(self) -> tuple[DataLine, ...]:
        """Copies of the lines; changing them does not affect this transaction."""
        return tuple(line.clone() for line in self._lines)

    def add_line(self, line: DataLine) -> None:
        """Append a copy of ``line``; later changes to ``line`` do not leak in."""
        if not isinstance(line, DataLine):
            raise InvalidValueError(
                "line", f"must be a DataLine, not {type(line).__name__}"
            )
        self._lines.append(line.clone())

    def debit_total(self) -> Decimal:
        return self._total(TransactionEffect.DEBIT)

    def credit_total(self) -> Decimal:
        return self._total(TransactionEffect.CREDIT)

    def balance_discrepancy(self) -> Decimal:
        with localcontext() as ctx:
            ctx.prec = MAX_PREC
            return self.debit_total() - self.credit_total()

    def is_balanced(self) -> bool:
        return self.balance_discrepancy() == 0

    def ensure_balanced(self) -> None:
        debit_total = self.debit_total()
        credit_total = self.credit_total()
        discrepancy = self.balance_discrepancy()
        if discrepancy != 0:
            _logger.warning(
                "Rejecting out-of-balance transaction "
                "(debits: %s, credits: %s, discrepancy: %s)",
                debit_total,
                credit_total,
                discrepancy,
            )
            raise OutOfBalanceError(
                debit_total, credit_total, discrepancy, transaction_report(self)
            )

    def report(self) -> str:
        return transaction_report(self)

    def child_exportables(self) -> Sequence[Exportable]:
        self.ensure_balanced()
        return [*self._lines, TransactionTerminationLine()]

    def clone(self) -> Transaction:
        return Transaction(self._lines)

    def _total(self, effect: TransactionEffect) -> Decimal:
        amounts = (
            line.amount.value
            for line in self._lines
            if line.amount is not None and line.amount.effect is effect
        )
        # Exact at any magnitude.
        with localcontext() as ctx:
            ctx.prec = MAX_PREC
            return abs(sum(amounts, Decimal(0)))

    def __len__(self) -> int:
        return len(self._lines)

    def __repr__(self) -> str:
        return f"Transaction(lines={len(self._lines)})"


__all__ = ["Transaction"]
