"""Plain-text summaries of transactions for logs and error messages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from qbiif_schemas import TransactionEffect

if TYPE_CHECKING:
    from .transaction import Transaction

_ROW_FORMAT = "{:<64}\t{:>8}\t\t{:>8}"
_SUMMARY_FORMAT = "{:<16} {}"


def transaction_report(transaction: Transaction) -> str:
    """Tabulate each line's account with its debit or credit."""
    rows = [
        "Transaction Report",
        "==================",
        _ROW_FORMAT.format("Account", "Debits", "Credits"),
    ]
    for line in transaction.lines:
        account = line.account.value if line.account is not None else "<unset>"
        if line.amount is None:
            rows.append(_ROW_FORMAT.format(account, "", ""))
        elif line.amount.effect is TransactionEffect.CREDIT:
            rows.append(_ROW_FORMAT.format(account, "", line.amount.negate().render()))
        else:
            rows.append(_ROW_FORMAT.format(account, line.amount.render(), ""))
    return "\n".join(rows) + "\n"


def transaction_summary(transaction: Transaction) -> str:
    """Report plus line count, balance status and totals."""
    rows = [
        transaction_report(transaction),
        _SUMMARY_FORMAT.format("Lines:", len(transaction.lines)),
        _SUMMARY_FORMAT.format("In balance?:", transaction.is_balanced()),
        _SUMMARY_FORMAT.format("Discrepancy:", transaction.balance_discrepancy()),
        _SUMMARY_FORMAT.format("Debits:", transaction.debit_total()),
        _SUMMARY_FORMAT.format("Credits:", transaction.credit_total()),
        "----",
    ]
    return "\n".join(rows) + "\n"


__all__ = ["transaction_report", "transaction_summary"]
