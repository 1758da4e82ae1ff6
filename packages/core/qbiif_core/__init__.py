"""Core transaction model and IIF export pipeline."""

from .builders import (
    AbstractTransactionBuilder,
    CustomerPaymentBuilder,
    GeneralJournalBuilder,
    PaymentDepositBuilder,
    VendorBillBuilder,
    VendorPaymentBuilder,
)
from .document import IifFile, TransactionFile
from .exportable import (
    CompositeExportable,
    CompositeExportableList,
    Exportable,
    FileHeader,
    HeaderLine,
    HeaderType,
    TransactionHeader,
    TransactionTerminationLine,
)
from .lines import DataLine, NameLine, SplitLine, TransactionLine
from .logging_setup import (
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)
from .money import amounts_equal, apply_precision, compare_money
from .report import transaction_report, transaction_summary
from .settings import load_settings, parse_settings, save_settings
from .transaction import Transaction

__all__ = [
    "AbstractTransactionBuilder",
    "CompositeExportable",
    "CompositeExportableList",
    "CustomerPaymentBuilder",
    "DataLine",
    "Exportable",
    "FileHeader",
    "GeneralJournalBuilder",
    "HeaderLine",
    "HeaderType",
    "IifFile",
    "NameLine",
    "PaymentDepositBuilder",
    "SplitLine",
    "Transaction",
    "TransactionFile",
    "TransactionHeader",
    "TransactionLine",
    "TransactionTerminationLine",
    "VendorBillBuilder",
    "VendorPaymentBuilder",
    "amounts_equal",
    "apply_precision",
    "compare_money",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "load_settings",
    "parse_settings",
    "save_settings",
    "transaction_report",
    "transaction_summary",
]
