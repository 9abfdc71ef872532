from stockroom.models.sku import Sku
from stockroom.models.transaction import Transaction, TransactionType, TRANSACTION_TYPES

__all__ = [
    "Sku",
    "Transaction",
    "TransactionType",
    "TRANSACTION_TYPES",
]
