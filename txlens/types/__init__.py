from .chain import BlockSummary, LogEntry, TransactionReceipt, TransactionSummary
from .decoding import DecodedEvent, DecodedFunction, IndexedParam

__all__ = [
    "BlockSummary",
    "DecodedEvent",
    "DecodedFunction",
    "IndexedParam",
    "LogEntry",
    "TransactionReceipt",
    "TransactionSummary",
]
