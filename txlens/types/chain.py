from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class LogEntry:
    """
    Single event log.  topics[0] is the event selector, topics[1:] hold the indexed parameters in
    declaration order, and data holds the ABI encoded non-indexed parameters.
    """

    topics: list[bytes]
    data: bytes = b""

    address: str | None = None
    log_index: int | None = None


@dataclass(frozen=True, slots=True)
class BlockSummary:
    """Header fields of a block returned by the node"""

    number: int
    block_hash: bytes
    parent_hash: bytes
    timestamp: int
    transaction_count: int
    gas_used: int
    gas_limit: int


@dataclass(frozen=True, slots=True)
class TransactionSummary:
    """Transaction fields returned by eth_getTransactionByHash"""

    tx_hash: bytes
    chain_id: int | None
    value: int
    sender: str
    to: str | None
    gas: int
    gas_price: int | None
    nonce: int
    block_number: int | None
    input: bytes


@dataclass(frozen=True, slots=True)
class TransactionReceipt:
    """Receipt of a mined transaction and the logs it emitted"""

    tx_hash: bytes
    status: int | None
    gas_used: int
    contract_address: str | None
    logs: list[LogEntry] = field(default_factory=list)
