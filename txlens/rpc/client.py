import logging
from typing import Any

from eth_typing import BlockIdentifier
from eth_utils import to_checksum_address
from web3 import Web3
from web3.exceptions import BlockNotFound, TransactionNotFound, Web3Exception

from txlens.exceptions import NodeDataMissing, NodeHostError
from txlens.types.chain import BlockSummary, LogEntry, TransactionReceipt, TransactionSummary
from txlens.utils import to_bytes

root_logger = logging.getLogger("txlens")
logger = root_logger.getChild("rpc")

# pylint: disable=raise-missing-from


def _optional_address(value: str | None) -> str | None:
    return to_checksum_address(value) if value else None


def parse_log(rpc_log: Any) -> LogEntry:
    """Converts a log from an eth_getTransactionReceipt response into a LogEntry"""
    return LogEntry(
        topics=[to_bytes(topic, pad=32) for topic in rpc_log["topics"]],
        data=to_bytes(rpc_log.get("data") or b""),
        address=_optional_address(rpc_log.get("address")),
        log_index=rpc_log.get("logIndex"),
    )


class NodeClient:
    """
    Thin wrapper around a :class:`~web3.Web3` connection.  Converts node responses into the
    read-only dataclasses consumed by the decoders, and raises NodeError subclasses on failure.
    """

    w3: Web3

    def __init__(self, w3: Web3):
        self.w3 = w3

    @classmethod
    def from_rpc_url(cls, json_rpc: str, timeout: int = 30) -> "NodeClient":
        """Dials an HTTP JSON-RPC endpoint"""
        logger.debug(f"Connecting to JSON RPC at {json_rpc}")
        return cls(Web3(Web3.HTTPProvider(json_rpc, request_kwargs={"timeout": timeout})))

    def get_balance(self, address: str, block_identifier: BlockIdentifier = "latest") -> int:
        """
        Returns the balance of an account in wei

        :param address: hex address.  Does not need to be checksummed
        :param block_identifier: block number, or block tag like 'latest'
        """
        checksum_address = to_checksum_address(address)
        logger.debug(f"Querying balance of {checksum_address} at block {block_identifier}")
        try:
            return self.w3.eth.get_balance(checksum_address, block_identifier)
        except (Web3Exception, OSError) as e:
            raise NodeHostError(f"Failed to query balance of {checksum_address}: {e}")

    def get_block(self, block_identifier: BlockIdentifier = "latest") -> BlockSummary:
        """Returns the header fields of a block.  Defaults to the latest known block"""
        logger.debug(f"Querying block {block_identifier}")
        try:
            block = self.w3.eth.get_block(block_identifier)
        except BlockNotFound:
            raise NodeDataMissing(f"Block {block_identifier} not found")
        except (Web3Exception, OSError) as e:
            raise NodeHostError(f"Failed to query block {block_identifier}: {e}")

        return BlockSummary(
            number=block["number"],
            block_hash=to_bytes(block["hash"], pad=32),
            parent_hash=to_bytes(block["parentHash"], pad=32),
            timestamp=block["timestamp"],
            transaction_count=len(block.get("transactions", [])),
            gas_used=block["gasUsed"],
            gas_limit=block["gasLimit"],
        )

    def get_transaction(self, tx_hash: str | bytes) -> TransactionSummary:
        """
        Returns a transaction by hash.  The sender is recovered from the transaction signature by the node.
        """
        hash_bytes = to_bytes(tx_hash, pad=32)
        logger.debug(f"Querying transaction 0x{hash_bytes.hex()}")
        try:
            tx = self.w3.eth.get_transaction(hash_bytes)
        except TransactionNotFound:
            raise NodeDataMissing(f"Transaction 0x{hash_bytes.hex()} not found")
        except (Web3Exception, OSError) as e:
            raise NodeHostError(f"Failed to query transaction 0x{hash_bytes.hex()}: {e}")

        return TransactionSummary(
            tx_hash=to_bytes(tx["hash"], pad=32),
            chain_id=tx.get("chainId"),
            value=tx["value"],
            sender=to_checksum_address(tx["from"]),
            to=_optional_address(tx.get("to")),
            gas=tx["gas"],
            gas_price=tx.get("gasPrice"),
            nonce=tx["nonce"],
            block_number=tx.get("blockNumber"),
            input=to_bytes(tx.get("input") or b""),
        )

    def get_receipt(self, tx_hash: str | bytes) -> TransactionReceipt:
        """Returns the receipt of a mined transaction, including its logs"""
        hash_bytes = to_bytes(tx_hash, pad=32)
        logger.debug(f"Querying receipt for 0x{hash_bytes.hex()}")
        try:
            receipt = self.w3.eth.get_transaction_receipt(hash_bytes)
        except TransactionNotFound:
            raise NodeDataMissing(f"Receipt for 0x{hash_bytes.hex()} not found.  Transaction may be pending")
        except (Web3Exception, OSError) as e:
            raise NodeHostError(f"Failed to query receipt for 0x{hash_bytes.hex()}: {e}")

        return TransactionReceipt(
            tx_hash=hash_bytes,
            status=receipt.get("status"),
            gas_used=receipt["gasUsed"],
            contract_address=_optional_address(receipt.get("contractAddress")),
            logs=[parse_log(rpc_log) for rpc_log in receipt.get("logs", [])],
        )
