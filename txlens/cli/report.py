import datetime
from dataclasses import asdict
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from web3 import Web3

from txlens.types import BlockSummary, DecodedEvent, DecodedFunction, LogEntry, TransactionSummary
from txlens.utils import to_hex, to_json


def _render_value(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return to_hex(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_render_value(v) for v in value) + "]"
    return str(value)


class CliReporter:
    """
    Renders node data and decoding results to the console, either as rich tables or as JSON.
    Holds no decoding logic.
    """

    console: Console
    json_output: bool

    def __init__(self, console: Console, json_output: bool = False):
        self.console = console
        self.json_output = json_output

    def document(self, value: Any):
        """Prints a single JSON document"""
        self.console.print_json(to_json(value))

    def balance(self, address: str, balance: int, block_id: int | str = "latest"):
        if self.json_output:
            self.document({"address": address, "block": block_id, "balance": balance})
            return

        ether = Web3.from_wei(balance, "ether")
        self.console.print(f"[bold]Account balance:[/bold] {address} -> {balance} wei ({ether} ETH) at {block_id}")

    def block(self, block: BlockSummary):
        if self.json_output:
            self.document(asdict(block))
            return

        table = Table(box=None, show_header=False)
        table.add_column("Field", style="bold")
        table.add_column("Value")
        table.add_row("Number", str(block.number))
        table.add_row("Hash", to_hex(block.block_hash))
        table.add_row("Parent Hash", to_hex(block.parent_hash))
        table.add_row(
            "Timestamp",
            f"{block.timestamp} ({datetime.datetime.fromtimestamp(block.timestamp, tz=datetime.timezone.utc)})",
        )
        table.add_row("Transactions", str(block.transaction_count))
        table.add_row("Gas Used", f"{block.gas_used} / {block.gas_limit}")

        self.console.print(Panel(f"-- Block {block.number} --", width=40))
        self.console.print(table)

    def transaction(self, tx: TransactionSummary):
        if self.json_output:
            self.document(asdict(tx))
            return

        table = Table(box=None, show_header=False)
        table.add_column("Field", style="bold")
        table.add_column("Value")
        table.add_row("Hash", to_hex(tx.tx_hash))
        table.add_row("ChainID", str(tx.chain_id))
        table.add_row("Value", str(tx.value))
        table.add_row("From", tx.sender)
        table.add_row("To", tx.to or "Contract Creation")
        table.add_row("Gas", str(tx.gas))
        table.add_row("GasPrice", str(tx.gas_price))
        table.add_row("Nonce", str(tx.nonce))
        table.add_row("Block", str(tx.block_number))

        self.console.print(Panel("-- Transaction --", width=40))
        self.console.print(table)

    def function(self, decoded: DecodedFunction):
        if self.json_output:
            self.document(asdict(decoded))
            return

        self.console.print(f"[bold]Method Name:[/bold] {decoded.name}  [dim]{decoded.function_signature}[/dim]")
        table = Table(title="Method Inputs", box=None)
        table.add_column("Name", style="bold")
        table.add_column("Value")
        for name, value in decoded.inputs.items():
            table.add_row(name, _render_value(value))
        self.console.print(table)

    def events(self, decoded_events: list[DecodedEvent], log_entries: list[LogEntry] | None = None):
        if self.json_output:
            self.document([asdict(event) for event in decoded_events])
            return

        for idx, event in enumerate(decoded_events):
            self.console.print(f"[bold]Event name:[/bold] {event.name}  [dim]{event.event_signature}[/dim]")
            for param in event.indexed:
                self.console.print(
                    f"  Indexed param {param.position} name {param.name} value decoded {_render_value(param.value)}"
                )

            if log_entries and len(log_entries[idx].data) > 1:
                self.console.print(f"  Log Data in Hex: {log_entries[idx].data.hex()}")

            if event.data:
                table = Table(title="Event outputs", box=None)
                table.add_column("Name", style="bold")
                table.add_column("Value")
                for name, value in event.data.items():
                    table.add_row(name, _render_value(value))
                self.console.print(table)

    def divider(self):
        if not self.json_output:
            self.console.rule()
