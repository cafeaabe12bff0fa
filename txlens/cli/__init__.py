import logging

import click

from txlens.cli.decode import decode_group
from txlens.cli.utils import (
    abi_file_option,
    block_option,
    group_options,
    json_output_option,
    json_rpc_option,
)

# isort: skip_file
# pylint: disable=import-outside-toplevel,too-many-locals

root_logger = logging.getLogger("txlens")
logger = root_logger.getChild("cli")


@click.group()
def txlens_cli():
    """Command Line Interface for txlens"""


@txlens_cli.command()
@click.argument("tx_hash")
@click.option(
    "--account",
    "-a",
    "account",
    default=None,
    help="Account to query the balance of.  Defaults to the transaction sender",
)
@group_options(abi_file_option, json_rpc_option, json_output_option)
def inspect(tx_hash: str, account: str | None, abi_file: str, json_rpc: str | None, json_output: bool):
    """
    Fetches a transaction and its receipt, and decodes its calldata and logs with a local ABI
    """
    from dataclasses import asdict

    from txlens.cli.report import CliReporter
    from txlens.cli.utils import cli_logger_config, create_cli_client
    from txlens.decoding import InterfaceDescription, decode_calldata, decode_logs
    from txlens.exceptions import DecodingError, NodeError

    console = cli_logger_config(root_logger)
    root_logger.setLevel(logging.WARNING)
    reporter = CliReporter(console, json_output)

    try:
        interface = InterfaceDescription.from_file(abi_file)
    except DecodingError as e:
        logger.error(e)
        raise SystemExit(1)

    client = create_cli_client(json_rpc)

    try:
        if account is None:
            # Balance defaults to the sender, so the transaction has to be fetched first
            tx = client.get_transaction(tx_hash)
            balance_address = tx.sender
            balance = client.get_balance(balance_address)
            latest_block = client.get_block("latest")
        else:
            balance_address = account
            balance = client.get_balance(balance_address)
            latest_block = client.get_block("latest")
            tx = client.get_transaction(tx_hash)
        decoded_function = decode_calldata(interface, tx.input)
        tx_receipt = client.get_receipt(tx_hash)
        decoded_events = decode_logs(tx_receipt.logs, interface)
    except (DecodingError, NodeError, ValueError) as e:
        logger.error(e)
        raise SystemExit(1)

    if json_output:
        reporter.document(
            {
                "balance": {"address": balance_address, "balance": balance},
                "latest_block": asdict(latest_block),
                "transaction": asdict(tx),
                "function": asdict(decoded_function),
                "events": [asdict(event) for event in decoded_events],
            }
        )
        return

    reporter.balance(balance_address, balance)
    reporter.block(latest_block)
    reporter.transaction(tx)
    reporter.function(decoded_function)
    reporter.events(decoded_events, tx_receipt.logs)
    reporter.divider()


@txlens_cli.command()
@click.argument("address")
@group_options(block_option, json_rpc_option, json_output_option)
def balance(address: str, block_id: str, json_rpc: str | None, json_output: bool):
    """Queries the balance of an account in wei"""
    from txlens.cli.report import CliReporter
    from txlens.cli.utils import cli_logger_config, create_cli_client, parse_block_identifier
    from txlens.exceptions import NodeError

    console = cli_logger_config(root_logger)
    root_logger.setLevel(logging.WARNING)

    block_identifier = parse_block_identifier(block_id)
    client = create_cli_client(json_rpc)

    try:
        account_balance = client.get_balance(address, block_identifier)
    except (NodeError, ValueError) as e:
        logger.error(e)
        raise SystemExit(1)

    CliReporter(console, json_output).balance(address, account_balance, block_identifier)


@txlens_cli.command()
@click.argument("block_id", default="latest")
@group_options(json_rpc_option, json_output_option)
def block(block_id: str, json_rpc: str | None, json_output: bool):
    """Queries a block header.  Defaults to the latest known block"""
    from txlens.cli.report import CliReporter
    from txlens.cli.utils import cli_logger_config, create_cli_client, parse_block_identifier
    from txlens.exceptions import NodeError

    console = cli_logger_config(root_logger)
    root_logger.setLevel(logging.WARNING)

    block_identifier = parse_block_identifier(block_id)
    client = create_cli_client(json_rpc)

    try:
        block_summary = client.get_block(block_identifier)
    except NodeError as e:
        logger.error(e)
        raise SystemExit(1)

    CliReporter(console, json_output).block(block_summary)


# Adding Command Groups
txlens_cli.add_command(decode_group, name="decode")
