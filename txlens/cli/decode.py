import logging

import click

from txlens.cli.utils import (
    group_options,
    json_output_option,
    json_rpc_option,
)

# isort: skip_file
# pylint: disable=import-outside-toplevel

root_logger = logging.getLogger("txlens")
logger = root_logger.getChild("cli")


@click.group("decode", short_help="Offline & Receipt ABI Decoding")
def decode_group():
    """Decode calldata, logs and receipts with a local contract ABI"""


@decode_group.command()
@click.argument("abi_json", type=click.Path(exists=True, dir_okay=False))
@click.argument("calldata")
@group_options(json_output_option)
def calldata(abi_json: str, calldata: str, json_output: bool):  # pylint: disable=redefined-outer-name
    """Decodes transaction calldata, including its 4 byte selector"""
    from txlens.cli.report import CliReporter
    from txlens.cli.utils import cli_logger_config
    from txlens.decoding import InterfaceDescription, decode_calldata
    from txlens.exceptions import DecodingError
    from txlens.utils import to_bytes

    console = cli_logger_config(root_logger)
    root_logger.setLevel(logging.WARNING)

    try:
        interface = InterfaceDescription.from_file(abi_json)
        decoded = decode_calldata(interface, to_bytes(calldata))
    except (DecodingError, ValueError) as e:
        logger.error(e)
        raise SystemExit(1)

    CliReporter(console, json_output).function(decoded)


@decode_group.command()
@click.argument("abi_json", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--topic",
    "-t",
    "topics",
    multiple=True,
    required=True,
    help="32 byte log topic.  Pass once per topic, starting with the event selector",
)
@click.option("--data", "-d", "data", default="0x", show_default=True, help="Hex encoded log data")
@group_options(json_output_option)
def log(abi_json: str, topics: tuple[str, ...], data: str, json_output: bool):
    """Decodes a single event log from its topics and data"""
    from txlens.cli.report import CliReporter
    from txlens.cli.utils import cli_logger_config
    from txlens.decoding import InterfaceDescription, decode_log
    from txlens.exceptions import DecodingError
    from txlens.types import LogEntry
    from txlens.utils import to_bytes

    console = cli_logger_config(root_logger)
    root_logger.setLevel(logging.WARNING)

    try:
        interface = InterfaceDescription.from_file(abi_json)
        log_entry = LogEntry(topics=[to_bytes(t, pad=32) for t in topics], data=to_bytes(data))
        decoded = decode_log(log_entry, interface)
    except (DecodingError, ValueError) as e:
        logger.error(e)
        raise SystemExit(1)

    CliReporter(console, json_output).events([decoded], [log_entry])


@decode_group.command()
@click.argument("abi_json", type=click.Path(exists=True, dir_okay=False))
@click.argument("tx_hash")
@group_options(json_rpc_option, json_output_option)
def receipt(abi_json: str, tx_hash: str, json_rpc: str | None, json_output: bool):
    """Fetches a transaction receipt and decodes all of its logs"""
    from txlens.cli.report import CliReporter
    from txlens.cli.utils import cli_logger_config, create_cli_client
    from txlens.decoding import InterfaceDescription, decode_logs
    from txlens.exceptions import DecodingError, NodeError

    console = cli_logger_config(root_logger)
    root_logger.setLevel(logging.WARNING)

    client = create_cli_client(json_rpc)

    try:
        interface = InterfaceDescription.from_file(abi_json)
        tx_receipt = client.get_receipt(tx_hash)
        decoded = decode_logs(tx_receipt.logs, interface)
    except (DecodingError, NodeError, ValueError) as e:
        logger.error(e)
        raise SystemExit(1)

    CliReporter(console, json_output).events(decoded, tx_receipt.logs)


@decode_group.command()
@click.argument("abi_json", type=click.Path(exists=True, dir_okay=False))
@click.option("--full-signatures", is_flag=True, default=False)
def list_abi(abi_json: str, full_signatures: bool):
    """Lists the function and event selectors an ABI can decode"""
    from txlens.cli.utils import cli_logger_config
    from txlens.decoding import InterfaceDescription
    from txlens.exceptions import DecodingError

    console = cli_logger_config(root_logger)
    root_logger.setLevel(logging.WARNING)

    try:
        interface = InterfaceDescription.from_file(abi_json)
    except DecodingError as e:
        logger.error(e)
        raise SystemExit(1)

    console.print(interface.decoder_table(full_signatures=full_signatures))
