import logging
import os
from logging import Logger

import click
from rich.console import Console
from rich.logging import RichHandler

from txlens.rpc import NodeClient

root_logger = logging.getLogger("txlens")
logger = root_logger.getChild("cli")


def cli_logger_config(instrument_logger: Logger) -> Console:
    rich_console = Console()
    instrument_logger.handlers.clear()

    instrument_logger.addHandler(RichHandler(show_path=False, console=rich_console))
    instrument_logger.setLevel(logging.INFO)
    return rich_console


def group_options(*options):
    """Decorator to group multiple click options together"""

    def wrapper(function):
        for option in reversed(options):
            function = option(function)
        return function

    return wrapper


def create_cli_client(json_rpc: str | None) -> NodeClient:
    """Creates a node client for the JSON RPC url"""

    if json_rpc is None:
        logger.error("JSON RPC URL not specified... Set with '--json-rpc' option or 'JSON_RPC' environment variable")
        raise SystemExit(1)

    return NodeClient.from_rpc_url(json_rpc)


# -------------------------------------------------------
#    CLI Secrets, Connections, and Configurations
# -------------------------------------------------------
json_rpc_option = click.option(
    "--json-rpc",
    "-rpc",
    "json_rpc",
    default=lambda: os.environ.get("JSON_RPC"),
    help="RPC url of the node to query.  If not provided, will use the JSON_RPC environment variable",
)

# -------------------------------------------------------
#    Decoding & Output Parameters
# -------------------------------------------------------
abi_file_option = click.option(
    "--abi",
    "-abi",
    "abi_file",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="Path to the contract ABI JSON used to decode calldata and logs",
)
json_output_option = click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Print results as JSON instead of tables",
)
block_option = click.option(
    "--block",
    "-b",
    "block_id",
    default="latest",
    type=str,
    show_default=True,
    help="Block to query.  Can be an integer, or a block identifier string like 'latest'",
)


def parse_block_identifier(block_id: str) -> int | str:
    """Converts CLI block input into an integer block number, or returns block tags unchanged"""
    if block_id.isdigit():
        return int(block_id)
    if block_id.startswith("0x"):
        return int(block_id, 16)
    if block_id in ("latest", "earliest", "pending", "safe", "finalized"):
        return block_id
    raise click.BadParameter(f"Invalid block identifier {block_id}")
