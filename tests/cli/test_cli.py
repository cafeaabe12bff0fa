import json

import pytest
from click.testing import CliRunner
from eth_abi import encode
from hexbytes import HexBytes

from tests.resources.rpc_responses import BAYC, SENDER, TX_HASH
from txlens.cli import txlens_cli
from txlens.rpc import NodeClient

TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
RECIPIENT = "0xbEbc44782C7dB0a1A60Cb6fe97d0b483032FF1C7"


def _padded(address: str) -> str:
    return "0x" + "00" * 12 + address[2:].lower()


@pytest.fixture(name="patched_node")
def fixture_patched_node(monkeypatch, fake_web3_factory):
    tx_input = bytes.fromhex("a9059cbb") + encode(["address", "uint256"], [RECIPIENT, 5000])
    rpc_log = {
        "address": BAYC,
        "topics": [HexBytes(TRANSFER_TOPIC), HexBytes(_padded(SENDER)), HexBytes(_padded(RECIPIENT))],
        "data": HexBytes(encode(["uint256"], [5000])),
        "logIndex": 0,
    }
    w3 = fake_web3_factory(tx_input=tx_input, logs=[rpc_log])
    monkeypatch.setattr("txlens.cli.utils.create_cli_client", lambda json_rpc: NodeClient(w3))
    return w3


def test_decode_calldata_json(erc20_abi_file):
    calldata = "0xa9059cbb" + encode(["address", "uint256"], [RECIPIENT, 36124523]).hex()

    result = CliRunner().invoke(txlens_cli, ["decode", "calldata", str(erc20_abi_file), calldata, "--json"])

    assert result.exit_code == 0
    decoded = json.loads(result.output)
    assert decoded["name"] == "transfer"
    assert decoded["inputs"] == {"recipient": RECIPIENT, "amount": 36124523}


def test_decode_calldata_table(erc20_abi_file):
    calldata = "0xa9059cbb" + encode(["address", "uint256"], [RECIPIENT, 36124523]).hex()

    result = CliRunner().invoke(txlens_cli, ["decode", "calldata", str(erc20_abi_file), calldata])

    assert result.exit_code == 0
    assert "Method Name:" in result.output
    assert "36124523" in result.output


def test_decode_unknown_selector(erc20_abi_file):
    result = CliRunner().invoke(txlens_cli, ["decode", "calldata", str(erc20_abi_file), "0xdeadbeef"])

    assert result.exit_code == 1


def test_decode_log_json(erc20_abi_file):
    result = CliRunner().invoke(
        txlens_cli,
        [
            "decode",
            "log",
            str(erc20_abi_file),
            "-t",
            TRANSFER_TOPIC,
            "-t",
            _padded(SENDER),
            "-t",
            _padded(RECIPIENT),
            "--data",
            "0x" + encode(["uint256"], [42]).hex(),
            "--json",
        ],
    )

    assert result.exit_code == 0
    events = json.loads(result.output)
    assert events[0]["name"] == "Transfer"
    assert [param["value"] for param in events[0]["indexed"]] == [SENDER, RECIPIENT]
    assert events[0]["data"] == {"value": 42}


def test_decode_log_topic_mismatch(erc20_abi_file):
    result = CliRunner().invoke(
        txlens_cli,
        ["decode", "log", str(erc20_abi_file), "-t", TRANSFER_TOPIC, "-t", _padded(SENDER), "-t", _padded(SENDER)]
        + ["-t", "0x" + "00" * 31 + "2a"],
    )

    assert result.exit_code == 1


def test_list_abi(erc20_abi_file):
    result = CliRunner().invoke(txlens_cli, ["decode", "list-abi", str(erc20_abi_file)])

    assert result.exit_code == 0
    assert "0xa9059cbb" in result.output
    assert "transfer" in result.output


def test_decode_receipt(erc20_abi_file, patched_node):
    result = CliRunner().invoke(txlens_cli, ["decode", "receipt", str(erc20_abi_file), TX_HASH, "--json"])

    assert result.exit_code == 0
    events = json.loads(result.output)
    assert len(events) == 1
    assert events[0]["data"] == {"value": 5000}


def test_inspect_json(erc20_abi_file, patched_node):
    result = CliRunner().invoke(txlens_cli, ["inspect", TX_HASH, "--abi", str(erc20_abi_file), "--json"])

    assert result.exit_code == 0
    report = json.loads(result.output)

    assert report["balance"] == {"address": SENDER, "balance": 25893180161173005034}
    assert report["latest_block"]["number"] == 17000000
    assert report["transaction"]["tx_hash"] == TX_HASH
    assert report["transaction"]["sender"] == SENDER
    assert report["function"]["name"] == "transfer"
    assert report["function"]["inputs"] == {"recipient": RECIPIENT, "amount": 5000}
    assert report["events"][0]["name"] == "Transfer"

    called = [call[0] for call in patched_node.eth.calls]
    assert called == ["get_transaction", "get_balance", "get_block", "get_transaction_receipt"]


def test_inspect_tables(erc20_abi_file, patched_node):
    result = CliRunner().invoke(
        txlens_cli, ["inspect", TX_HASH, "--abi", str(erc20_abi_file), "--account", RECIPIENT]
    )

    assert result.exit_code == 0
    assert "Account balance:" in result.output
    assert "Event name:" in result.output
    called = [call[0] for call in patched_node.eth.calls]
    assert called == ["get_balance", "get_block", "get_transaction", "get_transaction_receipt"]
    assert patched_node.eth.calls[0] == ("get_balance", RECIPIENT, "latest")


def test_inspect_missing_transaction(erc20_abi_file, patched_node):
    result = CliRunner().invoke(txlens_cli, ["inspect", "0x" + "ab" * 32, "--abi", str(erc20_abi_file)])

    assert result.exit_code == 1


def test_missing_json_rpc(erc20_abi_file, monkeypatch):
    monkeypatch.delenv("JSON_RPC", raising=False)

    result = CliRunner().invoke(txlens_cli, ["inspect", TX_HASH, "--abi", str(erc20_abi_file)])

    assert result.exit_code == 1


def test_balance_and_block(patched_node):
    balance = CliRunner().invoke(txlens_cli, ["balance", SENDER, "--json"])
    block = CliRunner().invoke(txlens_cli, ["block", "--json"])

    assert balance.exit_code == 0
    assert json.loads(balance.output)["balance"] == 25893180161173005034
    assert block.exit_code == 0
    assert json.loads(block.output)["transaction_count"] == 2


def test_invalid_block_identifier(patched_node):
    result = CliRunner().invoke(txlens_cli, ["block", "tomorrow"])

    assert result.exit_code == 2
