import pytest
from hexbytes import HexBytes
from web3.exceptions import Web3Exception

from txlens.exceptions import NodeDataMissing, NodeHostError
from txlens.rpc import NodeClient
from txlens.rpc.client import parse_log

from tests.resources.rpc_responses import BAYC, SENDER, TX_HASH

TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"


def test_get_balance(fake_web3_factory):
    w3 = fake_web3_factory()
    client = NodeClient(w3)

    balance = client.get_balance("0x71c7656ec7ab88b098defb751b7401b5f6d8976f")

    assert balance == 25893180161173005034
    assert w3.eth.calls == [("get_balance", SENDER, "latest")]


def test_get_balance_invalid_address(fake_web3_factory):
    client = NodeClient(fake_web3_factory())

    with pytest.raises(ValueError):
        client.get_balance("0x1234")


def test_get_latest_block(fake_web3_factory):
    client = NodeClient(fake_web3_factory())

    block = client.get_block()

    assert block.number == 17000000
    assert block.block_hash == b"\x11" * 32
    assert block.transaction_count == 2
    assert block.gas_limit == 30000000


def test_missing_block(fake_web3_factory):
    client = NodeClient(fake_web3_factory())

    with pytest.raises(NodeDataMissing):
        client.get_block(1)


def test_get_transaction(fake_web3_factory):
    client = NodeClient(fake_web3_factory(tx_input=bytes.fromhex("a723533e") + (1).to_bytes(32, "big")))

    tx = client.get_transaction(TX_HASH)

    assert tx.tx_hash == HexBytes(TX_HASH)
    assert tx.chain_id == 1
    assert tx.sender == SENDER
    assert tx.to == BAYC
    assert tx.nonce == 11
    assert tx.input[:4] == bytes.fromhex("a723533e")


def test_missing_transaction(fake_web3_factory):
    client = NodeClient(fake_web3_factory())

    with pytest.raises(NodeDataMissing):
        client.get_transaction("0x" + "ab" * 32)

    with pytest.raises(NodeDataMissing):
        client.get_receipt("0x" + "ab" * 32)


def test_get_receipt(fake_web3_factory):
    rpc_log = {
        "address": BAYC.lower(),
        "topics": [
            HexBytes(TRANSFER_TOPIC),
            HexBytes("0x" + "00" * 32),
            HexBytes("0x" + "00" * 12 + "71c7656ec7ab88b098defb751b7401b5f6d8976f"),
        ],
        "data": HexBytes("0x"),
        "logIndex": 4,
    }
    client = NodeClient(fake_web3_factory(logs=[rpc_log]))

    receipt = client.get_receipt(TX_HASH)

    assert receipt.status == 1
    assert receipt.contract_address is None
    assert len(receipt.logs) == 1
    assert receipt.logs[0].address == BAYC
    assert receipt.logs[0].log_index == 4
    assert receipt.logs[0].topics[0] == HexBytes(TRANSFER_TOPIC)
    assert receipt.logs[0].data == b""


@pytest.mark.parametrize("error", [Web3Exception("rpc error"), ConnectionError("connection refused")])
def test_host_errors(fake_web3_factory, error):
    client = NodeClient(fake_web3_factory(fail_with=error))

    with pytest.raises(NodeHostError):
        client.get_balance(SENDER)

    with pytest.raises(NodeHostError):
        client.get_block()

    with pytest.raises(NodeHostError):
        client.get_transaction(TX_HASH)

    with pytest.raises(NodeHostError):
        client.get_receipt(TX_HASH)


def test_parse_log_with_hex_strings():
    log_entry = parse_log({"topics": [TRANSFER_TOPIC], "data": "0x0001"})

    assert log_entry.topics == [bytes.fromhex(TRANSFER_TOPIC[2:])]
    assert log_entry.data == b"\x00\x01"
    assert log_entry.address is None


def test_from_rpc_url():
    client = NodeClient.from_rpc_url("http://localhost:8545")

    assert client.w3.provider.endpoint_uri == "http://localhost:8545"
