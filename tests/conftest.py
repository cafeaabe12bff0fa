import json
import random

import pytest
from eth_utils import to_checksum_address

from tests.resources.ABI import ERC20_ABI_JSON, ERC721_ABI_JSON, REGISTRY_ABI_JSON
from tests.resources.rpc_responses import FakeEth, FakeWeb3, build_node_responses
from txlens.decoding import InterfaceDescription


@pytest.fixture(name="random_address")
def fixture_random_address():
    def _generate_random_address():
        return to_checksum_address(random.randbytes(20).hex())

    return _generate_random_address


@pytest.fixture(name="erc20_interface")
def fixture_erc20_interface() -> InterfaceDescription:
    return InterfaceDescription.from_json("ERC20", json.loads(ERC20_ABI_JSON))


@pytest.fixture(name="erc721_interface")
def fixture_erc721_interface() -> InterfaceDescription:
    return InterfaceDescription.from_json("ERC721", json.loads(ERC721_ABI_JSON))


@pytest.fixture(name="registry_interface")
def fixture_registry_interface() -> InterfaceDescription:
    return InterfaceDescription.from_json("Registry", json.loads(REGISTRY_ABI_JSON))


@pytest.fixture(name="erc20_abi_file")
def fixture_erc20_abi_file(tmp_path):
    abi_path = tmp_path / "ERC20.json"
    abi_path.write_text(ERC20_ABI_JSON)
    return abi_path


@pytest.fixture(name="fake_web3_factory")
def fixture_fake_web3_factory():
    def _build(tx_input: bytes = b"", logs: list[dict] | None = None, fail_with: Exception | None = None):
        transactions, receipts = build_node_responses(tx_input, logs or [])
        return FakeWeb3(FakeEth(transactions, receipts, fail_with))

    return _build
