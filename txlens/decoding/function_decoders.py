import logging
from typing import TYPE_CHECKING

from eth_typing import ABIFunction  # Dict containing all params in Function Definition
from eth_utils.abi import function_signature_to_4byte_selector

from txlens.exceptions import DecodeError
from txlens.types.decoding import DecodedFunction

from .utils import (
    abi_to_signature,
    apply_formatters,
    collapse_if_tuple,
    decode_evm_abi_from_types,
    parameter_names,
)

if TYPE_CHECKING:
    from .interface import InterfaceDescription

root_logger = logging.getLogger("txlens")
logger = root_logger.getChild("decoding")


class EVMFunctionDecoder:
    """
    Represents a single EVM function selector.  Parses input types to efficiently decode
    transaction calldata with its selector
    """

    name: str
    abi_name: str
    function_signature: str
    signature: bytes

    _input_types: list[str]
    _input_names: list[str]

    def __init__(self, abi_function: ABIFunction, abi_name: str):
        self.abi_name = abi_name
        self.name = abi_function["name"]

        abi_inputs = abi_function.get("inputs", [])
        self._input_types = [collapse_if_tuple(param) for param in abi_inputs]
        self._input_names = parameter_names(abi_inputs)

        self.function_signature = abi_to_signature(abi_function)
        self.signature = function_signature_to_4byte_selector(self.function_signature)

    def decode(self, calldata: bytes) -> DecodedFunction:
        """
        Decodes Function arguments from calldata.  The 4 byte selector must already be stripped.

        :param calldata: ABI encoded argument payload
        :return: DecodedFunction
        """
        try:
            decoded_input = decode_evm_abi_from_types(self._input_types, calldata)
        except DecodeError:
            logger.debug(f"Error Decoding {self.function_signature} For Input 0x{calldata.hex()}")
            raise

        formatted_input = apply_formatters(decoded_input, self._input_types)

        return DecodedFunction(
            abi_name=self.abi_name,
            name=self.name,
            function_signature=self.function_signature,
            inputs=dict(zip(self._input_names, formatted_input, strict=True)),
        )

    def id_str(self, full_signature: bool = True) -> str:
        """
        Returns ID string for function.  If full_signature is True, returns the function name & parameter types.
        If full_signature is false, returns function name
        """
        if full_signature:
            return self.function_signature
        return self.name


def decode_calldata(interface: "InterfaceDescription", calldata: bytes) -> DecodedFunction:
    """
    Identifies the method invoked by a transaction and decodes its arguments.

    :param interface: Contract interface the transaction was sent to
    :param calldata: Full transaction input, including the 4 byte selector
    :return: DecodedFunction with the method name and a mapping of argument names to values
    :raises UnknownSelector: if no function in the interface matches the selector
    :raises DecodeError: if the input is shorter than 4 bytes, or the arguments do not match the function types
    """
    if len(calldata) < 4:
        raise DecodeError(f"Calldata 0x{calldata.hex()} is shorter than a 4 byte function selector")

    function_decoder = interface.function_by_selector(calldata[:4])
    return function_decoder.decode(calldata[4:])
