import logging
import traceback
from typing import Any, Sequence

from eth_abi import decode as eth_abi_decode
from eth_abi.exceptions import DecodingError as AbiDecodingError
from eth_abi.exceptions import InsufficientDataBytes, NonEmptyPaddingBytes
from eth_abi.grammar import ABIType, TupleType, parse
from eth_typing import ABI, ABIEvent, ABIFunction
from eth_utils import to_checksum_address

from txlens.exceptions import DecodeError

root_logger = logging.getLogger("txlens")
logger = root_logger.getChild("decoding")


def abi_to_signature(abi: ABIFunction | ABIEvent) -> str:
    """
    Converts ABI to signature.

    >>> from txlens.decoding.utils import abi_to_signature
    >>> abi_to_signature(
    ...     {
    ...         "name": "transferFrom",
    ...         "type": "function",
    ...         "inputs": [{"name": "from", "type": "address"}, {"name": "amount", "type": "uint256"}],
    ...     }
    ... )
    'transferFrom(address,uint256)'

    """
    collapsed = [collapse_if_tuple(abi_input) for abi_input in abi.get("inputs", [])]
    return f"{abi['name']}({','.join(collapsed)})"


def collapse_if_tuple(abi_params: dict[str, Any]) -> str:
    """
    Converts a tuple from a dict to a parenthesized list of its types.

    >>> from txlens.decoding.utils import collapse_if_tuple
    >>> collapse_if_tuple(
    ...     {
    ...         'components': [
    ...             {'name': 'anAddress', 'type': 'address'},
    ...             {'name': 'anInt', 'type': 'uint256'},
    ...             {'name': 'someBytes', 'type': 'bytes'},
    ...         ],
    ...         'type': 'tuple',
    ...     }
    ... )
    '(address,uint256,bytes)'
    """

    typ = abi_params["type"]
    if not isinstance(typ, str):
        raise TypeError(f"The 'type' must be a string, but got {typ} of type {type(typ)}")

    if not typ.startswith("tuple"):
        return typ

    delimited = ",".join(collapse_if_tuple(c) for c in abi_params["components"])
    # Whatever comes after "tuple" is the array dims.  The ABI spec states that
    # this will have the form "", "[]", or "[k]".
    array_dim = typ[5:]
    collapsed = f"({delimited}){array_dim}"

    return collapsed


def parameter_names(abi_params: Sequence[dict[str, Any]]) -> list[str]:
    """
    Returns parameter names for an ABI input list.  Unnamed parameters are named by position.

    >>> parameter_names([{"name": "to", "type": "address"}, {"name": "", "type": "uint256"}])
    ['to', 'param1']
    """
    return [param.get("name") or f"param{idx}" for idx, param in enumerate(abi_params)]


def filter_functions(contract_abi: ABI) -> list[ABIFunction]:
    """Filters out all non-function ABIs"""
    return [abi for abi in contract_abi if abi.get("type", "function") == "function"]


def filter_events(contract_abi: ABI) -> list[ABIEvent]:
    """Filters out all non-event ABIs"""
    return [abi for abi in contract_abi if abi.get("type") == "event"]


def decode_evm_abi_from_types(types: list[str], data: bytes | bytearray) -> tuple[Any, ...]:
    """
    Decodes ABI data from types and data bytes.  Decoding failures are logged and re-raised as
    :class:`~txlens.exceptions.DecodeError`

    :param types: ABI types to decode, ie ``["address", "uint256"]``
    :param data: ABI encoded bytes
    :return: tuple of decoded values, one per type
    """
    try:
        return eth_abi_decode(types, bytes(data))
    except InsufficientDataBytes as e:
        logger.debug(f"Insufficient data bytes while decoding {data.hex()} for types {types}")
        raise DecodeError(f"Insufficient data bytes for types {types}: {e}") from e
    except NonEmptyPaddingBytes as e:
        logger.debug(f"Non-empty padding bytes while decoding {data.hex()} for types {types}")
        raise DecodeError(f"Non-empty padding bytes for types {types}: {e}") from e
    except (AbiDecodingError, OverflowError, UnicodeDecodeError) as e:
        logger.debug(f"{e.__class__.__name__} while decoding {data.hex()} for types {types}")
        raise DecodeError(f"Could not decode data for types {types}: {e}") from e
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error(
            f"Unknown error while decoding {data.hex()} for types {types}: "
            f"{traceback.format_exception(type(e), e, e.__traceback__)}"
        )
        raise DecodeError(f"Unknown error decoding types {types}: {e}") from e


def format_decoded_value(value: Any, abi_type: str | ABIType) -> Any:
    """
    Checksums every address in a decoded value, including addresses nested inside arrays and tuples.

    >>> format_decoded_value(("0x71c7656ec7ab88b098defb751b7401b5f6d8976f",), "address[]")
    ('0x71C7656EC7ab88b098defB751B7401B5f6d8976F',)

    :param value: value returned from eth_abi decoding
    :param abi_type: collapsed ABI type string, ie ``(uint256,address)[]``, or a parsed eth_abi type
    """
    parsed = parse(abi_type) if isinstance(abi_type, str) else abi_type

    if parsed.is_array:
        return tuple(format_decoded_value(item, parsed.item_type) for item in value)
    if isinstance(parsed, TupleType):
        return tuple(
            format_decoded_value(item, component) for item, component in zip(value, parsed.components, strict=True)
        )
    if parsed.base == "address":
        return to_checksum_address(value)
    return value


def apply_formatters(decoding_result: Sequence[Any], types: list[str]) -> list[Any]:
    """
    Applies address formatting to a decoding result.

    :param decoding_result: List of values returned from ABI Decoding
    :param types: List of types for each entry in decoding_result
    """
    return [format_decoded_value(value, typ) for value, typ in zip(decoding_result, types, strict=True)]
