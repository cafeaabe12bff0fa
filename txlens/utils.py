import json

from eth_utils import to_checksum_address


def to_bytes(value: str | bytes | int, pad: int | None = None) -> bytes:
    """
    Converts a hex string, int or bytes-like value into bytes.  If pad is supplied, the result is
    left-padded with zero bytes to that length.

    >>> to_bytes("0x2a", pad=4)
    b'\\x00\\x00\\x00*'
    >>> to_bytes("deadbeef")
    b'\\xde\\xad\\xbe\\xef'

    :param value: hex string (with or without 0x prefix), integer, or bytes
    :param pad: byte length to left-pad the result to
    :return: bytes
    """
    match value:
        case bytes() | bytearray():
            result = bytes(value)
        case int():
            result = value.to_bytes(max(1, (value.bit_length() + 7) // 8), "big")
        case str():
            hex_str = value[2:] if value.startswith(("0x", "0X")) else value
            if len(hex_str) % 2:
                hex_str = "0" + hex_str
            result = bytes.fromhex(hex_str)
        case _:
            raise TypeError(f"Cannot convert {type(value)} to bytes")

    if pad:
        if len(result) > pad:
            raise ValueError(f"Value {result.hex()} is longer than {pad} bytes")
        return result.rjust(pad, b"\x00")
    return result


def to_hex(value: bytes | bytearray) -> str:
    """Returns 0x prefixed hex string for bytes"""
    return "0x" + bytes(value).hex()


def checksum_from_word(word: bytes) -> str:
    """Interprets the low 20 bytes of a 32 byte word as an address, and returns it checksummed"""
    return to_checksum_address(word[-20:])


class HexEnabledJsonEncoder(json.JSONEncoder):
    """JSON Encoder that converts bytes to 0x prefixed hex"""

    def default(self, o):
        if isinstance(o, (bytes, bytearray)):
            return to_hex(o)
        return json.JSONEncoder.default(self, o)


def to_json(value) -> str:
    """Serializes decoding results to indented json"""
    return json.dumps(value, cls=HexEnabledJsonEncoder, indent=4)
