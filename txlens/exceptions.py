class DecodingError(Exception):
    """

    Raised when issues occur while decoding calldata or logs against a contract interface

    """


class UnknownSelector(DecodingError):
    """Raised when no function or event in the interface matches a 4 byte selector or 32 byte topic"""


class DecodeError(DecodingError):
    """
    Raised when a byte payload does not match the declared parameter types.  Typical causes:

        * Truncated calldata or log data
        * Dynamic types pointing to an invalid offset
        * Non-empty padding bytes or integers overflowing their declared width
        * Invalid UTF-8 inside a string parameter

    """


class IndexedParamMismatch(DecodingError):
    """Raised when a log carries more topics than the matched event declares indexed parameters"""


class InvalidInterfaceError(DecodingError):
    """
    Raised when an ABI JSON document cannot be loaded into an InterfaceDescription.  Troubleshooting steps:

    * Verify the file is valid JSON, either a list of ABI entries or an object with an ``abi`` key
    * Check for functions or events that collapse to the same selector
    * Check that event topic names do not overlap with event data names

    """


class NodeError(Exception):
    """

    Raised when issues occur while querying the remote node

    """


class NodeHostError(NodeError):
    """Raised when the remote host returns an error, is unreachable, or when a timeout occurs"""


class NodeDataMissing(NodeError):
    """Raised when the node has no record of the requested block, transaction or receipt"""
