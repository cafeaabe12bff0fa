from txlens.decoding import InterfaceDescription, decode_calldata, decode_logs
from txlens.rpc import NodeClient

__all__ = ["InterfaceDescription", "NodeClient", "decode_calldata", "decode_logs"]
