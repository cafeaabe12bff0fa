from .event_decoders import EVMEventDecoder, decode_log, decode_logs
from .function_decoders import EVMFunctionDecoder, decode_calldata
from .interface import InterfaceDescription

__all__ = [
    "EVMEventDecoder",
    "EVMFunctionDecoder",
    "InterfaceDescription",
    "decode_calldata",
    "decode_log",
    "decode_logs",
]
