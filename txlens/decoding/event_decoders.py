import logging
from typing import TYPE_CHECKING, Any, Sequence

from eth_typing import ABIEvent  # Dict containing all params in Event Definition
from eth_utils.abi import event_signature_to_log_topic

from txlens.exceptions import DecodeError, IndexedParamMismatch, InvalidInterfaceError
from txlens.types.chain import LogEntry
from txlens.types.decoding import DecodedEvent, IndexedParam
from txlens.utils import checksum_from_word

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

# Dynamic values are stored in topics as the keccak hash of their encoding
_DYNAMIC_TOPIC_TYPES = ("string", "bytes")


def _is_hashed_topic_type(typ: str) -> bool:
    return typ in _DYNAMIC_TOPIC_TYPES or typ.endswith("]") or typ.startswith("(")


class EVMEventDecoder:
    """
    Stores precomputed data for Efficiently Decoding EVM Events
    """

    event_signature: str
    signature: bytes
    abi_name: str
    name: str
    indexed_params: int

    _data_types: list[str]
    _data_names: list[str]
    _topic_types: list[str]
    _topic_names: list[str]

    def __init__(self, abi_event: ABIEvent, abi_name: str):
        event_signature = abi_to_signature(abi_event)
        selector = event_signature_to_log_topic(event_signature)

        abi_inputs = abi_event.get("inputs", [])
        all_names = parameter_names(abi_inputs)

        log_topics_abi = [(name, param) for name, param in zip(all_names, abi_inputs) if param.get("indexed")]
        log_topic_types = [collapse_if_tuple(param) for _, param in log_topics_abi]
        log_topic_names = [name for name, _ in log_topics_abi]

        log_data_abi = [(name, param) for name, param in zip(all_names, abi_inputs) if not param.get("indexed")]
        log_data_types = [collapse_if_tuple(param) for _, param in log_data_abi]
        log_data_names = [name for name, _ in log_data_abi]

        self.abi_name = abi_name
        self.name = abi_event["name"]

        duplicate_names = set(log_topic_names).intersection(log_data_names)
        if duplicate_names:
            raise InvalidInterfaceError(
                f"Cannot have overlapping names between topics and data.  {self.abi_name} -> {self.name} "
                f"Has duplicate names: {list(duplicate_names)}"
            )

        logger.debug(
            f"Adding Event Decoder for {event_signature} with Topic Types: {log_topic_types} and "
            f"Data Types: {log_data_types}"
        )
        self._data_names = log_data_names
        self._data_types = log_data_types
        self._topic_names = log_topic_names
        self._topic_types = log_topic_types
        self.event_signature = event_signature
        self.signature = selector

        self.indexed_params = len(log_topic_names)

        if self.indexed_params > 3:
            raise InvalidInterfaceError(f"{self.event_signature} declares more than 3 indexed parameters")

    @property
    def topic_types(self) -> list[str]:
        """ABI types of the indexed parameters, in declaration order"""
        return list(self._topic_types)

    @property
    def data_types(self) -> list[str]:
        """ABI types of the non-indexed parameters, in declaration order"""
        return list(self._data_types)

    def decode_topic(self, position: int, topic: bytes) -> IndexedParam:
        """
        Decodes a single indexed parameter from its 32 byte topic word

        :param position: 0-indexed position into the event's indexed parameters
        :param topic: 32 byte topic word
        """
        typ = self._topic_types[position]
        if len(topic) != 32:
            raise DecodeError(f"Topic 0x{topic.hex()} for {self.event_signature} is not a 32 byte word")

        if _is_hashed_topic_type(typ):
            value: Any = bytes(topic)
        elif typ.startswith("uint"):
            value = int.from_bytes(topic, "big")
        elif typ == "address":
            value = checksum_from_word(topic)
        else:
            value = apply_formatters(decode_evm_abi_from_types([typ], topic), [typ])[0]

        return IndexedParam(position=position, name=self._topic_names[position], type=typ, value=value)

    def decode(self, topics: Sequence[bytes], data: bytes) -> DecodedEvent:
        """
        Decodes Event topics and data.

        :param topics: List of full Topic Bytes, including the signature at index 0
        :param data: ABI encoded non-indexed parameters
        :return: DecodedEvent
        """
        indexed_topics = topics[1:]
        if len(indexed_topics) > self.indexed_params:
            raise IndexedParamMismatch(
                f"{self.event_signature} declares {self.indexed_params} indexed parameters, "
                f"but log contains {len(indexed_topics)} indexed topics"
            )

        indexed = [self.decode_topic(position, topic) for position, topic in enumerate(indexed_topics)]

        decoded_data: dict[str, Any] = {}
        # Payloads of 0 or 1 bytes are treated as no payload
        if len(data) > 1:
            try:
                decoded_values = decode_evm_abi_from_types(self._data_types, data)
            except DecodeError:
                logger.debug(f"Error Decoding Event {self.event_signature} for data 0x{data.hex()}")
                raise
            formatted_data = apply_formatters(decoded_values, self._data_types)
            decoded_data = dict(zip(self._data_names, formatted_data, strict=True))

        return DecodedEvent(
            abi_name=self.abi_name,
            name=self.name,
            event_signature=self.event_signature,
            indexed=indexed,
            data=decoded_data,
        )

    def id_str(self, full_signature: bool = True) -> str:
        """If full_signature is True, returns EventName(types,...) Otherwise, returns event name"""
        if full_signature:
            return self.event_signature
        return self.name


def decode_log(log_entry: LogEntry, interface: "InterfaceDescription") -> DecodedEvent:
    """
    Decodes a single log entry against a contract interface

    :raises DecodeError: if the log has no topics, or its data does not match the event types
    :raises UnknownSelector: if topic 0 does not match any event in the interface
    :raises IndexedParamMismatch: if the log has more indexed topics than the event declares
    """
    if not log_entry.topics:
        raise DecodeError("Log entry has no topics.  Anonymous events cannot be matched to an event selector")

    event_decoder = interface.event_by_topic(log_entry.topics[0])
    return event_decoder.decode(log_entry.topics, log_entry.data)


def decode_logs(log_entries: Sequence[LogEntry], interface: "InterfaceDescription") -> list[DecodedEvent]:
    """
    Decodes every log emitted by a transaction receipt.  The first failing log raises, and no partial
    results are returned.

    :param log_entries: Logs in receipt order
    :param interface: Contract interface used to match event selectors
    :return: list of DecodedEvent, one per log entry
    """
    return [decode_log(log_entry, interface) for log_entry in log_entries]
