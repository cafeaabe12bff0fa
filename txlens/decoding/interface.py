import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from rich.table import Table

from txlens.exceptions import InvalidInterfaceError, UnknownSelector

from .event_decoders import EVMEventDecoder
from .function_decoders import EVMFunctionDecoder
from .utils import filter_events, filter_functions

root_logger = logging.getLogger("txlens")
logger = root_logger.getChild("decoding")


class InterfaceDescription:
    """

    Parsed contract interface.  Holds a decoder for every function and event in an ABI, keyed by selector.
    Built once when the ABI is loaded, and read-only afterwards.

    """

    abi_name: str
    """ Name of the ABI, used to label decoding results """

    functions: tuple[EVMFunctionDecoder, ...]
    """ Function decoders in ABI declaration order """

    events: tuple[EVMEventDecoder, ...]
    """ Event decoders in ABI declaration order """

    function_decoders: Mapping[bytes, EVMFunctionDecoder]
    """ Mapping from 4 byte selectors to function decoders """

    event_decoders: Mapping[bytes, EVMEventDecoder]
    """ Mapping from 32 byte event topics to event decoders """

    def __init__(self, abi_name: str, abi_data: list[dict[str, Any]]):
        self.abi_name = abi_name

        try:
            functions = tuple(EVMFunctionDecoder(f, abi_name) for f in filter_functions(abi_data))
            # Anonymous events do not emit their selector as topic 0, so they can't be matched
            events = tuple(
                EVMEventDecoder(e, abi_name) for e in filter_events(abi_data) if not e.get("anonymous", False)
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise InvalidInterfaceError(f"Malformed ABI entry in {abi_name}: {e!r}") from e

        function_decoders: dict[bytes, EVMFunctionDecoder] = {}
        unique_functions: list[EVMFunctionDecoder] = []
        for func in functions:
            existing_func = function_decoders.get(func.signature)
            if existing_func is not None:
                if existing_func.function_signature != func.function_signature:
                    raise InvalidInterfaceError(
                        f"Function selector 0x{func.signature.hex()} of {func.function_signature} conflicts with "
                        f"{existing_func.function_signature} in {abi_name}"
                    )
                logger.warning(f"Skipping duplicate definition of {func.function_signature} in {abi_name}")
                continue
            function_decoders[func.signature] = func
            unique_functions.append(func)

        event_decoders: dict[bytes, EVMEventDecoder] = {}
        unique_events: list[EVMEventDecoder] = []
        for event in events:
            existing_event = event_decoders.get(event.signature)
            if existing_event is not None:
                if (existing_event.topic_types, existing_event.data_types) != (event.topic_types, event.data_types):
                    raise InvalidInterfaceError(
                        f"Event {event.event_signature} is defined twice in {abi_name} with different indexed parameters"
                    )
                logger.warning(f"Skipping duplicate definition of {event.event_signature} in {abi_name}")
                continue
            event_decoders[event.signature] = event
            unique_events.append(event)

        self.functions = tuple(unique_functions)
        self.events = tuple(unique_events)
        self.function_decoders = MappingProxyType(function_decoders)
        self.event_decoders = MappingProxyType(event_decoders)

        logger.info(f"Loaded ABI {abi_name} with {len(self.functions)} functions and {len(self.events)} events")

    @classmethod
    def from_json(cls, abi_name: str, abi_json: list[dict[str, Any]] | dict[str, Any]) -> "InterfaceDescription":
        """
        Builds an InterfaceDescription from parsed ABI JSON.  Accepts either the list of ABI entries, or a
        build artifact with the entries stored under an ``abi`` key.
        """
        if isinstance(abi_json, dict):
            if "abi" not in abi_json:
                raise InvalidInterfaceError(f"ABI JSON for {abi_name} is an object without an 'abi' key")
            abi_json = abi_json["abi"]

        if not isinstance(abi_json, list):
            raise InvalidInterfaceError(f"ABI JSON for {abi_name} must be a list of ABI entries")

        return cls(abi_name, abi_json)

    @classmethod
    def from_file(cls, path: str | Path, abi_name: str | None = None) -> "InterfaceDescription":
        """
        Loads an InterfaceDescription from a local ABI JSON file

        :param path: Path to the ABI JSON file
        :param abi_name: Name of the ABI.  Defaults to the file name without extension
        """
        abi_path = Path(path)
        logger.debug(f"Reading ABI from {abi_path}")

        try:
            abi_json = json.loads(abi_path.read_text())
        except json.JSONDecodeError as e:
            raise InvalidInterfaceError(f"{abi_path} does not contain valid JSON: {e}") from e

        return cls.from_json(abi_name or abi_path.stem, abi_json)

    def function_by_selector(self, selector: bytes) -> EVMFunctionDecoder:
        """Returns the function decoder for a 4 byte selector"""
        function_decoder = self.function_decoders.get(bytes(selector))
        if function_decoder is None:
            raise UnknownSelector(f"Function with selector 0x{bytes(selector).hex()} not found in ABI {self.abi_name}")
        return function_decoder

    def event_by_topic(self, topic: bytes) -> EVMEventDecoder:
        """Returns the event decoder for a 32 byte event topic"""
        event_decoder = self.event_decoders.get(bytes(topic))
        if event_decoder is None:
            raise UnknownSelector(f"Event with topic 0x{bytes(topic).hex()} not found in ABI {self.abi_name}")
        return event_decoder

    def get_function_selector(self, function_name: str) -> bytes | None:
        """Returns the selector of a function given its name.  If the function does not exist, returns None"""
        for func in self.functions:
            if func.name == function_name:
                return func.signature
        return None

    def get_event_topic(self, event_name: str) -> bytes | None:
        """Returns the topic of an event given its name.  If the event does not exist, returns None"""
        for event in self.events:
            if event.name == event_name:
                return event.signature
        return None

    def decoder_table(self, full_signatures: bool = True) -> Table:
        """Returns a rich Table listing every selector the interface can decode"""
        table = Table(title=f"{self.abi_name} Selectors", box=None)
        table.add_column("Selector", style="bold")
        table.add_column("Kind")
        table.add_column("Signature" if full_signatures else "Name")

        for func in self.functions:
            table.add_row(f"0x{func.signature.hex()}", "function", func.id_str(full_signatures))
        for event in self.events:
            table.add_row(f"0x{event.signature.hex()}", "event", event.id_str(full_signatures))

        return table
