from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class DecodedFunction:
    """Function Decoding Result"""

    abi_name: str
    name: str
    function_signature: str

    inputs: dict[str, Any]


@dataclass(frozen=True)
class IndexedParam:
    """Single indexed event parameter decoded from a log topic"""

    position: int
    name: str
    type: str
    value: Any


@dataclass(frozen=True)
class DecodedEvent:
    """Event Decoding Result"""

    abi_name: str
    name: str
    event_signature: str

    indexed: list[IndexedParam] = field(default_factory=list)
    data: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Merges indexed parameters and decoded data into a single name -> value mapping"""
        return {**{param.name: param.value for param in self.indexed}, **self.data}
