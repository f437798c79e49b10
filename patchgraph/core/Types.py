from enum import Enum
from typing import Any, Dict, Union


class PinDirection(Enum):
    INPUT = "input"
    OUTPUT = "output"

    @staticmethod
    def parse(tag: Any) -> Union["PinDirection", Any]:
        """Return the matching member, or the tag itself when it is not one."""
        if isinstance(tag, PinDirection):
            return tag
        for member in PinDirection:
            if member.value == tag:
                return member
        return tag


class PinType(Enum):
    PULSE = "pulse"
    BOOL = "boolean"
    NUMBER = "number"
    STRING = "string"

    @staticmethod
    def parse(tag: Any) -> Union["PinType", Any]:
        """Return the matching member, or the tag itself when it is not one."""
        if isinstance(tag, PinType):
            return tag
        for member in PinType:
            if member.value == tag:
                return member
        return tag


# Runtime value kind for every pin type. Pulses travel as booleans.
NATIVE_TYPES: Dict[PinType, type] = {
    PinType.PULSE: bool,
    PinType.BOOL: bool,
    PinType.NUMBER: float,
    PinType.STRING: str,
}
