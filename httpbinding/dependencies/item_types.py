"""Command and state types that items accept"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Iterable, Optional, Type

from attr import attrib, attrs

# pylint: disable=invalid-name
types = {}


def data_type(cls: type) -> type:
    """Decorator to add a data type to the types dict"""
    types[cls.__name__] = cls
    return cls


class Command:
    """A value that can be sent to an item"""


class State:
    """A value describing what an item currently is"""


class PrimitiveEnum(Enum):
    """Base for the enumerated types, members are named like their text"""

    @classmethod
    def value_of(cls, text: str) -> "PrimitiveEnum":
        """Returns the member called text"""
        try:
            return cls.__members__[text]
        except KeyError:
            raise ValueError(f"{text!r} is not a valid {cls.__name__}")

    def __str__(self) -> str:
        return self.name


@data_type
class OnOffType(Command, State, PrimitiveEnum):
    """ON or OFF"""
    ON = "ON"
    OFF = "OFF"


@data_type
class OpenClosedType(Command, State, PrimitiveEnum):
    """OPEN or CLOSED"""
    OPEN = "OPEN"
    CLOSED = "CLOSED"


@data_type
class UpDownType(Command, State, PrimitiveEnum):
    """UP or DOWN"""
    UP = "UP"
    DOWN = "DOWN"


@data_type
class StopMoveType(Command, PrimitiveEnum):
    """STOP or MOVE"""
    STOP = "STOP"
    MOVE = "MOVE"


@data_type
class IncreaseDecreaseType(Command, PrimitiveEnum):
    """INCREASE or DECREASE"""
    INCREASE = "INCREASE"
    DECREASE = "DECREASE"


@data_type
class UnDefType(State, PrimitiveEnum):
    """The state of an item that has no (valid) state yet"""
    UNDEF = "UNDEF"
    NULL = "NULL"


@data_type
@attrs(frozen=True, slots=True)
class DecimalType(Command, State):
    """A number"""
    value: Decimal = attrib(converter=Decimal)

    @classmethod
    def value_of(cls, text: str) -> "DecimalType":
        """Parses a plain decimal number"""
        if text != text.strip():
            raise ValueError(f"{text!r} has surrounding whitespace")
        try:
            value = Decimal(text)
        except InvalidOperation:
            raise ValueError(f"{text!r} is not a number")
        if not value.is_finite():
            raise ValueError(f"{text!r} is not a finite number")
        return cls(value)

    def __str__(self) -> str:
        return str(self.value)

    def dump(self) -> str:
        """Dumps the number into a JSON serialisable format"""
        return str(self.value)


@data_type
@attrs(frozen=True, slots=True)
class PercentType(DecimalType):
    """A number between 0 and 100"""

    def __attrs_post_init__(self):
        if not 0 <= self.value <= 100:
            raise ValueError(f"{self.value} is not between 0 and 100")


@data_type
@attrs(frozen=True, slots=True)
class StringType(Command, State):
    """Arbitrary text"""
    value: str = attrib()

    @classmethod
    def value_of(cls, text: str) -> "StringType":
        """Every text is a valid StringType"""
        return cls(text)

    def __str__(self) -> str:
        return self.value

    def dump(self) -> str:
        """Dumps the text"""
        return self.value


@data_type
@attrs(frozen=True, slots=True)
class DateTimeType(Command, State):
    """A point in time"""
    value: datetime = attrib()

    @classmethod
    def value_of(cls, text: str) -> "DateTimeType":
        """Parses an ISO 8601 date time"""
        return cls(datetime.fromisoformat(text))

    def __str__(self) -> str:
        return self.value.isoformat()

    def dump(self) -> str:
        """Dump to JSON serialisable data"""
        return self.value.isoformat()


@data_type
@attrs(frozen=True, slots=True)
class HSBType(Command, State):
    """Representation for a color as hue, saturation and brightness"""
    h: int = attrib()
    s: int = attrib()
    b: int = attrib()

    def __attrs_post_init__(self):
        if not 0 <= self.h <= 360:
            raise ValueError(f"Hue {self.h} is not between 0 and 360")
        if not (0 <= self.s <= 100 and 0 <= self.b <= 100):
            raise ValueError(
                "Saturation and brightness have to be between 0 and 100")

    @classmethod
    def value_of(cls, text: str) -> "HSBType":
        """Parses h,s,b"""
        parts = text.split(",")
        if len(parts) != 3:
            raise ValueError(f"{text!r} is not of the form h,s,b")
        return cls(*(int(part) for part in parts))

    def __str__(self) -> str:
        return f"{self.h},{self.s},{self.b}"

    def dump(self) -> (int, int, int):
        """Dumps the color into a JSON serialisable format"""
        return (self.h, self.s, self.b)


def _parse(accepted_types: Iterable[Type], text: str) -> Optional[object]:
    for accepted_type in accepted_types:
        try:
            return accepted_type.value_of(text)
        except ValueError:
            continue
    return None


def parse_command(
        accepted_types: Iterable[Type[Command]],
        text: str) -> Optional[Command]:
    """
    Parses text into the first of accepted_types that accepts it

    Returns None if no type matches
    """
    return _parse(accepted_types, text)


def parse_state(
        accepted_types: Iterable[Type[State]],
        text: str) -> Optional[State]:
    """
    Parses text into the first of accepted_types that accepts it

    Returns None if no type matches
    """
    return _parse(accepted_types, text)
