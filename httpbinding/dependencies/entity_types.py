"""
Module containing the item types
Every item type declares which commands it accepts and which states it
can be in
"""

import logging
from typing import Dict, List, Optional, Type

from httpbinding.dependencies.item_types import (
    Command, DateTimeType, DecimalType, HSBType, IncreaseDecreaseType,
    OnOffType, OpenClosedType, PercentType, State, StopMoveType, StringType,
    UnDefType, UpDownType)
from httpbinding.exceptions import ItemTypeNotExistsError

LOGGER = logging.getLogger(__name__)

# pylint: disable=invalid-name
item_types: Dict[str, Type["Item"]] = {}


def item_type(cls: Type["Item"]) -> Type["Item"]:
    """Decorator to register an item type by its short type name"""
    item_types[cls.type] = cls
    return cls


class Item:
    """A dummy Item"""
    type: Optional[str] = None
    accepted_data_types: List[Type[State]] = []
    accepted_command_types: List[Type[Command]] = []

    def __init__(self, name: str, label: Optional[str] = None) -> None:
        self.name = name
        self.label = label or name

    def __repr__(self) -> str:
        return f"<Item {self.type} name={self.name}>"


@item_type
class SwitchItem(Item):
    """An item that is either ON or OFF"""
    type = "Switch"
    accepted_data_types = [OnOffType, UnDefType]
    accepted_command_types = [OnOffType]


@item_type
class ContactItem(Item):
    """A door or window contact"""
    type = "Contact"
    accepted_data_types = [OpenClosedType, UnDefType]
    accepted_command_types = [OpenClosedType]


@item_type
class NumberItem(Item):
    """An item holding a number"""
    type = "Number"
    accepted_data_types = [DecimalType, UnDefType]
    accepted_command_types = [DecimalType]


@item_type
class StringItem(Item):
    """An item holding text"""
    type = "String"
    accepted_data_types = [StringType, DateTimeType, UnDefType]
    accepted_command_types = [StringType]


@item_type
class DimmerItem(Item):
    """A dimmable light"""
    type = "Dimmer"
    accepted_data_types = [PercentType, OnOffType, UnDefType]
    accepted_command_types = [
        PercentType, OnOffType, IncreaseDecreaseType]


@item_type
class RollershutterItem(Item):
    """A rollershutter or blind"""
    type = "Rollershutter"
    accepted_data_types = [UpDownType, PercentType, UnDefType]
    accepted_command_types = [UpDownType, StopMoveType, PercentType]


@item_type
class ColorItem(Item):
    """A color light"""
    type = "Color"
    accepted_data_types = [HSBType, PercentType, OnOffType, UnDefType]
    accepted_command_types = [
        HSBType, PercentType, OnOffType, IncreaseDecreaseType]


@item_type
class DateTimeItem(Item):
    """An item holding a point in time"""
    type = "DateTime"
    accepted_data_types = [DateTimeType, UnDefType]
    accepted_command_types = [DateTimeType]


def create_item(
        type_name: str, name: str, label: Optional[str] = None) -> Item:
    """Creates an item of the registered type type_name"""
    if type_name not in item_types:
        raise ItemTypeNotExistsError(f"Item type not found: {type_name}")
    return item_types[type_name](name, label=label)
