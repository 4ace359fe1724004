"""Binding descriptors hold the configuration elements of one item"""

import logging
from typing import (Dict, Iterable, Iterator, List, Optional, Tuple, Type)

from attr import asdict, attrib, attrs

from httpbinding.binding.commands import BindingKey, CommandKey
from httpbinding.binding.grammar import (
    Header, InSegment, OutSegment, detect_transformation)
from httpbinding.dependencies.item_types import State, parse_state

LOGGER = logging.getLogger(__name__)


# pylint: disable=too-few-public-methods
@attrs(slots=True)
class ConfigurationElement:
    """One request rule of an item"""
    url: str = attrib()
    http_method: Optional[str] = attrib(default=None)
    headers: List[Header] = attrib(factory=list)
    refresh_interval: int = attrib(default=0)
    transformation: Optional[str] = attrib(default=None)
    body: Optional[str] = attrib(default=None)

    def __attrs_post_init__(self):
        if self.transformation is not None and self.body is not None:
            raise ValueError(
                "An element has either a transformation or a body")

    @classmethod
    def from_in_segment(cls, segment: InSegment) -> "ConfigurationElement":
        """Creates the element of an inbound segment"""
        transformation, _ = detect_transformation(segment.transformation)
        return cls(
            url=segment.url,
            headers=list(segment.headers),
            refresh_interval=segment.refresh_interval,
            transformation=(transformation if transformation is not None
                            else segment.transformation))

    @classmethod
    def from_out_segment(
            cls, segment: OutSegment) -> "ConfigurationElement":
        """Creates the element of an outbound segment"""
        return cls(
            url=segment.url,
            http_method=segment.http_method,
            headers=list(segment.headers),
            transformation=segment.transformation,
            body=segment.body)

    def dump(self) -> dict:
        """Dumps the element into a JSON serialisable format"""
        return asdict(self)


class BindingDescriptor:
    """
    The configuration elements of an item mapped by their command key

    Also holds the item's accepted state types
    """
    item_name: str
    accepted_data_types: List[Type[State]]
    elements: Dict[CommandKey, ConfigurationElement]

    def __init__(
            self, item_name: str,
            accepted_data_types: Iterable[Type[State]],
            elements: Optional[Dict[CommandKey, ConfigurationElement]] = None
    ) -> None:
        self.item_name = item_name
        self.accepted_data_types = list(accepted_data_types)
        self.elements = elements or {}

    @classmethod
    def from_entries(
            cls, item_name: str,
            accepted_data_types: Iterable[Type[State]],
            entries: Iterable[Tuple[CommandKey, ConfigurationElement]]
    ) -> "BindingDescriptor":
        """
        Folds (key, element) pairs into a descriptor

        A later element replaces an earlier one with the same key
        and takes its position in the iteration order
        """
        elements: Dict[CommandKey, ConfigurationElement] = {}
        for key, element in entries:
            if elements.pop(key, None) is not None:
                LOGGER.debug(
                    "Element for %s of item %s has been replaced",
                    key, item_name)
            elements[key] = element
        return cls(item_name, accepted_data_types, elements)

    def __repr__(self) -> str:
        return (f"<BindingDescriptor item={self.item_name} "
                f"keys={[str(key) for key in self.elements]}>")

    def __contains__(self, key: CommandKey) -> bool:
        return key in self.elements

    def __iter__(self) -> Iterator[CommandKey]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def get(self, key: CommandKey) -> Optional[ConfigurationElement]:
        """Returns the element stored for exactly this key"""
        return self.elements.get(key)

    def resolve(self, command: CommandKey) -> Optional[ConfigurationElement]:
        """
        Returns the element for a command

        Falls back to the wildcard element unless the command is CHANGED
        or the inbound key
        """
        element = self.elements.get(command)
        if element is not None:
            return element
        if command in (BindingKey.CHANGED, BindingKey.IN_BINDING):
            return None
        return self.elements.get(BindingKey.WILDCARD)

    @property
    def inbound(self) -> Optional[ConfigurationElement]:
        """The element of the inbound segment"""
        return self.elements.get(BindingKey.IN_BINDING)

    def parse_state(self, value: str) -> Optional[State]:
        """Parses a polled value into one of the accepted state types"""
        return parse_state(self.accepted_data_types, value)

    def dump(self) -> dict:
        """
        Dumps the descriptor into a JSON serialisable format

        Elements are listed with the type of their key, a StringType
        command and a BindingKey with the same text stay distinct
        """
        return {
            "item": self.item_name,
            "accepted_data_types": [
                data_type.__name__ for data_type in self.accepted_data_types],
            "elements": [
                {
                    "key": str(key),
                    "kind": type(key).__name__,
                    "element": element.dump()
                }
                for key, element in self.elements.items()
            ]
        }
