"""The provider answering questions about the http binding of items"""

import logging
import threading
from collections import defaultdict
from typing import TYPE_CHECKING, Dict, List, Optional, Set

from httpbinding.binding.commands import (
    BindingKey, CommandKey, resolve_command)
from httpbinding.binding.descriptor import (
    BindingDescriptor, ConfigurationElement)
from httpbinding.binding.grammar import Header, InSegment, parse_segments
from httpbinding.const import BINDING_TYPE
from httpbinding.dependencies.item_types import State
from httpbinding.exceptions import BindingConfigParseException

if TYPE_CHECKING:
    from httpbinding.dependencies.entity_types import Item

LOGGER = logging.getLogger(__name__)


class HttpGenericBindingProvider:
    """
    Parses http binding configuration strings of items and provides
    the resulting request configuration

    Examples of valid configuration strings:

        >[ON:POST:http://www.domain.org/lights/23871?status=on]
        >[OFF:POST:http://www.domain.org/lights/23871?status=off]
        <[http://www.domain.org/weather/daily:60000:REGEX(.*)]
        >[*:POST:http://www.domain.org/lights/23871?status=%2$s]
        >[CHANGED:POST:http://www.domain.org/lights?s=%2$s{AuthKey=key}]
    """
    binding_type = BINDING_TYPE

    def __init__(self) -> None:
        self.binding_configs: Dict[str, BindingDescriptor] = {}
        self.context_map: Dict[str, Set[str]] = defaultdict(set)
        self._lock = threading.Lock()

    @staticmethod
    def parse_binding_config(
            item: "Item", binding_config: str) -> BindingDescriptor:
        """Parses a configuration string into a descriptor for item"""
        entries = []
        for segment in parse_segments(binding_config):
            if isinstance(segment, InSegment):
                entries.append((
                    BindingKey.IN_BINDING,
                    ConfigurationElement.from_in_segment(segment)))
            else:
                entries.append((
                    resolve_command(
                        segment.command, item.accepted_command_types),
                    ConfigurationElement.from_out_segment(segment)))

        return BindingDescriptor.from_entries(
            item.name, item.accepted_data_types, entries)

    def process_binding_configuration(
            self, context: str, item: "Item",
            binding_config: Optional[str]) -> Optional[BindingDescriptor]:
        """
        Parses and registers the configuration string of an item

        If the string is invalid the item has no binding afterwards
        and the error is raised
        """
        if binding_config is None:
            LOGGER.warning(
                "bindingConfig is None (item=%s) -> "
                "process bindingConfig aborted!", item)
            return None

        try:
            descriptor = self.parse_binding_config(item, binding_config)
        except BindingConfigParseException:
            self.remove_binding(item.name)
            raise

        with self._lock:
            self.context_map[context].add(item.name)
            self.binding_configs[item.name] = descriptor
        LOGGER.debug("Registered %r", descriptor)
        return descriptor

    def remove_binding(self, item_name: str) -> None:
        """Drops the descriptor of an item"""
        with self._lock:
            self.binding_configs.pop(item_name, None)
            for item_names in self.context_map.values():
                item_names.discard(item_name)

    def remove_configurations(self, context: str) -> None:
        """Drops the descriptors of every item registered under context"""
        with self._lock:
            for item_name in self.context_map.pop(context, set()):
                self.binding_configs.pop(item_name, None)

    @property
    def item_names(self) -> List[str]:
        """The names of all items with a binding"""
        return list(self.binding_configs)

    def provides_binding(self) -> bool:
        """Whether any item has a binding"""
        return bool(self.binding_configs)

    def provides_binding_for(self, item_name: str) -> bool:
        """Whether the item has a binding"""
        return item_name in self.binding_configs

    def get_descriptor(self, item_name: str) -> Optional[BindingDescriptor]:
        """Returns the descriptor of an item"""
        return self.binding_configs.get(item_name)

    def _element(
            self, item_name: str,
            command: Optional[CommandKey] = None
    ) -> Optional[ConfigurationElement]:
        config = self.binding_configs.get(item_name)
        if config is None:
            return None
        if command is None:
            return config.inbound
        return config.resolve(command)

    def get_state(self, item_name: str, value: str) -> Optional[State]:
        """Parses a polled value into a state the item accepts"""
        config = self.binding_configs.get(item_name)
        if config is None:
            return None
        return config.parse_state(value)

    def get_http_method(
            self, item_name: str, command: CommandKey) -> Optional[str]:
        """Returns the HTTP method to use for command"""
        element = self._element(item_name, command)
        return element.http_method if element else None

    def get_url(
            self, item_name: str,
            command: Optional[CommandKey] = None) -> Optional[str]:
        """
        Returns the URL to request for command

        Without a command the URL to poll is returned
        """
        element = self._element(item_name, command)
        return element.url if element else None

    def get_http_headers(
            self, item_name: str,
            command: Optional[CommandKey] = None) -> Optional[List[Header]]:
        """
        Returns the HTTP headers to send for command

        Without a command the headers of the polling request are returned
        """
        element = self._element(item_name, command)
        return list(element.headers) if element else None

    def get_body(
            self, item_name: str, command: CommandKey) -> Optional[str]:
        """Returns the POST body to send for command"""
        element = self._element(item_name, command)
        return element.body if element else None

    def get_transformation(
            self, item_name: str,
            command: Optional[CommandKey] = None) -> Optional[str]:
        """
        Returns the transformation for command

        Without a command the transformation of the polled value is returned
        """
        element = self._element(item_name, command)
        return element.transformation if element else None

    def get_refresh_interval(self, item_name: str) -> int:
        """Returns the polling interval in milliseconds, 0 if not polled"""
        element = self._element(item_name)
        return element.refresh_interval if element else 0

    def get_in_binding_item_names(self) -> List[str]:
        """Returns the names of the items that are polled"""
        return [
            item_name
            for item_name, config in list(self.binding_configs.items())
            if BindingKey.IN_BINDING in config
        ]
