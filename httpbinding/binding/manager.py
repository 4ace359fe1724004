"""BindingManager for httpbinding"""
import logging
from typing import TYPE_CHECKING, Dict, List, Optional, cast

import voluptuous as vol

from httpbinding.binding.provider import HttpGenericBindingProvider
from httpbinding.const import BINDING_TYPE, CONFIG_DOMAIN_ITEMS, CONTEXT_YAML
from httpbinding.dependencies.entity_types import (
    Item, create_item, item_types)
from httpbinding.exceptions import BindingConfigParseException

if TYPE_CHECKING:
    from httpbinding.core import Core

LOGGER = logging.getLogger(__name__)

CONFIG_SCHEMA = vol.Schema([
    vol.Schema({
        vol.Required("name"): str,
        vol.Required("type"): vol.In(sorted(item_types)),
        vol.Optional("label"): str,
        vol.Required(BINDING_TYPE): str,
        vol.Required("enabled", default=True): bool
    }, extra=vol.ALLOW_EXTRA)
])


class BindingManager:
    """
    BindingManager creates the configured items
    and registers their binding configuration
    """
    core: "Core"
    provider: HttpGenericBindingProvider
    items: Dict[str, Item]
    errors: Dict[str, BindingConfigParseException]

    def __init__(self, core: "Core") -> None:
        self.core = core
        self.provider = HttpGenericBindingProvider()
        self.items = {}
        self.errors = {}

    async def init(self) -> None:
        """Registers the items from the configuration"""
        yaml_cfg = cast(List[dict], await self.core.cfg.register_domain(
            CONFIG_DOMAIN_ITEMS, handler=self, schema=CONFIG_SCHEMA,
            default=[]))
        self.load_items(yaml_cfg)

    async def apply_configuration(
            self, domain: str, config: List[dict]) -> None:
        """Applies a reloaded item configuration"""
        LOGGER.info("Re-registering the items of domain %s", domain)
        self.load_items(config)

    def load_items(self, entries: List[dict]) -> None:
        """Replaces every item from the configuration with entries"""
        self.provider.remove_configurations(CONTEXT_YAML)
        self.items = {}
        self.errors = {}

        for entry in entries:
            if not entry["enabled"]:
                LOGGER.debug("Item %s is disabled", entry["name"])
                continue
            item = create_item(
                entry["type"], entry["name"], label=entry.get("label"))
            self.items[item.name] = item
            self.register_item(item, entry[BINDING_TYPE])

        LOGGER.info("%d of %d items have an http binding",
                    len(self.items) - len(self.errors), len(self.items))

    def register_item(
            self, item: Item, binding_config: Optional[str],
            context: str = CONTEXT_YAML) -> bool:
        """
        Registers the binding configuration of an item

        An invalid configuration is logged and remembered in errors
        """
        self.errors.pop(item.name, None)
        try:
            self.provider.process_binding_configuration(
                context, item, binding_config)
        except BindingConfigParseException as error:
            LOGGER.error("Binding configuration of item %s is invalid: %s",
                         item.name, error)
            self.errors[item.name] = error
            return False
        LOGGER.debug("Item registered: %s [%s]", item.name, item.type)
        return True

    def get_item(self, name: str) -> Optional[Item]:
        """Returns an item by name"""
        return self.items.get(name)
