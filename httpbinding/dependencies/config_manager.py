"""Configuration domains of the item configuration file"""

import logging
import os
from typing import Any, Dict, List, Optional

import voluptuous as vol

from httpbinding.dependencies.yaml_loader import YAMLLoader
from httpbinding.exceptions import ConfigDomainAlreadyRegistered

LOGGER = logging.getLogger(__name__)


def load_config_file(cfg_path: str) -> dict:
    """Reads a configuration file, an empty file yields an empty dict"""
    with open(cfg_path) as file:
        return YAMLLoader.load(
            file, cfg_folder=os.path.dirname(cfg_path)) or {}


class ConfigManager:
    """
    ConfigManager

    Holds the raw configuration and hands out the validated configuration
    of a domain to whoever registers it. A registered handler with an
    apply_configuration coroutine is notified when its domain changes
    on reload.
    """
    cfg: dict
    cfg_path: str
    domains: Dict[str, Optional[object]]
    domain_schemas: Dict[str, vol.Schema]

    def __init__(self, cfg: dict, cfg_path: str) -> None:
        self.cfg = cfg
        self.cfg_path = cfg_path
        self.domains = {}
        self.domain_schemas = {}

    @classmethod
    def from_file(cls, cfg_path: str) -> "ConfigManager":
        """Creates a ConfigManager from the file at cfg_path"""
        return cls(load_config_file(cfg_path), cfg_path)

    async def reload_config(
            self, only_domain: Optional[str] = None) -> List[str]:
        """
        Reads the configuration file again and applies changed domains

        Returns the names of the domains that were updated
        """
        LOGGER.info("Reloading the configuration from %s", self.cfg_path)
        cfg = load_config_file(self.cfg_path)

        updated = []
        for domain, raw_config in cfg.items():
            if only_domain and domain != only_domain:
                continue
            if raw_config == self.cfg.get(domain):
                continue
            if await self._apply_domain(domain, raw_config):
                updated.append(domain)

        LOGGER.info("Updated %d configuration domain(s)", len(updated))
        return updated

    async def _apply_domain(self, domain: str, raw_config: Any) -> bool:
        if domain not in self.domains:
            LOGGER.warning("Configuration domain %s is not reloadable", domain)
            return False
        try:
            config = self.validate_domain_config(domain, raw_config)
        except vol.Error:
            return False

        self.cfg[domain] = raw_config
        handler = self.domains[domain]
        if hasattr(handler, "apply_configuration"):
            await handler.apply_configuration(domain, config)
        LOGGER.info("Configuration for domain %s updated", domain)
        return True

    def validate_domain_config(self, domain: str, config: Any) -> Any:
        """Validates config against the schema registered for domain"""
        schema = self.domain_schemas.get(domain)
        if schema is None:
            return config
        try:
            return schema(config)
        except vol.Error:
            LOGGER.error("Configuration for domain %s is invalid", domain,
                         exc_info=True)
            raise

    async def register_domain(self,
                              domain: str,
                              handler: Optional[object] = None,
                              schema: Optional[vol.Schema] = None,
                              default: Optional[Any] = None) -> Any:
        """
        Registers a configuration domain

        Returns the validated configuration of the domain
        """
        if domain in self.domains:
            raise ConfigDomainAlreadyRegistered(
                f"The configuration domain {domain} is already registered")

        self.domains[domain] = handler
        if schema:
            self.domain_schemas[domain] = schema

        return self.validate_domain_config(
            domain, self.cfg.get(domain, {} if default is None else default))
