"""The core instance for httpbinding"""

import logging
import os

from httpbinding.binding.manager import BindingManager
from httpbinding.dependencies.config_manager import ConfigManager

LOGGER = logging.getLogger(__name__)


class Core:
    """
    Represents the root object for httpbinding
    """

    def __init__(self, cfg: dict, cfg_path: str) -> None:
        """
        :param cfg: config dictionary
        :param cfg_path: configuration file
        """
        self.cfg = ConfigManager(cfg, cfg_path)
        self.cfg_path = cfg_path
        self.cfg_dir = os.path.dirname(cfg_path)
        self.binding_manager = BindingManager(core=self)

    @property
    def provider(self):
        """The binding provider"""
        return self.binding_manager.provider

    async def bootstrap(self) -> None:
        """
        Startup coroutine for Core
        """
        await self.binding_manager.init()
        LOGGER.info("Core bootstrap complete")

    async def reload(self) -> None:
        """Reloads the configuration file"""
        await self.cfg.reload_config()
