"""
YAML loader for the item configuration

Supported tags:

    !include <path>           contents of another YAML file
    !env_var <name> [default] value of an environment variable
    !path <path>              a path resolved like !include does

Paths starting with ~/ are relative to the home directory, @/ to the
configuration folder. Absolute paths are kept, anything else is relative
to the file containing the tag.
"""

import logging
import os

import yaml
from yaml.composer import Composer
from yaml.constructor import SafeConstructor
from yaml.parser import Parser
from yaml.reader import Reader
from yaml.resolver import Resolver
from yaml.scanner import Scanner

from httpbinding.dependencies.resolve_path import resolve_path

LOGGER = logging.getLogger(__name__)


# pylint: disable=too-many-ancestors
class YAMLLoader(Reader, Scanner, Parser, Composer, SafeConstructor,
                 Resolver):
    """Safe YAML loader knowing about the configuration folder"""

    def __init__(self, stream, cfg_folder: str = None):
        self.cfg_folder = cfg_folder
        Reader.__init__(self, stream)
        Scanner.__init__(self)
        Parser.__init__(self)
        Composer.__init__(self)
        SafeConstructor.__init__(self)
        Resolver.__init__(self)

    @classmethod
    def load(cls, data, cfg_folder: str = None):
        """Loads a single document from a string or a file"""
        loader = cls(data, cfg_folder=cfg_folder)
        try:
            return loader.get_single_data()
        finally:
            loader.dispose()

    def resolve_node_path(self, node: yaml.Node) -> str:
        """Resolves the path in a scalar node"""
        if not isinstance(node.value, str):
            raise yaml.constructor.ConstructorError(
                None, None, "expected a path", node.start_mark)
        return resolve_path(
            node.value, file_path=self.name, config_dir=self.cfg_folder)

    def construct_include(self, node: yaml.Node) -> object:
        """!include <path>"""
        path = self.resolve_node_path(node)
        if not os.path.isfile(path):
            raise FileNotFoundError(path)

        LOGGER.debug("Including %s", path)
        with open(path, "r") as file:
            return self.load(file, cfg_folder=self.cfg_folder)

    def construct_path(self, node: yaml.Node) -> str:
        """!path <path>"""
        return self.resolve_node_path(node)

    def construct_env_var(self, node: yaml.Node) -> str:
        """!env_var <name> [default]"""
        name, *default = self.construct_scalar(node).split()
        if default:
            return os.getenv(name, " ".join(default))
        return os.environ[name]


YAMLLoader.add_constructor("!include", YAMLLoader.construct_include)
YAMLLoader.add_constructor("!path", YAMLLoader.construct_path)
YAMLLoader.add_constructor("!env_var", YAMLLoader.construct_env_var)
