"""The entrypoint for httpbinding"""

import argparse
import asyncio
import logging
import os
import sys
from typing import Optional

import voluptuous as vol
import yaml

from httpbinding.const import CONFIG_FILE_NAME, MINIMUM_PYTHON_VERSION
from httpbinding.core import Core
from httpbinding.dependencies.json import dumps
from httpbinding.dependencies.yaml_loader import YAMLLoader

LOGGER = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    """Returns the parsed command-line arguments"""
    parser = argparse.ArgumentParser(
        description=("Parses the http binding configuration of items "
                     "and prints the resulting request configuration"))
    parser.add_argument(
        "--cfgdir", "-cd",
        default=os.path.expanduser("~/.httpbinding/"),
        help="Directory storing the configuration")
    parser.add_argument(
        "--item", "-i",
        action="append",
        default=None,
        help="Only print the binding of this item, can be repeated")
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Sets the loglevel to DEBUG")
    parser.add_argument(
        "--nocolor",
        action="store_true",
        default=False,
        help="Disables colored console output")
    parser.add_argument(
        "--logfile",
        default=None,
        help="Logfile location")
    return parser.parse_args(argv)


def get_config(directory: str) -> Optional[dict]:
    """
    Loads the config from directory

    Returns None if the file does not exist or is not valid YAML
    """
    file = os.path.join(directory, CONFIG_FILE_NAME)
    if not os.path.isfile(file):
        LOGGER.critical("Config file does not exist: %s", file)
        return None
    try:
        with open(file) as stream:
            cfg = YAMLLoader.load(stream, cfg_folder=directory)
    except yaml.YAMLError:
        LOGGER.error("Error in config file", exc_info=True)
        return None
    return cfg or {}


def validate_python_version() -> None:
    """Checks if the Python version is high enough"""
    if sys.version_info[:3] < MINIMUM_PYTHON_VERSION:
        LOGGER.critical(
            "The minimum Python version for httpbinding to work is %s",
            ".".join(map(str, MINIMUM_PYTHON_VERSION)))
        sys.exit(1)


def setup_logging(verbose: bool = False,
                  color: bool = True,
                  logfile: Optional[str] = None
                  ) -> None:
    """
    Set up logging
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)

    fmt = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    console_datefmt = '%H:%M:%S'
    datefmt = '%Y-%m-%d %H:%M:%S'

    if color:
        # pylint: disable=import-outside-toplevel
        from colorlog import ColoredFormatter

        colorfmt = "%(log_color)s{}%(reset)s".format(fmt)
        logging.getLogger().handlers[0].setFormatter(ColoredFormatter(
            colorfmt,
            datefmt=console_datefmt,
            reset=True,
            log_colors={
                'DEBUG': 'cyan',
                'INFO': 'white',
                'WARNING': 'yellow',
                'ERROR': 'red',
                'CRITICAL': 'red',
            }
        ))

    if logfile:
        file_handler = logging.FileHandler(logfile, mode="w")
        file_handler.setLevel(logging.INFO if verbose else logging.WARNING)
        file_handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
        logging.getLogger().addHandler(file_handler)


def run(cfg: dict, cfg_file: str, item_names=None) -> int:
    """
    Registers the configured items and prints their bindings

    Returns the exit status
    """
    core = Core(cfg=cfg, cfg_path=cfg_file)
    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(core.bootstrap())
    except vol.Invalid:
        LOGGER.critical("The item configuration is invalid")
        return 1
    finally:
        loop.close()

    provider = core.provider
    names = item_names or provider.item_names
    print(dumps({
        name: provider.get_descriptor(name)
        for name in names
        if provider.provides_binding_for(name)
    }, indent=2))

    for name in names:
        if not provider.provides_binding_for(name):
            LOGGER.warning("Item %s has no http binding", name)

    return 1 if core.binding_manager.errors else 0


def main(argv=None) -> None:
    """The main function"""
    validate_python_version()

    args = parse_args(argv)
    setup_logging(verbose=args.verbose,
                  color=not args.nocolor,
                  logfile=args.logfile)

    cfg = get_config(args.cfgdir)
    if cfg is None:
        sys.exit(1)
    cfg_file = os.path.join(args.cfgdir, CONFIG_FILE_NAME)

    sys.exit(run(cfg, cfg_file, item_names=args.item))


if __name__ == "__main__":
    main()
