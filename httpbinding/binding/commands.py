"""Resolution of command tokens to the keys of configuration elements"""

from enum import Enum
from typing import Iterable, Type, Union

from httpbinding.dependencies.item_types import Command, parse_command
from httpbinding.exceptions import CommandParseError


class BindingKey(Enum):
    """Keys of configuration elements that are not real commands"""
    # Matches state changes, never substituted by the wildcard
    CHANGED = "CHANGED"
    # Matches every command without an element of its own
    WILDCARD = "*"
    # The element of the inbound (polling) segment
    IN_BINDING = "IN_BINDING"

    def __str__(self) -> str:
        return self.value


CommandKey = Union[BindingKey, Command]


def resolve_command(
        token: str, accepted_command_types: Iterable[Type[Command]]
) -> CommandKey:
    """
    Creates the key for a command token

    CHANGED and * are taken into account, every other token has to be
    a valid command for one of the accepted command types
    """
    if token == BindingKey.CHANGED.value:
        return BindingKey.CHANGED
    if token == BindingKey.WILDCARD.value:
        return BindingKey.WILDCARD

    accepted_command_types = list(accepted_command_types)
    command = parse_command(accepted_command_types, token)
    if command is None:
        raise CommandParseError(token, accepted_command_types)
    return command
