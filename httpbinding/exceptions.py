"""Exceptions"""


class HttpBindingException(Exception):
    """The base exception for httpbinding"""


class ConfigDomainAlreadyRegistered(HttpBindingException):
    """The configuration domain is already registered"""


class ItemTypeNotExistsError(HttpBindingException):
    """Item type does not exist"""


class BindingConfigParseException(HttpBindingException):
    """A binding configuration string could not be processed"""


class GrammarError(BindingConfigParseException):
    """A segment or fragment does not have the shape its grammar requires"""

    def __init__(self, text: str, expected: str, msg: str = None) -> None:
        self.text = text
        self.expected = expected
        super().__init__(
            msg or (f"'{text}' doesn't match the expected "
                    f"grammar '{expected}'"))


class CommandParseError(BindingConfigParseException):
    """A command token is not valid for the item's accepted command types"""

    def __init__(self, token: str, accepted_types: list) -> None:
        self.token = token
        self.accepted_types = accepted_types
        super().__init__(f"couldn't create Command from '{token}'")
