"""
Parser for http binding configuration strings

A configuration string consists of segments like

    >[ON:POST:http://www.domain.org/home/lights/23871?status=on]
    <[http://www.domain.org/weather/daily{X-Token=mytoken}:60000:REGEX(.*)]

Outbound segments (>) describe a request issued on a command, inbound
segments (<) describe a URL that is polled for state updates.

The scanner functions below reproduce the matching behavior of these
regular expressions without relying on capture group positions:

    segment      (<|>)\\[(.*?)\\](\\s|$)
    in-binding   (.*?)(\\{.*\\})?:(?!//)(\\d*):(.*)
    out-binding  (.*?):([A-Z]*):(.*)
    url          ^((([^:/?#]+):)?(//([^/?#]*))?([^?#:]*)(\\?([^#:]*))?(#(.*))?)(:.*)?
"""

import logging
import string
from enum import Enum
from typing import List, Optional, Tuple, Union

from attr import attrib, attrs

from httpbinding.const import HTTP_METHOD_POST, TRANSFORMATION_DEFAULT
from httpbinding.exceptions import GrammarError

LOGGER = logging.getLogger(__name__)

SEGMENT_SHAPE = r"(<|>)\[(.*?)\](\s|$)"
IN_SEGMENT_SHAPE = r"(.*?)(\{.*\})?:(?!//)(\d*):(.*)"
OUT_SEGMENT_SHAPE = r"(.*?):([A-Z]*):(.*)"
URL_SHAPE = "scheme://authority/path?query#fragment"
HEADER_SHAPE = "{key=value&key=value}"
TRANSFORMATION_SHAPE = "name(parameter)"

DIGITS = string.digits
UPPERCASE = string.ascii_uppercase
WHITESPACE = string.whitespace

Header = Tuple[str, str]


class Direction(Enum):
    """Direction of a binding segment"""
    IN = "<"
    OUT = ">"

    @classmethod
    def from_char(cls, char: str) -> "Direction":
        """Returns the direction introduced by char"""
        try:
            return cls(char)
        except ValueError:
            raise GrammarError(
                char, SEGMENT_SHAPE,
                "Unknown command given! Configuration must start "
                "with '<' or '>'")


@attrs(slots=True)
class InSegment:
    """A parsed inbound segment"""
    url: str = attrib()
    headers: List[Header] = attrib(factory=list)
    refresh_interval: int = attrib(default=0)
    transformation: str = attrib(default="")


@attrs(slots=True)
class OutSegment:
    """A parsed outbound segment, the command is still a raw token"""
    command: str = attrib()
    http_method: str = attrib()
    url: str = attrib()
    headers: List[Header] = attrib(factory=list)
    body: Optional[str] = attrib(default=None)
    transformation: Optional[str] = attrib(default=None)


Segment = Union[InSegment, OutSegment]


@attrs(slots=True)
class UrlParts:
    """The components of a URL followed by an optional body"""
    url: str = attrib()
    scheme: Optional[str] = attrib(default=None)
    authority: Optional[str] = attrib(default=None)
    path: str = attrib(default="")
    query: Optional[str] = attrib(default=None)
    fragment: Optional[str] = attrib(default=None)
    body: Optional[str] = attrib(default=None)


class Scanner:
    """A cursor over a string"""

    def __init__(self, text: str, pos: int = 0) -> None:
        self.text = text
        self.pos = pos

    @property
    def at_end(self) -> bool:
        """Whether the whole text has been consumed"""
        return self.pos >= len(self.text)

    def accept(self, prefix: str) -> bool:
        """Consumes prefix if the text continues with it"""
        if self.text.startswith(prefix, self.pos):
            self.pos += len(prefix)
            return True
        return False

    def take_while(self, chars: str) -> str:
        """Consumes characters as long as they are in chars"""
        start = self.pos
        while not self.at_end and self.text[self.pos] in chars:
            self.pos += 1
        return self.text[start:self.pos]

    def take_until(self, chars: str) -> str:
        """Consumes characters up to the first one in chars"""
        start = self.pos
        while not self.at_end and self.text[self.pos] not in chars:
            self.pos += 1
        return self.text[start:self.pos]


def parse_headers(fragment: Optional[str]) -> List[Header]:
    """
    Parses a header fragment like {key=value&key=value}

    Fragments without a '=' are dropped
    """
    if not fragment:
        return []
    if fragment.startswith("{"):
        fragment = fragment[1:]
    if fragment.endswith("}"):
        fragment = fragment[:-1]

    headers = []
    for element in fragment.split("&"):
        key, separator, value = element.partition("=")
        if separator:
            headers.append((key, value))
    return headers


def split_url(text: str) -> UrlParts:
    """
    Decomposes text into the URL components and the body behind them

    The first colon following the URL components separates the body.
    Colons inside the authority (ports) and the fragment belong to the URL.
    """
    scanner = Scanner(text)

    scheme = scanner.take_until(":/?#")
    if not (scheme and scanner.accept(":")):
        scheme = None
        scanner.pos = 0

    authority = None
    if scanner.accept("//"):
        authority = scanner.take_until("/?#")

    path = scanner.take_until("?#:")

    query = None
    if scanner.accept("?"):
        query = scanner.take_until("#:")

    fragment = None
    if scanner.accept("#"):
        fragment = scanner.take_until("\n")

    url = text[:scanner.pos]

    body = None
    if scanner.accept(":"):
        body = scanner.take_until("\n")

    return UrlParts(url=url, scheme=scheme, authority=authority, path=path,
                    query=query, fragment=fragment, body=body)


def split_url_and_body(
        text: str) -> Tuple[str, Optional[str], Optional[str]]:
    """
    Splits text into (url, header fragment, body)

    A header fragment can be embedded at the end of the URL,
    e.g. http://host/path?a=b{key=value}
    """
    url = split_url(text)
    header_fragment = None
    address = url.url

    if address.endswith("}"):
        begin = address.find("{")
        end = address.find("}")
        if begin < 0 or end < begin:
            raise GrammarError(
                address, HEADER_SHAPE,
                f"header fragment in '{address}' is not enclosed in braces")
        header_fragment = address[begin + 1:end]
        address = address[:begin]

    if not address:
        raise GrammarError(text, URL_SHAPE, f"no URL found in '{text}'")

    return address, header_fragment, url.body


def parse_transformation_call(text: str) -> Optional[Tuple[str, str]]:
    """
    Splits name(parameter) into (name, parameter)

    The parameter starts after the last opening parenthesis
    """
    if "\n" in text or not text.endswith(")"):
        return None
    open_paren = text.rfind("(")
    if open_paren < 0:
        return None
    return text[:open_paren], text[open_paren + 1:-1]


def detect_transformation(
        body: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """
    Classifies a body

    Returns (transformation, body) of which at most one is set
    """
    if body is None:
        return None, None
    if body == TRANSFORMATION_DEFAULT:
        return TRANSFORMATION_DEFAULT, None

    call = parse_transformation_call(body)
    if call is None:
        LOGGER.debug("Body contained no known transforms")
        return None, body

    name, parameter = call
    LOGGER.debug("Transformation %s with parameter %s", name, parameter)
    return f"{name}={parameter}", None


def _segment_end(text: str, start: int) -> Optional[int]:
    """Index of the ']' closing a segment that started before start"""
    for index in range(start, len(text)):
        char = text[index]
        if char == "\n":
            return None
        if char == "]" and (index + 1 == len(text)
                            or text[index + 1] in WHITESPACE):
            return index
    return None


def _is_segment_sequence(text: str) -> bool:
    """Whether text as a whole matches the segment grammar"""
    if text[:2] not in ("<[", ">["):
        return False
    if text.endswith("]"):
        inner = text[2:-1]
    elif (len(text) >= 4 and text[-2] == "]"
          and text[-1] in WHITESPACE):
        inner = text[2:-2]
    else:
        return False
    return "\n" not in inner


def split_segments(config: str) -> List[Tuple[Direction, str]]:
    """Splits a configuration string into (direction, segment) pairs"""
    if not _is_segment_sequence(config):
        raise GrammarError(
            config, SEGMENT_SHAPE,
            f"bindingConfig '{config}' doesn't contain a valid "
            "binding configuration")

    segments = []
    pos = 0
    while pos < len(config):
        if config[pos] in "<>" and config.startswith("[", pos + 1):
            end = _segment_end(config, pos + 2)
            if end is not None:
                segments.append(
                    (Direction.from_char(config[pos]), config[pos + 2:end]))
                # Skip the bracket and the whitespace after it
                pos = end + 2
                continue
        pos += 1
    return segments


def _in_segment_tail(text: str, pos: int) -> Optional[Tuple[str, str]]:
    """Matches :(?!//)(\\d*):(.*) at pos"""
    if not text.startswith(":", pos) or text.startswith("//", pos + 1):
        return None
    scanner = Scanner(text, pos + 1)
    interval = scanner.take_while(DIGITS)
    if not scanner.accept(":"):
        return None
    return interval, text[scanner.pos:]


def _match_in_segment(
        text: str) -> Optional[Tuple[str, Optional[str], str, str]]:
    if "\n" in text:
        return None
    for split in range(len(text)):
        if text[split] == "{":
            # The header fragment extends to the last possible brace
            for close in range(len(text) - 1, split, -1):
                if text[close] != "}":
                    continue
                tail = _in_segment_tail(text, close + 1)
                if tail:
                    return (text[:split], text[split:close + 1]) + tail
        tail = _in_segment_tail(text, split)
        if tail:
            return (text[:split], None) + tail
    return None


def parse_in_segment(text: str) -> InSegment:
    """Parses url[{headers}]:refreshInterval:transformation"""
    LOGGER.debug("Parsing in-binding: %s", text)
    match = _match_in_segment(text)
    if match is None:
        raise GrammarError(
            text, IN_SEGMENT_SHAPE,
            f"bindingConfig '{text}' doesn't represent a valid "
            "in-binding-configuration. A valid configuration is matched "
            f"by the RegExp '{IN_SEGMENT_SHAPE}'")

    url, header_fragment, interval, transformation = match
    if not interval:
        raise GrammarError(
            text, IN_SEGMENT_SHAPE,
            f"refresh interval of '{text}' is not a non-negative integer")

    return InSegment(
        url=url.replace('\\"', ""),
        headers=parse_headers(header_fragment),
        refresh_interval=int(interval),
        transformation=transformation.replace('\\"', '"'))


def _match_out_segment(text: str) -> Optional[Tuple[str, str, str]]:
    if "\n" in text:
        return None
    colon = text.find(":")
    while colon >= 0:
        scanner = Scanner(text, colon + 1)
        method = scanner.take_while(UPPERCASE)
        if scanner.accept(":"):
            return text[:colon], method, text[scanner.pos:]
        colon = text.find(":", colon + 1)
    return None


def parse_out_segment(text: str) -> OutSegment:
    """Parses command:METHOD:url[{headers}][:body]"""
    LOGGER.debug("Parsing out-binding: %s", text)
    match = _match_out_segment(text)
    if match is None:
        raise GrammarError(
            text, OUT_SEGMENT_SHAPE,
            f"bindingConfig '{text}' doesn't contain a valid "
            "out-binding-configuration. A valid configuration is matched "
            f"by the RegExp '{OUT_SEGMENT_SHAPE}'")

    command, http_method, remainder = match
    remainder = remainder.replace('\\"', "")
    LOGGER.debug("URL portion of binding config to be processed: %s",
                 remainder)

    headers = []
    if remainder.startswith("{"):
        close = remainder.find("}")
        if close >= 0:
            headers.extend(parse_headers(remainder[:close + 1]))
            remainder = remainder[close + 1:]

    url, header_fragment, body = split_url_and_body(remainder)
    headers.extend(parse_headers(header_fragment))

    transformation = None
    if http_method == HTTP_METHOD_POST:
        transformation, body = detect_transformation(body)
    else:
        body = None

    return OutSegment(
        command=command, http_method=http_method, url=url,
        headers=headers, body=body, transformation=transformation)


def parse_segments(config: str) -> List[Segment]:
    """Parses every segment of a configuration string in order"""
    return [
        parse_in_segment(text) if direction is Direction.IN
        else parse_out_segment(text)
        for direction, text in split_segments(config)
    ]
