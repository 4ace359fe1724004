"""JSON Encoder for binding descriptors and item types"""

# pylint: disable=invalid-name,too-few-public-methods,import-self
import json
from datetime import datetime
from enum import Enum


class JSONEncoder(json.JSONEncoder):
    """Custom JSONEncoder that also encodes httpbinding's types"""

    # pylint: disable=method-hidden
    def default(self, o):
        """Encode custom types"""
        if isinstance(o, Enum):
            return o.value

        if isinstance(o, datetime):
            return o.isoformat()

        if hasattr(o, "dump"):
            return o.dump()

        return super().default(o)


def dumps(obj, *, indent=None, sort_keys=False, **kw) -> str:
    """
    Dumps an object into a JSON string with support
    for descriptors and item types
    """
    return json.dumps(
        obj, cls=JSONEncoder, indent=indent, sort_keys=sort_keys, **kw)
