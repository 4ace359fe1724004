"""Constants used by httpbinding"""

VERSION = (0, 3, 0)
VERSION_STRING = ".".join(map(str, VERSION))


MINIMUM_PYTHON_VERSION = (3, 8, 0)

BINDING_TYPE = "http"

CONFIG_FILE_NAME = "configuration.yaml"
CONFIG_DOMAIN_ITEMS = "items"

# Context under which items from the YAML configuration are registered
CONTEXT_YAML = "yaml"

HTTP_METHOD_POST = "POST"

TRANSFORMATION_DEFAULT = "default"
