"""Static defaults for the catalog service."""

SERVER_NAME = "modelsplus"

DEFAULT_MODELS_LIMIT = 50
DEFAULT_PROVIDERS_LIMIT = 20
DEFAULT_SUGGESTION_LIMIT = 10
MIN_SUGGESTION_QUERY_LENGTH = 2

DEFAULT_SORT = "name"
DEFAULT_ORDER = "asc"

MODELS_FILE = "models.json"
PROVIDERS_FILE = "providers.json"

# First entry is what we answer with when the client asks for something else.
SUPPORTED_PROTOCOL_VERSIONS = ["2024-11-05", "2025-03-26", "2025-06-18"]
DEFAULT_PROTOCOL_VERSION = SUPPORTED_PROTOCOL_VERSIONS[0]
