CLIENT_ID_HEADER = "X-ClientId"
TOKEN_HEADER = "X-Token"
IF_NONE_MATCH_HEADER = "If-None-Match"

OBJECT_FIELD = "object"
OBJECT_LIST_FIELD = "object[]"
DEFAULT_FILENAME = "default"

DEFAULT_TIMEOUT_SECONDS = 30.0
