"""Sidecar API paths, header names and defaults."""

DEFAULT_SIDECAR_IP = "127.0.0.1"
DEFAULT_HTTP_PORT = 3500

API_VERSION = "v1.0"
STATE_PATH = API_VERSION + "/state"
INVOKE_PATH = API_VERSION + "/invoke"
HEALTHZ_PATH = API_VERSION + "/healthz"

HEADER_DAPR_API_TOKEN = "dapr-api-token"
HEADER_DAPR_REQUEST_ID = "X-DaprRequestId"

MEDIA_TYPE_APPLICATION_JSON = "application/json; charset=utf-8"

# Методы, которые никогда не отправляют тело
BODYLESS_METHODS = frozenset({"GET", "DELETE", "HEAD", "OPTIONS"})
