"""Constants for the Milton client."""

from datetime import timedelta

IDENTIFY_PATH = "auth/identify"
CONTROL_PATH = "control"
PATTERN_PATH = "control/pattern"

DEFAULT_API_ROOT = "http://127.0.0.1:8081/"
DEFAULT_LOGIN_URL = "http://127.0.0.1:8081/auth/start"
DEFAULT_SNAPSHOT_URL = "http://127.0.0.1:8081/control/snapshot"
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_VERSION = "dev"

ENV_API_ROOT = "MILTON_API_ROOT"
ENV_LOGIN_URL = "MILTON_LOGIN_URL"
ENV_SNAPSHOT_URL = "MILTON_SNAPSHOT_URL"
ENV_REQUEST_TIMEOUT = "MILTON_REQUEST_TIMEOUT"
ENV_VERSION = "MILTON_VERSION"

DEFAULT_COLOR = "#ff0000"
DEFAULT_LED_RANGE = (2, 4)

SNAPSHOT_REFRESH_INTERVAL = timedelta(seconds=1)
