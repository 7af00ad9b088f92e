from enum import Enum


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# Datasets charted when a request does not name any
DEFAULT_ENDPOINTS = (
    "/fans/total",
    "/fans/facebook",
    "/fans/twitter",
    "/fans/youtube",
)
