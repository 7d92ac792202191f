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


class AxiomEndpoint(str, Enum):
    """POST endpoints exposed by the Axiom web API."""

    GET_TIME_ZONES = "/getTimeZones"
    GET_USER_TOKEN = "/getUserToken"
    REVOKE_USER_TOKEN = "/revokeUserToken"
    BROWSE_TAGS = "/browseTags"
    BROWSE_NODES = "/browseNodes"
    GET_TAG_PROPERTIES = "/getTagProperties"
    GET_AGGREGATES = "/getAggregates"
    GET_QUALITIES = "/getQualities"
    GET_TAG_DATA = "/getTagData2"
    GET_LIVE_DATA_TOKEN = "/getLiveDataToken"
    GET_LIVE_DATA = "/getLiveData"
    REVOKE_LIVE_DATA_TOKEN = "/revokeLiveDataToken"


DEFAULT_APPLICATION = "Web API"
DEFAULT_TIME_ZONE = "GMT Standard Time"
DEFAULT_START_TIME = "Now - 24 Hours"
DEFAULT_END_TIME = "Now"
DEFAULT_MAX_SIZE = 100000
DEFAULT_AGGREGATE_NAME = "TimeAverage2"
DEFAULT_AGGREGATE_INTERVAL = "1 Hour"
DEFAULT_LIVE_MODE = "AllValues"
DEFAULT_QUALITIES = (192, "193", 32768)
DEFAULT_MAX_PAGES = 10000
