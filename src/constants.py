"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    OPERATION_FAILED = 3
    VALIDATION_ERROR = 4
    CANCELLED = 130


class Commands(Enum):
    """Sub-commands supported by the program.

    Args:
        Enum (string): Sub-command names.
    """

    UNLIST = "unlist"
    DEPRECATE = "deprecate"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    REGISTRY_URL_NUGET_V3 = "https://api.nuget.org/v3/index.json"
    REGISTRY_URL_NUGET_FLATCONTAINER = "https://api.nuget.org/v3-flatcontainer/"
    GALLERY_URL_NUGET_PACKAGE = "https://www.nuget.org/api/v2/package/"
    PACKAGE_BASE_ADDRESS_TYPE = "PackageBaseAddress/3.0.0"
    API_KEY_HEADER = "X-NuGet-ApiKey"
    USER_AGENT = "nugetmgr/0.1"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    ENV_LOG_LEVEL = "NUGETMGR_LOG_LEVEL"
    WHAT_IF = "[WHAT-IF]"
    DRY_RUN = "[DRY-RUN]"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests

    # Deprecation retry/backoff tunables
    MAX_RETRIES = 3  # Total attempts, including the first one
    THROTTLE_BACKOFF_BASE_SEC = 60
    TRANSIENT_BACKOFF_BASE_SEC = 30
    MAX_RETRY_WAIT_SEC = 3600  # Ceiling for any single backoff wait
    TRANSIENT_STATUS_CODES = (502, 503, 504)
