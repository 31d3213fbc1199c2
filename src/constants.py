"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    USAGE_ERROR = 2


class AutoExpandInit(Enum):
    """Modes for generating directory metadata files.

    Args:
        Enum (string): Accepted values of A7_PATH_AUTO_EXPAND_INIT.
    """

    MISSING = "true"
    ALWAYS = "always"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    # Environment variables
    ENV_LOG_LEVEL = "A7_LOG_LEVEL"
    ENV_VOLUME_MOUNT_PATH = "A7_VOLUME_MOUNT_PATH"
    ENV_CORS_ALL = "A7_CORS_ALL"
    ENV_PATH_AUTO_RESOLVE = "A7_PATH_AUTO_RESOLVE"
    ENV_SERVE_FILES = "A7_SERVE_FILES"
    ENV_CATALOG_TTL = "A7_CATALOG_TTL"
    ENV_HOST = "A7_HOST"
    ENV_PORT = "A7_PORT"
    ENV_PATH_AUTO_EXPAND_INIT = "A7_PATH_AUTO_EXPAND_INIT"

    DEFAULT_VOLUME_MOUNT_PATH = "/var/a7"
    DEFAULT_HOST = "127.0.0.1"
    DEFAULT_PORT = 8080

    HEALTH_PATH = "/_a7/health"
    NOT_FOUND_PATH = "/404.html"
    DIRECTORY_METADATA_FILE = ".directory.txt"
    PACKAGE_JSON_FILE = "package.json"
    DEFAULT_PATH_FIELDS = ["main", "style"]
    MAX_INTERNAL_REDIRECTS = 5

    HEADER_CACHE_TAG = "cache-tag"
    HEADER_ETAG = "etag"
    MINIFIED_CACHE_TAG = "minified asset"
