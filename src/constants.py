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
    DATA_ERROR = 3
    BUILD_TOOL_ERROR = 4


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    REGISTRY_URL_CRATES = "https://crates.io"
    REGISTRY_CRATES_API_PATH = "/api/v1/crates/"
    USER_AGENT = "winch (automatic cargo dependency resolver)"
    CARGO_COMMAND = "cargo"
    MANIFEST_FILE = "Cargo.toml"
    TRIAL_MANIFEST_FILE = "Cargo.winch.toml"
    DEPENDENCY_TABLES = ["dependencies", "dev-dependencies", "build-dependencies"]
    MAX_CANDIDATES = 5
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests

    ENV_REGISTRY_URL = "WINCH_REGISTRY_URL"
    ENV_CARGO = "WINCH_CARGO"
    ENV_REQUEST_TIMEOUT = "WINCH_REQUEST_TIMEOUT"
    ENV_LOG_LEVEL = "WINCH_LOG_LEVEL"
