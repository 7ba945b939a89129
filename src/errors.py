"""Exception hierarchy for unrecoverable failures during a resolution run.

Routine trial build failures are not exceptions; they only advance the
search. Everything here aborts the run and maps onto a process exit code.
"""

from constants import ExitCodes


class WinchError(Exception):
    """Base class for hard failures."""

    exit_code = ExitCodes.FILE_ERROR


class ManifestError(WinchError):
    """Cargo.toml could not be read, parsed or written."""

    exit_code = ExitCodes.FILE_ERROR


class BuildToolError(WinchError):
    """The build tool executable could not be started."""

    exit_code = ExitCodes.BUILD_TOOL_ERROR


class RegistryError(WinchError):
    """Base class for registry lookup failures."""

    exit_code = ExitCodes.CONNECTION_ERROR


class RegistryConnectionError(RegistryError):
    """Transport-level failure (connection refused, DNS, timeout)."""


class RegistryResponseError(RegistryError):
    """The registry answered with a non-200 status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(RegistryError):
    """The registry body is not the expected JSON shape."""

    exit_code = ExitCodes.DATA_ERROR


class EmptyCandidateListError(RegistryError):
    """Every published version of a crate is yanked."""

    exit_code = ExitCodes.DATA_ERROR


class VersionOrderingError(WinchError):
    """A version string is not valid semver, so no total order exists."""

    exit_code = ExitCodes.DATA_ERROR
