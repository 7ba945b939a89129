"""Winch - Automatic Cargo Dependency Resolver

    Returns:
        int: Exit code
"""
import logging
import os
import sys

from args import parse_args
from cli_config import apply_env_overrides
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes
from errors import WinchError
from orchestrator import ResolutionOrchestrator
from versioning.models import AbortReason, ResolutionResult, ResolutionState


def exit_code_for(result: ResolutionResult) -> int:
    """Map a finished run onto a process exit code.

    Succeeded, Exhausted and unparseable diagnostics are informational
    outcomes and exit 0; a failed fetch exits with its error's code.
    """
    if result.state == ResolutionState.ABORTED and result.reason == AbortReason.FETCH_FAILED:
        if isinstance(result.error, WinchError):
            return result.error.exit_code.value
        return ExitCodes.CONNECTION_ERROR.value
    return ExitCodes.SUCCESS.value


def run(argv=None) -> int:
    """Parse arguments, run the resolver, return the exit code."""
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    configure_logging()
    apply_env_overrides()

    project_dir = os.path.abspath(args.PROJECT_DIR or os.getcwd())
    if not os.path.isdir(project_dir):
        logger.error("Project directory not found: %s", project_dir)
        return ExitCodes.FILE_ERROR.value

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main", target=project_dir)
        )

    try:
        result = ResolutionOrchestrator(project_dir).run()
    except WinchError as e:
        logger.error("%s", e)
        return e.exit_code.value

    if result.error is not None:
        logger.error("Aborted: %s", result.error)
    return exit_code_for(result)


def main():
    """Main function of the program."""
    sys.exit(run())


if __name__ == "__main__":
    main()
