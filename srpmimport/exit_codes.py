"""
Standard exit codes for srpmimport commands.

Following Unix/POSIX conventions for command-line tools.
"""
from typing import Optional

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors

# Application-specific exit codes (64-113 are typically available)
TOOL_ERROR = 64          # External conversion/query tool missing or failed
ARCHIVE_ERROR = 65       # Archive stream could not be decoded
CONFIG_ERROR = 66        # Configuration file error
PERMISSION_ERROR = 67    # Insufficient permissions
REPOSITORY_ERROR = 68    # Git repository could not be initialized or committed
METADATA_ERROR = 69      # Package metadata unreadable or invalid
WORKTREE_ERROR = 73      # Working tree write failed
STAGING_ERROR = 74       # Adding a file to the index failed
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit codes for exceptions the import command catches outside the
# CommandError hierarchy
EXCEPTION_EXIT_CODES = {
    'PermissionError': PERMISSION_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: BaseException) -> int:
    """
    Get the appropriate exit code for an exception.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    if isinstance(exc, CommandError):
        return exc.exit_code
    exc_name = exc.__class__.__name__
    return EXCEPTION_EXIT_CODES.get(exc_name, GENERAL_ERROR)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)


class PipelineError(CommandError):
    """Base class for failures that abort an import run."""


class ToolError(PipelineError):
    """Raised when the rpm2cpio conversion cannot run or exits non-zero."""
    def __init__(self, message: str):
        super().__init__(message, TOOL_ERROR)


class ArchiveDecodeError(PipelineError):
    """Raised when the cpio stream is corrupt or truncated."""
    def __init__(self, message: str):
        super().__init__(message, ARCHIVE_ERROR)


class MetadataError(PipelineError):
    """Raised when package metadata cannot be read or parsed."""
    def __init__(self, message: str):
        super().__init__(message, METADATA_ERROR)


class RepositoryError(PipelineError):
    """Raised when the git repository cannot be initialized or committed."""
    def __init__(self, message: str):
        super().__init__(message, REPOSITORY_ERROR)


class WorktreeError(PipelineError):
    """Raised when a directory or file in the working tree cannot be written."""
    def __init__(self, message: str):
        super().__init__(message, WORKTREE_ERROR)


class StagingError(PipelineError):
    """Raised when a written file cannot be added to the index."""
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, STAGING_ERROR)
        self.path = path
