"""
Infrastructure layer for srpmimport.

Contains abstractions for external systems:
- Rpm2CpioClient: rpm2cpio invocation
- RpmQueryClient: rpm header queries
- GitClient: Git command execution
- Worktree: Working tree writes and staging

These provide clean interfaces that can be mocked for testing.
"""

from .git_client import GitClient
from .rpm_tools import Rpm2CpioClient, RpmQueryClient
from .worktree import Worktree

__all__ = [
    'GitClient',
    'Rpm2CpioClient',
    'RpmQueryClient',
    'Worktree',
]
