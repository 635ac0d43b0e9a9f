"""
Working tree infrastructure for srpmimport.

A Worktree is a directory on disk backed by a git repository. It offers
exactly what the materializer needs: directory creation, file writes
with explicit permission bits, and staging by relative path.
"""

import os
import logging
from pathlib import Path, PurePosixPath
from typing import Union

from ..exit_codes import WorktreeError, StagingError, RepositoryError
from .git_client import GitClient

logger = logging.getLogger(__name__)

RelPath = Union[str, PurePosixPath]


class Worktree:
    """
    Git working tree rooted at a directory.

    Example:
        tree = Worktree.init(Path("/tmp/import"), GitClient())
        tree.mkdir("SPECS")
        tree.write_file("SPECS/bash.spec", b"Name: bash\\n", 0o644)
        tree.add("SPECS/bash.spec")
    """

    def __init__(self, root: Path, git: GitClient):
        self.root = Path(root)
        self.git = git

    @classmethod
    def init(cls, root: Union[str, Path], git: GitClient) -> "Worktree":
        """
        Initialize a git repository at root and return its working tree.

        An existing repository at root is reused as is.

        Raises:
            RepositoryError: git init failed
        """
        root = Path(root).expanduser().resolve()
        if git.is_git_repo(root):
            logger.info(f"Reusing existing repository at {root}")
            return cls(root, git)

        ok, message = git.init(root)
        if not ok:
            raise RepositoryError(f"could not init git repo at {root}: {message}")
        logger.debug(f"Initialized repository at {root}")
        return cls(root, git)

    def resolve(self, rel_path: RelPath) -> Path:
        """
        Absolute path for a tree-relative path.

        Raises:
            WorktreeError: the path is absolute or escapes the tree root
        """
        rel = PurePosixPath(rel_path)
        if rel.is_absolute() or ".." in rel.parts:
            raise WorktreeError(f"refusing to write outside the working tree: {rel_path}")
        return self.root / rel

    def mkdir(self, rel_path: RelPath, mode: int = 0o755) -> None:
        try:
            self.resolve(rel_path).mkdir(mode=mode, parents=True, exist_ok=True)
        except OSError as e:
            raise WorktreeError(f"could not create {rel_path} dir: {e}")

    def write_file(self, rel_path: RelPath, content: bytes, mode: int) -> Path:
        """
        Create or truncate a file, set its mode and write content.

        The mode is applied exactly, regardless of the process umask.

        Raises:
            WorktreeError: open, chmod, write or close failed
        """
        target = self.resolve(rel_path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(target, os.O_RDWR | os.O_CREAT | os.O_TRUNC, mode)
        except OSError as e:
            raise WorktreeError(f"could not create file {rel_path}: {e}")

        try:
            with os.fdopen(fd, "wb") as f:
                os.fchmod(f.fileno(), mode)
                f.write(content)
        except OSError as e:
            raise WorktreeError(f"could not write to file {rel_path}: {e}")

        return target

    def add(self, rel_path: RelPath) -> None:
        """
        Stage a file for the next commit.

        Raises:
            StagingError: git add failed
        """
        path = str(PurePosixPath(rel_path))
        ok, message = self.git.add(self.root, path)
        if not ok:
            raise StagingError(f"could not add {path}: {message}", path=path)
