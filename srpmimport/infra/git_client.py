"""
Git client infrastructure for srpmimport.

Provides a clean abstraction over git command execution.
All git operations go through this client, making them:
- Easy to mock for testing
- Consistent in error handling
- Isolated from business logic
"""

import subprocess
from typing import Optional, List, Tuple, Union
from pathlib import Path
import logging

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class GitClient:
    """
    Abstraction over git commands.

    Commands are passed as argument lists so file names with spaces or
    shell metacharacters reach git untouched.

    Example:
        client = GitClient()
        ok, message = client.init("/tmp/import")
        ok, message = client.add("/tmp/import", "SPECS/bash.spec")
    """

    def __init__(
        self,
        timeout: Optional[float] = 60,
        user_name: str = "",
        user_email: str = ""
    ):
        """
        Initialize GitClient.

        Args:
            timeout: Command timeout in seconds (default: 60)
            user_name: Committer name (empty uses git config)
            user_email: Committer email (empty uses git config)
        """
        self.timeout = timeout
        self.user_name = user_name
        self.user_email = user_email

    def _identity_args(self) -> List[str]:
        args = []
        if self.user_name:
            args += ["-c", f"user.name={self.user_name}"]
        if self.user_email:
            args += ["-c", f"user.email={self.user_email}"]
        return args

    def _run(self, args: List[str], cwd: PathLike) -> Tuple[str, int, str]:
        """
        Run a git command.

        Args:
            args: Arguments after `git`
            cwd: Working directory

        Returns:
            Tuple of (stdout, returncode, stderr); returncode is -1 if git
            could not be run at all
        """
        cmd = ["git"] + args
        try:
            result = subprocess.run(
                cmd,
                cwd=str(cwd),
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
            return result.stdout.strip(), result.returncode, result.stderr.strip()

        except subprocess.TimeoutExpired:
            logger.warning(f"Git command timed out: {' '.join(cmd)}")
            return "", -1, "timed out"
        except OSError as e:
            logger.error(f"Git command failed: {' '.join(cmd)} - {e}")
            return "", -1, str(e)

    def is_git_repo(self, path: PathLike) -> bool:
        """Check if path is a git repository."""
        return (Path(path) / ".git").exists()

    def init(self, path: PathLike) -> Tuple[bool, str]:
        """
        Initialize a repository at path, creating the directory if needed.

        Returns:
            Tuple of (success, message)
        """
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return False, str(e)
        output, code, stderr = self._run(["init", "--quiet"], cwd=path)
        if code != 0:
            return False, stderr or output
        return True, output

    def add(self, path: PathLike, file_path: str) -> Tuple[bool, str]:
        """
        Stage a single file, given relative to the repository root.

        Returns:
            Tuple of (success, message)
        """
        output, code, stderr = self._run(["add", "--", file_path], cwd=path)
        if code != 0:
            return False, stderr or output
        return True, output

    def has_commits(self, path: PathLike) -> bool:
        """True if HEAD points at a commit (the branch is not unborn)."""
        _, code, _ = self._run(["rev-parse", "--verify", "--quiet", "HEAD"], cwd=path)
        return code == 0

    def checkout_branch(self, path: PathLike, branch: str) -> Tuple[bool, str]:
        """Create or reset branch and switch to it, keeping the index."""
        if not self.has_commits(path):
            # Unborn HEAD: just point it at the new branch name
            args = ["symbolic-ref", "HEAD", f"refs/heads/{branch}"]
        else:
            args = ["checkout", "-q", "-B", branch]
        output, code, stderr = self._run(args, cwd=path)
        if code != 0:
            return False, stderr or output
        return True, output

    def commit(self, path: PathLike, message: str) -> Tuple[bool, str]:
        """
        Commit whatever is staged.

        Returns:
            Tuple of (success, message)
        """
        args = self._identity_args() + ["commit", "--quiet", "-m", message]
        output, code, stderr = self._run(args, cwd=path)
        if code != 0:
            return False, stderr or output
        return True, output

    def current_branch(self, path: PathLike) -> Optional[str]:
        """Get current branch name."""
        output, code, _ = self._run(["symbolic-ref", "--short", "HEAD"], cwd=path)
        if code == 0 and output:
            return output
        return None

    def staged_files(self, path: PathLike) -> List[str]:
        """List paths in the index that differ from HEAD (or all, before the first commit)."""
        output, code, _ = self._run(["diff", "--cached", "--name-only", "--no-renames"], cwd=path)
        if code != 0 or not output:
            return []
        return output.splitlines()
