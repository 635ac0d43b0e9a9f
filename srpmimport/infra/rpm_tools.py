"""
RPM tool clients for srpmimport.

Wraps the two external rpm utilities the importer relies on:
- rpm2cpio: converts the package into a cpio stream on stdout
- rpm -qp:  reads header tags straight from the package file

Both run synchronously. With no timeout configured a hung tool hangs
the import.
"""

import subprocess
import logging
from pathlib import Path
from typing import List, Optional, Union

from ..exit_codes import ToolError, MetadataError

logger = logging.getLogger(__name__)

# One tagged line per declared source, declared patch and embedded file.
# FILE lines carry the full st_mode in octal.
METADATA_QUERYFORMAT = (
    "[SOURCE\t%{SOURCE}\n]"
    "[PATCH\t%{PATCH}\n]"
    "[FILE\t%{FILEMODES:octal}\t%{FILENAMES}\n]"
)


class Rpm2CpioClient:
    """
    Runs rpm2cpio against a package file.

    Example:
        client = Rpm2CpioClient()
        stream = client.convert("/tmp/bash-5.1-1.src.rpm")
    """

    def __init__(self, executable: str = "rpm2cpio", timeout: Optional[float] = None):
        """
        Initialize Rpm2CpioClient.

        Args:
            executable: Name or path of the rpm2cpio binary
            timeout: Seconds before giving up (None waits forever)
        """
        self.executable = executable
        self.timeout = timeout

    def convert(self, path: Union[str, Path]) -> bytes:
        """
        Convert a package into a cpio archive stream.

        Raises:
            ToolError: rpm2cpio is missing, failed to run, or exited non-zero
        """
        cmd = [self.executable, str(path)]
        logger.debug(f"Running {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                check=True,
                timeout=self.timeout
            )
        except FileNotFoundError:
            raise ToolError(
                f"could not convert to cpio ({self.executable} is missing, install rpm)"
            )
        except subprocess.CalledProcessError as e:
            stderr = e.stderr.decode(errors="replace").strip() if e.stderr else ""
            raise ToolError(
                f"could not convert to cpio (maybe {self.executable} is missing): "
                f"exit status {e.returncode}{': ' + stderr if stderr else ''}"
            )
        except subprocess.TimeoutExpired:
            raise ToolError(f"{self.executable} timed out after {self.timeout}s")
        except OSError as e:
            raise ToolError(f"could not convert to cpio: {e}")

        return result.stdout


class RpmQueryClient:
    """
    Reads package header tags with `rpm -qp`.

    The package file is opened fresh on every query, independent of any
    rpm2cpio conversion of the same file.
    """

    def __init__(self, executable: str = "rpm", timeout: Optional[float] = None):
        self.executable = executable
        self.timeout = timeout

    def _command(self, path: Union[str, Path], queryformat: str) -> List[str]:
        return [
            self.executable,
            "-qp",
            "--nosignature",
            "--nodigest",
            "--queryformat",
            queryformat,
            str(path),
        ]

    def query(self, path: Union[str, Path], queryformat: str = METADATA_QUERYFORMAT) -> str:
        """
        Run a header query and return its stdout.

        Raises:
            MetadataError: rpm is missing or could not read the package
        """
        cmd = self._command(path, queryformat)
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout
            )
        except FileNotFoundError:
            raise MetadataError(f"could not read package metadata ({self.executable} is missing)")
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise MetadataError(
                f"could not read package, invalid?: {path}{': ' + stderr if stderr else ''}"
            )
        except subprocess.TimeoutExpired:
            raise MetadataError(f"{self.executable} timed out after {self.timeout}s reading {path}")
        except OSError as e:
            raise MetadataError(f"could not read package metadata: {e}")

        return result.stdout
