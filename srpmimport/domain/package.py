"""
Package domain objects for srpmimport.

Describe the source package being imported and the metadata it declares.
All objects are immutable and serializable for JSONL output.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Dict, Any, Tuple


SRPM_SUFFIX = ".src.rpm"


@dataclass(frozen=True)
class PackageReference:
    """A source package on disk plus the distribution version it targets."""
    path: Path
    version: int

    @property
    def import_name(self) -> str:
        """Basename of the package file."""
        return Path(self.path).name

    @property
    def stem(self) -> str:
        """Package file name without the .src.rpm (or .rpm) suffix."""
        name = self.import_name
        if name.endswith(SRPM_SUFFIX):
            return name[:-len(SRPM_SUFFIX)]
        return Path(name).stem

    def to_dict(self) -> Dict[str, Any]:
        return {
            'path': str(self.path),
            'version': self.version,
        }


class FileRole(Enum):
    """Role a file plays inside the source package."""
    SPEC = "spec"
    SOURCE = "source"
    PATCH = "patch"
    OTHER = "other"


@dataclass(frozen=True)
class FileMetadata:
    """Declared metadata for one file embedded in the package."""
    name: str
    mode: int  # permission bits only
    role: FileRole = FileRole.OTHER

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'mode': oct(self.mode),
            'role': self.role.value,
        }


@dataclass(frozen=True)
class PackageMetadata:
    """
    Structured metadata read from the package header.

    sources and patches keep the declared order. files lists every file
    physically embedded in the package.
    """
    sources: Tuple[str, ...] = ()
    patches: Tuple[str, ...] = ()
    files: Tuple[FileMetadata, ...] = ()

    def get_file(self, name: str) -> Optional[FileMetadata]:
        """Look up a file by exact name. Later declarations win."""
        found = None
        for file in self.files:
            if file.name == name:
                found = file
        return found

    def mode_for(self, name: str) -> Optional[int]:
        """Declared permission mode for name, or None if not declared."""
        file = self.get_file(name)
        return file.mode if file else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sources': list(self.sources),
            'patches': list(self.patches),
            'files': [f.to_dict() for f in self.files],
        }
