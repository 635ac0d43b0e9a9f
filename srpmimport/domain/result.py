"""
Pipeline result domain objects for srpmimport.

ImportResult is the single value handed from stage to stage. Stages never
mutate it; they return a new instance with their additions.
"""

import hashlib
from dataclasses import dataclass, field, replace
from typing import Dict, Any, List, Mapping, Optional, Tuple, TYPE_CHECKING

from ..layout import ignore_path_for
from .package import PackageReference, PackageMetadata

if TYPE_CHECKING:
    from ..infra.worktree import Worktree


@dataclass(frozen=True)
class DecodedEntry:
    """One member of the decoded archive stream."""
    name: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


def _new_hasher():
    return hashlib.sha256()


@dataclass(frozen=True)
class ExcludedSource:
    """
    A declared source kept out of version control.

    hasher is an unseeded SHA-256 accumulator reserved for fingerprinting
    the file's content; it takes no part in equality.
    """
    name: str
    hasher: Any = field(default_factory=_new_hasher, compare=False, repr=False)

    @property
    def ignore_path(self) -> str:
        return ignore_path_for(self.name)

    def __str__(self) -> str:
        return self.name

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'ignore_path': self.ignore_path,
            'hash': self.hasher.name,
        }


@dataclass(frozen=True)
class ImportResult:
    """Aggregate threaded through the import pipeline."""
    reference: PackageReference
    worktree: "Worktree"
    metadata: PackageMetadata
    entries: Mapping[str, bytes]
    excluded: Tuple[ExcludedSource, ...] = ()
    branches: Tuple[str, ...] = ()

    @property
    def excluded_names(self) -> frozenset:
        return frozenset(source.name for source in self.excluded)

    def is_excluded(self, name: str) -> bool:
        return name in self.excluded_names

    def with_branch(self, branch: str) -> "ImportResult":
        """Return a copy with branch appended to the branch list."""
        return replace(self, branches=self.branches + (branch,))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'package': self.reference.import_name,
            'version': self.reference.version,
            'worktree': str(self.worktree.root),
            'entries': sorted(self.entries),
            'excluded': [source.name for source in self.excluded],
            'branches': list(self.branches),
        }


@dataclass
class MaterializeReport:
    """What the materializer wrote, staged and ignored."""
    written: List[str] = field(default_factory=list)
    staged: List[str] = field(default_factory=list)
    ignored: List[str] = field(default_factory=list)
    modes: Dict[str, int] = field(default_factory=dict)
    ignore_file: Optional[str] = None

    @property
    def unstaged(self) -> List[str]:
        staged = set(self.staged)
        return [path for path in self.written if path not in staged]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'summary',
            'written': len(self.written),
            'staged': len(self.staged),
            'ignored': list(self.ignored),
            'ignore_file': self.ignore_file,
        }
