"""
Domain layer for srpmimport.

Contains pure domain objects with no I/O or side effects:
- PackageReference: The source package and target distribution version
- PackageMetadata / FileMetadata: Declared sources, patches and file modes
- DecodedEntry: One member of the decoded archive
- ExcludedSource: A source kept out of version control
- ImportResult: Aggregate threaded between pipeline stages

These objects are immutable where possible and provide
serialization methods for JSONL output.
"""

from .package import PackageReference, PackageMetadata, FileMetadata, FileRole
from .result import DecodedEntry, ExcludedSource, ImportResult, MaterializeReport

__all__ = [
    'PackageReference',
    'PackageMetadata',
    'FileMetadata',
    'FileRole',
    'DecodedEntry',
    'ExcludedSource',
    'ImportResult',
    'MaterializeReport',
]
