"""
Metadata correlator service for srpmimport.

Reads the package header independently of the archive stream and
returns declared sources, declared patches and per-file modes.
"""

import logging
from pathlib import Path
from typing import List, Optional

from ..domain.package import PackageReference, PackageMetadata, FileMetadata, FileRole
from ..exit_codes import MetadataError
from ..infra.rpm_tools import RpmQueryClient
from ..layout import is_spec_file

logger = logging.getLogger(__name__)

# rpm prints this for tags the header does not carry
NONE_VALUE = "(none)"


def parse_metadata(output: str) -> PackageMetadata:
    """
    Parse tagged query output into PackageMetadata.

    Each line is one of:
        SOURCE<TAB>name
        PATCH<TAB>name
        FILE<TAB>octal-mode<TAB>name

    Raises:
        MetadataError: a line has an unknown tag or a bad mode
    """
    sources: List[str] = []
    patches: List[str] = []
    files: List[tuple] = []

    for lineno, line in enumerate(output.splitlines(), start=1):
        if not line.strip():
            continue
        tag, _, rest = line.partition("\t")
        if tag == "SOURCE":
            if rest and rest != NONE_VALUE:
                sources.append(rest)
        elif tag == "PATCH":
            if rest and rest != NONE_VALUE:
                patches.append(rest)
        elif tag == "FILE":
            mode_str, _, name = rest.partition("\t")
            if not name or name == NONE_VALUE:
                continue
            try:
                mode = int(mode_str, 8) & 0o7777
            except ValueError:
                raise MetadataError(f"invalid file mode {mode_str!r} on line {lineno}")
            files.append((name, mode))
        else:
            raise MetadataError(f"unexpected metadata line {lineno}: {line!r}")

    source_set = set(sources)
    patch_set = set(patches)

    def role_for(name: str) -> FileRole:
        if is_spec_file(name):
            return FileRole.SPEC
        if name in patch_set:
            return FileRole.PATCH
        if name in source_set:
            return FileRole.SOURCE
        return FileRole.OTHER

    return PackageMetadata(
        sources=tuple(sources),
        patches=tuple(patches),
        files=tuple(FileMetadata(name=name, mode=mode, role=role_for(name)) for name, mode in files),
    )


class MetadataCorrelator:
    """
    Read structured package metadata.

    Files listed in the metadata but absent from the archive are never
    materialized; that mismatch is not an error.
    """

    def __init__(self, query_client: Optional[RpmQueryClient] = None):
        self.rpm = query_client or RpmQueryClient()

    def read(self, reference: PackageReference) -> PackageMetadata:
        """
        Raises:
            MetadataError: the package is missing, unreadable or invalid
        """
        path = Path(reference.path)
        if not path.is_file():
            raise MetadataError(f"could not open the package file: {path}")

        metadata = parse_metadata(self.rpm.query(path))
        logger.debug(
            f"{reference.import_name}: {len(metadata.sources)} sources, "
            f"{len(metadata.patches)} patches, {len(metadata.files)} files"
        )
        return metadata
