"""
srpmimport - Import RPM source packages into git working trees.

A source package is converted with rpm2cpio, decoded in memory and
written into a working tree ready to commit:

    SPECS/<name>.spec
    SOURCES/<sources and patches>
    .gitignore          archive sources kept out of git

Quick Start:
    from pathlib import Path
    from srpmimport import ImportService, ImportOptions, PackageReference

    service = ImportService()
    reference = PackageReference(Path("bash-5.1.8-9.el9.src.rpm"), 9)
    options = ImportOptions(destination=Path("/tmp/bash"), commit=True)

    for message in service.run(reference, options):
        print(message)

    print(service.last_result.branches)   # ('rocky9',)
    print(service.last_report.ignored)    # ['SOURCES/bash-5.1.tar.gz']

Domain Objects:
    PackageReference - Package path and target distribution version
    PackageMetadata - Declared sources, patches and file modes
    ExcludedSource - Source kept out of version control
    ImportResult - Aggregate threaded through the pipeline

Services:
    PackageDecoder - rpm2cpio + cpio decoding
    MetadataCorrelator - rpm header query
    SourceClassifier - Archive source exclusion
    Materializer - Working tree writes and staging
    ImportService - Full pipeline
"""

__version__ = "0.1.0"

# Domain objects
from .domain import (
    PackageReference,
    PackageMetadata,
    FileMetadata,
    FileRole,
    DecodedEntry,
    ExcludedSource,
    ImportResult,
    MaterializeReport,
)

# Services
from .services import (
    PackageDecoder,
    MetadataCorrelator,
    SourceClassifier,
    Materializer,
    ImportService,
    ImportOptions,
)

# Layout rules
from .layout import destination_for, branch_name

# Configuration
from .config import load_config

__all__ = [
    # Version
    "__version__",
    # Domain objects
    "PackageReference",
    "PackageMetadata",
    "FileMetadata",
    "FileRole",
    "DecodedEntry",
    "ExcludedSource",
    "ImportResult",
    "MaterializeReport",
    # Services
    "PackageDecoder",
    "MetadataCorrelator",
    "SourceClassifier",
    "Materializer",
    "ImportService",
    "ImportOptions",
    # Layout
    "destination_for",
    "branch_name",
    # Configuration
    "load_config",
]
