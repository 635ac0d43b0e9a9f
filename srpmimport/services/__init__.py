"""
Service layer for srpmimport.

Contains the import pipeline stages and the service that runs them:
- PackageDecoder: rpm2cpio + cpio decoding into memory
- MetadataCorrelator: declared sources, patches and file modes
- SourceClassifier: archive-like sources kept out of git
- Materializer: writes, stages and records the branch
- ImportService: runs the stages in order

Services are the primary API for commands to use.
"""

from .decoder import PackageDecoder
from .correlator import MetadataCorrelator
from .classifier import SourceClassifier
from .materializer import Materializer
from .import_service import ImportService, ImportOptions

__all__ = [
    'PackageDecoder',
    'MetadataCorrelator',
    'SourceClassifier',
    'Materializer',
    'ImportService',
    'ImportOptions',
]
