"""
Source classifier for srpmimport.

Decides which declared sources stay out of version control. Archive-like
sources are usually large and can be fetched again from upstream, so
they are written to the tree but never staged.
"""

import logging
from typing import Iterable, Tuple

from ..domain.result import ExcludedSource

logger = logging.getLogger(__name__)

ARCHIVE_INDICATOR = ".tar"


def is_archive_source(name: str) -> bool:
    """
    True if a declared source should be excluded from version control.

    Matches the indicator anywhere in the name, so "foo.tar.gz" and
    "notes.tarball.txt" are both excluded.
    """
    return ARCHIVE_INDICATOR in name


class SourceClassifier:
    """Partition declared sources into tracked and excluded."""

    def classify(self, sources: Iterable[str]) -> Tuple[ExcludedSource, ...]:
        """
        Build an ExcludedSource per archive-like source, in declared order.

        Each gets its own fresh SHA-256 accumulator. Duplicate
        declarations yield a single entry.
        """
        excluded = []
        seen = set()
        for name in sources:
            if name in seen or not is_archive_source(name):
                continue
            seen.add(name)
            excluded.append(ExcludedSource(name=name))
            logger.debug(f"Excluding {name} from version control")
        return tuple(excluded)
