"""
Working tree materializer for srpmimport.

Writes every decoded entry into the working tree, applies declared
permission bits, stages everything except excluded sources, writes the
ignore file and records the branch the import belongs on.

Per entry the only transitions are written -> staged, and staged is
skipped for excluded sources. Nothing is ever unstaged or removed; a
failure leaves earlier writes in place.
"""

import logging
from typing import Callable, Optional, Tuple

from ..domain.result import ImportResult, MaterializeReport
from ..exit_codes import WorktreeError
from ..layout import (
    SPEC_DIR,
    SOURCE_DIR,
    IGNORE_FILE,
    FALLBACK_MODE,
    DIR_MODE,
    destination_for,
    branch_name,
)

logger = logging.getLogger(__name__)


def resolve_mode(result: ImportResult, name: str) -> int:
    """Declared mode for an entry, or the fallback mode if undeclared."""
    mode = result.metadata.mode_for(name)
    return FALLBACK_MODE if mode is None else mode


def render_ignore_file(result: ImportResult) -> str:
    """One line per excluded source, relative to the tree root."""
    return "".join(f"{source.ignore_path}\n" for source in result.excluded)


class Materializer:
    """
    Populate a working tree from an ImportResult.

    Example:
        materializer = Materializer()
        result, report = materializer.materialize(result)
        print(report.staged)
        print(result.branches)  # ('rocky9',)
    """

    def __init__(self, on_progress: Optional[Callable[[str], None]] = None):
        self.on_progress = on_progress

    def _progress(self, message: str) -> None:
        if self.on_progress:
            self.on_progress(message)

    def materialize(self, result: ImportResult) -> Tuple[ImportResult, MaterializeReport]:
        """
        Write, stage and record.

        Returns:
            The result with its branch appended, and a report of what
            was written, staged and ignored

        Raises:
            WorktreeError: a directory, file or the ignore file could not be written
            StagingError: git add failed
        """
        tree = result.worktree
        report = MaterializeReport()

        tree.mkdir(SPEC_DIR, DIR_MODE)
        tree.mkdir(SOURCE_DIR, DIR_MODE)

        for name in sorted(result.entries):
            path = str(destination_for(name))
            mode = resolve_mode(result, name)

            tree.write_file(path, result.entries[name], mode)
            report.written.append(path)
            report.modes[path] = mode

            if result.is_excluded(name):
                # Written but left untracked
                logger.debug(f"Not staging excluded source {path}")
                self._progress(f"Wrote {path} (ignored)")
                continue

            tree.add(path)
            report.staged.append(path)
            self._progress(f"Wrote {path}")

        content = render_ignore_file(result)
        try:
            tree.write_file(IGNORE_FILE, content.encode("utf-8"), FALLBACK_MODE)
        except WorktreeError as e:
            raise WorktreeError(f"could not write {IGNORE_FILE}: {e}")
        report.ignored = [source.ignore_path for source in result.excluded]
        report.ignore_file = IGNORE_FILE

        branch = branch_name(result.reference.version)
        logger.info(
            f"Materialized {len(report.written)} files "
            f"({len(report.staged)} staged, {len(report.ignored)} ignored) for {branch}"
        )
        return result.with_branch(branch), report
