"""
Import service for srpmimport.

Runs the whole pipeline for one source package:

    decode -> init repository -> read metadata -> classify -> materialize
    -> (optional) commit on the recorded branch

Any failure aborts the run. The exception propagates unchanged and the
working tree is left as the last successful write produced it.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Generator, Optional

from ..config import load_config
from ..domain.package import PackageReference
from ..domain.result import ImportResult, MaterializeReport
from ..exit_codes import ConfigError, RepositoryError
from ..infra.git_client import GitClient
from ..infra.rpm_tools import Rpm2CpioClient, RpmQueryClient
from ..infra.worktree import Worktree
from ..layout import IGNORE_FILE
from .classifier import SourceClassifier
from .correlator import MetadataCorrelator
from .decoder import PackageDecoder
from .materializer import Materializer

logger = logging.getLogger(__name__)


def parse_timeout(value: Any, key: str) -> Optional[float]:
    """
    Read a timeout setting as seconds.

    Environment overrides arrive as strings, so "2.5" is accepted. An unset
    or empty value means no timeout.

    Raises:
        ConfigError: the value is not a positive number
    """
    if value is None or value == "":
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be a number of seconds, got {value!r}")
    if seconds <= 0:
        raise ConfigError(f"{key} must be positive, got {value!r}")
    return seconds


@dataclass
class ImportOptions:
    """Options for an import run."""
    destination: Path
    commit: bool = False
    message: Optional[str] = None  # defaults to "import <package file>"


class ImportService:
    """
    Service for importing a source package into a git working tree.

    Example:
        service = ImportService()
        reference = PackageReference(Path("bash-5.1-1.src.rpm"), 9)
        options = ImportOptions(destination=Path("/tmp/bash"))

        for progress in service.run(reference, options):
            print(progress)

        result = service.last_result
        print(result.branches)  # ('rocky9',)
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        decoder: Optional[PackageDecoder] = None,
        correlator: Optional[MetadataCorrelator] = None,
        classifier: Optional[SourceClassifier] = None,
        git_client: Optional[GitClient] = None,
    ):
        """
        Initialize ImportService.

        Args:
            config: Configuration dict (loads default if None)
            decoder: PackageDecoder (built from config if None)
            correlator: MetadataCorrelator (built from config if None)
            classifier: SourceClassifier (creates new if None)
            git_client: GitClient (built from config if None)
        """
        self.config = config if config is not None else load_config()
        tools = self.config.get('tools', {})
        git = self.config.get('git', {})
        timeout = parse_timeout(tools.get('timeout_seconds'), 'tools.timeout_seconds')

        self.decoder = decoder or PackageDecoder(
            Rpm2CpioClient(tools.get('rpm2cpio', 'rpm2cpio'), timeout=timeout)
        )
        self.correlator = correlator or MetadataCorrelator(
            RpmQueryClient(tools.get('rpm', 'rpm'), timeout=timeout)
        )
        self.classifier = classifier or SourceClassifier()
        self.git = git_client or GitClient(
            timeout=parse_timeout(git.get('timeout_seconds', 60), 'git.timeout_seconds'),
            user_name=git.get('user_name', ''),
            user_email=git.get('user_email', ''),
        )
        self.last_result: Optional[ImportResult] = None
        self.last_report: Optional[MaterializeReport] = None

    def prepare(self, reference: PackageReference, destination: Path) -> ImportResult:
        """
        Run decode, repository init, metadata read and classification.

        Returns:
            ImportResult ready for materialization (no branches yet)
        """
        entries = self.decoder.decode(reference)
        worktree = Worktree.init(destination, self.git)
        metadata = self.correlator.read(reference)
        excluded = self.classifier.classify(metadata.sources)

        return ImportResult(
            reference=reference,
            worktree=worktree,
            metadata=metadata,
            entries=entries,
            excluded=excluded,
        )

    def run(
        self,
        reference: PackageReference,
        options: ImportOptions
    ) -> Generator[str, None, ImportResult]:
        """
        Import a package.

        Yields progress messages, returns the final ImportResult.
        """
        self.last_result = None
        self.last_report = None

        yield f"Decoding {reference.import_name}..."
        result = self.prepare(reference, options.destination)
        yield f"Decoded {len(result.entries)} files, {len(result.excluded)} excluded"

        messages = []
        materializer = Materializer(on_progress=messages.append)
        result, report = materializer.materialize(result)
        yield from messages

        self.last_result = result
        self.last_report = report

        if options.commit:
            message = options.message or f"import {reference.import_name}"
            for branch in result.branches:
                yield f"Committing to {branch}..."
                self.commit(result, branch, message)

        return result

    def commit(self, result: ImportResult, branch: str, message: str) -> None:
        """
        Stage the ignore file and commit the index onto branch.

        Raises:
            RepositoryError: checkout or commit failed
        """
        tree = result.worktree
        ok, output = self.git.checkout_branch(tree.root, branch)
        if not ok:
            raise RepositoryError(f"could not create branch {branch}: {output}")

        tree.add(IGNORE_FILE)

        ok, output = self.git.commit(tree.root, message)
        if not ok:
            raise RepositoryError(f"could not commit to {branch}: {output}")
        logger.info(f"Committed {result.reference.import_name} to {self.git.current_branch(tree.root) or branch}")
