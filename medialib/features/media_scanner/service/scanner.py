import logging
import os
from pathlib import Path
from typing import Iterable, Optional

from ..data.classifier import PathClassifier
from ..data.file_walker import LocalFileWalker
from ..data.ignore_rules import PruneRules
from ..domain.exceptions import CatalogUnavailableError, ScanAbortedError
from ..domain.interfaces import ICatalog, IFileWalker
from ..domain.models import CandidateFile, RegistrationOutcome, ScanCounter, ScanRoot, ScanStats
from .registrar import Registrar

logger = logging.getLogger(__name__)

class DirectoryScanner:
    """
    Walks a scan root and pushes every eligible file through
    Classifier -> Lookup -> Registrar, counting what happened to each.
    """

    def __init__(self,
                 catalog: ICatalog,
                 registrar: Optional[Registrar] = None,
                 walker: Optional[IFileWalker] = None,
                 prune_rules: Optional[PruneRules] = None):
        self.catalog = catalog
        self.registrar = registrar or Registrar(catalog)
        self.walker = walker or LocalFileWalker()
        self.prune_rules = prune_rules or PruneRules()

    def scan_directory(self, root: ScanRoot) -> ScanStats:
        """
        Narrow walk: only files directly inside root.base_dir.
        A missing or unreadable directory yields empty stats.
        """
        directory = root.base_dir
        if not directory.is_dir() or not os.access(directory, os.R_OK):
            logger.info(f"Nothing to scan: {directory} is missing or unreadable")
            return ScanStats.empty()

        logger.info(f"Starting narrow scan of: {directory}")
        return self._run(root, self.walker.walk(directory, recursive=False))

    def scan_tree(self, root: ScanRoot) -> ScanStats:
        """
        Deep walk: everything below root.base_dir, minus pruned directories.
        """
        logger.info(f"Starting deep scan of: {root.base_dir}")
        return self._run(root, self.walker.walk(root.base_dir, recursive=True, dir_filter=self.prune_rules))

    def _run(self, root: ScanRoot, paths: Iterable[Path]) -> ScanStats:
        counter = ScanCounter()

        try:
            for path in paths:
                self._process(path, root, counter)
        except CatalogUnavailableError as e:
            partial = counter.freeze()
            logger.critical(f"Scan aborted, catalog unreachable: {e}")
            raise ScanAbortedError(str(e), partial_stats=partial) from e

        stats = counter.freeze()
        logger.info(
            f"Scan complete. Scanned: {stats.scanned}, imported: {stats.imported}, "
            f"existing: {stats.skipped_existing}, intermediate: {stats.skipped_intermediate}, "
            f"errors: {stats.errors}"
        )
        return stats

    def _process(self, path: Path, root: ScanRoot, counter: ScanCounter) -> None:
        if not path.is_file():
            return

        name = path.name
        if PathClassifier.is_hidden(name) or not PathClassifier.is_candidate_extension(name):
            return

        if PathClassifier.is_intermediate_variant(name):
            logger.debug(f"Intermediate size, skipped: {name}")
            counter.scanned += 1
            counter.skipped_intermediate += 1
            return

        candidate = CandidateFile.from_path(path, root.relative_path_of(path))

        # Lookup errors propagate and end the walk; the file is left uncounted
        registered = self.catalog.exists(candidate.relative_path)
        counter.scanned += 1

        if registered:
            logger.debug(f"Already registered: {candidate.relative_path}")
            counter.skipped_existing += 1
            return

        try:
            result = self.registrar.register(candidate, root)
        except Exception as e:
            logger.exception(f"Unexpected failure registering {candidate.relative_path}: {e}")
            counter.errors += 1
            return

        if result.outcome == RegistrationOutcome.IMPORTED:
            counter.imported += 1
        elif result.outcome == RegistrationOutcome.FAILED:
            counter.errors += 1
