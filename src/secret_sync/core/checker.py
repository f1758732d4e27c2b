"""
Secret sync checker.

Verifies that every file an AI assistant is told not to read is also hidden
from the container by a docker-compose.yml mount rule.
"""

import logging
from pathlib import Path

from secret_sync.core.compose import ComposeFileCoverage, MountCoverageInterface
from secret_sync.core.config import SyncConfig
from secret_sync.core.matcher import FileMatcher, SecretPattern
from secret_sync.core.models import ClassifiedFile, FileClassification, SyncResult, SyncStatus
from secret_sync.core.patterns import collect_patterns, find_ai_ignore_files
from secret_sync.core.sync_ignore import SyncIgnoreList

logger = logging.getLogger(__name__)


class SecretSyncChecker:
    """
    Runs the secret sync check for a workspace.

    Stateless: each run() re-reads every input, so repeated runs over an
    unchanged workspace produce identical results.
    """

    def __init__(
        self,
        config: SyncConfig,
        coverage: MountCoverageInterface | None = None,
        sync_ignore: SyncIgnoreList | None = None,
    ):
        """
        Initialize the checker.

        Args:
            config: Run configuration (workspace, compose selection, paths)
            coverage: Mount coverage source. Defaults to scanning the compose
                file selected by the config.
            sync_ignore: Allow-list. Defaults to the workspace sync-ignore file.
        """
        self._config = config
        self._coverage = coverage
        self._sync_ignore = sync_ignore
        self._matcher = FileMatcher(config.workspace, config.scan.ignored_dirs)

    @property
    def matcher(self) -> FileMatcher:
        return self._matcher

    def run(self) -> SyncResult:
        """
        Run the check.

        Returns:
            SyncResult; missing inputs produce a non-CHECKED status rather
            than an error
        """
        config = self._config

        if not config.settings_path.is_file():
            logger.info(f"Settings file not found: {config.settings_path}")
            return SyncResult(status=SyncStatus.NO_SETTINGS)

        if self._coverage is None and not config.compose_path.is_file():
            logger.info(f"Compose file not found: {config.compose_path}")
            return SyncResult(status=SyncStatus.NO_COMPOSE)

        ignore_files = find_ai_ignore_files(
            config.workspace,
            config.scan.ai_ignore_files,
            config.scan.ignored_dirs,
        )
        patterns = collect_patterns(config.settings_path, ignore_files)
        if not patterns:
            return SyncResult(status=SyncStatus.NO_PATTERNS)

        matched = self._matcher.expand_all(SecretPattern.parse(p) for p in patterns)
        logger.debug(f"{len(patterns)} patterns matched {len(matched)} files")
        if not matched:
            return SyncResult(status=SyncStatus.NO_FILES, patterns=patterns)

        coverage = self._coverage
        if coverage is None:
            coverage = ComposeFileCoverage(config.compose_path, config.workspace)
        sync_ignore = self._sync_ignore
        if sync_ignore is None:
            sync_ignore = SyncIgnoreList.from_file(config.sync_ignore_path)

        files = []
        for path in sorted(matched):
            classified = self.classify(path, coverage, sync_ignore)
            if classified is not None:
                files.append(classified)

        return SyncResult(status=SyncStatus.CHECKED, patterns=patterns, files=files)

    def classify(
        self,
        path: Path,
        coverage: MountCoverageInterface,
        sync_ignore: SyncIgnoreList,
    ) -> ClassifiedFile | None:
        """
        Classify a single matched file.

        Returns:
            ClassifiedFile, or None if the file no longer exists
        """
        if not path.exists():
            logger.debug(f"File vanished before classification: {path}")
            return None

        rel_path = self._matcher.relative_posix(path)
        if sync_ignore.matches(rel_path):
            classification = FileClassification.IGNORED
        elif coverage.is_path_covered(path):
            classification = FileClassification.COVERED
        else:
            classification = FileClassification.MISSING

        return ClassifiedFile(path=path, classification=classification)
