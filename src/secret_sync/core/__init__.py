"""
Core Layer - pattern extraction, filesystem expansion, compose coverage and reporting.
"""

from secret_sync.core.checker import SecretSyncChecker
from secret_sync.core.compare import ComposeComparison, MountDiff, compare_compose_files
from secret_sync.core.compose import (
    ComposeFileCoverage,
    MountCoverageInterface,
    extract_devnull_mounts,
    extract_tmpfs_mounts,
)
from secret_sync.core.config import (
    LoggingConfig,
    PathsConfig,
    ScanConfig,
    SyncConfig,
    Verbosity,
    load_config,
)
from secret_sync.core.matcher import (
    DEFAULT_IGNORED_DIRS,
    FileMatcher,
    PatternShape,
    SecretPattern,
)
from secret_sync.core.models import (
    ClassifiedFile,
    FileClassification,
    SyncResult,
    SyncStatus,
)
from secret_sync.core.patterns import (
    collect_patterns,
    extract_deny_patterns,
    find_ai_ignore_files,
    read_ignore_file_patterns,
)
from secret_sync.core.report import render_compare_report, render_sync_report
from secret_sync.core.sync_ignore import SyncIgnoreList

__all__ = [
    # Config
    "SyncConfig",
    "PathsConfig",
    "ScanConfig",
    "LoggingConfig",
    "Verbosity",
    "load_config",
    # Patterns
    "extract_deny_patterns",
    "read_ignore_file_patterns",
    "find_ai_ignore_files",
    "collect_patterns",
    # Matcher
    "SecretPattern",
    "PatternShape",
    "FileMatcher",
    "DEFAULT_IGNORED_DIRS",
    "SyncIgnoreList",
    # Compose
    "MountCoverageInterface",
    "ComposeFileCoverage",
    "extract_devnull_mounts",
    "extract_tmpfs_mounts",
    # Checker
    "SecretSyncChecker",
    "SyncResult",
    "SyncStatus",
    "ClassifiedFile",
    "FileClassification",
    # Compare
    "ComposeComparison",
    "MountDiff",
    "compare_compose_files",
    # Reporting
    "render_sync_report",
    "render_compare_report",
]
