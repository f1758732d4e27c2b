"""
Data models for secret sync results.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class FileClassification(str, Enum):
    """Outcome for a single matched file."""

    IGNORED = "ignored"
    COVERED = "covered"
    MISSING = "missing"


class SyncStatus(str, Enum):
    """How far a check got before it finished."""

    NO_SETTINGS = "no_settings"
    NO_COMPOSE = "no_compose"
    NO_PATTERNS = "no_patterns"
    NO_FILES = "no_files"
    CHECKED = "checked"


@dataclass(frozen=True)
class ClassifiedFile:
    """
    A matched file and its classification.

    Attributes:
        path: Absolute path to the file
        classification: Ignored, covered or missing
    """

    path: Path
    classification: FileClassification


@dataclass
class SyncResult:
    """
    Result of a secret sync check.

    Attributes:
        status: Terminal status of the run
        patterns: Merged secret patterns that were expanded
        files: Every matched file with its classification, sorted by path
    """

    status: SyncStatus
    patterns: list[str] = field(default_factory=list)
    files: list[ClassifiedFile] = field(default_factory=list)

    def _paths(self, classification: FileClassification) -> list[Path]:
        return [f.path for f in self.files if f.classification is classification]

    @property
    def ignored(self) -> list[Path]:
        return self._paths(FileClassification.IGNORED)

    @property
    def covered(self) -> list[Path]:
        return self._paths(FileClassification.COVERED)

    @property
    def missing(self) -> list[Path]:
        return self._paths(FileClassification.MISSING)

    @property
    def checked_count(self) -> int:
        return len(self.files)

    @property
    def is_compliant(self) -> bool:
        return not self.missing
