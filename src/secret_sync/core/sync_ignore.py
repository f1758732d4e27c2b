"""
Sync-ignore allow-list.

Files matching a sync-ignore pattern are intentionally not secret (for
example ``**/*.example`` templates) and are reported as ignored instead of
missing.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from secret_sync.core.matcher import SecretPattern
from secret_sync.core.patterns import read_ignore_file_patterns

logger = logging.getLogger(__name__)


class SyncIgnoreList:
    """Allow-list of patterns exempt from the must-be-hidden requirement."""

    def __init__(self, patterns: Iterable[str] = ()):
        self._patterns: list[SecretPattern] = [
            SecretPattern.parse(p) for p in patterns if p.strip()
        ]

    @classmethod
    def from_file(cls, path: Path) -> "SyncIgnoreList":
        """
        Load the allow-list from a sync-ignore file.

        A missing file yields an empty allow-list.
        """
        patterns = read_ignore_file_patterns(path)
        if patterns:
            logger.debug(f"Loaded {len(patterns)} sync-ignore patterns from {path}")
        return cls(patterns)

    @property
    def patterns(self) -> list[SecretPattern]:
        return list(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def first_match(self, rel_path: str) -> SecretPattern | None:
        """Return the first pattern matching rel_path, or None."""
        for pattern in self._patterns:
            if pattern.matches(rel_path):
                return pattern
        return None

    def matches(self, rel_path: str) -> bool:
        return self.first_match(rel_path) is not None
