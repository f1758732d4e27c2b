"""
Compose mount-rule scanning.

docker-compose.yml is scanned line by line rather than parsed as YAML.
Two kinds of rules hide a path from the container:

- ``- /dev/null:<path>`` (optionally ``:ro``) masks a single file
- ``- <dir>:ro`` (tmpfs or bind) masks a directory and everything below it
"""

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)

_DEVNULL_MOUNT_RE = re.compile(r"^\s*-\s*/dev/null:(?P<target>\S+?)(?::ro)?\s*$")
_READONLY_MOUNT_RE = re.compile(r"^\s*-\s*(?P<target>\S+):ro\s*$")
_LIST_ITEM_PREFIX_RE = re.compile(r"^\s*-\s*")
_SECTION_KEY_RE = re.compile(r"^\s*[a-z_]+:")
_TMPFS_KEY_RE = re.compile(r"^\s*tmpfs:")


class MountCoverageInterface(ABC):
    """Answers whether a file is hidden from the container."""

    @abstractmethod
    def is_path_covered(self, path: Path) -> bool:
        """
        Check whether a file is hidden by the container definition.

        Args:
            path: Absolute path of the file

        Returns:
            True if a mount rule hides the file
        """
        pass


class ComposeFileCoverage(MountCoverageInterface):
    """
    Line-based coverage check against a docker-compose.yml.

    The ancestor walk stops at the workspace root, so rules that target the
    root itself or anything above it are never consulted.
    """

    def __init__(self, compose_path: Path, root_path: Path, text: str | None = None):
        """
        Initialize from a compose file.

        Args:
            compose_path: Path to docker-compose.yml
            root_path: Workspace root where the ancestor walk stops
            text: Compose content. Read from compose_path when None.
        """
        self._compose_path = Path(compose_path)
        self._root_path = Path(root_path)

        if text is None:
            try:
                text = self._compose_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Error reading compose file {self._compose_path}: {e}")
                text = ""

        self._devnull_targets: set[str] = set()
        self._readonly_targets: set[str] = set()
        self._parse(text)

    def _parse(self, text: str) -> None:
        for line in text.splitlines():
            devnull = _DEVNULL_MOUNT_RE.match(line)
            if devnull:
                self._devnull_targets.add(self._normalize(devnull.group("target")))
                continue
            readonly = _READONLY_MOUNT_RE.match(line)
            if readonly:
                self._readonly_targets.add(self._normalize(readonly.group("target")))

        logger.debug(
            f"Parsed {len(self._devnull_targets)} /dev/null mounts and "
            f"{len(self._readonly_targets)} read-only mounts from {self._compose_path}"
        )

    def _normalize(self, target: str) -> str:
        """Resolve a workspace-relative target (e.g. "secrets") against the root."""
        target = target.rstrip("/") or "/"
        if target.startswith("/"):
            return target
        while target.startswith("./"):
            target = target[2:]
        return str(self._root_path / target)

    @property
    def devnull_targets(self) -> frozenset[str]:
        return frozenset(self._devnull_targets)

    @property
    def readonly_targets(self) -> frozenset[str]:
        return frozenset(self._readonly_targets)

    def is_path_covered(self, path: Path) -> bool:
        path = Path(path)
        if str(path) in self._devnull_targets:
            return True

        current = path.parent
        while current != self._root_path and current != current.parent:
            if str(current) in self._readonly_targets:
                return True
            current = current.parent

        return False


def extract_devnull_mounts(text: str) -> list[str]:
    """
    Extract /dev/null mount entries (file masks) from compose text.

    Returns:
        Sorted entries without the leading list marker,
        e.g. ["/dev/null:/workspace/app/.env:ro"]
    """
    entries = []
    for line in text.splitlines():
        if re.match(r"^\s*-\s*/dev/null:", line):
            entries.append(_LIST_ITEM_PREFIX_RE.sub("", line).rstrip())
    return sorted(entries)


def extract_tmpfs_mounts(text: str, root_path: Path | str) -> list[str]:
    """
    Extract read-only tmpfs entries under the workspace root from compose text.

    Only list items inside a ``tmpfs:`` section that start with the root
    path and end with ``:ro`` count as secret directory masks.

    Returns:
        Sorted, deduplicated entries, e.g. ["/workspace/app/secrets:ro"]
    """
    root = str(root_path)
    entries: set[str] = set()
    in_tmpfs = False

    for line in text.splitlines():
        if _TMPFS_KEY_RE.match(line):
            in_tmpfs = True
            continue

        is_list_item = bool(_LIST_ITEM_PREFIX_RE.match(line))
        if in_tmpfs and _SECTION_KEY_RE.match(line) and not is_list_item:
            in_tmpfs = False
            continue

        if not (in_tmpfs and is_list_item):
            continue

        entry = _LIST_ITEM_PREFIX_RE.sub("", line).rstrip()
        if entry.startswith(root) and entry.endswith(":ro"):
            entries.add(entry)

    return sorted(entries)
