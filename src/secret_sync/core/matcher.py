"""
Secret pattern parsing, matching and filesystem expansion.

Three pattern shapes are supported:
- Recursive directory: ``**/<name>/**`` (every file under any directory named <name>)
- Recursive file: ``**/<glob>`` (every file whose name matches <glob>, at any depth)
- Workspace-relative: anything else, a literal path or a single-level wildcard
  resolved against the workspace root
"""

import functools
import glob
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath

import pathspec

from secret_sync.core.config import ScanConfig

logger = logging.getLogger(__name__)

# Directories pruned from every traversal, as configured in defaults.yaml
DEFAULT_IGNORED_DIRS: frozenset[str] = frozenset(ScanConfig().ignored_dirs)


class PatternShape(str, Enum):
    """How a pattern is expanded against the filesystem."""

    RECURSIVE_DIR = "recursive_dir"
    RECURSIVE_FILE = "recursive_file"
    WORKSPACE = "workspace"


@functools.lru_cache(maxsize=256)
def _anchored_spec(target: str) -> pathspec.PathSpec:
    """Compile a workspace-anchored gitwildmatch spec for a wildcard target."""
    return pathspec.PathSpec.from_lines(pathspec.patterns.GitWildMatchPattern, ["/" + target])


@dataclass(frozen=True)
class SecretPattern:
    """
    A parsed secret pattern.

    Attributes:
        raw: Pattern as written in the settings or ignore file
        shape: Expansion shape
        target: Shape-specific operand. Directory name for RECURSIVE_DIR,
            file glob for RECURSIVE_FILE, workspace-relative path for WORKSPACE.
    """

    raw: str
    shape: PatternShape
    target: str

    @classmethod
    def parse(cls, raw: str) -> "SecretPattern":
        """
        Parse a raw pattern string into a SecretPattern.

        Args:
            raw: Pattern string, e.g. "**/secrets/**", "**/*.env", "config/db.env"

        Returns:
            Parsed SecretPattern
        """
        pattern = raw.strip()

        if pattern.startswith("**/"):
            rest = pattern[3:]
            if rest.endswith("/**") and rest[:-3]:
                # **/a/secrets/** is keyed on its last directory name
                name = rest[:-3].rsplit("/", 1)[-1]
                return cls(raw=raw, shape=PatternShape.RECURSIVE_DIR, target=name)
            return cls(raw=raw, shape=PatternShape.RECURSIVE_FILE, target=rest)

        target = pattern
        while target.startswith("./"):
            target = target[2:]
        target = target.lstrip("/")
        return cls(raw=raw, shape=PatternShape.WORKSPACE, target=target)

    @property
    def has_wildcard(self) -> bool:
        return "*" in self.target

    @property
    def escapes_root(self) -> bool:
        """True if a workspace target climbs out of the root with "..", e.g. "../x/**"."""
        return self.shape is PatternShape.WORKSPACE and ".." in PurePosixPath(self.target).parts

    def matches(self, rel_path: str) -> bool:
        """
        Check whether a workspace-relative file path matches this pattern.

        Args:
            rel_path: POSIX-style path relative to the workspace root

        Returns:
            True if the pattern selects the file
        """
        path = PurePosixPath(rel_path)
        if not path.parts:
            return False

        if self.shape is PatternShape.RECURSIVE_DIR:
            return self.target in path.parts[:-1]

        if self.shape is PatternShape.RECURSIVE_FILE:
            if not self.target:
                return False
            return path.match(self.target)

        if not self.target or self.escapes_root:
            return False
        if self.has_wildcard:
            return _anchored_spec(self.target).match_file(str(path))

        target = self.target.rstrip("/")
        return str(path) == target or str(path).startswith(target + "/")


class FileMatcher:
    """
    Expands secret patterns into the set of existing files under a root.

    Every traversal prunes the ignored directories, and errors while
    expanding one pattern never abort the remaining ones.
    """

    def __init__(self, root_path: Path, ignored_dirs: Iterable[str] | None = None):
        """
        Initialize the FileMatcher.

        Args:
            root_path: Workspace root that patterns are resolved against
            ignored_dirs: Directory names to prune. Defaults to DEFAULT_IGNORED_DIRS.
        """
        self._root_path = Path(root_path).absolute()
        self._ignored_dirs = (
            frozenset(ignored_dirs) if ignored_dirs is not None else DEFAULT_IGNORED_DIRS
        )

    @property
    def root_path(self) -> Path:
        return self._root_path

    def expand_all(self, patterns: Iterable[SecretPattern | str]) -> set[Path]:
        """
        Expand every pattern and return the union of matching files.

        Args:
            patterns: Parsed patterns or raw pattern strings

        Returns:
            Deduplicated set of absolute file paths
        """
        matched: set[Path] = set()
        for pattern in patterns:
            try:
                matched |= self.expand(pattern)
            except OSError as e:
                raw = pattern.raw if isinstance(pattern, SecretPattern) else pattern
                logger.debug(f"Expansion failed for pattern '{raw}': {e}")
        return matched

    def expand(self, pattern: SecretPattern | str) -> set[Path]:
        """
        Expand a single pattern against the filesystem.

        Args:
            pattern: Parsed pattern or raw pattern string

        Returns:
            Set of absolute paths of regular files selected by the pattern
        """
        if isinstance(pattern, str):
            pattern = SecretPattern.parse(pattern)

        if pattern.shape is PatternShape.RECURSIVE_DIR:
            return set(self._expand_recursive_dir(pattern.target))
        if pattern.shape is PatternShape.RECURSIVE_FILE:
            return set(self._expand_recursive_file(pattern))
        return set(self._expand_workspace(pattern))

    def is_ignored(self, path: Path) -> bool:
        """Check if any component of path below the root is an ignored directory."""
        try:
            rel_parts = Path(path).relative_to(self._root_path).parts
        except ValueError:
            return False
        return any(part in self._ignored_dirs for part in rel_parts)

    def relative_posix(self, path: Path) -> str:
        """Return path relative to the root with forward slashes."""
        return Path(path).relative_to(self._root_path).as_posix()

    def _expand_recursive_dir(self, name: str) -> Iterator[Path]:
        if not name:
            return
        for dirpath, dirnames, _ in self._walk(self._root_path):
            for dirname in dirnames:
                if dirname == name:
                    yield from self._files_under(dirpath / dirname)

    def _expand_recursive_file(self, pattern: SecretPattern) -> Iterator[Path]:
        if not pattern.target:
            return
        for dirpath, _, filenames in self._walk(self._root_path):
            for filename in filenames:
                candidate = dirpath / filename
                if pattern.matches(self.relative_posix(candidate)) and candidate.is_file():
                    yield candidate

    def _expand_workspace(self, pattern: SecretPattern) -> Iterator[Path]:
        if not pattern.target:
            return
        if pattern.escapes_root:
            logger.debug(f"Skipping pattern outside the workspace: {pattern.raw}")
            return

        if pattern.has_wildcard:
            # Single-level shell-style expansion; "**" behaves like "*"
            base = glob.escape(str(self._root_path))
            for match in sorted(glob.glob(f"{base}/{pattern.target}")):
                yield from self._files_at(Path(match))
            return

        yield from self._files_at(self._root_path / pattern.target)

    def _files_at(self, path: Path) -> Iterator[Path]:
        """Yield path itself if it is a file, or every file under it if a directory."""
        if self.is_ignored(path):
            logger.debug(f"Skipping ignored path: {path}")
            return
        if path.is_file():
            yield path
        elif path.is_dir():
            yield from self._files_under(path)

    def _files_under(self, directory: Path) -> Iterator[Path]:
        for dirpath, _, filenames in self._walk(directory):
            for filename in filenames:
                candidate = dirpath / filename
                if candidate.is_file():
                    yield candidate

    def _walk(self, start: Path) -> Iterator[tuple[Path, list[str], list[str]]]:
        """Walk a directory tree top-down, pruning ignored directories in place."""
        for dirpath, dirnames, filenames in start.walk(on_error=self._log_walk_error):
            dirnames[:] = sorted(d for d in dirnames if d not in self._ignored_dirs)
            yield dirpath, dirnames, sorted(filenames)

    @staticmethod
    def _log_walk_error(error: OSError) -> None:
        logger.debug(f"Error scanning directory: {error}")
