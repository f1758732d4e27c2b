"""
Secret pattern extraction from AI assistant configuration.

Sources:
- .claude/settings.json: ``permissions.deny`` entries of the form ``Read(<pattern>)``
- .aiexclude / .geminiignore: gitignore-style files, one pattern per line

.gitignore is deliberately not a source: it lists many non-secret paths
(build output, logs, dependencies) that would only add noise.
"""

import json
import logging
import re
from collections.abc import Iterable
from pathlib import Path

from secret_sync.core.config import ScanConfig

logger = logging.getLogger(__name__)

DEFAULT_AI_IGNORE_FILES: tuple[str, ...] = tuple(ScanConfig().ai_ignore_files)

_READ_ENTRY_RE = re.compile(r"^Read\(([^)]+)\)$")

# Used when the settings document is not valid JSON
_QUOTED_READ_ENTRY_RE = re.compile(r'"Read\(([^)"]+)\)"')


def parse_read_entry(entry: str) -> str | None:
    """
    Return the pattern wrapped by a ``Read(...)`` permission entry.

    Args:
        entry: Permission string from the deny list

    Returns:
        The inner pattern, or None if the entry is not a Read() entry
    """
    match = _READ_ENTRY_RE.match(entry)
    if match is None:
        return None
    return match.group(1)


def extract_deny_patterns(settings_path: Path) -> list[str]:
    """
    Extract Read() patterns from a Claude settings document.

    Entries that are not Read() permissions are skipped. If the document
    is not valid JSON, quoted ``"Read(...)"`` tokens are scraped from the
    raw text instead.

    Args:
        settings_path: Path to .claude/settings.json

    Returns:
        Sorted, deduplicated list of patterns (empty if the file is absent)
    """
    settings_path = Path(settings_path)
    if not settings_path.is_file():
        logger.debug(f"Settings file not found: {settings_path}")
        return []

    try:
        content = settings_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Error reading settings file {settings_path}: {e}")
        return []

    try:
        document = json.loads(content)
    except json.JSONDecodeError as e:
        logger.warning(f"Settings file is not valid JSON ({e}); using text extraction")
        return sorted(set(_QUOTED_READ_ENTRY_RE.findall(content)))

    deny = _get_deny_list(document)
    patterns = set()
    for entry in deny:
        if not isinstance(entry, str):
            continue
        pattern = parse_read_entry(entry)
        if pattern is not None:
            patterns.add(pattern)

    return sorted(patterns)


def _get_deny_list(document: object) -> list:
    if not isinstance(document, dict):
        return []
    permissions = document.get("permissions")
    if not isinstance(permissions, dict):
        return []
    deny = permissions.get("deny")
    return deny if isinstance(deny, list) else []


def read_ignore_file_patterns(ignore_path: Path) -> list[str]:
    """
    Read patterns from a gitignore-style file.

    Blank lines and lines starting with # are skipped.

    Args:
        ignore_path: Path to the ignore file

    Returns:
        Patterns in file order; empty if the file is missing or unreadable
    """
    ignore_path = Path(ignore_path)
    if not ignore_path.is_file():
        return []

    try:
        content = ignore_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        logger.warning(f"Invalid UTF-8 encoding in {ignore_path}: {e}")
        return []
    except OSError as e:
        logger.warning(f"Error reading {ignore_path}: {e}")
        return []

    patterns = []
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        patterns.append(line)

    return patterns


def find_ai_ignore_files(
    root_path: Path,
    file_names: Iterable[str] = DEFAULT_AI_IGNORE_FILES,
    ignored_dirs: Iterable[str] | None = None,
) -> list[Path]:
    """
    Find every AI ignore file (.aiexclude, .geminiignore) under root_path.

    Args:
        root_path: Workspace root
        file_names: Ignore file names to look for
        ignored_dirs: Directory names to prune from the search. Defaults to
            the configured scan.ignored_dirs.

    Returns:
        Sorted list of ignore file paths
    """
    root_path = Path(root_path)
    names = frozenset(file_names)
    pruned = frozenset(ScanConfig().ignored_dirs if ignored_dirs is None else ignored_dirs)
    found: list[Path] = []

    if not root_path.is_dir():
        return found

    def _on_error(error: OSError) -> None:
        logger.debug(f"Error scanning directory: {error}")

    for dirpath, dirnames, filenames in root_path.walk(on_error=_on_error):
        dirnames[:] = [d for d in dirnames if d not in pruned]
        for filename in filenames:
            if filename in names and (dirpath / filename).is_file():
                found.append(dirpath / filename)

    return sorted(found)


def collect_patterns(settings_path: Path, ignore_files: Iterable[Path] = ()) -> list[str]:
    """
    Union the deny-list patterns and all ignore-file patterns.

    Args:
        settings_path: Path to .claude/settings.json
        ignore_files: AI ignore files to read

    Returns:
        Sorted list of unique, non-empty patterns
    """
    patterns = set(extract_deny_patterns(settings_path))
    for ignore_file in ignore_files:
        file_patterns = read_ignore_file_patterns(ignore_file)
        if file_patterns:
            logger.debug(f"Loaded {len(file_patterns)} patterns from {ignore_file}")
        patterns.update(file_patterns)

    return sorted(p for p in patterns if p)
