"""
Compose consistency comparison.

The DevContainer and the CLI Sandbox each have a docker-compose.yml, and
both must hide the same secrets.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from secret_sync.core.compose import extract_devnull_mounts, extract_tmpfs_mounts

logger = logging.getLogger(__name__)


@dataclass
class MountDiff:
    """Entries of one mount category present in only one compose file."""

    only_in_devcontainer: list[str] = field(default_factory=list)
    only_in_cli: list[str] = field(default_factory=list)

    @property
    def matches(self) -> bool:
        return not self.only_in_devcontainer and not self.only_in_cli

    @classmethod
    def between(cls, devcontainer: list[str], cli: list[str]) -> "MountDiff":
        dev_set, cli_set = set(devcontainer), set(cli)
        return cls(
            only_in_devcontainer=sorted(dev_set - cli_set),
            only_in_cli=sorted(cli_set - dev_set),
        )


@dataclass
class ComposeComparison:
    """
    Result of comparing the two compose files.

    Attributes:
        devcontainer_name: Display name of the DevContainer compose file
        cli_name: Display name of the CLI Sandbox compose file
        devcontainer_path: Full path of the DevContainer compose file
        cli_path: Full path of the CLI Sandbox compose file
        volumes: Differences in /dev/null file masks
        tmpfs: Differences in read-only directory masks
        missing_files: Compose files that do not exist (comparison skipped)
    """

    devcontainer_name: str
    cli_name: str
    devcontainer_path: Path
    cli_path: Path
    volumes: MountDiff = field(default_factory=MountDiff)
    tmpfs: MountDiff = field(default_factory=MountDiff)
    missing_files: list[Path] = field(default_factory=list)

    @property
    def matches(self) -> bool:
        return not self.missing_files and self.volumes.matches and self.tmpfs.matches


def _display_name(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


def compare_compose_files(
    devcontainer_path: Path,
    cli_path: Path,
    root_path: Path,
) -> ComposeComparison:
    """
    Compare the secret-hiding mounts of two compose files.

    Args:
        devcontainer_path: DevContainer docker-compose.yml
        cli_path: CLI Sandbox docker-compose.yml
        root_path: Workspace root; tmpfs masks must live under it

    Returns:
        ComposeComparison
    """
    devcontainer_path = Path(devcontainer_path)
    cli_path = Path(cli_path)
    root_path = Path(root_path)

    comparison = ComposeComparison(
        devcontainer_name=_display_name(devcontainer_path, root_path),
        cli_name=_display_name(cli_path, root_path),
        devcontainer_path=devcontainer_path,
        cli_path=cli_path,
    )

    texts = []
    for path in (devcontainer_path, cli_path):
        if not path.is_file():
            comparison.missing_files.append(path)
            continue
        try:
            texts.append(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Error reading compose file {path}: {e}")
            comparison.missing_files.append(path)

    if comparison.missing_files:
        return comparison

    dev_text, cli_text = texts
    comparison.volumes = MountDiff.between(
        extract_devnull_mounts(dev_text), extract_devnull_mounts(cli_text)
    )
    comparison.tmpfs = MountDiff.between(
        extract_tmpfs_mounts(dev_text, root_path), extract_tmpfs_mounts(cli_text, root_path)
    )
    return comparison
