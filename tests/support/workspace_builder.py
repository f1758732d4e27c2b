"""Helpers for building throwaway sandbox workspaces in tests."""

import json
from collections.abc import Iterable
from pathlib import Path

from secret_sync.core.config import SyncConfig, load_config


class WorkspaceBuilder:
    """Creates the settings, compose and secret files a check reads."""

    def __init__(self, root: Path):
        self.root = Path(root).absolute()
        self.root.mkdir(parents=True, exist_ok=True)

    def abs(self, rel_path: str) -> str:
        return str(self.root / rel_path)

    def file(self, rel_path: str, content: str = "") -> Path:
        path = self.root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def settings(self, deny: Iterable[str], allow: Iterable[str] = ()) -> Path:
        document = {"permissions": {"deny": list(deny), "allow": list(allow)}}
        return self.file(".claude/settings.json", json.dumps(document, indent=2))

    def compose(
        self,
        devnull: Iterable[str] = (),
        readonly: Iterable[str] = (),
        cli: bool = False,
    ) -> Path:
        """
        Write a docker-compose.yml.

        devnull and readonly take workspace-relative paths and are written
        as absolute mount lines.
        """
        service = "cli-sandbox" if cli else "ai-sandbox"
        lines = [
            "services:",
            f"  {service}:",
            "    volumes:",
            "      - ..:/workspace:cached",
        ]
        lines.extend(f"      - /dev/null:{self.abs(p)}:ro" for p in devnull)
        lines.append("    tmpfs:")
        lines.extend(f"      - {self.abs(p)}:ro" for p in readonly)
        lines.append("    environment:")
        lines.append("      - SANDBOX_ENV=cli_claude" if cli else "      - SANDBOX_ENV=devcontainer")
        target = "cli_sandbox/docker-compose.yml" if cli else ".devcontainer/docker-compose.yml"
        return self.file(target, "\n".join(lines) + "\n")

    def sync_ignore(self, *patterns: str) -> Path:
        return self.file(".sandbox/config/sync-ignore", "\n".join(patterns) + "\n")

    def config(self, **env: str) -> SyncConfig:
        environ = {"WORKSPACE": str(self.root), **env}
        return load_config(environ)

    def env(self, **env: str) -> dict[str, str]:
        """Environment for CLI runs against this workspace."""
        return {
            "WORKSPACE": str(self.root),
            "LANG": "C.UTF-8",
            "LC_ALL": "",
            "SANDBOX_ENV": "",
            "STARTUP_VERBOSITY": "",
            **env,
        }
