"""Tests for compose mount-rule coverage and mount extraction."""

from pathlib import Path

from secret_sync.core.compose import (
    ComposeFileCoverage,
    extract_devnull_mounts,
    extract_tmpfs_mounts,
)

ROOT = Path("/workspace")


def _coverage(text: str) -> ComposeFileCoverage:
    return ComposeFileCoverage(ROOT / "docker-compose.yml", ROOT, text=text)


class TestExactFileMask:
    def test_devnull_mount_with_ro_covers_file(self):
        coverage = _coverage("    volumes:\n      - /dev/null:/workspace/app/.env:ro\n")

        assert coverage.is_path_covered(ROOT / "app/.env")

    def test_devnull_mount_without_ro_covers_file(self):
        coverage = _coverage("      - /dev/null:/workspace/app/.env\n")

        assert coverage.is_path_covered(ROOT / "app/.env")

    def test_mask_is_exact(self):
        coverage = _coverage("      - /dev/null:/workspace/app/.env:ro\n")

        assert not coverage.is_path_covered(ROOT / "app/.env.local")
        assert not coverage.is_path_covered(ROOT / "other/app/.env")

    def test_dots_in_paths_are_literal(self):
        coverage = _coverage("      - /dev/null:/workspace/app/a.env:ro\n")

        assert not coverage.is_path_covered(ROOT / "app/aXenv")

    def test_commented_mount_is_ignored(self):
        coverage = _coverage("      # - /dev/null:/workspace/app/.env:ro\n")

        assert not coverage.is_path_covered(ROOT / "app/.env")


class TestAncestorDirectoryMask:
    def test_readonly_parent_covers_file(self):
        coverage = _coverage("    tmpfs:\n      - /workspace/app/secrets:ro\n")

        assert coverage.is_path_covered(ROOT / "app/secrets/key.txt")

    def test_readonly_ancestor_covers_deep_file(self):
        coverage = _coverage("      - /workspace/app:ro\n")

        assert coverage.is_path_covered(ROOT / "app/secrets/nested/cert.pem")

    def test_sibling_directory_is_not_covered(self):
        coverage = _coverage("      - /workspace/app/secrets:ro\n")

        assert not coverage.is_path_covered(ROOT / "app/secrets-old/key.txt")

    def test_workspace_root_rule_is_not_consulted(self):
        coverage = _coverage("      - /workspace:ro\n")

        assert not coverage.is_path_covered(ROOT / "app/.env")

    def test_workspace_relative_rule_is_resolved_against_root(self):
        coverage = _coverage("      - secrets:ro\n")

        assert coverage.is_path_covered(ROOT / "secrets/a.txt")

    def test_writable_directory_mount_does_not_cover(self):
        coverage = _coverage("      - /workspace/app/secrets\n")

        assert not coverage.is_path_covered(ROOT / "app/secrets/key.txt")


class TestComposeFile:
    def test_reads_compose_from_disk(self, tmp_path):
        compose = tmp_path / "docker-compose.yml"
        compose.write_text(f"      - /dev/null:{tmp_path}/.env:ro\n", encoding="utf-8")

        coverage = ComposeFileCoverage(compose, tmp_path)

        assert coverage.is_path_covered(tmp_path / ".env")
        assert coverage.devnull_targets == frozenset([str(tmp_path / ".env")])

    def test_unreadable_compose_covers_nothing(self, tmp_path):
        coverage = ComposeFileCoverage(tmp_path / "absent.yml", tmp_path)

        assert not coverage.is_path_covered(tmp_path / ".env")


COMPOSE = """\
services:
  ai-sandbox:
    volumes:
      - ..:/workspace:cached
      - /dev/null:/workspace/b/.env:ro
      - /dev/null:/workspace/a/.env:ro
    tmpfs:
      - /workspace/app/secrets:ro
      - /tmp:rw
      - /workspace/cache
    environment:
      - KEY=/workspace/not-a-mount:ro
"""


class TestExtractMounts:
    def test_devnull_mounts_are_sorted(self):
        assert extract_devnull_mounts(COMPOSE) == [
            "/dev/null:/workspace/a/.env:ro",
            "/dev/null:/workspace/b/.env:ro",
        ]

    def test_tmpfs_mounts_are_limited_to_readonly_workspace_entries(self):
        assert extract_tmpfs_mounts(COMPOSE, "/workspace") == ["/workspace/app/secrets:ro"]

    def test_no_tmpfs_section(self):
        assert extract_tmpfs_mounts("services:\n  x:\n    volumes: []\n", "/workspace") == []
