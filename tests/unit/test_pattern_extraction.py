"""Tests for secret pattern extraction from AI settings and ignore files."""

import logging

from secret_sync.core.patterns import (
    collect_patterns,
    extract_deny_patterns,
    find_ai_ignore_files,
    parse_read_entry,
    read_ignore_file_patterns,
)


class TestParseReadEntry:
    def test_read_entry_is_unwrapped(self):
        assert parse_read_entry("Read(demo-app/.env)") == "demo-app/.env"

    def test_glob_is_kept_verbatim(self):
        assert parse_read_entry("Read(**/secrets/**)") == "**/secrets/**"

    def test_other_permissions_are_rejected(self):
        assert parse_read_entry("Bash(rm -rf /)") is None
        assert parse_read_entry("Write(.env)") is None
        assert parse_read_entry("Read()") is None
        assert parse_read_entry(" Read(.env)") is None


class TestExtractDenyPatterns:
    def test_only_read_entries_are_extracted(self, tmp_path):
        settings = tmp_path / "settings.json"
        settings.write_text(
            '{"permissions": {"deny": ["Read(.env)", "Bash(curl:*)", "Read(**/*.pem)"]}}',
            encoding="utf-8",
        )

        assert extract_deny_patterns(settings) == ["**/*.pem", ".env"]

    def test_duplicates_are_removed(self, tmp_path):
        settings = tmp_path / "settings.json"
        settings.write_text(
            '{"permissions": {"deny": ["Read(.env)", "Read(.env)"]}}', encoding="utf-8"
        )

        assert extract_deny_patterns(settings) == [".env"]

    def test_missing_file_yields_nothing(self, tmp_path):
        assert extract_deny_patterns(tmp_path / "absent.json") == []

    def test_missing_deny_list_yields_nothing(self, tmp_path):
        settings = tmp_path / "settings.json"
        settings.write_text('{"permissions": {"allow": ["Read(.env)"]}}', encoding="utf-8")

        assert extract_deny_patterns(settings) == []

    def test_non_string_entries_are_skipped(self, tmp_path):
        settings = tmp_path / "settings.json"
        settings.write_text(
            '{"permissions": {"deny": [42, null, {"x": 1}, "Read(a.txt)"]}}', encoding="utf-8"
        )

        assert extract_deny_patterns(settings) == ["a.txt"]

    def test_invalid_json_falls_back_to_text_scan(self, tmp_path, caplog):
        settings = tmp_path / "settings.json"
        # Trailing comma makes this invalid JSON
        settings.write_text(
            '{\n  "permissions": {\n    "deny": [\n      "Read(config/db.env)",\n'
            '      "Bash(ls)",\n    ],\n  }\n}\n',
            encoding="utf-8",
        )

        with caplog.at_level(logging.WARNING):
            patterns = extract_deny_patterns(settings)

        assert patterns == ["config/db.env"]
        assert any("not valid JSON" in r.message for r in caplog.records)


class TestReadIgnoreFilePatterns:
    def test_comments_and_blank_lines_are_skipped(self, tmp_path):
        ignore_file = tmp_path / ".aiexclude"
        ignore_file.write_text(
            "# secrets\n\n.env\n   \n**/*.key\n# trailing comment\n", encoding="utf-8"
        )

        assert read_ignore_file_patterns(ignore_file) == [".env", "**/*.key"]

    def test_missing_file_yields_nothing(self, tmp_path):
        assert read_ignore_file_patterns(tmp_path / ".geminiignore") == []


class TestFindAiIgnoreFiles:
    def test_finds_nested_ignore_files(self, tmp_path):
        (tmp_path / "app").mkdir()
        (tmp_path / ".aiexclude").write_text(".env\n", encoding="utf-8")
        (tmp_path / "app" / ".geminiignore").write_text("*.pem\n", encoding="utf-8")

        found = find_ai_ignore_files(tmp_path)

        assert found == sorted([tmp_path / ".aiexclude", tmp_path / "app" / ".geminiignore"])

    def test_skips_node_modules_and_git(self, tmp_path):
        (tmp_path / "node_modules" / "pkg").mkdir(parents=True)
        (tmp_path / ".git").mkdir()
        (tmp_path / "node_modules" / "pkg" / ".aiexclude").write_text("x\n", encoding="utf-8")
        (tmp_path / ".git" / ".geminiignore").write_text("y\n", encoding="utf-8")

        assert find_ai_ignore_files(tmp_path) == []

    def test_skips_sandbox_tooling_directory_by_default(self, tmp_path):
        (tmp_path / ".sandbox" / "config").mkdir(parents=True)
        (tmp_path / ".sandbox" / "config" / ".aiexclude").write_text("x\n", encoding="utf-8")

        assert find_ai_ignore_files(tmp_path) == []

    def test_explicit_ignored_dirs_replace_the_defaults(self, tmp_path):
        (tmp_path / ".sandbox").mkdir()
        (tmp_path / ".sandbox" / ".aiexclude").write_text("x\n", encoding="utf-8")

        found = find_ai_ignore_files(tmp_path, ignored_dirs=["node_modules"])

        assert found == [tmp_path / ".sandbox" / ".aiexclude"]

    def test_gitignore_is_not_an_ai_ignore_file(self, tmp_path):
        (tmp_path / ".gitignore").write_text("node_modules/\n", encoding="utf-8")

        assert find_ai_ignore_files(tmp_path) == []


class TestCollectPatterns:
    def test_union_is_sorted_and_deduplicated(self, tmp_path):
        settings = tmp_path / "settings.json"
        settings.write_text(
            '{"permissions": {"deny": ["Read(.env)", "Read(secrets/**)"]}}', encoding="utf-8"
        )
        aiexclude = tmp_path / ".aiexclude"
        aiexclude.write_text(".env\n**/*.pem\n", encoding="utf-8")
        geminiignore = tmp_path / ".geminiignore"
        geminiignore.write_text("secrets/**\n", encoding="utf-8")

        patterns = collect_patterns(settings, [aiexclude, geminiignore])

        assert patterns == ["**/*.pem", ".env", "secrets/**"]

    def test_ignore_files_alone_provide_patterns(self, tmp_path):
        aiexclude = tmp_path / ".aiexclude"
        aiexclude.write_text("keys/\n", encoding="utf-8")

        assert collect_patterns(tmp_path / "absent.json", [aiexclude]) == ["keys/"]
