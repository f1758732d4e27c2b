"""
Plain-text report rendering.

Renderers return lists of lines so they can be tested without a console;
the CLI prints them.
"""

from collections.abc import Iterable
from pathlib import Path

from secret_sync.core.compare import ComposeComparison, MountDiff
from secret_sync.core.config import Verbosity
from secret_sync.core.messages import CompareMessages, SyncMessages, get_sync_messages
from secret_sync.core.models import SyncResult, SyncStatus

SEPARATOR = "━" * 60

SYNC_PREFIX = "✓ Secret sync: "


def title_lines(title: str, gap: bool = True) -> list[str]:
    lines = ["", SEPARATOR, title, SEPARATOR]
    if gap:
        lines.append("")
    return lines


def footer_lines() -> list[str]:
    return [SEPARATOR, ""]


def relative_display(path: Path, root: Path) -> str:
    """Show path relative to the workspace root when it lies below it."""
    try:
        return Path(path).relative_to(root).as_posix()
    except ValueError:
        return str(path)


def file_bullets(paths: Iterable[Path], root: Path) -> list[str]:
    return [f"   📄 {relative_display(p, root)}" for p in paths]


def _status_message(status: SyncStatus, messages: SyncMessages) -> str:
    return {
        SyncStatus.NO_SETTINGS: messages.no_settings,
        SyncStatus.NO_COMPOSE: messages.no_compose,
        SyncStatus.NO_PATTERNS: messages.no_deny,
        SyncStatus.NO_FILES: messages.no_files,
    }[status]


def _missing_block(result: SyncResult, messages: SyncMessages, root: Path) -> list[str]:
    return [
        messages.missing_header,
        "",
        *file_bullets(result.missing, root),
        "",
        *messages.missing_footer,
        "",
        messages.action,
        *messages.action_lines,
    ]


def _ignored_block(result: SyncResult, messages: SyncMessages, root: Path) -> list[str]:
    if not result.ignored:
        return []
    return ["", *messages.ignored_header, *file_bullets(result.ignored, root)]


def render_sync_report(
    result: SyncResult,
    verbosity: Verbosity,
    root: Path,
    messages: SyncMessages | None = None,
    title_gap: bool = True,
) -> list[str]:
    """
    Render a secret sync result.

    Args:
        result: Check result
        verbosity: QUIET, SUMMARY or VERBOSE
        root: Workspace root used to shorten paths
        messages: Message catalog (English when None)
        title_gap: Add a blank line below the title banner

    Returns:
        Output lines (possibly empty)
    """
    messages = messages or get_sync_messages()

    if result.status is not SyncStatus.CHECKED:
        if verbosity is Verbosity.QUIET:
            return []
        return [SYNC_PREFIX + _status_message(result.status, messages)]

    missing = result.missing

    if verbosity is Verbosity.QUIET:
        if not missing:
            return []
        return [
            f"⚠️  {len(missing)} files missing from docker-compose.yml",
            *file_bullets(missing, root),
        ]

    if verbosity is Verbosity.SUMMARY:
        if not missing:
            return [
                f"{SYNC_PREFIX}all configured "
                f"({result.checked_count} checked, {len(result.ignored)} ignored)"
            ]
        return ["", *_missing_block(result, messages, root), ""]

    lines = title_lines(messages.title, gap=title_gap)
    if missing:
        lines.extend(_missing_block(result, messages, root))
    else:
        lines.append(messages.all_synced)
    lines.extend(_ignored_block(result, messages, root))
    lines.extend(footer_lines())
    return lines


def _diff_entries(
    diff: MountDiff,
    messages: CompareMessages,
    devcontainer_name: str,
    cli_name: str,
    spaced: bool = False,
) -> list[str]:
    groups = [
        (messages.devcontainer, devcontainer_name, diff.only_in_devcontainer),
        (messages.cli_sandbox, cli_name, diff.only_in_cli),
    ]
    lines = []
    for label, name, entries in groups:
        if not entries:
            continue
        if spaced:
            lines.append("")
        lines.append(f"   {label} {messages.only_in} ({name})")
        lines.extend(f"      - {entry}" for entry in entries)
    return lines


def render_compare_report(
    comparison: ComposeComparison,
    verbosity: Verbosity,
    messages: CompareMessages,
    title_gap: bool = True,
) -> list[str]:
    """
    Render a compose consistency comparison.

    Args:
        comparison: Comparison of the DevContainer and CLI Sandbox compose files
        verbosity: QUIET, SUMMARY or VERBOSE
        messages: Message catalog
        title_gap: Add a blank line below the title banner

    Returns:
        Output lines (possibly empty)
    """
    if comparison.missing_files:
        return [f"{messages.file_not_found} {path}" for path in comparison.missing_files]

    categories = [
        (messages.volumes, comparison.volumes),
        (messages.tmpfs, comparison.tmpfs),
    ]
    names = (comparison.devcontainer_name, comparison.cli_name)

    if verbosity is Verbosity.QUIET:
        if comparison.matches:
            return []
        lines = [f"⚠️  {messages.mismatch}"]
        lines.extend(f"   - {label}" for label, diff in categories if not diff.matches)
        return lines

    if verbosity is Verbosity.SUMMARY:
        if comparison.matches:
            return [f"✓ {messages.match}"]
        lines = ["", messages.mismatch, ""]
        for label, diff in categories:
            if diff.matches:
                continue
            lines.append(f"📁 {label}")
            lines.extend(_diff_entries(diff, messages, *names))
            lines.append("")
        lines.extend([messages.action, *messages.action_lines, ""])
        return lines

    lines = title_lines(messages.title, gap=title_gap)
    for label, diff in categories:
        lines.append(f"📁 {label}")
        if diff.matches:
            lines.append("   ✅ Match")
        else:
            lines.append("   ⚠️  Mismatch")
            lines.extend(_diff_entries(diff, messages, *names, spaced=True))
        lines.append("")

    if comparison.matches:
        lines.append(messages.match)
    else:
        lines.extend(
            [
                messages.mismatch,
                "",
                messages.hint,
                f"  📄 {comparison.devcontainer_path}",
                f"  📄 {comparison.cli_path}",
                "",
                messages.action,
                *messages.action_lines,
            ]
        )
    lines.extend(footer_lines())
    return lines
