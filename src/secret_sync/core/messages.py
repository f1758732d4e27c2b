"""
User-facing message catalogs (English and Japanese).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SyncMessages:
    """Messages for the secret sync check report."""

    title: str
    no_settings: str
    no_compose: str
    all_synced: str
    missing_header: str
    missing_footer: tuple[str, ...]
    action: str
    action_lines: tuple[str, ...]
    no_deny: str
    no_files: str
    ignored_header: tuple[str, ...]


@dataclass(frozen=True)
class CompareMessages:
    """Messages for the compose consistency report."""

    title: str
    match: str
    mismatch: str
    devcontainer: str
    cli_sandbox: str
    volumes: str
    tmpfs: str
    only_in: str
    hint: str
    file_not_found: str
    action: str
    action_lines: tuple[str, ...]


# The ignored-files header is printed in both languages regardless of locale
_IGNORED_HEADER = (
    "Ignored files (matched sync-ignore patterns):",
    "無視されたファイル (sync-ignore パターンにマッチ):",
)

SYNC_MESSAGES: dict[str, SyncMessages] = {
    "en": SyncMessages(
        title="🔄 Secret Config Sync Check",
        no_settings="Claude settings file not found",
        no_compose="docker-compose.yml not found",
        all_synced="✅ All secret files are configured in docker-compose.yml",
        missing_header="⚠️  The following files are NOT configured in docker-compose.yml:",
        missing_footer=(
            "These files are blocked in one or more AI settings but",
            "not configured in docker-compose.yml volume mounts.",
            "AI may be able to read these files inside DevContainer or CLI Sandbox.",
        ),
        action="Action required:",
        action_lines=(
            "  Manually edit docker-compose.yml (on host OS)",
            "  Or run: .sandbox/scripts/sync-secrets.sh (in shell environment)",
            "  If not secret: add pattern to .sandbox/config/sync-ignore",
        ),
        no_deny="No file patterns in AI settings",
        no_files="No matching files found",
        ignored_header=_IGNORED_HEADER,
    ),
    "ja": SyncMessages(
        title="🔄 シークレット設定同期チェック",
        no_settings="Claude 設定ファイルが見つかりません",
        no_compose="docker-compose.yml が見つかりません",
        all_synced="✅ すべての秘匿ファイルが docker-compose.yml に設定されています",
        missing_header="⚠️  以下のファイルが docker-compose.yml に未設定です:",
        missing_footer=(
            "これらのファイルはいずれかの AI設定でブロックされていますが、",
            "docker-compose.yml のボリュームマウントに設定されていません。",
            "DevContainer や CLI Sandbox 内では AI がこれらのファイルを読める可能性があります。",
        ),
        action="対処方法:",
        action_lines=(
            "  手動で docker-compose.yml を編集する（ホストOS側で）",
            "  または: .sandbox/scripts/sync-secrets.sh を実行（シェル環境で）",
            "  秘匿不要なら: .sandbox/config/sync-ignore にパターンを追加",
        ),
        no_deny="AI設定にファイルパターンがありません",
        no_files="該当するファイルが見つかりませんでした",
        ignored_header=_IGNORED_HEADER,
    ),
}

COMPARE_MESSAGES: dict[str, CompareMessages] = {
    "en": CompareMessages(
        title="🔍 Secret Config Consistency Check",
        match="✅ Secret hiding config matches in both environments",
        mismatch="⚠️  Secret hiding config mismatch detected",
        devcontainer="DevContainer",
        cli_sandbox="CLI Sandbox",
        volumes="/dev/null mounts (volumes)",
        tmpfs="tmpfs mounts",
        only_in="only in:",
        hint="Please sync both docker-compose.yml files:",
        file_not_found="File not found:",
        action="How to fix:",
        action_lines=(
            "  Manually edit docker-compose.yml (on host OS)",
            "  Or run: .sandbox/scripts/sync-compose-secrets.sh (inside this environment)",
        ),
    ),
    "ja": CompareMessages(
        title="🔍 秘匿設定の整合性チェック",
        match="✅ 両環境の秘匿設定は一致しています",
        mismatch="⚠️  秘匿設定に差異があります",
        devcontainer="DevContainer",
        cli_sandbox="CLI Sandbox",
        volumes="/dev/null マウント (volumes)",
        tmpfs="tmpfs マウント",
        only_in="のみに存在:",
        hint="両方の docker-compose.yml を同期してください:",
        file_not_found="ファイルが見つかりません:",
        action="対処方法:",
        action_lines=(
            "  手動で docker-compose.yml を編集する（ホストOS側で）",
            "  または: .sandbox/scripts/sync-compose-secrets.sh を実行（この環境内で）",
        ),
    ),
}


def get_sync_messages(language: str = "en") -> SyncMessages:
    return SYNC_MESSAGES.get(language, SYNC_MESSAGES["en"])


def get_compare_messages(language: str = "en") -> CompareMessages:
    return COMPARE_MESSAGES.get(language, COMPARE_MESSAGES["en"])
