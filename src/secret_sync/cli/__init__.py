"""
CLI for secret-sync.

Checks that files hidden from AI assistants are also hidden from the
container, and that both compose files hide the same secrets.
"""

import logging

import typer

from secret_sync.cli.ui import create_console, print_lines
from secret_sync.core.checker import SecretSyncChecker
from secret_sync.core.compare import compare_compose_files
from secret_sync.core.config import LoggingConfig, load_config
from secret_sync.core.messages import get_compare_messages, get_sync_messages
from secret_sync.core.report import render_compare_report, render_sync_report

console = create_console()

app = typer.Typer(
    name="secret-sync",
    help="Secret sync checks for the AI sandbox",
    add_completion=False,
)


def _configure_logging(config: LoggingConfig) -> None:
    """Send diagnostic logs to stderr at the configured level."""
    level = logging.getLevelNamesMapping().get(config.level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format=config.format)
    logging.getLogger("secret_sync").setLevel(level)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """Run the secret sync check when no command is given."""
    if ctx.invoked_subcommand is None:
        check()


@app.command()
def check():
    """Check that AI-blocked files are hidden in docker-compose.yml."""
    cfg = load_config()
    _configure_logging(cfg.logging)

    result = SecretSyncChecker(cfg).run()

    lines = render_sync_report(
        result,
        cfg.verbosity,
        cfg.workspace,
        get_sync_messages(cfg.language),
        title_gap=cfg.title_gap,
    )
    print_lines(console, lines)


@app.command()
def compare():
    """Compare secret mounts between the DevContainer and CLI Sandbox compose files."""
    cfg = load_config()
    _configure_logging(cfg.logging)

    comparison = compare_compose_files(
        cfg.devcontainer_compose_path,
        cfg.cli_compose_path,
        cfg.workspace,
    )

    lines = render_compare_report(
        comparison,
        cfg.compare_verbosity,
        get_compare_messages(cfg.language),
        title_gap=cfg.title_gap,
    )
    print_lines(console, lines)

    if not comparison.matches:
        raise typer.Exit(1)
