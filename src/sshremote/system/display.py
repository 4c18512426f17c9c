# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/sshremote/system/display.py

"""Rich rendering of remotes and commits for the command line."""

from typing import Any

import orjson
from rich.console import Console
from rich.table import Table

from sshremote.commits import Commit
from sshremote.config.properties import REDACTED


def display_properties(console: Console, properties: dict[str, Any]) -> None:
    """Show a remote property map, password redacted."""
    table = Table(title="Remote properties")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    for name, value in properties.items():
        shown = REDACTED if name == "password" else str(value)
        table.add_row(name, shown)

    console.print(table)


def display_commit_list(console: Console, commits: list[Commit], quiet: bool = False) -> None:
    if quiet:
        for commit in commits:
            console.print(commit.id)
        return

    if not commits:
        console.print("[yellow]No commits found.[/yellow]")
        return

    table = Table(title=f"{len(commits)} commit(s)")
    table.add_column("Commit", style="cyan")
    table.add_column("Timestamp", style="green")
    table.add_column("Tags", style="magenta")

    for commit in commits:
        tags = ", ".join(
            key if value in (None, "") else f"{key}={value}"
            for key, value in commit.tags.items()
        )
        table.add_row(commit.id, str(commit.timestamp or ""), tags)

    console.print(table)


def commits_to_json(commits: list[Commit]) -> str:
    payload = [commit.model_dump() for commit in commits]
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8")


def display_commit(console: Console, commit: Commit) -> None:
    console.print(f"[bold]commit[/bold] {commit.id}")
    console.print_json(orjson.dumps(commit.properties).decode("utf-8"))
