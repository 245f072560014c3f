"""Rich console output for glicense.

Status output (banner, lookup summary, failures) goes to stderr through
the shared console. Reports are written to their own stream by
:mod:`glicense.report`.
"""

import os
from typing import Dict

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

IS_GITHUB_ACTIONS = os.getenv("GITHUB_ACTIONS") == "true"

custom_theme = Theme(
    {
        "success": "bold green",
        "error": "bold red",
        "metric": "cyan",
    }
)

# Actions logs render ANSI colors but are not a TTY
console = Console(
    theme=custom_theme,
    stderr=True,
    force_terminal=IS_GITHUB_ACTIONS or None,
)


def print_banner(version: str = "unknown") -> None:
    """Print the tool name and version."""
    label = f"v{version}" if version[:1].isdigit() else version
    console.print(f"[bold blue]glicense[/bold blue] [magenta]{label}[/magenta] - Go dependency licenses")


def print_enrichment_summary(stats: Dict[str, int]) -> None:
    """
    Print how many license lookups succeeded, failed or had no source.

    Rows with a zero count are left out; nothing is printed for an
    empty run.

    Args:
        stats: Statistics from Enricher.last_stats
    """
    total = stats.get("total", 0)
    if not total:
        return

    table = Table(title="License Summary", show_header=False)
    table.add_column(style="metric")
    table.add_column(justify="right")
    table.add_row("Dependencies enriched", f"{stats.get('enriched', 0)}/{total}")
    for label, key in (("Failed lookups", "failed"), ("Skipped (no license source)", "skipped")):
        if stats.get(key):
            table.add_row(label, str(stats[key]))

    console.print(table)


def print_final_failure(message: str) -> None:
    """Report a fatal error, as a workflow annotation when running in GitHub Actions."""
    if IS_GITHUB_ACTIONS:
        print(f"::error title=glicense failed::{message}")
    else:
        console.print(f"[error]glicense failed:[/error] {message}")
