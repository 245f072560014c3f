"""Report rendering for enriched repositories.

Three formats are supported:
- table: Rich table, license names in color when the stream is a terminal
- json: array of repository records
- csv: fixed header row followed by one row per repository

Repositories are always written in the order they are given, which is
the order they were resolved in.
"""

import csv
import json
from typing import IO, List, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ._resolution.models import Repository
from .exceptions import ConfigurationError

HEADER_ROW = ["Dependency", "RepoURL", "License", "Version"]

FORMAT_EXTENSIONS = {
    "table": "txt",
    "json": "json",
    "csv": "csv",
}

VALID_FORMATS = tuple(FORMAT_EXTENSIONS)

# Wide enough that rows are never wrapped when the output is a file
_FILE_WIDTH = 1000


def _is_terminal(stream: IO[str]) -> bool:
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        return False


def render_table(repositories: Sequence[Repository], stream: IO[str]) -> None:
    """Write repositories as a Rich table."""
    table = Table(show_header=True, header_style="bold")
    for header in HEADER_ROW:
        table.add_column(header)
    for repo in repositories:
        table.add_row(repo.name, Text(repo.url, style="blue"), repo.shortname, repo.version)

    terminal = _is_terminal(stream)
    console = Console(file=stream, width=None if terminal else _FILE_WIDTH)
    console.print(table)


def render_json(repositories: Sequence[Repository], stream: IO[str]) -> None:
    """Write repositories as a JSON array."""
    json.dump([repo.to_dict() for repo in repositories], stream)
    stream.write("\n")


def render_csv(repositories: Sequence[Repository], stream: IO[str]) -> None:
    """Write repositories as CSV with a header row."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(HEADER_ROW)
    for repo in repositories:
        writer.writerow([repo.name, repo.url, repo.license, repo.version])


_RENDERERS = {
    "table": render_table,
    "json": render_json,
    "csv": render_csv,
}


def render_report(repositories: List[Repository], fmt: str, stream: IO[str]) -> None:
    """
    Render repositories in the requested format.

    Nothing is written when there are no repositories.

    Args:
        repositories: Repositories in resolution order
        fmt: One of "table", "json", "csv"
        stream: Text stream to write to

    Raises:
        ConfigurationError: If the format is unknown
    """
    renderer = _RENDERERS.get(fmt)
    if renderer is None:
        raise ConfigurationError(f"invalid format provided ({fmt}) - allowed ones are [{', '.join(VALID_FORMATS)}]")
    if not repositories:
        return
    renderer(repositories, stream)
