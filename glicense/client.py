"""Client tying manifest parsing, resolution, enrichment and reporting together."""

import os
from pathlib import Path
from typing import IO, List, Optional, Union

from ._enrichment import NO_API_KEY_MESSAGE, Enricher
from ._manifest import manifest_exists, parse_manifest
from ._resolution import Repository, Resolver
from .exceptions import ConfigurationError, ManifestNotFoundError
from .license_files import write_license_files
from .logging_config import logger
from .report import VALID_FORMATS, render_report

GITHUB_TOKEN_ENV = "GITHUB_API_KEY"

VALID_OUTPUTS = ("stdout", "file")


def list_repositories(
    path: Union[str, Path],
    include_indirect: bool = False,
    resolver: Optional[Resolver] = None,
) -> List[Repository]:
    """
    Parse go.mod and resolve every requirement to a repository.

    Args:
        path: Project directory
        include_indirect: Also include ``// indirect`` requirements
        resolver: Resolver to use; a fresh one is created when omitted

    Returns:
        Repositories in manifest order
    """
    modules = parse_manifest(path, include_indirect=include_indirect)
    resolver = resolver or Resolver()
    return resolver.resolve_all(modules)


class Client:
    """
    Dependency license report for one Go module.

    Example:
        client = Client("path/to/project", fmt="csv")
        client.parse_dependencies()
        client.print(sys.stdout)
    """

    def __init__(self, path: Union[str, Path], fmt: str = "table", output: str = "stdout") -> None:
        """
        Raises:
            ConfigurationError: If format or output is invalid
            ManifestNotFoundError: If the project has no go.mod
        """
        if fmt not in VALID_FORMATS:
            raise ConfigurationError(
                f"invalid format provided ({fmt}) - allowed ones are [{', '.join(VALID_FORMATS)}]"
            )
        if output not in VALID_OUTPUTS:
            raise ConfigurationError(
                f"invalid output provided ({output}) - allowed ones are [{', '.join(VALID_OUTPUTS)}]"
            )
        if not manifest_exists(path):
            raise ManifestNotFoundError(f"no go.mod file present in {path}")

        self.path = Path(path)
        self.format = fmt
        self.output = output
        self.dependencies: List[Repository] = []
        self.stats: dict = {}

    def parse_dependencies(
        self,
        include_indirect: bool = False,
        thanks: bool = False,
        token: Optional[str] = None,
    ) -> List[Repository]:
        """
        Resolve and enrich the project's dependencies.

        Args:
            include_indirect: Also include ``// indirect`` requirements
            thanks: Star GitHub dependencies (requires a token)
            token: GitHub token; read from GITHUB_API_KEY when omitted

        Returns:
            Enriched repositories in manifest order

        Raises:
            ConfigurationError: If thanks is requested without a token
            ManifestError: If go.mod cannot be parsed
        """
        if token is None:
            token = os.getenv(GITHUB_TOKEN_ENV) or None
        if thanks and not token:
            raise ConfigurationError(NO_API_KEY_MESSAGE)

        repositories = list_repositories(self.path, include_indirect=include_indirect)
        logger.info(f"Found {len(repositories)} dependencies")

        with Enricher(token=token, star=thanks) as enricher:
            enricher.enrich(repositories)
            self.stats = enricher.last_stats

        self.dependencies = repositories
        return repositories

    def print(self, stream: IO[str]) -> None:
        """Render the report to a text stream."""
        render_report(self.dependencies, self.format, stream)

    def write_licenses_to_file(self) -> List[Path]:
        """Write captured license texts under ``<path>/licenses``."""
        return write_license_files(self.dependencies, self.path)


def print_to(
    path: Union[str, Path],
    fmt: str,
    output: str,
    include_indirect: bool,
    stream: IO[str],
) -> Client:
    """Build a report for a project and write it to stream."""
    client = Client(path, fmt=fmt, output=output)
    client.parse_dependencies(include_indirect=include_indirect)
    client.print(stream)
    return client


def print_report(path: Union[str, Path], include_indirect: bool, stream: IO[str]) -> Client:
    """Write the table report for a project to stream."""
    return print_to(path, "table", "stdout", include_indirect, stream)
