"""Source registry for managing license source plugins."""

from typing import Any, Dict, List, Optional

from glicense._resolution.models import Repository
from glicense.logging_config import logger

from .protocol import LicenseSource


class SourceRegistry:
    """
    Registry for license source plugins.

    Sources are asked in registration order; the first one that supports
    a repository's host handles it.

    Example:
        registry = SourceRegistry()
        registry.register(GitHubLicenseSource())
        registry.register(PkgGoDevSource())

        source = registry.get_source_for(repository)
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._sources: List[LicenseSource] = []

    def register(self, source: LicenseSource) -> None:
        """
        Register a license source.

        Args:
            source: LicenseSource implementation to register
        """
        self._sources.append(source)
        logger.debug(f"Registered license source: {source.name}")

    def get_source_for(self, repository: Repository) -> Optional[LicenseSource]:
        """
        Find the source that handles a repository.

        Args:
            repository: Resolved repository

        Returns:
            The first registered source supporting it, or None
        """
        for source in self._sources:
            if source.supports(repository):
                return source
        return None

    def list_sources(self) -> List[Dict[str, Any]]:
        """List registered sources by name."""
        return [{"name": s.name} for s in self._sources]

    def clear(self) -> None:
        """Remove all registered sources."""
        self._sources.clear()
