"""LicenseSource protocol for license lookup plugins."""

from typing import Protocol

import requests

from glicense._resolution.models import Repository


class LicenseSource(Protocol):
    """
    Protocol defining the interface for license source plugins.

    Each source looks up license data for repositories on one kind of
    host and writes it into the Repository it is given. A source is only
    ever handed a repository owned by the calling worker, so it may
    mutate it freely.

    Example:
        class GitHubLicenseSource:
            name = "github.com"

            def supports(self, repository: Repository) -> bool:
                return repository.host == "github.com"

            def fetch(self, repository: Repository, session: requests.Session) -> bool:
                # Call the GitHub license API and fill in repository.license
                ...
    """

    @property
    def name(self) -> str:
        """
        Human-readable name of this source.

        Used for logging and statistics.
        Examples: "github.com", "pkg.go.dev"
        """
        ...

    def supports(self, repository: Repository) -> bool:
        """
        Check if this source can look up the given repository.

        Args:
            repository: Resolved repository

        Returns:
            True if this source handles the repository's host
        """
        ...

    def fetch(self, repository: Repository, session: requests.Session) -> bool:
        """
        Look up license data and store it on the repository.

        Implementations decide how failures surface: an authoritative API
        raises APIError and leaves the repository untouched, a best-effort
        scraper logs and returns False.

        Args:
            repository: Repository to enrich in place
            session: requests.Session with default headers

        Returns:
            True if any license, version or repository data was applied
        """
        ...
