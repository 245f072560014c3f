"""Enricher: concurrent license lookup for resolved repositories."""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Dict, List, Optional

import requests

from glicense._resolution.models import Repository
from glicense.exceptions import APIError, ConfigurationError
from glicense.http_client import create_session
from glicense.logging_config import logger

from .registry import SourceRegistry
from .sources import GitHubLicenseSource, PkgGoDevSource

MAX_CONCURRENT_LOOKUPS = 5

NO_API_KEY_MESSAGE = "cannot use thanks feature without github api key"

# Outcomes of a single lookup
ENRICHED = "enriched"
FAILED = "failed"
SKIPPED = "skipped"


def create_default_registry(token: Optional[str] = None, star: bool = False) -> SourceRegistry:
    """
    Create a SourceRegistry with the default license sources.

    - GitHubLicenseSource - github.com repositories (and gopkg.in redirects)
    - PkgGoDevSource - every module resolved to a pkg.go.dev page

    gitlab.com and bitbucket.org repositories are resolved but have no
    license source; they are reported without a license.

    Args:
        token: Optional GitHub token
        star: Star GitHub repositories after a successful lookup

    Returns:
        Configured SourceRegistry
    """
    registry = SourceRegistry()
    registry.register(GitHubLicenseSource(token=token, star=star))
    registry.register(PkgGoDevSource())
    return registry


class Enricher:
    """
    Looks up licenses for many repositories with bounded concurrency.

    One task is dispatched per repository and at most
    ``max_workers`` lookups are in flight at any time. Every task owns
    its repository exclusively. A failed lookup is logged and counted;
    it never stops the other lookups and there are no retries.

    Example:
        with Enricher(token=os.getenv("GITHUB_API_KEY")) as enricher:
            enricher.enrich(repositories)
            print(enricher.last_stats)
    """

    def __init__(
        self,
        token: Optional[str] = None,
        star: bool = False,
        max_workers: int = MAX_CONCURRENT_LOOKUPS,
        registry: Optional[SourceRegistry] = None,
    ) -> None:
        """
        Initialize the Enricher.

        Args:
            token: Optional GitHub token
            star: Star GitHub repositories as a thank-you (needs a token)
            max_workers: Maximum concurrent lookups
            registry: Optional SourceRegistry. If not provided, creates
                      the default registry.

        Raises:
            ConfigurationError: If star is requested without a token
        """
        if star and not token:
            raise ConfigurationError(NO_API_KEY_MESSAGE)
        if max_workers < 1:
            raise ConfigurationError("max_workers must be at least 1")

        self._registry = registry or create_default_registry(token=token, star=star)
        self._max_workers = max_workers
        self._session: Optional[requests.Session] = None
        self.last_stats: Dict[str, int] = {}

    @property
    def registry(self) -> SourceRegistry:
        """Get the source registry."""
        return self._registry

    def _get_session(self) -> requests.Session:
        """Get or create a requests session."""
        if self._session is None:
            self._session = create_session()
        return self._session

    def close(self) -> None:
        """Close the requests session."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self) -> "Enricher":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def enrich_one(self, repository: Repository, session: Optional[requests.Session] = None) -> str:
        """
        Look up the license of a single repository.

        Args:
            repository: Repository to enrich in place
            session: Optional session, defaults to the enricher's own

        Returns:
            ENRICHED, FAILED or SKIPPED

        Raises:
            APIError: If an authoritative source fails
        """
        source = self._registry.get_source_for(repository)
        if source is None:
            logger.debug(f"No license source for {repository.name} (host: {repository.host or 'unresolved'})")
            return SKIPPED

        found = source.fetch(repository, session or self._get_session())
        return ENRICHED if found else FAILED

    def enrich(self, repositories: List[Repository]) -> List[Repository]:
        """
        Look up licenses for all repositories.

        Blocks until every lookup has finished, whatever its outcome.
        A Repository listed more than once (the resolver hands out one
        object per module path) is looked up by a single task.

        Args:
            repositories: Resolved repositories, enriched in place

        Returns:
            The same list, in its original order
        """
        unique = list({id(repository): repository for repository in repositories}.values())
        stats = {"total": len(unique), ENRICHED: 0, FAILED: 0, SKIPPED: 0}
        session = self._get_session()
        gate = threading.BoundedSemaphore(self._max_workers)
        futures: List[Future] = []

        with ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="glicense") as executor:
            for repository in unique:
                logger.info(f"Fetching license for: {repository.url or repository.name}")
                gate.acquire()
                try:
                    futures.append(executor.submit(self._run, repository, session, gate))
                except BaseException:
                    gate.release()
                    raise

        for future in futures:
            stats[future.result()] += 1

        self.last_stats = stats
        logger.info(
            f"License lookup finished: {stats[ENRICHED]} enriched, {stats[FAILED]} failed, {stats[SKIPPED]} skipped"
        )
        return repositories

    def _run(self, repository: Repository, session: requests.Session, gate: threading.BoundedSemaphore) -> str:
        try:
            return self.enrich_one(repository, session)
        except APIError as e:
            logger.warning(str(e))
            return FAILED
        except Exception as e:
            logger.error(f"Unexpected error fetching license for {repository.name}: {e}")
            return FAILED
        finally:
            gate.release()
