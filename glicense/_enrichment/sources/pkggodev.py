"""pkg.go.dev source for modules without a known source host."""

from typing import Optional

import requests
from bs4 import BeautifulSoup

from glicense._resolution.models import Repository
from glicense._resolution.resolver import METADATA_HOST
from glicense.http_client import BROWSER_USER_AGENT, DEFAULT_TIMEOUT
from glicense.logging_config import logger

from ..licenses import license_color

VERSION_SELECTOR = 'span[data-test-id="UnitHeader-version"]'
LICENSE_SELECTOR = 'span[data-test-id="UnitHeader-licenses"]'
REPO_SELECTOR = ".UnitMeta-repo"

VERSION_LABEL = "Version:"


def _child_text(soup: BeautifulSoup, selector: str) -> Optional[str]:
    """Text of the links inside the element matching selector, or None if absent."""
    element = soup.select_one(selector)
    if element is None:
        return None
    links = element.select("a")
    if not links:
        return None
    return ", ".join(link.get_text(" ", strip=True) for link in links if link.get_text(strip=True))


def parse_version(text: str) -> str:
    """Extract the version from the unit header text.

    The header reads like "Version: v1.2.3 Latest Latest ..."; the first
    word after the label is the version.
    """
    text = text.strip()
    if text.startswith(VERSION_LABEL):
        text = text[len(VERSION_LABEL) :]
    words = text.split()
    return words[0] if words else ""


class PkgGoDevSource:
    """
    License source that reads the pkg.go.dev page of a module.

    pkg.go.dev has no JSON API for licenses, so the module page is fetched
    once (no links are followed) and three header elements are read:
    the displayed version, the license names and the source repository.

    Failures are logged and leave the repository as it was; this source
    never raises for network or page problems.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "pkg.go.dev"

    def supports(self, repository: Repository) -> bool:
        """Check if the repository was resolved to a pkg.go.dev page."""
        return repository.host == METADATA_HOST and bool(repository.url)

    def fetch(self, repository: Repository, session: requests.Session) -> bool:
        """
        Scrape license, version and repository name for a module.

        Args:
            repository: Repository with a pkg.go.dev URL
            session: requests.Session with default headers

        Returns:
            True if the page yielded a version, license or repository name
        """
        try:
            logger.debug(f"Fetching pkg.go.dev page: {repository.url}")
            response = session.get(
                repository.url,
                headers={"User-Agent": BROWSER_USER_AGENT},
                timeout=self._timeout,
            )
        except requests.exceptions.Timeout:
            logger.warning(f"Timeout fetching {repository.url}")
            return False
        except requests.exceptions.RequestException as e:
            logger.warning(f"{repository.url} error: {e}")
            return False

        if response.status_code != 200:
            logger.warning(f"{repository.url} error: HTTP {response.status_code}")
            return False

        try:
            soup = BeautifulSoup(response.text, "html.parser")
        except Exception as e:
            logger.warning(f"Cannot parse {repository.url}: {e}")
            return False

        version_text = _child_text(soup, VERSION_SELECTOR)
        if version_text:
            repository.annotate_version(parse_version(version_text))

        license_name = _child_text(soup, LICENSE_SELECTOR)
        if license_name:
            repository.set_license(license_name, license_color(license_name))
        else:
            logger.debug(f"No license shown on {repository.url}")

        repo_name = _child_text(soup, REPO_SELECTOR)
        if repo_name:
            repository.project = repo_name

        return bool(version_text or license_name or repo_name)
