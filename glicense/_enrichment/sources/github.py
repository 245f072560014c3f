"""GitHub license source using the repository license API."""

from typing import Any, Dict, Optional

import requests

from glicense._resolution.models import Repository
from glicense.exceptions import APIError
from glicense.http_client import DEFAULT_TIMEOUT, get_default_headers
from glicense.logging_config import logger

from ..licenses import license_format

GITHUB_API_BASE = "https://api.github.com"
GITHUB_ACCEPT = "application/vnd.github+json"


class GitHubLicenseSource:
    """
    License source for repositories hosted on github.com.

    Calls GET /repos/{owner}/{repo}/license, which returns the detected
    license key and the base64 encoded license file.

    When a token is configured and ``star`` is enabled, the repository is
    also starred as a thank-you. Starring is best effort: its failures are
    logged at debug level and otherwise ignored.
    """

    HOST = "github.com"

    def __init__(self, token: Optional[str] = None, star: bool = False, api_base: str = GITHUB_API_BASE) -> None:
        self._token = token or None
        self._star = star
        self._api_base = api_base.rstrip("/")

    @property
    def name(self) -> str:
        return "github.com"

    @property
    def authenticated(self) -> bool:
        return self._token is not None

    def supports(self, repository: Repository) -> bool:
        """Check if the repository lives on github.com."""
        return repository.host == self.HOST and bool(repository.author) and bool(repository.project)

    def fetch(self, repository: Repository, session: requests.Session) -> bool:
        """
        Fetch the license of a GitHub repository.

        Args:
            repository: Repository with author and project set
            session: requests.Session with default headers

        Returns:
            True when the license was stored on the repository

        Raises:
            APIError: If the API call fails. The repository is left untouched.
        """
        url = f"{self._api_base}/repos/{repository.author}/{repository.project}/license"
        headers = get_default_headers(token=self._token, accept=GITHUB_ACCEPT)

        try:
            logger.debug(f"Fetching GitHub license for: {repository.author}/{repository.project}")
            response = session.get(url, headers=headers, timeout=DEFAULT_TIMEOUT)
        except requests.exceptions.Timeout:
            raise APIError(f"Timeout fetching GitHub license for {repository.name}")
        except requests.exceptions.RequestException as e:
            raise APIError(f"Error fetching GitHub license for {repository.name}: {e}")

        if response.status_code != 200:
            raise APIError(f"Failed to fetch GitHub license for {repository.name}: HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise APIError(f"JSON decode error for GitHub license {repository.name}: {e}")

        key = self._license_key(data)
        if not key:
            raise APIError(f"GitHub returned no license key for {repository.name}")

        fmt = license_format(key)
        repository.set_license(fmt.name, fmt.style)
        repository.text = data.get("content") or ""

        if self._star and self.authenticated:
            self._star_repository(repository, session)

        return True

    @staticmethod
    def _license_key(data: Dict[str, Any]) -> str:
        license_info = data.get("license")
        if not isinstance(license_info, dict):
            return ""
        return license_info.get("key") or ""

    def _star_repository(self, repository: Repository, session: requests.Session) -> None:
        url = f"{self._api_base}/user/starred/{repository.author}/{repository.project}"
        headers = get_default_headers(token=self._token, accept=GITHUB_ACCEPT)
        headers["Content-Length"] = "0"
        try:
            response = session.put(url, headers=headers, timeout=DEFAULT_TIMEOUT)
            if response.status_code != 204:
                logger.debug(f"Starring {repository.author}/{repository.project} returned HTTP {response.status_code}")
        except requests.exceptions.RequestException as e:
            logger.debug(f"Starring {repository.author}/{repository.project} failed: {e}")
