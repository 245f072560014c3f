"""HTTP client utilities with consistent user agent."""

from typing import Optional

import requests

from . import __version__

USER_AGENT = f"glicense/{__version__} (+https://github.com/ribice/glice)"

# pkg.go.dev serves a reduced page to unknown clients, so the page fetch
# identifies itself as a desktop browser.
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/58.0.3029.110 Safari/537.3"
)

DEFAULT_TIMEOUT = 10  # seconds


def get_default_headers(token: Optional[str] = None, accept: Optional[str] = None) -> dict:
    """
    Get default HTTP headers with user agent.

    Args:
        token: Optional bearer token to include
        accept: Optional Accept header value (e.g., "application/vnd.github+json")

    Returns:
        Dictionary of HTTP headers
    """
    headers = {"User-Agent": USER_AGENT}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    if accept:
        headers["Accept"] = accept
    return headers


def create_session() -> requests.Session:
    """Create a requests session carrying the default headers.

    Credentials are never put on the session; sources that talk to an
    authenticated API add them per request.
    """
    session = requests.Session()
    session.headers.update(get_default_headers())
    return session
