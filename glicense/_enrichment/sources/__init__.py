"""License source implementations."""

from .github import GitHubLicenseSource
from .pkggodev import PkgGoDevSource

__all__ = [
    "GitHubLicenseSource",
    "PkgGoDevSource",
]
