"""Module path to repository resolution."""

from .models import Repository
from .resolver import KNOWN_HOSTS, METADATA_HOST, REDIRECT_TARGET, REDIRECTOR_HOST, Resolver

__all__ = [
    "KNOWN_HOSTS",
    "METADATA_HOST",
    "REDIRECTOR_HOST",
    "REDIRECT_TARGET",
    "Repository",
    "Resolver",
]
