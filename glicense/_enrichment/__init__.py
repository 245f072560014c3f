"""License enrichment for resolved repositories.

Sources are plugins implementing :class:`LicenseSource`; the
:class:`Enricher` dispatches one lookup per repository with at most five
in flight.
"""

from .enricher import (
    ENRICHED,
    FAILED,
    MAX_CONCURRENT_LOOKUPS,
    NO_API_KEY_MESSAGE,
    SKIPPED,
    Enricher,
    create_default_registry,
)
from .licenses import LICENSE_COLORS, LICENSE_FORMATS, license_color, license_format
from .protocol import LicenseSource
from .registry import SourceRegistry

__all__ = [
    "ENRICHED",
    "FAILED",
    "LICENSE_COLORS",
    "LICENSE_FORMATS",
    "MAX_CONCURRENT_LOOKUPS",
    "NO_API_KEY_MESSAGE",
    "SKIPPED",
    "Enricher",
    "LicenseSource",
    "SourceRegistry",
    "create_default_registry",
    "license_color",
    "license_format",
]
