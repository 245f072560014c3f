"""License display names and styles.

Styles are Rich color names so that the table report can show each
license in a stable color.
"""

from typing import Dict, NamedTuple

DEFAULT_STYLE = "yellow"


class LicenseFormat(NamedTuple):
    """Display name and style for a license key."""

    name: str
    style: str


# GitHub license keys -> display format
LICENSE_FORMATS: Dict[str, LicenseFormat] = {
    "other": LicenseFormat("Other", "blue"),
    "mit": LicenseFormat("MIT", "green"),
    "lgpl-3.0": LicenseFormat("LGPL-3.0", "cyan"),
    "mpl-2.0": LicenseFormat("MPL-2.0", "bright_blue"),
    "agpl-3.0": LicenseFormat("AGPL-3.0", "bright_cyan"),
    "unlicense": LicenseFormat("Unlicense", "bright_red"),
    "apache-2.0": LicenseFormat("Apache-2.0", "bright_green"),
    "gpl-3.0": LicenseFormat("GPL-3.0", "bright_magenta"),
}

# License names as shown on pkg.go.dev (lowercased) -> style
LICENSE_COLORS: Dict[str, str] = {
    "mit": "green",
    "apache-2.0": "bright_green",
    "gpl-2.0": "magenta",
    "gpl-3.0": "bright_magenta",
    "lgpl-2.1": "cyan",
    "lgpl-3.0": "bright_cyan",
    "mpl-2.0": "bright_blue",
    "bsd-2-clause": "yellow",
    "bsd-3-clause": "bright_yellow",
    "epl-2.0": "red",
    "artistic-2.0": "bright_red",
    "bsl-1.0": "blue",
    "cc0-1.0": "bright_white",
    "unlicense": "bright_red",
    "agpl-3.0": "bright_cyan",
    "other": "blue",
}


def license_format(key: str) -> LicenseFormat:
    """Display format for a GitHub license key; unknown keys are shown as-is."""
    fmt = LICENSE_FORMATS.get(key)
    if fmt is None:
        return LicenseFormat(key, DEFAULT_STYLE)
    return fmt


def license_color(name: str) -> str:
    """Style for a license name, matched case-insensitively."""
    return LICENSE_COLORS.get(name.strip().lower(), DEFAULT_STYLE)
