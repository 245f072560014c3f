"""Dependency manifest parsing.

Reads the project's go.mod and returns its requirements as
:class:`ModuleVersion` entries.

Example:
    from glicense._manifest import parse_manifest

    modules = parse_manifest("path/to/project")
    for module in modules:
        print(module.path, module.version)
"""

from pathlib import Path
from typing import List, Union

from glicense.exceptions import ManifestNotFoundError

from .gomod import GoModParser
from .models import ModuleVersion

MANIFEST_FILE = "go.mod"


def manifest_exists(path: Union[str, Path]) -> bool:
    """Check whether the project directory contains a go.mod file."""
    return (Path(path) / MANIFEST_FILE).is_file()


def parse_manifest(path: Union[str, Path], include_indirect: bool = False) -> List[ModuleVersion]:
    """
    Parse the project's go.mod into its required modules.

    Args:
        path: Project directory containing go.mod
        include_indirect: Also return requirements marked ``// indirect``

    Returns:
        Requirements in manifest order

    Raises:
        ManifestNotFoundError: If go.mod is absent
        ManifestParseError: If go.mod is malformed
    """
    manifest_path = Path(path) / MANIFEST_FILE
    if not manifest_path.is_file():
        raise ManifestNotFoundError(f"no go.mod file present in {path}")

    modules = GoModParser().parse(manifest_path)
    if include_indirect:
        return modules
    return [m for m in modules if not m.indirect]


__all__ = [
    "GoModParser",
    "MANIFEST_FILE",
    "ModuleVersion",
    "manifest_exists",
    "parse_manifest",
]
