"""Data models for dependency manifests."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ModuleVersion:
    """A required module as declared in the manifest.

    Attributes:
        path: Module path, e.g. ``github.com/pkg/errors``
        version: Declared version, e.g. ``v0.9.1``
        indirect: True when the requirement carries an ``// indirect`` marker
    """

    path: str
    version: str
    indirect: bool = False

    def __str__(self) -> str:
        return f"{self.path}@{self.version}"
