"""Repository record threaded through resolution, enrichment and reporting."""

from dataclasses import dataclass, field
from typing import Any, Dict

from rich.text import Text

# Fields that may be assigned once and never changed afterwards.
_WRITE_ONCE_FIELDS = ("name", "url")


@dataclass
class Repository:
    """
    Source repository and license information for one dependency.

    Created by the resolver, filled in by exactly one enrichment worker,
    then only read by the report renderer.

    Attributes:
        name: Module path as written in the manifest
        version: Declared version, possibly annotated by enrichment
        host: Hosting domain the license is looked up on
        author: Owner or organization on the host
        project: Project name on the host
        url: Canonical repository (or metadata page) URL
        license: License display name, empty until enriched
        license_style: Rich style used when showing the license
        text: Base64 license body when the host returns it
    """

    name: str
    version: str = ""
    host: str = ""
    author: str = ""
    project: str = ""
    url: str = ""
    license: str = ""
    license_style: str = ""
    text: str = field(default="", repr=False)

    def __setattr__(self, key: str, value: Any) -> None:
        if key in _WRITE_ONCE_FIELDS and self.__dict__.get(key):
            raise AttributeError(f"Repository.{key} cannot be changed once set")
        super().__setattr__(key, value)

    @property
    def is_resolved(self) -> bool:
        """True when resolution produced a URL for this module."""
        return bool(self.url)

    @property
    def shortname(self) -> Text:
        """License name rendered in its display style."""
        return Text(self.license, style=self.license_style)

    def set_license(self, name: str, style: str) -> None:
        """Record the license found for this repository."""
        self.license = name
        self.license_style = style

    def annotate_version(self, discovered: str) -> None:
        """Flag a live version that differs from the declared one.

        The declared version is kept and the discovered one appended as
        ``"<declared> (!new:<discovered>)"``.
        """
        if not discovered or discovered.lower() == self.version.lower():
            return
        self.version = f"{self.version} (!new:{discovered})"

    def to_dict(self) -> Dict[str, str]:
        """JSON record: identity fields omitted when empty, license and version always present."""
        data: Dict[str, str] = {}
        for key in ("name", "url", "host", "author", "project"):
            value = getattr(self, key)
            if value:
                data[key] = value
        data["license"] = self.license
        data["Version"] = self.version
        return data
