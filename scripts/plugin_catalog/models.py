"""Catalog data types: listing entries, commit dates and plugin records."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class PackageListing:
    """One entry of the marketplace `packages/` directory listing."""
    name: str
    type: str

    @property
    def is_dir(self) -> bool:
        return self.type == "dir"

    @classmethod
    def from_api(cls, entry: Dict[str, Any]) -> "PackageListing":
        return cls(name=str(entry.get("name", "")), type=str(entry.get("type", "")))


@dataclass(frozen=True)
class CommitDates:
    created_at: str = ""
    last_updated: str = ""


@dataclass
class PluginRecord:
    """
    One row of the catalog.

    Records built from a manifest carry every field. Two reduced shapes exist:
    a missing manifest keeps only the name, error, icon and dates, and a
    package whose processing raised keeps only the name and error. Fields
    outside a shape stay None and are left out of the JSON.
    """
    name: str
    error: str = ""
    id: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    repo: Optional[str] = None
    dir: Optional[str] = None
    icon_url: Optional[str] = None
    readme_url: Optional[str] = None
    created_at: Optional[str] = None
    last_updated: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.dir is not None

    @classmethod
    def from_manifest(cls, package_name: str, manifest: Dict[str, Any], icon_url: str,
                      readme_url: Optional[str], dates: CommitDates, error: str) -> "PluginRecord":
        return cls(
            name=manifest.get("name") or package_name,
            id=manifest.get("id") or "",
            description=manifest.get("description") or "",
            author=manifest.get("author") or "",
            repo=manifest.get("repo") or "",
            dir=package_name,
            icon_url=icon_url,
            readme_url=readme_url,
            created_at=dates.created_at,
            last_updated=dates.last_updated,
            error=error,
        )

    @classmethod
    def missing_manifest(cls, package_name: str, dates: CommitDates) -> "PluginRecord":
        return cls(
            name=package_name,
            error="Missing manifest",
            icon_url="",
            created_at=dates.created_at,
            last_updated=dates.last_updated,
        )

    @classmethod
    def failed(cls, package_name: str, message: str) -> "PluginRecord":
        return cls(name=package_name, error=message)

    def to_dict(self) -> Dict[str, Any]:
        if self.is_complete:
            return {
                "name": self.name,
                "id": self.id,
                "description": self.description,
                "author": self.author,
                "repo": self.repo,
                "dir": self.dir,
                "iconUrl": self.icon_url,
                "readmeUrl": self.readme_url,
                "created_at": self.created_at,
                "last_updated": self.last_updated,
                "error": self.error,
            }
        out: Dict[str, Any] = {"name": self.name, "error": self.error}
        if self.icon_url is not None:
            out["iconUrl"] = self.icon_url
        if self.created_at is not None:
            out["created_at"] = self.created_at
        if self.last_updated is not None:
            out["last_updated"] = self.last_updated
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PluginRecord":
        return cls(
            name=data.get("name") or "",
            error=data.get("error") or "",
            id=data.get("id"),
            description=data.get("description"),
            author=data.get("author"),
            repo=data.get("repo"),
            dir=data.get("dir"),
            icon_url=data.get("iconUrl"),
            readme_url=data.get("readmeUrl"),
            created_at=data.get("created_at"),
            last_updated=data.get("last_updated"),
        )
