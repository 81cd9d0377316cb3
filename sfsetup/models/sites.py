"""
Site Catalog Models

Dataclass models for the Site Factory site listing.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class SiteRecord:
    """A single site from `acli acsf:sites:find`."""

    id: Optional[Union[int, str]]
    name: str
    domain: str = ""
    owner: str = ""
    db_name: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SiteRecord":
        """Build a record from one entry of the JSON `sites` array."""
        return cls(
            id=data.get("id"),
            name=str(data.get("site") or ""),
            domain=str(data.get("domain") or ""),
            owner=str(data.get("owner") or ""),
            db_name=str(data.get("db_name") or ""),
        )

    @property
    def label(self) -> str:
        """Get the selection label, e.g. 'alpha (alpha.example.com)'."""
        return f"{self.name} ({self.domain})"


@dataclass(frozen=True)
class SiteCatalog:
    """Parsed site listing."""

    count: int
    sites: List[SiteRecord] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return len(self.sites) == 0
