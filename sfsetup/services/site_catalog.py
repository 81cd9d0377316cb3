"""Parsing and filtering of the Site Factory site listing."""

import json
from typing import List, Optional

from sfsetup.exceptions import CatalogParseError
from sfsetup.models.sites import SiteCatalog, SiteRecord


class SiteCatalogParser:
    """Turns `acli acsf:sites:find` JSON output into a SiteCatalog."""

    def parse(self, raw: bytes) -> SiteCatalog:
        """
        Parse raw stdout from the site listing command.

        Raises:
            CatalogParseError: If the payload is not JSON or has no `sites`
                array. The raw text is kept on the error, since a bad payload
                usually means the CLI is not logged in.
        """
        text = raw.decode("utf-8", errors="replace")

        try:
            data = json.loads(text)
        except ValueError as e:
            raise CatalogParseError(f"Site listing is not valid JSON: {e}", raw=text)

        if not isinstance(data, dict) or not isinstance(data.get("sites"), list):
            raise CatalogParseError("Site listing has no 'sites' array", raw=text)

        sites = []
        for entry in data["sites"]:
            if not isinstance(entry, dict):
                raise CatalogParseError(
                    f"Unexpected site entry: {entry!r}", raw=text
                )
            sites.append(SiteRecord.from_dict(entry))

        try:
            count = int(data.get("count", len(sites)))
        except (TypeError, ValueError):
            count = len(sites)

        return SiteCatalog(count=count, sites=sites)

    @staticmethod
    def matches(site: SiteRecord, term: Optional[str]) -> bool:
        """Check if term is a case-insensitive substring of name or domain."""
        if not term:
            return False
        needle = term.lower()
        return needle in site.name.lower() or needle in site.domain.lower()

    @classmethod
    def filter(cls, sites: List[SiteRecord], term: Optional[str]) -> List[SiteRecord]:
        """
        Filter sites by name or domain.

        An empty term, or a term matching nothing, returns the full list.
        """
        if not term:
            return list(sites)

        matched = [site for site in sites if cls.matches(site, term)]
        return matched or list(sites)
