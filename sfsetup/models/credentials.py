"""
Credential Models

The credential set collected at the start of a setup run.
"""

from dataclasses import dataclass
from typing import List

from sfsetup.constants import DEFAULT_ORGANIZATION_UUID


@dataclass(frozen=True)
class CredentialSet:
    """Site Factory and Cloud API credentials, in web_environment order."""

    acsf_key: str
    acsf_username: str
    api_key: str
    api_secret: str
    factory_url: str
    use_default_organization: bool

    @property
    def organization_uuid(self) -> str:
        """Get the organization UUID, empty when the default was declined."""
        return DEFAULT_ORGANIZATION_UUID if self.use_default_organization else ""

    def to_web_environment(self) -> List[str]:
        """Encode as DDEV web_environment NAME=value declarations."""
        return [
            f"ACQUIA_ACSF_KEY={self.acsf_key}",
            f"ACQUIA_ACSF_USERNAME={self.acsf_username}",
            f"ACQUIA_API_KEY={self.api_key}",
            f"ACQUIA_API_SECRET={self.api_secret}",
            f"ACQUIA_FACTORY_URL={self.factory_url}",
            f"AH_ORGANIZATION_UUID={self.organization_uuid}",
        ]

    def __repr__(self) -> str:
        # Secrets stay out of logs and tracebacks
        return (
            f"CredentialSet(username={self.acsf_username}, "
            f"factory_url={self.factory_url})"
        )
