"""
Site Factory Setup Services Layer

Sole owners of the external resources the workflow touches.
"""

from .process_runner import ProcessRunner
from .environment_probe import EnvironmentProbe
from .ssh_service import SSHKeyManager
from .credential_store import CredentialStore
from .site_catalog import SiteCatalogParser

__all__ = [
    "ProcessRunner",
    "EnvironmentProbe",
    "SSHKeyManager",
    "CredentialStore",
    "SiteCatalogParser",
]
