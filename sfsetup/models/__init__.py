"""
Site Factory Setup Domain Models

Clean dataclass-based models for type-safe data handling.
"""

from .results import (
    ProcessOutcome,
    Spawned,
    SpawnFailed,
    describe_failure,
)
from .ssh import (
    SSHKeyInfo,
    SSHKeyRecord,
)
from .credentials import CredentialSet
from .sites import (
    SiteCatalog,
    SiteRecord,
)
from .prompts import (
    Question,
    QuestionKind,
)

__all__ = [
    # Results
    "ProcessOutcome",
    "Spawned",
    "SpawnFailed",
    "describe_failure",
    # SSH
    "SSHKeyInfo",
    "SSHKeyRecord",
    # Credentials
    "CredentialSet",
    # Sites
    "SiteCatalog",
    "SiteRecord",
    # Prompts
    "Question",
    "QuestionKind",
]
