"""
SSH Key Models

Dataclass models for discovered key pairs.
"""

from dataclasses import dataclass
from pathlib import Path

from sfsetup.constants import PUBLIC_KEY_EXTENSION


@dataclass(frozen=True)
class SSHKeyInfo:
    """Display summary of a public key."""

    key_type: str
    fingerprint: str
    comment: str


@dataclass(frozen=True)
class SSHKeyRecord:
    """A public key file found in the SSH directory."""

    name: str
    path: Path
    content: str

    @property
    def private_key_path(self) -> Path:
        """Get the matching private key path (strips the .pub extension)."""
        name = self.path.name
        if name.endswith(PUBLIC_KEY_EXTENSION):
            return self.path.with_name(name[: -len(PUBLIC_KEY_EXTENSION)])
        return self.path

    def __repr__(self) -> str:
        return f"SSHKeyRecord(name={self.name}, path={self.path})"
