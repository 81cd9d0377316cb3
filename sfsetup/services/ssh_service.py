"""SSH key discovery, generation and agent registration."""

import os
import sys
from pathlib import Path
from typing import List, Union

from sfsetup.constants import (
    DEFAULT_KEY_NAME,
    DEFAULT_KEY_TYPE,
    INSTALL_HINTS,
    PUBLIC_KEY_EXTENSION,
    SSH_ADD,
    SSH_KEYGEN,
)
from sfsetup.exceptions import (
    AgentRegistrationError,
    KeyGenerationError,
    ToolNotFoundError,
)
from sfsetup.models.results import describe_failure
from sfsetup.models.ssh import SSHKeyInfo, SSHKeyRecord
from sfsetup.services.environment_probe import EnvironmentProbe
from sfsetup.services.process_runner import ProcessRunner


class SSHKeyManager:
    """Service for the user's SSH key pairs."""

    def __init__(self, ssh_dir: Path, runner: ProcessRunner, probe: EnvironmentProbe):
        """
        Initialize SSH key manager.

        Args:
            ssh_dir: Directory holding key pairs (usually ~/.ssh)
            runner: Runner used for ssh-keygen and ssh-add
            probe: Probe used for tool checks and the key comment email
        """
        self.ssh_dir = Path(ssh_dir)
        self.runner = runner
        self.probe = probe

    @property
    def default_key_path(self) -> Path:
        return self.ssh_dir / DEFAULT_KEY_NAME

    def list_keys(self) -> List[SSHKeyRecord]:
        """
        List public keys in the SSH directory.

        A missing or unreadable directory means "no keys yet" and yields an
        empty list. Unreadable key files are skipped.
        """
        try:
            entries = sorted(self.ssh_dir.iterdir())
        except OSError:
            return []

        keys = []
        for path in entries:
            if not path.name.endswith(PUBLIC_KEY_EXTENSION) or not path.is_file():
                continue
            try:
                content = path.read_text(encoding="utf-8").rstrip()
            except (OSError, UnicodeDecodeError):
                continue
            keys.append(SSHKeyRecord(name=path.name, path=path, content=content))

        return keys

    def has_any_key(self) -> bool:
        return len(self.list_keys()) > 0

    def generate_key(self) -> None:
        """
        Generate a passphrase-less ed25519 key pair with the default name.

        Raises:
            ToolNotFoundError: If ssh-keygen is not on PATH
            KeyGenerationError: If ssh-keygen fails
        """
        if not self.probe.command_on_path(SSH_KEYGEN):
            raise ToolNotFoundError(SSH_KEYGEN, INSTALL_HINTS[SSH_KEYGEN])

        self._ensure_ssh_dir()

        email = self.probe.git_user_email()
        outcome = self.runner.run_interactive(
            SSH_KEYGEN,
            [
                "-t",
                DEFAULT_KEY_TYPE,
                "-C",
                email,
                "-f",
                str(self.default_key_path),
                "-N",
                "",
            ],
        )

        failure = describe_failure(outcome)
        if failure:
            raise KeyGenerationError(f"{SSH_KEYGEN} {failure}")

    def _ensure_ssh_dir(self) -> None:
        if self.ssh_dir.exists():
            return

        try:
            self.ssh_dir.mkdir(parents=True)
        except OSError as e:
            raise KeyGenerationError(f"Could not create {self.ssh_dir}: {e}")

        if sys.platform != "win32":
            try:
                os.chmod(self.ssh_dir, 0o700)
            except OSError:
                pass  # Filesystems without POSIX permissions

    @staticmethod
    def describe_key(content: str) -> SSHKeyInfo:
        """
        Summarize a public key blob as type, short fingerprint and comment.

        The fingerprint is a display abbreviation, not a cryptographic digest.
        """
        parts = content.split(None, 2)
        key_type = parts[0] if parts else "unknown"
        material = parts[1] if len(parts) > 1 else ""
        comment = parts[2].strip() if len(parts) > 2 else "no comment"

        fingerprint = "unknown"
        if len(material) > 8:
            fingerprint = f"{material[:8]}...{material[-8:]}"

        return SSHKeyInfo(key_type=key_type, fingerprint=fingerprint, comment=comment)

    def register_with_agent(self, private_key_path: Union[str, Path]) -> None:
        """
        Add a private key to the running SSH agent.

        Raises:
            AgentRegistrationError: If ssh-add fails or cannot be started
        """
        outcome = self.runner.run_interactive(SSH_ADD, [str(private_key_path)])

        failure = describe_failure(outcome)
        if failure:
            raise AgentRegistrationError(
                f"Error adding SSH key: {SSH_ADD} {failure}",
                "Make sure your SSH agent is running (ssh-add -l) and add the key manually.",
            )
