"""Read-only checks against the host environment."""

import shutil
import subprocess
from typing import Optional

from rich.console import Console

from sfsetup.constants import FALLBACK_EMAIL, GIT
from sfsetup.logger import SetupLogger


class EnvironmentProbe:
    """Answers yes/no questions about installed tools and git identity."""

    def __init__(
        self, logger: Optional[SetupLogger] = None, console: Optional[Console] = None
    ):
        self.logger = logger
        self.console = console or (logger.console if logger else Console())

    def command_available(self, name: str) -> bool:
        """Check if `<name> --version` starts and exits 0."""
        try:
            result = subprocess.run(
                [name, "--version"],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError:
            return False
        return result.returncode == 0

    def command_on_path(self, name: str) -> bool:
        """Check if an executable is on PATH (for tools without --version)."""
        return shutil.which(name) is not None

    def git_user_email(self) -> str:
        """
        Get the git-configured user email.

        Returns:
            The configured email, or a fallback address (with a warning)
        """
        try:
            result = subprocess.run(
                [GIT, "config", "--get", "user.email"],
                capture_output=True,
                text=True,
            )
        except OSError:
            result = None

        email = result.stdout.strip() if result and result.returncode == 0 else ""
        if email:
            return email

        message = f"Could not get git user email, using default: {FALLBACK_EMAIL}"
        if self.logger:
            self.logger.warning(message)
        else:
            self.console.print(f"[yellow]⚠ {message}[/yellow]")
        return FALLBACK_EMAIL
