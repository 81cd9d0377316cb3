"""
Runtime settings

Home-relative paths and repository coordinates, with environment overrides.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from sfsetup.constants import (
    DDEV_DIR_NAME,
    DDEV_GLOBAL_CONFIG_NAME,
    GIT_REPOSITORY_URL,
    LOG_DIR_NAME,
    REPO_NAME,
    SSH_DIR_NAME,
)


@dataclass(frozen=True)
class Settings:
    """Resolved locations used by a setup run."""

    ssh_dir: Path
    ddev_config_path: Path
    log_dir: Path
    repo_url: str = GIT_REPOSITORY_URL
    repo_name: str = REPO_NAME

    @classmethod
    def for_home(cls, home: Path) -> "Settings":
        """Build default settings rooted at a home directory."""
        return cls(
            ssh_dir=home / SSH_DIR_NAME,
            ddev_config_path=home / DDEV_DIR_NAME / DDEV_GLOBAL_CONFIG_NAME,
            log_dir=home / LOG_DIR_NAME,
        )

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, home: Optional[Path] = None
    ) -> "Settings":
        """
        Build settings from the user's home directory.

        Honors SFSETUP_SSH_DIR, SFSETUP_DDEV_CONFIG, SFSETUP_LOG_DIR and
        SFSETUP_REPO_URL overrides.
        """
        environ = os.environ if environ is None else environ
        defaults = cls.for_home(home or Path.home())

        def _path(name: str, default: Path) -> Path:
            value = environ.get(name)
            return Path(value).expanduser() if value else default

        return cls(
            ssh_dir=_path("SFSETUP_SSH_DIR", defaults.ssh_dir),
            ddev_config_path=_path("SFSETUP_DDEV_CONFIG", defaults.ddev_config_path),
            log_dir=_path("SFSETUP_LOG_DIR", defaults.log_dir),
            repo_url=environ.get("SFSETUP_REPO_URL") or defaults.repo_url,
            repo_name=defaults.repo_name,
        )
