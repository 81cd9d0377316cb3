"""
Site Factory Setup Constants

Centralized constants for URLs, defaults, and external tool names.
"""

# Site Factory / Acquia Cloud
DEFAULT_FACTORY_URL = "https://www.asufactory1.acsitefactory.com"
DEFAULT_ORGANIZATION_UUID = "8e1fbfbf-e743-48ec-b9b8-3048964ef3aa"
CODE_STUDIO_SSH_URL = "https://code.acquia.com/-/user_settings/ssh_keys"
CLOUD_SSH_URL = "https://cloud.acquia.com/a/profile/ssh-keys"
CLOUD_API_TOKENS_URL = "https://profile.acquia.com/tokens"

# Source repository
GIT_REPOSITORY_URL = (
    "git@gitcode.acquia.com:ArizonaBoardofRegentsSiteFactoryACSFSites/asufactory1.git"
)
REPO_NAME = "asufactory1"

# SSH Configuration
SSH_DIR_NAME = ".ssh"
PUBLIC_KEY_EXTENSION = ".pub"
DEFAULT_KEY_NAME = "id_ed25519"
DEFAULT_KEY_TYPE = "ed25519"
FALLBACK_EMAIL = "user@example.com"

# DDEV global configuration
DDEV_DIR_NAME = ".ddev"
DDEV_GLOBAL_CONFIG_NAME = "global_config.yaml"
WEB_ENVIRONMENT_KEY = "web_environment"

# Log Configuration
LOG_DIR_NAME = ".sfsetup/logs"
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"

# Tool Names
GIT = "git"
SSH_KEYGEN = "ssh-keygen"
SSH_ADD = "ssh-add"
DDEV = "ddev"
ACLI = "acli"

# Install hints (for missing-tool messages and doctor check)
INSTALL_HINTS = {
    GIT: "https://git-scm.com/downloads",
    SSH_KEYGEN: "Install OpenSSH (Git for Windows bundles it)",
    SSH_ADD: "Install OpenSSH (Git for Windows bundles it)",
    DDEV: "https://ddev.readthedocs.io/en/stable/",
    ACLI: "https://github.com/acquia/cli",
}

# Remote site listing
SITE_LIST_LIMIT = 250
