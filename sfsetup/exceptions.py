"""
Site Factory Setup Exception Hierarchy

Clean exception hierarchy for consistent error handling across the workflow.
"""

from typing import Optional


class SetupError(Exception):
    """Base exception for all setup errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ConfigurationError(SetupError):
    """Raised when the DDEV global configuration is invalid."""

    pass


class ConfigWriteError(ConfigurationError):
    """Raised when the DDEV global configuration cannot be written."""

    pass


class SSHError(SetupError):
    """Raised when SSH operations fail."""

    pass


class KeyGenerationError(SSHError):
    """Raised when a new SSH key pair could not be generated."""

    pass


class AgentRegistrationError(SSHError):
    """Raised when a private key could not be added to the SSH agent."""

    pass


class CatalogParseError(SetupError):
    """Raised when the site listing output is not a usable catalog."""

    def __init__(self, message: str, raw: str = ""):
        self.raw = raw
        super().__init__(message)


class ToolNotFoundError(SetupError):
    """Raised when a required external tool is not installed."""

    def __init__(self, tool: str, hint: Optional[str] = None):
        self.tool = tool
        self.hint = hint
        message = f"{tool} command not found"
        context = hint
        if hint and hint.startswith("http"):
            context = f"Install from: {hint}"
        super().__init__(message, context)


class WorkflowAborted(SetupError):
    """Raised by a workflow stage to end the remaining stages."""

    def __init__(self, stage: str, message: str):
        self.stage = stage
        super().__init__(message)
