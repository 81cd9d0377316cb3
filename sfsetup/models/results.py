"""
Result Models

Tagged outcomes for external process invocations.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Spawned:
    """The process started and ran to completion."""

    exit_code: int
    captured_output: Optional[bytes] = None
    command: str = ""

    @property
    def is_success(self) -> bool:
        """Check if the process exited cleanly."""
        return self.exit_code == 0

    @property
    def output_text(self) -> str:
        """Get captured stdout decoded as UTF-8."""
        if self.captured_output is None:
            return ""
        return self.captured_output.decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"Spawned(exit_code={self.exit_code}, command='{self.command[:50]}')"


@dataclass(frozen=True)
class SpawnFailed:
    """The process could not be started at all."""

    error: OSError
    command: str = ""

    @property
    def is_success(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"SpawnFailed(error={self.error!r}, command='{self.command[:50]}')"


ProcessOutcome = Union[Spawned, SpawnFailed]


def describe_failure(outcome: ProcessOutcome) -> Optional[str]:
    """
    Describe why an outcome failed.

    Returns:
        None on success, otherwise a message distinguishing a missing or
        non-executable tool from one that ran and exited non-zero.

    Raises:
        TypeError: If outcome is not a known variant
    """
    if isinstance(outcome, Spawned):
        if outcome.exit_code == 0:
            return None
        return f"exited with status {outcome.exit_code}"
    if isinstance(outcome, SpawnFailed):
        return f"could not be started ({outcome.error})"
    raise TypeError(f"Unknown process outcome: {outcome!r}")
