"""
Prompt Models

Questions are plain data; a Prompter turns them into answers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple


class QuestionKind(Enum):
    """How a question is answered."""

    CONFIRM = "confirm"
    INPUT = "input"
    PASSWORD = "password"
    SELECT = "select"


@dataclass(frozen=True)
class Question:
    """A single operator question."""

    name: str
    kind: QuestionKind
    message: str
    default: Any = None
    # (label, value) pairs for SELECT
    choices: List[Tuple[str, Any]] = field(default_factory=list)
    validate: Optional[Callable[[str], bool]] = None

    @classmethod
    def confirm(cls, name: str, message: str, default: bool = True) -> "Question":
        return cls(name=name, kind=QuestionKind.CONFIRM, message=message, default=default)

    @classmethod
    def input(
        cls,
        name: str,
        message: str,
        default: Optional[str] = None,
        required: bool = True,
    ) -> "Question":
        return cls(
            name=name,
            kind=QuestionKind.INPUT,
            message=message,
            default=default,
            validate=is_non_empty if required else None,
        )

    @classmethod
    def password(cls, name: str, message: str) -> "Question":
        return cls(
            name=name,
            kind=QuestionKind.PASSWORD,
            message=message,
            validate=is_non_empty,
        )

    @classmethod
    def select(
        cls, name: str, message: str, choices: List[Tuple[str, Any]]
    ) -> "Question":
        return cls(name=name, kind=QuestionKind.SELECT, message=message, choices=choices)


def is_non_empty(value: str) -> bool:
    """Validator for required text answers."""
    return bool(value and str(value).strip())
