"""
Shared test fixtures and fakes.

The workflow is driven by scripted answers and a fake process runner, so no
terminal, ssh-keygen, git, ddev or acli is needed.
"""

import io
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pytest
from rich.console import Console

from sfsetup.logger import SetupLogger
from sfsetup.models.prompts import Question
from sfsetup.models.results import ProcessOutcome, Spawned
from sfsetup.prompter import Prompter
from sfsetup.settings import Settings


class ScriptedPrompter(Prompter):
    """Answers questions by name from a dict; records what was asked."""

    def __init__(self, answers: Dict[str, Any]):
        self.answers = dict(answers)
        self.asked: List[Question] = []

    def ask(self, question: Question) -> Any:
        self.asked.append(question)
        if question.name not in self.answers:
            raise AssertionError(f"Unexpected question: {question.name}")
        answer = self.answers[question.name]
        if callable(answer):
            return answer(question)
        return answer

    @property
    def asked_names(self) -> List[str]:
        return [q.name for q in self.asked]


class FakeRunner:
    """Records invocations and returns scripted outcomes."""

    def __init__(self, outcomes: Optional[Dict[Tuple[str, ...], ProcessOutcome]] = None):
        self.outcomes = outcomes or {}
        self.calls: List[Tuple[str, Tuple[str, ...], Optional[Path]]] = []
        self.captured_calls: List[Tuple[str, ...]] = []
        self.opened_urls: List[str] = []

    def _outcome(self, argv: Tuple[str, ...]) -> ProcessOutcome:
        # Longest matching prefix wins, default is a clean exit
        for length in range(len(argv), 0, -1):
            if argv[:length] in self.outcomes:
                return self.outcomes[argv[:length]]
        return Spawned(exit_code=0, command=" ".join(argv))

    def run_interactive(self, program: str, args: Sequence[str] = (), cwd=None) -> ProcessOutcome:
        argv = (program, *args)
        self.calls.append((program, tuple(args), cwd))
        return self._outcome(argv)

    def run_captured(self, program: str, args: Sequence[str] = (), cwd=None) -> ProcessOutcome:
        argv = (program, *args)
        self.captured_calls.append(argv)
        return self._outcome(argv)

    def open_in_browser(self, url: str) -> None:
        self.opened_urls.append(url)

    @property
    def argv_list(self) -> List[Tuple[str, ...]]:
        return [(program, *args) for program, args, _ in self.calls]


class FakeProbe:
    """Tool availability from a set of installed names."""

    def __init__(self, installed=(), email: str = "dev@example.com"):
        self.installed = set(installed)
        self.email = email

    def command_available(self, name: str) -> bool:
        return name in self.installed

    def command_on_path(self, name: str) -> bool:
        return name in self.installed

    def git_user_email(self) -> str:
        return self.email


@pytest.fixture
def console() -> Console:
    """A rich console writing plain text to memory."""
    return Console(file=io.StringIO(), width=200, color_system=None, force_terminal=False)


@pytest.fixture
def output(console: Console):
    """Return a callable giving everything printed so far."""
    return lambda: console.file.getvalue()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings rooted at a temporary home directory."""
    return Settings.for_home(tmp_path / "home")


@pytest.fixture
def logger(settings: Settings, console: Console):
    run_logger = SetupLogger("test", log_dir=settings.log_dir, console=console)
    yield run_logger
    run_logger.close()


@pytest.fixture
def write_key(settings: Settings):
    """Return a callable that writes a public key into the SSH directory."""

    def _write(name: str, content: str) -> Path:
        settings.ssh_dir.mkdir(parents=True, exist_ok=True)
        path = settings.ssh_dir / name
        path.write_text(content + "\n")
        return path

    return _write
