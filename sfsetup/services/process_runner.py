"""External process runner for the tools the workflow drives."""

import shlex
import subprocess
import sys
from pathlib import Path
from typing import Optional, Sequence, Union

from rich.console import Console

from sfsetup.logger import SetupLogger
from sfsetup.models.results import ProcessOutcome, Spawned, SpawnFailed


class ProcessRunner:
    """Service for running external programs."""

    def __init__(
        self, logger: Optional[SetupLogger] = None, console: Optional[Console] = None
    ):
        """
        Initialize process runner.

        Args:
            logger: Run logger that records every command line
            console: Rich console for non-fatal notices
        """
        self.logger = logger
        self.console = console or (logger.console if logger else Console())

    def _command_line(self, program: str, args: Sequence[str]) -> str:
        return " ".join(shlex.quote(part) for part in [program, *args])

    def run_interactive(
        self,
        program: str,
        args: Sequence[str] = (),
        cwd: Optional[Union[str, Path]] = None,
    ) -> ProcessOutcome:
        """
        Run a program attached to the user's terminal.

        The child may prompt and stream freely; this call blocks until it exits.

        Args:
            program: Executable name
            args: Arguments
            cwd: Working directory for the child

        Returns:
            Spawned with the exit code, or SpawnFailed if it could not start
        """
        command = self._command_line(program, args)
        if self.logger:
            self.logger.log_command(command)

        try:
            result = subprocess.run([program, *args], cwd=cwd)
        except OSError as e:
            return SpawnFailed(error=e, command=command)

        return Spawned(exit_code=result.returncode, command=command)

    def run_captured(
        self,
        program: str,
        args: Sequence[str] = (),
        cwd: Optional[Union[str, Path]] = None,
    ) -> ProcessOutcome:
        """
        Run a program capturing stdout as bytes.

        stdin and stderr stay attached to the terminal so the tool can still
        report problems to the user.

        Returns:
            Spawned with exit code and captured stdout, or SpawnFailed
        """
        command = self._command_line(program, args)
        if self.logger:
            self.logger.log_command(command)

        try:
            result = subprocess.run(
                [program, *args], cwd=cwd, stdout=subprocess.PIPE
            )
        except OSError as e:
            return SpawnFailed(error=e, command=command)

        return Spawned(
            exit_code=result.returncode,
            captured_output=result.stdout,
            command=command,
        )

    def open_in_browser(self, url: str) -> None:
        """
        Open a URL with the platform's opener, without waiting for it.

        Failures are reported as a notice with the URL; never raised.
        """
        if sys.platform == "darwin":
            argv = ["open", url]
        elif sys.platform == "win32":
            # Empty window title; list2cmdline renders "" as a quoted empty arg
            argv = ["cmd", "/c", "start", "", url]
        else:
            argv = ["xdg-open", url]

        if self.logger:
            self.logger.log_command(self._command_line(argv[0], argv[1:]))

        popen_kwargs = {
            "stdin": subprocess.DEVNULL,
            "stdout": subprocess.DEVNULL,
            "stderr": subprocess.DEVNULL,
        }
        if sys.platform == "win32":
            popen_kwargs["creationflags"] = subprocess.DETACHED_PROCESS
        else:
            popen_kwargs["start_new_session"] = True

        try:
            subprocess.Popen(argv, **popen_kwargs)
        except OSError as e:
            if self.logger:
                self.logger.log(f"Browser open failed: {e}", "WARNING")
            self.console.print(
                f"[yellow]Could not open browser automatically. Please visit: {url}[/yellow]"
            )
