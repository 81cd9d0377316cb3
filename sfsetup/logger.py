"""
Logging system for Site Factory setup
Provides real-time logging to files with clean console output
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

from rich.console import Console
from rich.markup import escape

from sfsetup.constants import LOG_DATE_FORMAT, LOG_TIME_FORMAT


ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


class SetupLogger:
    """
    Manages logging for a setup run
    - Writes every step, command and error to a log file in real-time
    - Shows styled progress in the console
    - Echoes debug lines to the console only when verbose
    """

    def __init__(
        self,
        operation: str,
        log_dir: Path,
        verbose: bool = False,
        console: Optional[Console] = None,
    ):
        """
        Initialize logger

        Args:
            operation: Operation name (e.g., 'setup', 'doctor')
            log_dir: Root logs directory
            verbose: If True, show debug output in console
            console: Rich console for styled output
        """
        self.operation = operation
        self.verbose = verbose
        self.console = console or Console()
        self.log_file: Optional[TextIO] = None
        self.log_path: Optional[Path] = None
        self.current_step = ""
        self.has_errors = False

        # Structure: logs/{date}/{time}_{operation}.log
        now = datetime.now()
        dated_dir = Path(log_dir) / now.strftime(LOG_DATE_FORMAT)
        dated_dir.mkdir(parents=True, exist_ok=True)

        self.log_path = dated_dir / f"{now.strftime(LOG_TIME_FORMAT)}_{operation}.log"

        # Line buffered for real-time
        self.log_file = open(self.log_path, "w", buffering=1, encoding="utf-8")

        self._write_log_header()

    def _write_log_header(self):
        """Write log file header"""
        header = f"""
{"=" * 80}
Site Factory Setup Log
{"=" * 80}
Operation: {self.operation}
Started: {datetime.now().isoformat()}
{"=" * 80}

"""
        self.log_file.write(header)
        self.log_file.flush()

    def log(self, message: str, level: str = "INFO"):
        """
        Log a message to file and optionally console

        Args:
            message: Message to log
            level: Log level (INFO, WARNING, ERROR, DEBUG)
        """
        timestamp = datetime.now().strftime("%H:%M:%S")
        log_line = f"[{timestamp}] [{level}] {message}\n"

        if self.log_file:
            self.log_file.write(log_line)
            self.log_file.flush()

        if self.verbose and level == "DEBUG":
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def log_command(self, command: str):
        """Log a command being executed"""
        self.log(f"Executing: {command}", "DEBUG")

    def log_output(self, output: str, stream: str = "stdout"):
        """
        Log captured command output (file only, ANSI codes stripped)

        Args:
            output: Command output (single line or multiline)
            stream: Stream name (stdout, stderr)
        """
        if not output or not self.log_file:
            return

        clean_output = ANSI_ESCAPE.sub("", output)
        for line in clean_output.splitlines():
            self.log_file.write(f"  [{stream}] {line}\n")
        self.log_file.flush()

    def log_error(self, error: str, context: Optional[str] = None):
        """
        Log an error with context

        Args:
            error: Error message
            context: Additional context (e.g., what to try next)
        """
        self.has_errors = True

        if self.log_file:
            error_block = f"""
{"!" * 80}
ERROR OCCURRED
{"!" * 80}
{error}
"""
            if context:
                error_block += f"\nContext: {context}\n"
            error_block += f"{'!' * 80}\n\n"

            self.log_file.write(error_block)
            self.log_file.flush()

        self.console.print(f"[bold red]✗ {escape(error)}[/bold red]")
        if context:
            self.console.print(f"  [color(208)]{escape(context)}[/color(208)]")

    def step(self, step_name: str, style: str = "bold white on cyan"):
        """
        Start a new workflow section

        Args:
            step_name: Name of the section
            style: Rich style for the heading
        """
        if self.current_step:
            self.console.print()

        self.current_step = step_name
        self.log(f"Step: {step_name}", "INFO")
        self.console.print(f"[{style}] {step_name} [/{style}]")

    def info(self, message: str):
        """Log a progress message"""
        self.log(message, "INFO")
        self.console.print(f"[cyan]{escape(message)}[/cyan]")

    def success(self, message: str):
        """Log a success message"""
        self.log(message, "INFO")
        self.console.print(f"[green]✓ {escape(message)}[/green]")

    def warning(self, message: str):
        """Log a warning message"""
        self.log(message, "WARNING")
        self.console.print(f"[yellow]⚠ {escape(message)}[/yellow]")

    def close(self):
        """Close log file"""
        if self.log_file:
            footer = f"""
{"=" * 80}
Completed: {datetime.now().isoformat()}
Status: {"FAILED" if self.has_errors else "SUCCESS"}
{"=" * 80}
"""
            self.log_file.write(footer)
            self.log_file.close()
            self.log_file = None

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb):
        """Context manager exit"""
        if exc_type is not None and exc_type not in (SystemExit, KeyboardInterrupt):
            self.log_error(
                str(exc_val) if exc_val else "Operation failed",
                context=f"{exc_type.__name__}",
            )
        self.close()
        return False  # Don't suppress exceptions
