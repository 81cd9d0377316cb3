"""
Base Command Class

Abstract base for all sfsetup CLI commands.
Provides common functionality and structure.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from rich.console import Console

from sfsetup.exceptions import SetupError
from sfsetup.logger import SetupLogger
from sfsetup.settings import Settings
from sfsetup.ui_components import show_header


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Settings resolution
    - Logger initialization
    - Header display
    - Error handling
    - JSON output support
    """

    def __init__(
        self,
        verbose: bool = False,
        json_output: bool = False,
        settings: Optional[Settings] = None,
        console: Optional[Console] = None,
    ):
        self.verbose = verbose
        self.json_output = json_output
        self.console = console or Console()
        self.settings = settings or Settings.from_env()
        self.logger: Optional[SetupLogger] = None

    def init_logger(self, command_name: str) -> Optional[SetupLogger]:
        """
        Initialize command logger (skip in JSON mode).

        Args:
            command_name: Command name, used in the log file name

        Returns:
            SetupLogger instance or None if JSON mode
        """
        if self.json_output:
            return None
        self.logger = SetupLogger(
            command_name,
            log_dir=self.settings.log_dir,
            verbose=self.verbose,
            console=self.console,
        )
        return self.logger

    def output_json(self, data: Dict[str, Any], exit_code: int = 0) -> None:
        """
        Output data as JSON and exit.

        Args:
            data: Data to output as JSON
            exit_code: Exit code (0 for success, non-zero for error)
        """
        print(json.dumps(data, indent=2))
        if exit_code != 0:
            raise SystemExit(exit_code)

    def show_header(
        self,
        title: str,
        subtitle: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in JSON mode)."""
        if not self.json_output:
            show_header(
                title=title,
                subtitle=subtitle,
                details=details,
                console=self.console,
            )

    def _print_log_location(self) -> None:
        if self.logger:
            self.console.print(f"[dim]Logs saved to:[/dim] {self.logger.log_path}\n")

    @abstractmethod
    def execute(self, **kwargs) -> None:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """
        pass

    def run(self, **kwargs) -> None:
        """
        Run command with error handling.

        Args:
            **kwargs: Command arguments
        """
        try:
            self.execute(**kwargs)
        except KeyboardInterrupt:
            # Nothing is rolled back; partial config or clones stay on disk
            self.console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            self._print_log_location()
            raise SystemExit(130)
        except SystemExit:
            raise
        except SetupError as e:
            self.console.print(f"\n[bold red]✗ {e.message}[/bold red]")
            if e.context:
                self.console.print(f"  [color(208)]{e.context}[/color(208)]")
            if self.logger:
                self.logger.log_error(e.message, context=e.context)
            self._print_log_location()
            raise SystemExit(1)
        except PermissionError as e:
            self.console.print(f"\n[bold red]✗ Permission denied:[/bold red] {e}\n")
            if self.logger:
                self.logger.log_error(f"Permission error: {e}")
            self._print_log_location()
            raise SystemExit(1)
        except Exception as e:
            error_type = type(e).__name__
            self.console.print(f"\n[bold red]✗ {error_type}:[/bold red] {e}\n")
            if self.logger:
                self.logger.log_error(f"{error_type}: {e}")
            self._print_log_location()
            raise SystemExit(1)
        finally:
            if self.logger:
                self.logger.close()
