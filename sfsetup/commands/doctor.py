"""sfsetup - Doctor command"""

import click
from rich.table import Table

from sfsetup.base import BaseCommand
from sfsetup.constants import (
    ACLI,
    DDEV,
    GIT,
    INSTALL_HINTS,
    SSH_ADD,
    SSH_KEYGEN,
    WEB_ENVIRONMENT_KEY,
)
from sfsetup.exceptions import ConfigurationError
from sfsetup.services import (
    CredentialStore,
    EnvironmentProbe,
    ProcessRunner,
    SSHKeyManager,
)

# Tools probed with `--version`; the OpenSSH tools have no such flag
VERSIONED_TOOLS = [GIT, DDEV, ACLI]
PATH_TOOLS = [SSH_KEYGEN, SSH_ADD]


class DoctorCommand(BaseCommand):
    """Check the machine is ready for setup."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.probe = EnvironmentProbe(console=self.console)
        self.runner = ProcessRunner(console=self.console)
        self.table = Table(
            title="Setup Readiness Report", title_justify="left", padding=(0, 1)
        )
        self.table.add_column("Check", style="cyan", no_wrap=True)
        self.table.add_column("Status")
        self.table.add_column("Details", style="dim")
        self.report = {}

    def check_tools(self) -> None:
        """Check external tools."""
        tools = {}
        for tool in VERSIONED_TOOLS + PATH_TOOLS:
            if tool in PATH_TOOLS:
                installed = self.probe.command_on_path(tool)
            else:
                installed = self.probe.command_available(tool)
            tools[tool] = installed

            if installed:
                self.table.add_row(f"✅ {tool}", "[green]Installed[/green]", "")
            else:
                self.table.add_row(
                    f"❌ {tool}", "[red]Missing[/red]", INSTALL_HINTS[tool]
                )
        self.report["tools"] = tools

    def check_ssh_keys(self) -> None:
        """Check for SSH public keys."""
        keys = SSHKeyManager(
            self.settings.ssh_dir, runner=self.runner, probe=self.probe
        ).list_keys()
        self.report["ssh_keys"] = [key.name for key in keys]

        if keys:
            self.table.add_row(
                "✅ SSH keys",
                "[green]Found[/green]",
                ", ".join(key.name for key in keys),
            )
        else:
            self.table.add_row(
                "⏳ SSH keys",
                "[yellow]None found[/yellow]",
                "Run: sfsetup setup",
            )

    def check_configuration(self) -> None:
        """Check the DDEV global config carries credentials."""
        store = CredentialStore(self.settings.ddev_config_path)
        path = str(store.config_path)

        try:
            document = store.load()
        except ConfigurationError as e:
            self.report["config"] = {"path": path, "status": "invalid"}
            self.table.add_row("❌ DDEV config", "[red]Invalid[/red]", e.message)
            return

        if document.get(WEB_ENVIRONMENT_KEY):
            status = "configured"
            self.table.add_row("✅ DDEV config", "[green]Credentials set[/green]", path)
        else:
            status = "missing"
            self.table.add_row(
                "⏳ DDEV config",
                "[yellow]No credentials[/yellow]",
                "Run: sfsetup setup",
            )
        self.report["config"] = {"path": path, "status": status}

    def execute(self) -> None:
        self.show_header(title="Doctor", subtitle="Setup readiness check")

        self.check_tools()
        self.check_ssh_keys()
        self.check_configuration()

        if self.json_output:
            self.output_json(self.report)
            return

        self.console.print(self.table)
        self.console.print()


@click.command(name="doctor")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
def doctor(json_output):
    """Check installed tools, SSH keys and DDEV credentials"""
    cmd = DoctorCommand(json_output=json_output)
    cmd.run()
