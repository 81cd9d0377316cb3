"""
Guided setup - credentials, SSH key, repository and local DDEV environment
"""

import click

from sfsetup.base import BaseCommand
from sfsetup.core import ProvisioningOrchestrator
from sfsetup.prompter import InquirerPrompter, Prompter
from sfsetup.services import (
    CredentialStore,
    EnvironmentProbe,
    ProcessRunner,
    SiteCatalogParser,
    SSHKeyManager,
)


class SetupCommand(BaseCommand):
    """Run the provisioning workflow."""

    def __init__(
        self,
        verbose: bool = False,
        debug: bool = False,
        prompter: Prompter = None,
        **kwargs,
    ):
        super().__init__(verbose=verbose, **kwargs)
        self.debug = debug
        self.prompter = prompter or InquirerPrompter()

    def build_orchestrator(self) -> ProvisioningOrchestrator:
        """Wire services to the run logger."""
        logger = self.logger
        runner = ProcessRunner(logger=logger)
        probe = EnvironmentProbe(logger=logger)

        return ProvisioningOrchestrator(
            settings=self.settings,
            prompter=self.prompter,
            logger=logger,
            probe=probe,
            runner=runner,
            keys=SSHKeyManager(self.settings.ssh_dir, runner=runner, probe=probe),
            store=CredentialStore(self.settings.ddev_config_path),
            catalog_parser=SiteCatalogParser(),
            dry_run=self.debug,
        )

    def execute(self) -> None:
        self.init_logger("setup")
        self.show_header(
            title="Setup",
            subtitle="Acquia CLI, Code Studio and DDEV onboarding",
            details={"Config": self.settings.ddev_config_path},
        )

        result = self.build_orchestrator().run()
        if not result.completed:
            self.logger.log(f"Stopped at stage: {result.stopped_at}", "WARNING")

        self._print_log_location()


@click.command(name="setup")
@click.option("--verbose", "-v", is_flag=True, help="Show executed commands")
@click.option(
    "--debug",
    "-d",
    is_flag=True,
    help="Print the DDEV global config instead of writing it",
)
def setup(verbose, debug):
    """
    Guide you through Acquia CLI and Code Studio setup

    \b
    Steps:
    - Store Acquia credentials in ~/.ddev/global_config.yaml
    - Find or generate an SSH key and add it to the agent
    - Clone the Site Factory repository
    - Configure and start DDEV, log in to Acquia CLI
    - Pick a site and pull it locally
    """
    cmd = SetupCommand(verbose=verbose, debug=debug)
    cmd.run()
