"""
Provisioning workflow

Walks the operator from credentials to a running local copy of a Site
Factory site. Stages run in a fixed order; each one can skip, branch or end
the workflow based on probes, operator answers and process outcomes.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from rich.markup import escape

from sfsetup.constants import (
    ACLI,
    CLOUD_API_TOKENS_URL,
    CLOUD_SSH_URL,
    CODE_STUDIO_SSH_URL,
    DDEV,
    DEFAULT_FACTORY_URL,
    DEFAULT_ORGANIZATION_UUID,
    GIT,
    INSTALL_HINTS,
    SITE_LIST_LIMIT,
)
from sfsetup.exceptions import (
    AgentRegistrationError,
    CatalogParseError,
    ConfigurationError,
    KeyGenerationError,
    ToolNotFoundError,
    WorkflowAborted,
)
from sfsetup.logger import SetupLogger
from sfsetup.models.credentials import CredentialSet
from sfsetup.models.prompts import Question
from sfsetup.models.results import describe_failure
from sfsetup.models.sites import SiteCatalog
from sfsetup.models.ssh import SSHKeyRecord
from sfsetup.prompter import Prompter
from sfsetup.services import (
    CredentialStore,
    EnvironmentProbe,
    ProcessRunner,
    SiteCatalogParser,
    SSHKeyManager,
)
from sfsetup.settings import Settings
from sfsetup.ui_components import (
    HEADING_STYLES,
    show_completion,
    show_public_key,
    show_stopped,
)

TOOL_LABELS = {
    DDEV: "DDEV",
    ACLI: "Acquia CLI",
}


@dataclass
class WorkflowContext:
    """State carried from one stage to the next."""

    credentials: Optional[CredentialSet] = None
    config: Dict[str, Any] = field(default_factory=dict)
    selected_key: Optional[SSHKeyRecord] = None
    repo_path: Optional[Path] = None
    tools: Dict[str, bool] = field(default_factory=dict)
    selected_site: Optional[str] = None


@dataclass
class WorkflowResult:
    """How a run ended."""

    completed: bool
    context: WorkflowContext
    stopped_at: Optional[str] = None


class ProvisioningOrchestrator:
    """Guided setup workflow."""

    def __init__(
        self,
        settings: Settings,
        prompter: Prompter,
        logger: SetupLogger,
        probe: EnvironmentProbe,
        runner: ProcessRunner,
        keys: SSHKeyManager,
        store: CredentialStore,
        catalog_parser: SiteCatalogParser,
        dry_run: bool = False,
        cwd: Optional[Path] = None,
    ):
        self.settings = settings
        self.prompter = prompter
        self.logger = logger
        self.console = logger.console
        self.probe = probe
        self.runner = runner
        self.keys = keys
        self.store = store
        self.catalog_parser = catalog_parser
        self.dry_run = dry_run
        self.cwd = Path(cwd) if cwd else Path.cwd()

    def run(self) -> WorkflowResult:
        """
        Run every stage in order.

        Returns:
            WorkflowResult; completed is False when a stage ended the workflow
        """
        context = WorkflowContext()
        self.logger.step(
            "Welcome to the Acquia Setup Helper! 🎉", HEADING_STYLES["welcome"]
        )

        try:
            self.collect_credentials(context)
            self.merge_configuration(context)

            if self.prepare_ssh(context):
                self.offer_browser_handoff()

            if self.acquire_repository(context):
                self.bootstrap_environment(context)
                catalog = self.discover_sites(context)
                if catalog is not None and not catalog.is_empty:
                    self.select_and_pull_site(context, catalog)
        except WorkflowAborted as e:
            self.logger.log(f"Workflow ended at stage '{e.stage}': {e.message}", "ERROR")
            show_stopped(e.message, self.console)
            return WorkflowResult(completed=False, context=context, stopped_at=e.stage)

        self.logger.log("Setup complete", "INFO")
        show_completion(self.console)
        return WorkflowResult(completed=True, context=context)

    # ------------------------------------------------------------------
    # Prompt helpers
    # ------------------------------------------------------------------

    def _ask(self, question: Question) -> Any:
        answer = self.prompter.ask(question)
        self.logger.log(f"Answer {question.name}: {answer}", "DEBUG")
        return answer

    def _confirm(self, name: str, message: str, default: bool = True) -> bool:
        return bool(self._ask(Question.confirm(name, message, default=default)))

    # ------------------------------------------------------------------
    # Process helpers
    # ------------------------------------------------------------------

    def _run_step(
        self,
        program: str,
        args: Sequence[str],
        cwd: Optional[Path] = None,
        success_message: Optional[str] = None,
    ) -> bool:
        """Run an interactive command and report its outcome."""
        command = " ".join([program, *args])
        self.logger.info(f"Running: {command}")

        outcome = self.runner.run_interactive(program, args, cwd=cwd)
        if not outcome.is_success:
            self.logger.log_error(
                f"Error running {command}: {describe_failure(outcome)}"
            )
            return False

        self.logger.success(success_message or f"{command} finished")
        return True

    def _offer_command(
        self,
        name: str,
        message: str,
        program: str,
        args: Sequence[str],
        cwd: Optional[Path] = None,
        success_message: Optional[str] = None,
    ) -> Optional[bool]:
        """Ask before running a command. Returns None when declined."""
        if not self._confirm(name, message):
            return None
        return self._run_step(program, args, cwd=cwd, success_message=success_message)

    # ------------------------------------------------------------------
    # Stage 1: credentials
    # ------------------------------------------------------------------

    def collect_credentials(self, context: WorkflowContext) -> CredentialSet:
        # Asked directly so answers stay out of the run log
        acsf_key = self.prompter.ask(
            Question.password(
                "ACQUIA_ACSF_KEY",
                "Enter your Acquia Site Factory Key (from the Site Factory user API tab. "
                f"Url is {DEFAULT_FACTORY_URL})",
            )
        )
        acsf_username = self.prompter.ask(
            Question.input(
                "ACQUIA_ACSF_USERNAME",
                "Enter your Acquia Site Factory USERNAME (ASURITE email)",
            )
        )

        self.console.print(
            f"[dim]Cloud API tokens are created at {CLOUD_API_TOKENS_URL}[/dim]"
        )
        api_key = self.prompter.ask(
            Question.input(
                "ACQUIA_API_KEY",
                "Enter your Acquia Cloud API Client ID (from Acquia Cloud Platform)",
            )
        )
        api_secret = self.prompter.ask(
            Question.password(
                "ACQUIA_API_SECRET",
                "Enter your ACQUIA_API_SECRET (from Acquia Cloud Platform)",
            )
        )
        factory_url = self.prompter.ask(
            Question.input(
                "ACQUIA_FACTORY_URL",
                "Enter your ACQUIA_FACTORY_URL (site factory URL) or accept default",
                default=DEFAULT_FACTORY_URL,
            )
        )
        use_default_organization = self._confirm(
            "AH_ORGANIZATION_UUID",
            f"AH_ORGANIZATION_UUID set to {DEFAULT_ORGANIZATION_UUID}. Continue?",
        )

        context.credentials = CredentialSet(
            acsf_key=acsf_key,
            acsf_username=acsf_username,
            api_key=api_key,
            api_secret=api_secret,
            factory_url=factory_url,
            use_default_organization=use_default_organization,
        )
        return context.credentials

    # ------------------------------------------------------------------
    # Stage 2: configuration merge
    # ------------------------------------------------------------------

    def merge_configuration(self, context: WorkflowContext) -> None:
        config_path = self.store.config_path

        try:
            if self.dry_run:
                document = self.store.merge(self.store.load(), context.credentials)
                context.config = document
                self.console.print(f"[magenta]\\[DEBUG] Writing config to:[/magenta] {config_path}")
                self.console.print("[magenta]\\[DEBUG] Config content:[/magenta]")
                self.console.print(self.store.render(document), markup=False, highlight=False)
                self.logger.warning(f"Debug mode: {config_path} was not written")
                return

            context.config = self.store.store(context.credentials)
        except ConfigurationError as e:
            self.logger.log_error(e.message, e.context)
            raise WorkflowAborted("configuration", "the DDEV configuration could not be updated")

        self.logger.success(f"Updated {config_path} with your Acquia credentials.")

    # ------------------------------------------------------------------
    # Stage 3: SSH readiness
    # ------------------------------------------------------------------

    def prepare_ssh(self, context: WorkflowContext) -> bool:
        """
        Make sure a key exists, pick one, show it and add it to the agent.

        Returns:
            True if a usable key was selected
        """
        self.logger.step("🔑 SSH Key Setup for Acquia Services 🔑", HEADING_STYLES["ssh"])

        if not self.keys.has_any_key():
            if not self._confirm(
                "generate_key",
                "No SSH key found. Would you like to generate a new SSH key?",
            ):
                self.logger.warning("Skipping SSH key setup")
                return False

            self.logger.info("Generating new SSH key...")
            try:
                self.keys.generate_key()
            except (KeyGenerationError, ToolNotFoundError) as e:
                advice = "Please generate it manually using ssh-keygen."
                self.logger.log_error(
                    f"Failed to generate SSH key: {e.message}",
                    f"{e.context}. {advice}" if e.context else advice,
                )
                return False
            self.logger.success("SSH key generated successfully!")

        keys = self.keys.list_keys()
        if not keys:
            self.logger.warning(f"No public key found in {self.keys.ssh_dir}")
            return False

        key = keys[0] if len(keys) == 1 else self._choose_key(keys)
        context.selected_key = key
        show_public_key(key.name, key.content, self.console)

        self.logger.info("Adding SSH key to current SSH agent...")
        try:
            self.keys.register_with_agent(key.private_key_path)
        except AgentRegistrationError as e:
            self.logger.warning(e.message)
            if e.context:
                self.logger.warning(e.context)
        else:
            self.logger.success("SSH key added to current SSH agent successfully!")

        return True

    def _choose_key(self, keys: List[SSHKeyRecord]) -> SSHKeyRecord:
        self.console.print(f"\n[bold yellow]Found {len(keys)} SSH keys:[/bold yellow]")

        choices = []
        for index, key in enumerate(keys):
            info = self.keys.describe_key(key.content)
            label = (
                f"{key.name} ({info.key_type}) - {info.comment} "
                f"(Fingerprint: {info.fingerprint})"
            )
            self.console.print(f"  [dim]{index + 1}. {escape(label)}[/dim]")
            choices.append((label, index))

        selected = self._ask(
            Question.select(
                "selected_key",
                "Which SSH key would you like to display and use?",
                choices,
            )
        )
        return keys[selected]

    # ------------------------------------------------------------------
    # Stage 4: browser hand-off
    # ------------------------------------------------------------------

    def offer_browser_handoff(self) -> None:
        pages = [
            ("open_code_studio", "Acquia Code Studio", CODE_STUDIO_SSH_URL),
            ("open_cloud", "Acquia Cloud", CLOUD_SSH_URL),
        ]
        for name, label, url in pages:
            if self._confirm(
                name,
                f"Would you like to open {label} SSH key management page in your browser?",
            ):
                self.logger.info(f"Opening {label} SSH key management page...")
                self.runner.open_in_browser(url)

    # ------------------------------------------------------------------
    # Stage 5: repository acquisition
    # ------------------------------------------------------------------

    def acquire_repository(self, context: WorkflowContext) -> bool:
        """
        Clone the factory repository on request.

        Returns:
            True if a checkout is ready; False if the operator declined

        Raises:
            WorkflowAborted: If git is missing or the clone fails
        """
        self.logger.step("📦 Repository Setup 📦", HEADING_STYLES["repo"])

        if not self._confirm(
            "clone_repo", "Would you like to clone the Acquia Site Factory repository?"
        ):
            self.logger.info("Skipping repository clone")
            return False

        if not self.probe.command_available(GIT):
            self.logger.log_error(
                "Git command not found. Please install Git and ensure it's in your PATH.",
                f"You can download Git from: {INSTALL_HINTS[GIT]}",
            )
            raise WorkflowAborted("repository", "git is not installed")

        current_dir = str(self.cwd)
        clone_dir = self._ask(
            Question.input(
                "clone_dir",
                f"Where would you like to clone the repository? (current location: {current_dir})",
                default=current_dir,
            )
        )

        destination = self.cwd / Path(clone_dir).expanduser() / self.settings.repo_name
        self.logger.info(f"Cloning repository to {destination}...")

        outcome = self.runner.run_interactive(
            GIT, ["clone", self.settings.repo_url, str(destination)]
        )
        if not outcome.is_success:
            self.logger.log_error(
                f"Error cloning repository: git clone {describe_failure(outcome)}",
                "Make sure your SSH key is properly set up with Acquia Code Studio.",
            )
            raise WorkflowAborted("repository", "the repository could not be cloned")

        self.logger.success("Repository cloned successfully!")
        context.repo_path = destination
        return True

    # ------------------------------------------------------------------
    # Stage 6: local environment bootstrap
    # ------------------------------------------------------------------

    def bootstrap_environment(self, context: WorkflowContext) -> None:
        self.logger.step(
            "🛠️ Setting up development environment 🛠️", HEADING_STYLES["dev_env"]
        )

        for tool in (DDEV, ACLI):
            context.tools[tool] = self.probe.command_available(tool)
            if not context.tools[tool]:
                self.logger.warning(
                    f"{TOOL_LABELS[tool]} not found. Please install it from: "
                    f"{INSTALL_HINTS[tool]}"
                )

        repo_path = context.repo_path

        if context.tools[DDEV]:
            self._offer_command(
                "ddev_config",
                "Would you like to set up DDEV configuration for this repository?",
                DDEV,
                ["config"],
                cwd=repo_path,
                success_message="DDEV configuration set up successfully!",
            )
            self._offer_command(
                "ddev_auth",
                'Would you like to run "ddev auth ssh" now?',
                DDEV,
                ["auth", "ssh"],
                cwd=repo_path,
            )

        if context.tools[ACLI]:
            self._offer_command(
                "acli_login",
                'Would you like to run "acli auth:login" now?',
                ACLI,
                ["auth:login"],
                cwd=repo_path,
            )

        if context.tools[DDEV]:
            self._offer_command(
                "ddev_start",
                'Would you like to run "ddev start" to initialize the local '
                "development environment?",
                DDEV,
                ["start"],
                cwd=repo_path,
                success_message="Local development environment started!",
            )

    # ------------------------------------------------------------------
    # Stage 7: remote site discovery
    # ------------------------------------------------------------------

    def discover_sites(self, context: WorkflowContext) -> Optional[SiteCatalog]:
        """
        List remote sites through the platform CLI.

        Returns:
            The parsed catalog, or None if declined or the listing failed
        """
        if not self._confirm(
            "list_sites",
            "Would you like to list all sites you have access to in Acquia Site Factory?",
        ):
            return None

        self.logger.step("🌐 Site Setup 🌐", HEADING_STYLES["sites"])
        self.logger.info("Fetching available sites from Acquia Site Factory...")

        outcome = self.runner.run_captured(
            ACLI, ["acsf:sites:find", f"--limit={SITE_LIST_LIMIT}"], cwd=context.repo_path
        )
        if not outcome.is_success:
            self.logger.log_error(
                f"Error fetching sites: {ACLI} {describe_failure(outcome)}"
            )
            return None

        self.logger.log_output(outcome.output_text)

        try:
            catalog = self.catalog_parser.parse(outcome.captured_output or b"")
        except CatalogParseError as e:
            self.logger.log_error(
                "Failed to parse sites data. Make sure you are logged in to Acquia CLI.",
                e.message,
            )
            self.console.print("[dim]Raw output:[/dim]")
            self.console.print(e.raw, markup=False, highlight=False)
            return None

        if catalog.is_empty:
            self.logger.warning("No sites found for this account")
        else:
            self.logger.success(f"Found {len(catalog.sites)} sites!")
        return catalog

    # ------------------------------------------------------------------
    # Stage 8: site selection and pull
    # ------------------------------------------------------------------

    def select_and_pull_site(self, context: WorkflowContext, catalog: SiteCatalog) -> None:
        sites = catalog.sites

        if self._confirm(
            "use_filter",
            f"Found {len(sites)} sites. Would you like to filter by site name first?",
        ):
            term = self._ask(
                Question.input(
                    "filter_term",
                    'Enter search term to filter sites (e.g., "visitasu")',
                )
            )
            filtered = self.catalog_parser.filter(sites, term)
            if any(self.catalog_parser.matches(site, term) for site in sites):
                self.logger.success(f'Found {len(filtered)} sites matching "{term}"')
            else:
                self.logger.warning(f'No sites found matching "{term}". Showing all sites.')
            sites = filtered

        selected = self._ask(
            Question.select(
                "selected_site",
                "Select a site to work with",
                [(site.label, site.name) for site in sites],
            )
        )
        context.selected_site = selected
        self.logger.success(f"Selected site: {selected}")

        self.logger.info("Initializing DDEV ASU SF configuration...")
        if not self._run_step(
            DDEV,
            ["asusf:init"],
            cwd=context.repo_path,
            success_message="DDEV ASU SF initialized successfully!",
        ):
            self.logger.warning(f"Skipped pulling {selected} because initialization failed")
            return

        self.logger.info(f"Pulling site: {selected}...")
        self._run_step(
            DDEV,
            ["asusf:pull", selected],
            cwd=context.repo_path,
            success_message=f"Successfully pulled site: {selected}",
        )
