"""
Tests for the process runner and environment probe (mocked subprocess).

No real external tools are started.
"""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from sfsetup.constants import FALLBACK_EMAIL
from sfsetup.models.results import Spawned, SpawnFailed, describe_failure
from sfsetup.services.environment_probe import EnvironmentProbe
from sfsetup.services.process_runner import ProcessRunner

RUNNER_SUBPROCESS = "sfsetup.services.process_runner.subprocess"
PROBE_RUN = "sfsetup.services.environment_probe.subprocess.run"


def _completed(rc: int = 0, stdout=None):
    return subprocess.CompletedProcess(args=[], returncode=rc, stdout=stdout)


class TestDescribeFailure:
    def test_success_is_none(self):
        assert describe_failure(Spawned(exit_code=0)) is None

    def test_non_zero_exit(self):
        assert describe_failure(Spawned(exit_code=3)) == "exited with status 3"

    def test_spawn_failure_wording_differs(self):
        message = describe_failure(SpawnFailed(error=FileNotFoundError("ddev")))
        assert message.startswith("could not be started")

    def test_unknown_variant(self):
        with pytest.raises(TypeError):
            describe_failure("nope")


class TestRunInteractive:
    def test_inherits_terminal(self, logger):
        with patch(f"{RUNNER_SUBPROCESS}.run", return_value=_completed(0)) as run:
            outcome = ProcessRunner(logger=logger).run_interactive(
                "ddev", ["start"], cwd="/srv/site"
            )

        run.assert_called_once_with(["ddev", "start"], cwd="/srv/site")
        assert outcome == Spawned(exit_code=0, command="ddev start")
        assert outcome.is_success

    def test_exit_code_reported(self):
        with patch(f"{RUNNER_SUBPROCESS}.run", return_value=_completed(2)):
            outcome = ProcessRunner().run_interactive("git", ["clone", "x", "y"])
        assert isinstance(outcome, Spawned)
        assert outcome.exit_code == 2
        assert not outcome.is_success

    def test_spawn_error(self):
        error = FileNotFoundError(2, "No such file or directory", "acli")
        with patch(f"{RUNNER_SUBPROCESS}.run", side_effect=error):
            outcome = ProcessRunner().run_interactive("acli", ["auth:login"])
        assert isinstance(outcome, SpawnFailed)
        assert outcome.error is error
        assert not outcome.is_success

    def test_command_is_logged(self, logger):
        with patch(f"{RUNNER_SUBPROCESS}.run", return_value=_completed(0)):
            ProcessRunner(logger=logger).run_interactive("ddev", ["auth", "ssh"])
        assert "Executing: ddev auth ssh" in logger.log_path.read_text()


class TestRunCaptured:
    def test_captures_stdout_bytes(self):
        with patch(
            f"{RUNNER_SUBPROCESS}.run", return_value=_completed(0, stdout=b'{"sites": []}')
        ) as run:
            outcome = ProcessRunner().run_captured("acli", ["acsf:sites:find"])

        _, kwargs = run.call_args
        assert kwargs["stdout"] is subprocess.PIPE
        assert "stderr" not in kwargs
        assert outcome.captured_output == b'{"sites": []}'
        assert outcome.output_text == '{"sites": []}'

    def test_spawn_error(self):
        with patch(f"{RUNNER_SUBPROCESS}.run", side_effect=PermissionError("denied")):
            outcome = ProcessRunner().run_captured("acli", ["acsf:sites:find"])
        assert isinstance(outcome, SpawnFailed)


class TestOpenInBrowser:
    @pytest.mark.parametrize(
        "platform, argv",
        [
            ("darwin", ["open", "https://example.com"]),
            ("linux", ["xdg-open", "https://example.com"]),
        ],
    )
    def test_platform_opener(self, platform, argv):
        with patch("sfsetup.services.process_runner.sys.platform", platform), patch(
            f"{RUNNER_SUBPROCESS}.Popen"
        ) as popen:
            ProcessRunner().open_in_browser("https://example.com")

        args, kwargs = popen.call_args
        assert args[0] == argv
        assert kwargs["start_new_session"] is True
        popen.return_value.wait.assert_not_called()

    def test_windows_start_gets_empty_title(self):
        with patch("sfsetup.services.process_runner.sys.platform", "win32"), patch(
            f"{RUNNER_SUBPROCESS}.DETACHED_PROCESS", 0x00000008, create=True
        ), patch(f"{RUNNER_SUBPROCESS}.Popen") as popen:
            ProcessRunner().open_in_browser("https://example.com")

        args, kwargs = popen.call_args
        assert subprocess.list2cmdline(args[0]) == 'cmd /c start "" https://example.com'
        assert kwargs["creationflags"] == 0x00000008
        assert "start_new_session" not in kwargs

    def test_spawn_failure_prints_url(self, console, output):
        with patch(f"{RUNNER_SUBPROCESS}.Popen", side_effect=FileNotFoundError("xdg-open")):
            ProcessRunner(console=console).open_in_browser("https://example.com/keys")

        assert "Please visit: https://example.com/keys" in output()


class TestEnvironmentProbe:
    def test_available(self):
        with patch(PROBE_RUN, return_value=_completed(0)) as run:
            assert EnvironmentProbe().command_available("ddev") is True
        assert run.call_args[0][0] == ["ddev", "--version"]

    def test_non_zero_is_unavailable(self):
        with patch(PROBE_RUN, return_value=_completed(1)):
            assert EnvironmentProbe().command_available("ddev") is False

    def test_spawn_error_is_unavailable(self):
        with patch(PROBE_RUN, side_effect=FileNotFoundError("ddev")):
            assert EnvironmentProbe().command_available("ddev") is False

    def test_command_on_path(self):
        with patch("sfsetup.services.environment_probe.shutil.which", return_value=None):
            assert EnvironmentProbe().command_on_path("ssh-keygen") is False
        with patch(
            "sfsetup.services.environment_probe.shutil.which",
            return_value="/usr/bin/ssh-keygen",
        ):
            assert EnvironmentProbe().command_on_path("ssh-keygen") is True

    def test_git_email(self):
        result = MagicMock(returncode=0, stdout="dev@asu.edu\n")
        with patch(PROBE_RUN, return_value=result):
            assert EnvironmentProbe().git_user_email() == "dev@asu.edu"

    def test_git_email_fallback_warns(self, console, output):
        with patch(PROBE_RUN, return_value=MagicMock(returncode=1, stdout="")):
            email = EnvironmentProbe(console=console).git_user_email()

        assert email == FALLBACK_EMAIL
        assert "Could not get git user email" in output()

    def test_git_missing_fallback(self, logger, output):
        with patch(PROBE_RUN, side_effect=FileNotFoundError("git")):
            assert EnvironmentProbe(logger=logger).git_user_email() == FALLBACK_EMAIL
        assert "using default" in output()
