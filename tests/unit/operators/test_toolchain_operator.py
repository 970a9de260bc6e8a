"""Unit tests for ToolchainOperator."""

from unittest.mock import patch

import pytest
from freshbox.models.step import StepStatus, ToolchainStep
from freshbox.operators.toolchain import ToolchainOperator
from freshbox.utils.shell import CommandResult

OK = CommandResult(stdout="", stderr="", returncode=0)


def _fail(message: str) -> CommandResult:
    return CommandResult(stdout="", stderr=f"error: {message}\n", returncode=101)


class TestToolchainOperator:
    """Tests for ToolchainOperator class."""

    @pytest.fixture
    def operator(self) -> ToolchainOperator:
        """Create ToolchainOperator instance."""
        return ToolchainOperator()

    @pytest.fixture
    def step(self) -> ToolchainStep:
        """Toolchain step with three packages."""
        return ToolchainStep(label="Install cargo apps", packages=("a", "b", "c"))

    def test_one_invocation_per_package(
        self, operator: ToolchainOperator, step: ToolchainStep
    ) -> None:
        """Each package gets its own installer call, in order."""
        with (
            patch("freshbox.operators.toolchain.command_exists", return_value=True),
            patch("freshbox.operators.toolchain.run_command", return_value=OK) as mock_run,
        ):
            outcome = operator.run(step)

        assert outcome.status == StepStatus.SUCCEEDED
        calls = [c[0][0] for c in mock_run.call_args_list]
        assert calls == [
            ["cargo", "install", "a"],
            ["cargo", "install", "b"],
            ["cargo", "install", "c"],
        ]

    def test_failure_does_not_stop_remaining_packages(
        self, operator: ToolchainOperator, step: ToolchainStep
    ) -> None:
        """When B fails, C is still attempted and only B is reported."""
        with (
            patch("freshbox.operators.toolchain.command_exists", return_value=True),
            patch("freshbox.operators.toolchain.run_command") as mock_run,
        ):
            mock_run.side_effect = [OK, _fail("could not compile b"), OK]

            outcome = operator.run(step)

        assert mock_run.call_count == 3
        assert mock_run.call_args_list[2][0][0] == ["cargo", "install", "c"]
        assert outcome.failed is True
        assert outcome.status == StepStatus.PARTIAL
        assert outcome.failed_packages == ("b",)
        assert "could not compile b" in outcome.error

    def test_all_packages_failing_is_full_failure(
        self, operator: ToolchainOperator, step: ToolchainStep
    ) -> None:
        """If nothing installs, the step is FAILED rather than PARTIAL."""
        with (
            patch("freshbox.operators.toolchain.command_exists", return_value=True),
            patch("freshbox.operators.toolchain.run_command", return_value=_fail("offline")),
        ):
            outcome = operator.run(step)

        assert outcome.status == StepStatus.FAILED
        assert outcome.failed_packages == ("a", "b", "c")

    def test_duplicate_package_failing_every_time_is_full_failure(
        self, operator: ToolchainOperator
    ) -> None:
        """A package listed twice that never installs is FAILED, not PARTIAL."""
        step = ToolchainStep(label="Install cargo apps", packages=("a", "a"))
        with (
            patch("freshbox.operators.toolchain.command_exists", return_value=True),
            patch(
                "freshbox.operators.toolchain.run_command", return_value=_fail("offline")
            ) as mock_run,
        ):
            outcome = operator.run(step)

        assert mock_run.call_count == 2
        assert outcome.status == StepStatus.FAILED
        assert outcome.failed_packages == ("a",)
        assert "2 of 2" in outcome.error

    def test_duplicate_package_succeeding_once_is_partial(
        self, operator: ToolchainOperator
    ) -> None:
        """One success among repeated invocations makes the step PARTIAL."""
        step = ToolchainStep(label="Install cargo apps", packages=("a", "a"))
        with (
            patch("freshbox.operators.toolchain.command_exists", return_value=True),
            patch("freshbox.operators.toolchain.run_command") as mock_run,
        ):
            mock_run.side_effect = [OK, _fail("already installed")]

            outcome = operator.run(step)

        assert outcome.status == StepStatus.PARTIAL
        assert outcome.failed_packages == ("a",)
        assert "1 of 2" in outcome.error

    def test_oserror_on_one_package_is_recorded(
        self, operator: ToolchainOperator, step: ToolchainStep
    ) -> None:
        """An OSError for one package counts as that package failing."""
        with (
            patch("freshbox.operators.toolchain.command_exists", return_value=True),
            patch("freshbox.operators.toolchain.run_command") as mock_run,
        ):
            mock_run.side_effect = [OSError("exec format error"), OK, OK]

            outcome = operator.run(step)

        assert outcome.failed_packages == ("a",)
        assert mock_run.call_count == 3

    def test_custom_installer(self, operator: ToolchainOperator) -> None:
        """The configured installer prefix is used."""
        step = ToolchainStep(label="go", packages=("gopls",), installer=("go", "install"))
        with (
            patch("freshbox.operators.toolchain.command_exists", return_value=True),
            patch("freshbox.operators.toolchain.run_command", return_value=OK) as mock_run,
        ):
            operator.run(step)

        assert mock_run.call_args[0][0] == ["go", "install", "gopls"]

    def test_dry_run_does_not_execute(self, step: ToolchainStep) -> None:
        """Dry-run mode reports success without running anything."""
        with patch("freshbox.operators.toolchain.run_command") as mock_run:
            outcome = ToolchainOperator(dry_run=True).run(step)

        assert outcome.success is True
        mock_run.assert_not_called()

    def test_raises_when_installer_missing(
        self, operator: ToolchainOperator, step: ToolchainStep
    ) -> None:
        """run() raises RuntimeError when the installer is not on PATH."""
        with (
            patch("freshbox.operators.toolchain.command_exists", return_value=False),
            pytest.raises(RuntimeError, match="cargo"),
        ):
            operator.run(step)
