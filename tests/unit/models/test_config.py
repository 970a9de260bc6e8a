"""Unit tests for provisioning configuration models."""

import pytest
from freshbox.models.config import (
    AptStepConfig,
    ExportsConfig,
    ProvisionConfig,
    ScriptStepConfig,
    ToolchainStepConfig,
    default_config,
)
from pydantic import ValidationError


class TestStepConfig:
    """Tests for the step discriminated union."""

    def test_steps_are_parsed_by_kind(self) -> None:
        """The 'kind' key selects the step model."""
        config = ProvisionConfig.model_validate(
            {
                "steps": [
                    {"kind": "script", "label": "Update apt", "command": ["apt-get", "update"]},
                    {"kind": "apt", "label": "apt", "packages_file": "apt_apps"},
                    {"kind": "toolchain", "label": "cargo", "packages_file": "cargo_apps"},
                ]
            }
        )

        assert [type(s) for s in config.steps] == [
            ScriptStepConfig,
            AptStepConfig,
            ToolchainStepConfig,
        ]

    def test_unknown_kind_rejected(self) -> None:
        """Unknown step kinds fail validation."""
        with pytest.raises(ValidationError):
            ProvisionConfig.model_validate(
                {"steps": [{"kind": "snap", "label": "x", "packages_file": "y"}]}
            )

    def test_toolchain_defaults_to_cargo(self) -> None:
        """The toolchain installer defaults to cargo install."""
        step = ToolchainStepConfig(label="cargo", packages_file="cargo_apps")
        assert step.installer == ["cargo", "install"]

    def test_empty_command_rejected(self) -> None:
        """Script steps need a command."""
        with pytest.raises(ValidationError):
            ScriptStepConfig(label="nothing", command=[])

    def test_extra_keys_rejected(self) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(ValidationError):
            AptStepConfig.model_validate(
                {"label": "apt", "packages_file": "apt_apps", "sudo": False}
            )

    def test_duplicate_labels_rejected(self) -> None:
        """Step labels must be unique."""
        with pytest.raises(ValidationError, match="duplicate step label"):
            ProvisionConfig(
                steps=[
                    ScriptStepConfig(label="same", command=["true"]),
                    ScriptStepConfig(label="same", command=["false"]),
                ]
            )


class TestExportsConfig:
    """Tests for ExportsConfig."""

    def test_defaults(self) -> None:
        """Default targets are zshrc and bashrc in the home directory."""
        config = ExportsConfig()
        assert config.source == "exports"
        assert config.targets == {"zshrc": "~/.zshrc", "bashrc": "~/.bashrc"}

    def test_empty_targets_rejected(self) -> None:
        """At least one target is required."""
        with pytest.raises(ValidationError, match="at least one export target"):
            ExportsConfig(targets={})

    def test_blank_target_path_rejected(self) -> None:
        """Target paths cannot be blank."""
        with pytest.raises(ValidationError, match="empty path"):
            ExportsConfig(targets={"zshrc": "  "})


class TestDefaultConfig:
    """Tests for default_config."""

    def test_step_order(self) -> None:
        """The default run updates apt, installs apps, oh my zsh, then cargo apps."""
        config = default_config()

        assert [s.label for s in config.steps] == [
            "Update apt",
            "Install apt apps",
            "Install oh my zsh",
            "Install cargo apps",
        ]

    def test_dotfiles_has_no_repository(self) -> None:
        """No dotfiles repository is assumed."""
        config = default_config()
        assert config.dotfiles.enabled is True
        assert config.dotfiles.repository is None
        assert config.dotfiles.skip == [".git"]
