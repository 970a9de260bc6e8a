"""Provisioning configuration models.

This module defines the Pydantic models representing the freshbox.toml
structure that describes which steps to run, where dotfiles come from,
and which shell startup files receive the canonical exports.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

OH_MY_ZSH_INSTALL_URL = "https://raw.githubusercontent.com/ohmyzsh/ohmyzsh/master/tools/install.sh"


class AptStepConfig(BaseModel):
    """Configured apt install step.

    Attributes:
        kind: Step discriminator, always "apt".
        label: Human-readable step name.
        packages_file: Newline-delimited package list.
    """

    model_config = ConfigDict(extra="forbid")

    kind: Literal["apt"] = "apt"
    label: Annotated[str, Field(min_length=1, description="Step name")]
    packages_file: Annotated[str, Field(min_length=1, description="Package list file")]


class ToolchainStepConfig(BaseModel):
    """Configured language toolchain install step (cargo-style).

    Attributes:
        kind: Step discriminator, always "toolchain".
        label: Human-readable step name.
        packages_file: Newline-delimited package list.
        installer: Installer command; each package name is appended to it.
    """

    model_config = ConfigDict(extra="forbid")

    kind: Literal["toolchain"] = "toolchain"
    label: Annotated[str, Field(min_length=1, description="Step name")]
    packages_file: Annotated[str, Field(min_length=1, description="Package list file")]
    installer: Annotated[
        list[str],
        Field(min_length=1, description="Installer command prefix"),
    ] = ["cargo", "install"]


class ScriptStepConfig(BaseModel):
    """Configured external script step.

    Attributes:
        kind: Step discriminator, always "script".
        label: Human-readable step name.
        command: Command and arguments to run.
    """

    model_config = ConfigDict(extra="forbid")

    kind: Literal["script"] = "script"
    label: Annotated[str, Field(min_length=1, description="Step name")]
    command: Annotated[list[str], Field(min_length=1, description="Command to run")]


StepConfig = Annotated[
    AptStepConfig | ToolchainStepConfig | ScriptStepConfig,
    Field(discriminator="kind"),
]


class DotfilesConfig(BaseModel):
    """Dotfiles deployment section.

    Attributes:
        enabled: Whether the dotfiles phase runs.
        repository: Git remote to clone. The phase is skipped when unset.
        skip: Path segments that are never copied.
    """

    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    repository: Annotated[str | None, Field(description="Git remote of the dotfiles")] = None
    skip: Annotated[
        list[str],
        Field(default_factory=lambda: [".git"], description="Path segments to skip"),
    ]


class ExportsConfig(BaseModel):
    """Shell export sync section.

    Attributes:
        enabled: Whether the export sync phase runs.
        source: Canonical export file.
        targets: Target identifier to shell startup file.
    """

    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    source: Annotated[str, Field(min_length=1, description="Canonical export file")] = "exports"
    targets: Annotated[
        dict[str, str],
        Field(
            default_factory=lambda: {"zshrc": "~/.zshrc", "bashrc": "~/.bashrc"},
            description="Shell startup files to sync",
        ),
    ]

    @field_validator("targets")
    @classmethod
    def validate_targets(cls, v: dict[str, str]) -> dict[str, str]:
        """Require at least one target with a non-empty path."""
        if not v:
            msg = "at least one export target is required"
            raise ValueError(msg)
        for name, path in v.items():
            if not path.strip():
                msg = f"export target '{name}' has an empty path"
                raise ValueError(msg)
        return v


class ProvisionConfig(BaseModel):
    """Complete provisioning configuration.

    Attributes:
        steps: Install steps, run in order.
        dotfiles: Dotfiles deployment settings.
        exports: Shell export sync settings.
    """

    model_config = ConfigDict(extra="forbid")

    steps: Annotated[list[StepConfig], Field(default_factory=list)]
    dotfiles: Annotated[DotfilesConfig, Field(default_factory=DotfilesConfig)]
    exports: Annotated[ExportsConfig, Field(default_factory=ExportsConfig)]

    @field_validator("steps")
    @classmethod
    def validate_unique_labels(
        cls, v: list[AptStepConfig | ToolchainStepConfig | ScriptStepConfig]
    ) -> list[AptStepConfig | ToolchainStepConfig | ScriptStepConfig]:
        """Validate that step labels are unique so reports stay unambiguous."""
        seen: set[str] = set()
        for step in v:
            if step.label in seen:
                msg = f"duplicate step label: {step.label}"
                raise ValueError(msg)
            seen.add(step.label)
        return v


def default_config() -> ProvisionConfig:
    """Build the configuration written by ``freshbox init``.

    Returns:
        ProvisionConfig mirroring a typical Ubuntu workstation setup.
    """
    return ProvisionConfig(
        steps=[
            ScriptStepConfig(label="Update apt", command=["sudo", "apt-get", "update"]),
            AptStepConfig(label="Install apt apps", packages_file="apt_apps"),
            ScriptStepConfig(
                label="Install oh my zsh",
                command=[
                    "sh",
                    "-c",
                    f"curl -fsSL {OH_MY_ZSH_INSTALL_URL} | sh -s -- --unattended",
                ],
            ),
            ToolchainStepConfig(label="Install cargo apps", packages_file="cargo_apps"),
        ],
    )
