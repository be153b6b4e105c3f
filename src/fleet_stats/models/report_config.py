"""Pydantic models for the optional fleet_stats YAML config."""

from typing import Any

import click
from pydantic import BaseModel, ConfigDict, Field, model_validator

# Keyword arguments accepted by click.style().
_STYLE_KEYS = {
    "fg",
    "bg",
    "bold",
    "dim",
    "underline",
    "overline",
    "italic",
    "blink",
    "reverse",
    "strikethrough",
    "reset",
}


class ModesConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    normal: str = "AGENT_MODE_NORMAL"
    maintenance: str = "AGENT_MODE_MAINTENANCE"
    freeze_env: str = "AGENT_MODE_FREEZE_ENV"
    # Modes that can never generate income, regardless of assigned VMs.
    non_income: list[str] = Field(
        default_factory=lambda: [
            "AGENT_MODE_MAINTENANCE",
            "AGENT_MODE_SETUP",
            "AGENT_MODE_NOT_READY",
        ]
    )


class StylesConfig(BaseModel):
    """click.style() keyword arguments for each renderer role."""

    model_config = ConfigDict(extra="forbid")

    emphasize: dict[str, Any] = Field(default_factory=lambda: {"fg": "yellow"})
    divider: dict[str, Any] = Field(default_factory=lambda: {"fg": "cyan"})
    entity: dict[str, Any] = Field(default_factory=lambda: {"fg": "green"})
    value: dict[str, Any] = Field(default_factory=lambda: {"fg": "red"})

    @model_validator(mode="after")
    def _valid_styles(self) -> "StylesConfig":
        for role in ("emphasize", "divider", "entity", "value"):
            unknown = set(getattr(self, role)) - _STYLE_KEYS
            if unknown:
                raise ValueError(f"styles.{role}: unknown click.style option(s): {', '.join(sorted(unknown))}")
            try:
                click.style("", **getattr(self, role))
            except (TypeError, ValueError) as exc:
                raise ValueError(f"styles.{role}: {exc}") from exc
        return self


class ReportConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    modes: ModesConfig = Field(default_factory=ModesConfig)
    styles: StylesConfig = Field(default_factory=StylesConfig)
