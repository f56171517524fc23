"""Application settings."""

from __future__ import annotations

from typing import Iterable, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogProfile = Literal["default", "shell"]


class TransformConfig(BaseSettings):
    """Which sugared constructs the transformer eliminates.

    Every switch defaults to on and can be turned off from the environment,
    e.g. SETSUGAR_OMEGA=false. Instances are frozen.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SETSUGAR_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    variables: bool = Field(default=True, description="rename letter variables to v0, v1, ...")
    negated_relations: bool = Field(default=True, description="≠ ∉ ⊈")
    subset: bool = Field(default=True, description="⊆")
    singleton: bool = Field(default=True, description="{A}")
    comprehension: bool = Field(default=True, description="{y ∈ A | φ}")
    power_set: bool = Field(default=True, description="Pot(A)")
    big_union: bool = Field(default=True, description="⋃(A)")
    big_intersection: bool = Field(default=True, description="⋂(A)")
    union: bool = Field(default=True, description="A ∪ B")
    intersection: bool = Field(default=True, description="A ∩ B")
    difference: bool = Field(default=True, description="A \\ B")
    pair_set: bool = Field(default=True, description="{A, B}")
    empty_set: bool = Field(default=True, description="∅")
    omega: bool = Field(default=True, description="ω")

    @classmethod
    def switches(cls) -> tuple[str, ...]:
        return tuple(cls.model_fields)

    @classmethod
    def none(cls) -> TransformConfig:
        """All eliminations off."""
        return cls(**dict.fromkeys(cls.switches(), False))

    @classmethod
    def only(cls, *names: str) -> TransformConfig:
        """Only the named eliminations on."""
        _check_switches(names)
        return cls(**{name: name in names for name in cls.switches()})

    def without(self, *names: str) -> TransformConfig:
        _check_switches(names)
        return self.model_copy(update=dict.fromkeys(names, False))

    def toggled(self, name: str) -> TransformConfig:
        _check_switches([name])
        return self.model_copy(update={name: not getattr(self, name)})

    def enabled(self) -> list[str]:
        return [name for name in self.switches() if getattr(self, name)]


class LogSettings(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SETSUGAR_LOG_",
        case_sensitive=False,
        extra="ignore",
    )

    filter: str = Field(default="warning")
    profile: LogProfile = Field(default="default")


SWITCHES = TransformConfig.switches()


def _check_switches(names: Iterable[str]) -> None:
    unknown = sorted(set(names) - set(SWITCHES))
    if unknown:
        raise ValueError(f"Unknown switch: {', '.join(unknown)}; expected one of {', '.join(SWITCHES)}")


def load_config(*, only: Iterable[str] | None = None, skip: Iterable[str] | None = None) -> TransformConfig:
    """Load the transform configuration from the environment, then apply overrides."""
    config = TransformConfig.only(*only) if only is not None else TransformConfig()
    if skip:
        config = config.without(*skip)
    return config
