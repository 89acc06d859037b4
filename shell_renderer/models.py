from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from shell_renderer.resources import read_data

logger = logging.getLogger("shell_renderer.models")

Family = Literal["posix", "windows"]


class PlatformFamilies(BaseModel):
    model_config = ConfigDict(frozen=True)

    posix: frozenset[str] = Field(default_factory=frozenset)
    windows: frozenset[str] = frozenset({"windows"})

    @field_validator("posix", "windows", mode="before")
    @classmethod
    def normalize_aliases(cls, value: Any) -> Any:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            raise ValueError("Aliases must be a list of platform names")
        aliases = [str(alias).strip().lower() for alias in value]
        if any(not alias for alias in aliases):
            raise ValueError("Platform aliases must not be empty")
        return frozenset(aliases)

    @model_validator(mode="after")
    def validate_families(self) -> PlatformFamilies:
        overlap = self.posix & self.windows
        if overlap:
            listed = ", ".join(sorted(overlap))
            raise ValueError(f"Aliases listed under more than one family: {listed}")
        if "windows" not in self.windows:
            raise ValueError("'windows' must resolve to the windows family")
        return self


class PlatformTable(BaseModel):
    """Static mapping from platform identifiers to shell families."""

    model_config = ConfigDict(frozen=True)

    version: int = 1
    families: PlatformFamilies = Field(default_factory=PlatformFamilies)

    def aliases(self, family: Family) -> frozenset[str]:
        return getattr(self.families, family)

    def family_for(self, os_name: str) -> Family | None:
        name = os_name.lower()
        if name in self.families.windows:
            return "windows"
        if name in self.families.posix:
            return "posix"
        return None

    def with_aliases(self, family: Family, *aliases: str) -> PlatformTable:
        families = {
            "posix": sorted(self.families.posix),
            "windows": sorted(self.families.windows),
        }
        families[family] = [*families[family], *aliases]
        return PlatformTable.model_validate({"version": self.version, "families": families})


def parse_platform_table(data: dict[str, Any]) -> PlatformTable:
    return PlatformTable.model_validate(data)


def load_platform_table(path: Path) -> PlatformTable:
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"Platform table at {path} must be a YAML object")
    table = parse_platform_table(raw)
    logger.info(
        "Platform table loaded from %s: %d posix, %d windows aliases",
        path,
        len(table.families.posix),
        len(table.families.windows),
    )
    return table


@lru_cache(maxsize=1)
def default_platform_table() -> PlatformTable:
    raw = yaml.safe_load(read_data("platforms"))
    if not isinstance(raw, dict):
        raise ValueError("Packaged platform table must be a YAML object")
    return parse_platform_table(raw)


def format_validation_error(exc: ValidationError) -> str:
    messages: list[str] = []
    for issue in exc.errors():
        loc = ".".join(str(part) for part in issue.get("loc", []))
        message = issue.get("msg", "validation error")
        messages.append(f"{loc}: {message}")
    return "\n".join(messages)
