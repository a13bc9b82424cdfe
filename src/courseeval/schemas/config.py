"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class EngineConfig(BaseModel):
    default_rules: dict[str, Any] | None = None


class ModelsConfig(BaseModel):
    score_cap: dict[str, Any] | None = None
    replace_lowest: dict[str, Any] | None = None
    final_exam: dict[str, Any] | None = None


class AppConfig(BaseModel):
    engine: EngineConfig = Field(default_factory=EngineConfig)
    models: ModelsConfig = Field(default_factory=ModelsConfig)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        engine_settings = self.engine.model_dump(exclude_none=True)
        if engine_settings:
            settings["engine"] = engine_settings
        model_settings = self.models.model_dump(exclude_none=True)
        if model_settings:
            settings["models"] = model_settings
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValueError("Config must be a mapping")
    return AppConfig.model_validate(raw)
