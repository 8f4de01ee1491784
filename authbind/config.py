"""Engine configuration loaded from YAML and validated with pydantic."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict

from authbind.settings import Settings


class EngineConfig(BaseModel):
    """
    Behaviour switches for ``Authorization``.

    - strict_subset_apply: reject ``apply()`` of components without a binding
      instead of treating them as having no permission requirements.
    - integrity_check: default for ``bind_data()`` when the caller passes none.
    - reset_location: where the view re-evaluation navigates before coming back;
      the navigator must have a view there.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    strict_subset_apply: bool = False
    integrity_check: bool = True
    reset_location: str = ""

    @classmethod
    def from_settings(cls, settings: Settings) -> EngineConfig:
        path = settings.resolved_config_path()
        if path is None:
            return cls()
        return load_engine_config(path)


def load_engine_config(path: Path) -> EngineConfig:
    raw_text = path.read_text(encoding="utf-8")
    raw: dict[str, Any] = yaml.safe_load(raw_text) or {}

    if "authorization" not in raw:
        raise ValueError(f"Missing top-level 'authorization' key in config: {path}")

    return EngineConfig.model_validate(raw["authorization"] or {})
