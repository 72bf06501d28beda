"""Named heatmap presets stored as JSON next to the package.

A profile is a JSON object whose keys are ``HeatmapConfig`` fields. Profiles
are looked up in ``profiles/`` or in ``HEATLAYER_PROFILES_DIR`` when set; a
path to a ``.json`` file is accepted as well.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List

from .config import HeatmapConfig
from .errors import ConfigError

PROFILES_DIR = Path(__file__).resolve().parents[1] / "profiles"


def profiles_dir() -> Path:
    return Path(os.getenv("HEATLAYER_PROFILES_DIR") or PROFILES_DIR)


def available_profiles() -> List[str]:
    return sorted(p.stem for p in profiles_dir().glob("*.json"))


def _locate(name_or_path: str) -> Path:
    given = Path(name_or_path)
    if given.suffix == ".json" and given.is_file():
        return given
    named = profiles_dir() / f"{given.stem if given.suffix == '.json' else given.name}.json"
    if named.is_file():
        return named
    raise FileNotFoundError(
        f"No heatmap profile '{name_or_path}' in {profiles_dir()}; "
        f"available: {', '.join(available_profiles()) or 'none'}"
    )


def load_profile(name_or_path: str) -> Dict[str, Any]:
    """Read a profile and check its keys against ``HeatmapConfig``.

    Raises ``FileNotFoundError`` for an unknown profile and ``ConfigError``
    when the file is not a JSON object of config fields.
    """
    path = _locate(name_or_path)
    try:
        profile = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"profile {path} is not valid JSON: {e}") from None
    if not isinstance(profile, dict):
        raise ConfigError(f"profile {path} must hold a JSON object, got {type(profile).__name__}")
    HeatmapConfig.check_keys(profile, source=str(path))
    return profile


def load_config(name_or_path: str, **overrides) -> HeatmapConfig:
    """Validated ``HeatmapConfig`` from a profile; ``None`` overrides keep the profile value."""
    return HeatmapConfig.from_profile(load_profile(name_or_path), **overrides)
