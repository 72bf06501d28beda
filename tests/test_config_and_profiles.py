import json

import pytest

from heatlayer.config import HeatmapConfig, Style
from heatlayer.errors import ConfigError
from heatlayer.profiles import available_profiles, load_config, load_profile


def test_defaults():
    cfg = HeatmapConfig()
    assert cfg.shade_count == 32
    assert cfg.stamp_radius == 50
    assert cfg.opacity == 30
    assert cfg.dither is False and cfg.fill_with_smallest is False
    assert cfg.style is Style.SPOTS
    assert cfg.gradient_name == "gradient-32.png"


@pytest.mark.parametrize("kwargs", [
    {"shade_count": 10},
    {"stamp_radius": 0},
    {"stamp_radius": -4},
    {"opacity": 101},
    {"opacity": -1},
    {"opacity": "lots"},
    {"style": "hexagons"},
    {"grid_size": 0},
    {"stamp_radius": True},
    {"grid_size": True},
    {"stamp_radius": 2.5},
])
def test_invalid_config_rejected(kwargs):
    with pytest.raises(ConfigError):
        HeatmapConfig(**kwargs)


def test_config_error_is_value_error():
    with pytest.raises(ValueError):
        HeatmapConfig(shade_count=12)


def test_fill_gradient_name_and_style_string():
    cfg = HeatmapConfig(shade_count=8, fill_with_smallest=True, style="squares")
    assert cfg.gradient_name == "gradient-8-fill.png"
    assert cfg.style is Style.SQUARES
    assert cfg.to_dict()["style"] == "squares"


def test_load_profile_by_name():
    prof = load_profile("default")
    assert prof["shade_count"] == 32
    assert {"coverage", "default", "hotspots"} <= set(available_profiles())


def test_load_config_applies_overrides():
    cfg = load_config("coverage", opacity=90, dither=None)
    assert cfg.style is Style.SQUARES and cfg.fill_with_smallest is True
    assert cfg.opacity == 90 and cfg.dither is False


def test_load_profile_from_path(tmp_path):
    p = tmp_path / "custom.json"
    p.write_text(json.dumps({"shade_count": 8, "opacity": 55}))
    prof = load_profile(str(p))
    cfg = HeatmapConfig.from_profile(prof, stamp_radius=12, opacity=None)
    assert cfg.shade_count == 8 and cfg.opacity == 55 and cfg.stamp_radius == 12


def test_load_profile_env_dir_and_missing(tmp_path, monkeypatch):
    (tmp_path / "mine.json").write_text(json.dumps({"shade_count": 16}))
    monkeypatch.setenv("HEATLAYER_PROFILES_DIR", str(tmp_path))
    assert load_profile("mine")["shade_count"] == 16
    assert load_profile("mine.json") == load_profile("mine")
    with pytest.raises(FileNotFoundError) as ei:
        load_profile("nope")
    assert "mine" in str(ei.value)


def test_profile_with_unknown_key_is_config_error(tmp_path):
    p = tmp_path / "typo.json"
    p.write_text(json.dumps({"shade_count": 16, "stamp_raduis": 30}))
    with pytest.raises(ConfigError) as ei:
        load_profile(str(p))
    assert "stamp_raduis" in str(ei.value)


@pytest.mark.parametrize("content", ["[8, 16]", "{not json"])
def test_profile_must_be_json_object(tmp_path, content):
    p = tmp_path / "bad.json"
    p.write_text(content)
    with pytest.raises(ConfigError):
        load_profile(str(p))


def test_from_profile_rejects_unknown_keys():
    with pytest.raises(ConfigError):
        HeatmapConfig.from_profile({"shade_count": 25, "comment": "x"})
    with pytest.raises(ConfigError):
        HeatmapConfig.from_profile({"shade_count": 25}, colour="red")
    assert HeatmapConfig.from_profile({"shade_count": 25}).shade_count == 25
