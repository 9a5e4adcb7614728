from pathlib import Path

import pytest
from pydantic import ValidationError

from settings import Settings


def test_settings_defaults():
    s = Settings()
    assert s.project_dir == Path("./data")
    assert s.theme == "editorial"
    assert s.gallery_title == ""
    assert s.captions is True
    assert s.log_level == "INFO"


def test_settings_derived_paths():
    s = Settings(project_dir=Path("/tmp/project"))
    assert s.photos_dir == Path("/tmp/project/photos")
    assert s.themes_dir == Path("/tmp/project/themes")
    assert s.images_path == Path("/tmp/project/images.json")
    assert s.cache_dir == Path("/tmp/project/.cache")
    assert s.images_cache_path == Path("/tmp/project/.cache/images.json")
    assert s.spread_plan_path == Path("/tmp/project/.cache/spread_plan.json")


def test_blank_theme_rejected():
    with pytest.raises(ValidationError):
        Settings(theme="   ")


def test_theme_is_stripped():
    assert Settings(theme=" album ").theme == "album"


def test_log_level_normalised_to_upper_case():
    assert Settings(log_level="debug").log_level == "DEBUG"


def test_unknown_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(log_level="chatty")


def test_settings_env_prefix(monkeypatch):
    monkeypatch.setenv("SPREADS_THEME", "profile")
    monkeypatch.setenv("SPREADS_CAPTIONS", "false")
    monkeypatch.setenv("SPREADS_GALLERY_TITLE", "Winter Wedding")
    s = Settings()
    assert s.theme == "profile"
    assert s.captions is False
    assert s.gallery_title == "Winter Wedding"
