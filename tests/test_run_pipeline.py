"""End-to-end tests for run_pipeline.main()."""
import json

import pytest
from PIL import Image

from models.spread import SpreadPlan
from run_pipeline import main


@pytest.fixture
def project(tmp_path, monkeypatch):
    photos = tmp_path / "photos"
    photos.mkdir()
    for k in range(7):
        Image.new("RGB", (160, 100)).save(photos / f"img_{k:02d}.jpg")
    monkeypatch.setenv("SPREADS_PROJECT_DIR", str(tmp_path))
    return tmp_path


def _saved_plan(project) -> SpreadPlan:
    return SpreadPlan.model_validate_json((project / ".cache" / "spread_plan.json").read_text())


def test_full_run(project):
    result = main(["--title", "Winter Wedding"])
    assert [s.kind for s in result.spreads] == ["hero", "collage-right", "trio"]
    assert result.spreads[1].captions[0].text == "Winter Wedding"
    assert _saved_plan(project) == result


def test_theme_option(project):
    result = main(["--theme", "album", "--no-captions"])
    assert result.theme == "album"
    assert all(s.captions == [] for s in result.spreads)


def test_from_stage_two_uses_cached_images(project):
    main(["--no-captions"])
    # Replace the cached image list; stage 2 must read it instead of the folder
    (project / ".cache" / "images.json").write_text(
        json.dumps({"images": [{"id": "x"}, {"id": "y"}]}), encoding="utf-8"
    )
    result = main(["--from-stage", "2", "--no-captions"])
    assert [[i.id for i in s.images] for s in result.spreads] == [["x"], ["y"]]


def test_from_stage_three_captions_cached_plan(project):
    main(["--no-captions"])
    result = main(["--from-stage", "3", "--title", "Harbour Lights"])
    assert result.spreads[2].captions[0].text == "Harbour Lights"


def test_unknown_theme_fails(project):
    with pytest.raises(KeyError):
        main(["--theme", "brutalist"])
