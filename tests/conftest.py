from pathlib import Path

import pytest

from settings import Settings


@pytest.fixture
def tmp_settings(tmp_path: Path) -> Settings:
    """Settings instance pointing at a fresh temp directory for tests that write output.

    Directory layout mirrors the real project:
        data/photos/   gallery photo files
        data/themes/   optional layout theme overrides
    """
    for subdir in ("photos", "themes"):
        (tmp_path / subdir).mkdir()
    return Settings(project_dir=tmp_path)

