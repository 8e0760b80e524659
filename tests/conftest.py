import sys
from dataclasses import replace
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gallery.config import Settings
from gallery.models import Record
from gallery.store import RecordStore


@pytest.fixture
def settings(tmp_path):
    return replace(
        Settings(),
        api_key="test-key",
        api_base="https://api.example.test/v2",
        pages=2,
        db_path=str(tmp_path / "gallery.db"),
        photos_dir=str(tmp_path / "photos"),
        results_path=str(tmp_path / "results.json"),
        workers=4,
        open_browser=False,
    )


@pytest.fixture
def store(settings):
    s = RecordStore(settings.db_path)
    yield s
    s.close()


def make_record(n: int) -> Record:
    src = f"https://cdn.example.test/projects/{n}/image{n}.png"
    return Record(
        title=f"Project {n}",
        description=f"Description {n}",
        filename=f"image{n}.png",
        source_url=src,
    )


@pytest.fixture
def record_factory():
    return make_record
