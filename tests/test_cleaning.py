import pytest

from gallery.cleaning import cover_url, filename_from_url, project_to_record, query_filters
from gallery.models import RecordQuery


def test_filename_from_url_takes_last_segment():
    assert filename_from_url("https://cdn.example.com/folder/image123.png") == "image123.png"
    assert filename_from_url("image123.png") == "image123.png"
    assert filename_from_url("https://cdn.example.com/folder/") == ""


def test_cover_url_picks_original():
    covers = {"115": "https://x/115/a.png", "original": "https://x/orig/a.png"}
    assert cover_url(covers) == "https://x/orig/a.png"
    assert cover_url({"115": "https://x/115/a.png"}) is None
    assert cover_url(None) is None


def test_project_to_record_shapes_fields():
    payload = {
        "project": {
            "name": "Sunset",
            "description": "Warm colours",
            "covers": {"original": "https://mir-s3.example/projects/original/sunset_01.jpg"},
        }
    }
    rec = project_to_record(payload)
    assert rec.id == 0
    assert rec.title == "Sunset"
    assert rec.description == "Warm colours"
    assert rec.filename == "sunset_01.jpg"
    assert rec.source_url.endswith("/sunset_01.jpg")


def test_project_to_record_without_cover_raises():
    with pytest.raises(ValueError):
        project_to_record({"project": {"name": "No cover", "covers": {}}})


def test_query_filters_skips_empty_fields_and_accepts_src_alias():
    q = RecordQuery.model_validate({"title": "X", "description": "", "src": "https://x/y.png"})
    assert query_filters(q) == {"title": "X", "source_url": "https://x/y.png"}
    assert query_filters(RecordQuery()) == {}


@pytest.mark.parametrize("payload", [{"project": "unavailable"}, {"project": [1, 2]}, "oops"])
def test_project_to_record_rejects_non_object_payloads(payload):
    with pytest.raises(ValueError):
        project_to_record(payload)
