import pytest
import requests

from ingestion.assets import AssetDownloadError, download_asset


class FakeResponse:
    def __init__(self, content=b"", status=200):
        self.content = content
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.exc:
            raise self.exc
        return self.response


def test_download_writes_file_named_by_last_segment(tmp_path):
    session = FakeSession(FakeResponse(b"image-bytes"))
    dest = tmp_path / "photos"
    path = download_asset("https://cdn.example.test/folder/image123.png", str(dest), session=session)

    assert path == dest / "image123.png"
    assert path.read_bytes() == b"image-bytes"
    _, timeout = session.calls[0]
    assert timeout[0] == 3.0


def test_download_overwrites_existing_file(tmp_path):
    (tmp_path / "a.png").write_bytes(b"old")
    download_asset("https://x.test/a.png", str(tmp_path), session=FakeSession(FakeResponse(b"new")))
    assert (tmp_path / "a.png").read_bytes() == b"new"


def test_download_network_error_raises(tmp_path):
    session = FakeSession(exc=requests.ConnectTimeout("connect timed out"))
    with pytest.raises(AssetDownloadError) as ei:
        download_asset("https://x.test/a.png", str(tmp_path), session=session)
    assert ei.value.url == "https://x.test/a.png"
    assert not (tmp_path / "a.png").exists()


def test_download_http_error_raises(tmp_path):
    session = FakeSession(FakeResponse(status=404))
    with pytest.raises(AssetDownloadError):
        download_asset("https://x.test/a.png", str(tmp_path), session=session)


def test_download_uses_requests_get_by_default(tmp_path, monkeypatch):
    seen = {}

    def fake_get(url, timeout=None):
        seen["url"] = url
        seen["timeout"] = timeout
        return FakeResponse(b"ok")

    monkeypatch.setattr(requests, "get", fake_get)
    download_asset("https://x.test/dir/b.jpg", str(tmp_path), connect_timeout=1.5)
    assert seen["url"] == "https://x.test/dir/b.jpg"
    assert seen["timeout"][0] == 1.5
    assert (tmp_path / "b.jpg").read_bytes() == b"ok"


def test_download_write_failure_raises(tmp_path):
    # dest_dir is an existing file, so the directory can't be created
    blocker = tmp_path / "photos"
    blocker.write_bytes(b"")
    session = FakeSession(FakeResponse(b"image-bytes"))
    with pytest.raises(AssetDownloadError) as ei:
        download_asset("https://x.test/a.png", str(blocker), session=session)
    assert "write failed" in ei.value.reason
