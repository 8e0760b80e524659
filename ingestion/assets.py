# ingestion/assets.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import requests

from gallery.cleaning import filename_from_url

READ_TIMEOUT = 60.0


class AssetDownloadError(RuntimeError):
    def __init__(self, url: str, reason: str):
        super().__init__(f"{url} -> {reason}")
        self.url = url
        self.reason = reason


def download_asset(
    url: str,
    dest_dir: str,
    connect_timeout: float = 3.0,
    read_timeout: float = READ_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> Path:
    """
    Download `url` into dest_dir/<last path segment of url>, overwriting any
    existing file of that name. Returns the written path.
    """
    fname = filename_from_url(url)
    if not fname:
        raise AssetDownloadError(url, "URL has no filename segment")

    getter = session.get if session is not None else requests.get
    try:
        r = getter(url, timeout=(connect_timeout, read_timeout))
        r.raise_for_status()
        content = r.content
    except requests.RequestException as e:
        raise AssetDownloadError(url, str(e)) from e

    dest = Path(dest_dir) / fname
    try:
        os.makedirs(dest_dir, exist_ok=True)
        dest.write_bytes(content)
    except OSError as e:
        raise AssetDownloadError(url, f"write failed: {e}") from e
    return dest
