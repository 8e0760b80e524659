# ingestion/client.py
"""
Thin client for the portfolio API (Behance v2 shape).

Three endpoints, all paginated with `page` and authenticated with `client_id`:
  - /creativestofollow            -> {"creatives_to_follow": [{"id", "username"}, ...]}
  - /users/{username}/projects    -> {"projects": [{"id"}, ...]}
  - /projects/{id}                -> {"project": {"name", "description", "covers"}}
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import requests

logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """An upstream call failed (network, HTTP status, or undecodable body)."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{url} -> {reason}")
        self.url = url
        self.reason = reason


class PortfolioClient:
    def __init__(
        self,
        api_key: str,
        api_base: str = "https://api.behance.net/v2",
        timeout: float = 20.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def close(self) -> None:
        self.session.close()

    def fetch(self, path: str, page: int = 1) -> Dict:
        """GET one page of an endpoint and return its decoded JSON body."""
        url = f"{self.api_base}/{path.lstrip('/')}"
        params = {"page": page, "client_id": self.api_key}
        try:
            r = self.session.get(url, params=params, timeout=self.timeout)
            r.raise_for_status()
            data = r.json()
        except requests.RequestException as e:
            raise FetchError(url, str(e)) from e
        except ValueError as e:
            # requests' JSONDecodeError subclasses ValueError
            raise FetchError(url, f"invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise FetchError(url, f"expected a JSON object, got {type(data).__name__}")
        return data

    def fetch_list(self, path: str, key: str, page: int = 1) -> List:
        """Fetch a page and return the list under `key` (missing or null -> [])."""
        data = self.fetch(path, page=page)
        items = data.get(key) or []
        if not isinstance(items, list):
            raise FetchError(f"{self.api_base}/{path}", f"expected a list under {key!r}, got {type(items).__name__}")
        return items

    # ----- endpoints -----
    def creators(self, page: int) -> List[Dict]:
        return self.fetch_list("creativestofollow", "creatives_to_follow", page=page)

    def user_projects(self, username: str, page: int = 1) -> List[Dict]:
        return self.fetch_list(f"users/{username}/projects", "projects", page=page)

    def project(self, project_id: int) -> Dict:
        return self.fetch(f"projects/{project_id}", page=1)
