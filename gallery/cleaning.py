# gallery/cleaning.py
from __future__ import annotations
from typing import Any, Dict, Optional

from gallery.models import Record, RecordQuery
from gallery.schema import QUERY_FIELDS

# ---------- Filenames ----------
def filename_from_url(src: str) -> str:
    """Final '/'-separated segment of a URL, e.g. '.../folder/image123.png' -> 'image123.png'."""
    return (src or "").rsplit("/", 1)[-1]

# ---------- Upstream payload shaping ----------
def cover_url(covers: Any, size: str = "original") -> Optional[str]:
    """Pick one cover URL out of the project's `covers` mapping."""
    if not isinstance(covers, dict):
        return None
    url = covers.get(size)
    return url if isinstance(url, str) and url else None

def project_to_record(project: Dict) -> Record:
    """
    Build an unsaved Record from a project-detail payload
    ({"project": {"name", "description", "covers": {...}}}).
    Raises ValueError when the payload is not shaped like that or the
    project carries no original cover.
    """
    body = project.get("project") if isinstance(project, dict) else None
    if body is None:
        body = {}
    if not isinstance(body, dict):
        raise ValueError(f"project payload is a {type(body).__name__}, not an object")
    src = cover_url(body.get("covers"))
    if src is None:
        raise ValueError("project has no original cover")
    return Record(
        title=body.get("name") or "",
        description=body.get("description") or "",
        filename=filename_from_url(src),
        source_url=src,
    )

# ---------- Query filters ----------
def query_filters(q: RecordQuery) -> Dict[str, str]:
    """Equality filters for the non-empty fields of a query."""
    values = q.model_dump()
    return {k: values[k] for k in QUERY_FIELDS if values.get(k)}
