# gallery/store.py
"""
SQLite-backed record store.

One connection is shared by ingestion workers and API handlers, so every
statement goes through a lock.
"""

from __future__ import annotations

import os
import sqlite3
import threading
from typing import Dict, List, Optional

from gallery.models import Record
from gallery.schema import QUERY_FIELDS, SCHEMA

_COLUMNS = "id, title, description, filename, source_url"


def ensure_db(path: str) -> sqlite3.Connection:
    """Create the SQLite DB (and schema) if missing; return a live connection."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    con = sqlite3.connect(path, check_same_thread=False)
    # WAL lets readers proceed while ingestion writes
    if path != ":memory:":
        con.execute("PRAGMA journal_mode=WAL;")
    with con:
        con.executescript(SCHEMA)
    return con


def _row_to_record(row) -> Record:
    rid, title, description, filename, source_url = row
    return Record(
        id=rid,
        title=title,
        description=description,
        filename=filename,
        source_url=source_url,
    )


class RecordStore:
    def __init__(self, path: str = "gallery.db"):
        self.path = path
        self._con = ensure_db(path)
        self._lock = threading.Lock()

    # ----- context manager -----
    def __enter__(self) -> "RecordStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        with self._lock:
            self._con.close()

    # ----- writes -----
    def insert(self, record: Record) -> Record:
        """Insert with a store-assigned id. Any id on the input is ignored."""
        sql = """
        INSERT INTO records (title, description, filename, source_url)
        VALUES (:title, :description, :filename, :source_url)
        """
        params = record.model_dump(exclude={"id"})
        with self._lock, self._con:
            cur = self._con.execute(sql, params)
            rid = cur.lastrowid
        return record.model_copy(update={"id": rid})

    # ----- reads -----
    def all(self) -> List[Record]:
        with self._lock:
            rows = self._con.execute(f"SELECT {_COLUMNS} FROM records ORDER BY id").fetchall()
        return [_row_to_record(r) for r in rows]

    def count(self) -> int:
        with self._lock:
            (n,) = self._con.execute("SELECT COUNT(*) FROM records").fetchone()
        return int(n)

    def first_match(self, filters: Dict[str, str]) -> Optional[Record]:
        """
        First record (lowest id) whose columns equal every value in `filters`.
        An empty filter set matches the first record.
        """
        unknown = set(filters) - set(QUERY_FIELDS)
        if unknown:
            raise ValueError(f"Unknown query fields: {sorted(unknown)}")

        # column names come from QUERY_FIELDS only; values are bound
        clauses = [f"{k} = ?" for k in QUERY_FIELDS if k in filters]
        params = [filters[k] for k in QUERY_FIELDS if k in filters]
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        sql = f"SELECT {_COLUMNS} FROM records {where} ORDER BY id LIMIT 1"

        with self._lock:
            row = self._con.execute(sql, params).fetchone()
        return _row_to_record(row) if row is not None else None
