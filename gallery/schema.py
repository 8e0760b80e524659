# gallery/schema.py
SCHEMA = """
CREATE TABLE IF NOT EXISTS records (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  title TEXT NOT NULL DEFAULT '',
  description TEXT NOT NULL DEFAULT '',
  filename TEXT NOT NULL DEFAULT '',
  source_url TEXT NOT NULL DEFAULT ''
);
CREATE INDEX IF NOT EXISTS idx_title ON records(title);
CREATE INDEX IF NOT EXISTS idx_filename ON records(filename);
CREATE INDEX IF NOT EXISTS idx_source_url ON records(source_url);
"""

# Columns a query may filter on, in the order they are applied.
QUERY_FIELDS = ("title", "description", "filename", "source_url")
