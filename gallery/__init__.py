"""Portfolio gallery: record store, settings and query API."""
