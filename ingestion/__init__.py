"""Ingestion of portfolio projects from the upstream API into the record store."""
