"""Bulk text import for the category tree."""

from ingestion.hierarchy import ingest, parse_outline, plan_insertions

__all__ = ["ingest", "parse_outline", "plan_insertions"]
