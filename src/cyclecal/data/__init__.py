"""Packaged calendar and culture definitions (JSON)."""
