"""Shared helpers (merging, YAML I/O, project paths)."""
