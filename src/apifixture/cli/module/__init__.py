"""Module registry commands."""
