"""Shared helpers for the apifixture test suite."""
