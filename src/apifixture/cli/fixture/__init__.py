"""Fixture commands: resolve, run and revert fixture scripts."""
