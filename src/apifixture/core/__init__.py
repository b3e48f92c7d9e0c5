"""Core library: configuration, errors and the fixture lifecycle."""
