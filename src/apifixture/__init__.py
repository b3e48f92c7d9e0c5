"""
apifixture - declarative data fixtures for Python test suites

Tests declare fixture scripts or fixture methods; apifixture applies them
before each test and reverts them afterwards through rollback counterparts.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
