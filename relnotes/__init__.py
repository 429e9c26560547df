"""Merge and build ScalarDB release notes."""

__version__ = "1.0.0"
