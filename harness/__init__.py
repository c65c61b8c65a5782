"""Curriculum harness — helper routines for blockchain curriculum test suites."""

__version__ = "1.0.0"
