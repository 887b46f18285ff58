"""Pytest integration - fixtures, markers and service availability checks."""
