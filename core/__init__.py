"""Shared runtime utilities."""
