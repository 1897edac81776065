"""Shared helpers for session storage and request parsing."""
