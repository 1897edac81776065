"""Validation, calculation and request orchestration."""
