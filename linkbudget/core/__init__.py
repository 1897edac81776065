"""Core configuration, logging, templating and shared utilities."""
