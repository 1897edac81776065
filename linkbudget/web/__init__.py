"""Web layer for FastAPI routes and request handling.

This package contains the HTML-facing routes: the input form and the
calculation endpoint that drives the shared request handler.
"""
