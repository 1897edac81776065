#!/usr/bin/env python3
"""
Gateway entry point: one link budget request per process.

Reads the form body from stdin and the cookie header from ``HTTP_COOKIE``,
then writes the header block and the HTML page to stdout. Handled errors are
rendered into the page, so the process always exits 0. Application logs go
to stderr to keep stdout reserved for the response.
"""
import os
import sys
from typing import Mapping, Optional, TextIO

from linkbudget.core.config import Settings, settings as default_settings
from linkbudget.core.logging_config import get_correlation_id, init_application_logging
from linkbudget.core.utils.session_store import SessionStore
from linkbudget.services.request_handler import handle_request


def run(
    stdin: TextIO,
    stdout: TextIO,
    environ: Mapping[str, str],
    store: Optional[SessionStore] = None,
    app_settings: Optional[Settings] = None,
) -> int:
    """Serve a single request; returns the process exit status."""
    form_body = stdin.readline()
    result = handle_request(
        form_body,
        cookie_header=environ.get("HTTP_COOKIE", ""),
        store=store,
        app_settings=app_settings or default_settings,
    )

    for name, value in result.headers:
        stdout.write(f"{name}: {value}\r\n")
    stdout.write("\r\n")
    stdout.write(result.body)
    stdout.flush()
    return 0


def main() -> int:
    init_application_logging(stream=sys.stderr)
    get_correlation_id()
    return run(sys.stdin, sys.stdout, os.environ)


if __name__ == "__main__":
    sys.exit(main())
