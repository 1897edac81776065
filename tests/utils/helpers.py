"""
Test helper functions for common testing operations

These helpers provide utilities for building request bodies and reading
the artifacts (session files, log lines) a request leaves behind.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

DEFAULT_FIELDS = {
    "tx_power": "20",
    "tx_gain": "10",
    "free_space_loss": "90",
    "misc_loss": "1",
    "rx_gain": "5",
    "rx_loss": "0",
}


def build_form_body(overrides: Optional[Dict[str, str]] = None, omit: Optional[List[str]] = None) -> str:
    """Build a raw ``key=value&...`` body from the default fields"""
    fields = dict(DEFAULT_FIELDS)
    fields.update(overrides or {})
    for key in omit or []:
        fields.pop(key, None)
    return "&".join(f"{key}={value}" for key, value in fields.items())


def read_session_file(session_dir: Path, session_id: str) -> Dict[str, Any]:
    """Load the persisted record for a session"""
    return json.loads((session_dir / f"{session_id}.json").read_text(encoding="utf-8"))


def read_log_lines(log_file: Path) -> List[str]:
    """Return non-empty lines of the calculation log"""
    if not log_file.exists():
        return []
    return [line for line in log_file.read_text(encoding="utf-8").splitlines() if line]


def session_id_from_cookie(set_cookie: str, name: str = "session_id") -> str:
    """Extract the identifier from a Set-Cookie value"""
    first = set_cookie.split(";", 1)[0]
    key, _, value = first.partition("=")
    assert key.strip() == name, f"Unexpected cookie name in {set_cookie!r}"
    return value
