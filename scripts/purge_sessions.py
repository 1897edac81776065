#!/usr/bin/env python3
"""
Session cleanup script for RF Link Budget.

Deletes session files whose last access is older than the configured expiry.
Expired sessions are otherwise only cleared when their client returns.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from linkbudget.core.config import settings
from linkbudget.core.utils.session_store import SessionStore


def main():
    """Purge expired sessions from the configured session directory"""
    print("RF Link Budget Session Cleanup")
    print("=" * 40)
    print(f"Session Directory: {settings.SESSION_DIR}")
    print(f"Expiry: {settings.SESSION_EXPIRY_SECONDS}s")

    store = SessionStore.from_settings(settings)
    try:
        removed = store.purge_expired()
    except Exception as e:
        print(f"Cleanup failed: {e}")
        return False

    print(f"Removed {removed} expired session(s)")
    return True


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
