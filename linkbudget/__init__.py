"""RF link budget calculator with cookie-keyed server-side sessions."""

__version__ = "1.0.0"
