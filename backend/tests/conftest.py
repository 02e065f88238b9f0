"""Root conftest — shared test configuration."""

import os

# Settings are cached on first import: pin test values before the app loads.
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")
