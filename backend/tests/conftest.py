"""Root conftest — shared test configuration."""

import os

# Required settings; tests never talk to a real database
os.environ.setdefault("DB_URI", "sqlite+aiosqlite://")
os.environ.setdefault("DB_NAME", ":memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-for-tokens-only")
os.environ.setdefault("LOG_FORMAT", "text")
