"""Root conftest — shared test configuration."""

import os

# Never touch a real database or SMTP server from tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SMTP_HOST", "")
# Cheap bcrypt work factor keeps login-heavy tests fast
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "text")
