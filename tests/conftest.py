"""Shared pytest configuration.

The environment is pinned before any application module is imported, since
configuration is loaded once at import time.
"""

import os

os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("IMAGE_STORE", "memory")
os.environ.setdefault("LOG_FILE", "")
os.environ.setdefault("DATABASE_URL", "sqlite://")

pytest_plugins = ["tests.fixtures"]
