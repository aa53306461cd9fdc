"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration.  In a production deployment
override these via environment variables.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Blog API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite file holding the post documents.  Relative
    # paths are resolved against the project root by the ``db`` module.
    # The special value ``:memory:`` keeps posts in process memory.
    database_url: str = os.getenv("DATABASE_URL", "blog.db")
    test_database_url: str = os.getenv("TEST_DATABASE_URL", "test-blog.db")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))

    # Prefix under which the v1 routes are mounted.  Empty by default so
    # that posts live at ``/posts``.
    api_prefix: str = os.getenv("API_PREFIX", "")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
