"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service can start with no configuration at all; in a production
deployment override them via environment variables.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Beacon API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    # Level of uvicorn's per‑request access log.
    access_log_level: str = os.getenv("ACCESS_LOG_LEVEL", "INFO")

    # Path to the SQLite database.  Relative paths are resolved against
    # the package root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "beacons.db")
    # Seconds a connection waits on a locked database before giving up.
    db_timeout: float = float(os.getenv("DB_TIMEOUT", "5"))

    # Entropy of generated beacon keys.  Values below 130 are rejected by
    # ``KeyGenerator``.
    key_bits: int = int(os.getenv("KEY_BITS", "130"))
    # Total number of insert attempts when a generated key collides.
    key_max_attempts: int = int(os.getenv("KEY_MAX_ATTEMPTS", "3"))

    # File served to clients on every rendezvous.  An empty value selects
    # the bundled 1x1 GIF.
    payload_path: str = os.getenv("PAYLOAD_PATH", "")
    payload_media_type: str = os.getenv("PAYLOAD_MEDIA_TYPE", "image/gif")

    # Comma‑separated proxy addresses (or "*") whose X-Forwarded-For
    # header is honoured when recording the remote address.  Empty means
    # the socket peer is always recorded.
    forwarded_allow_ips: str = os.getenv("FORWARDED_ALLOW_IPS", "")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
