"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "orionzb",
    "environment": "dev",
    "orionoid": {
        "api_url": "https://api.orionoid.com",
    },
    "server": {
        "host": "0.0.0.0",
        "port": 3000,
        "base_url": None,  # Derived from port in schema.py
    },
    "newznab": {
        "server_name": "Orionoid Newznab",
        "server_description": "Orionoid to Newznab bridge",
    },
    "features": {
        "cache_ttl_seconds": 300,
        "max_results": 100,
        "default_results": 50,
        "preferred_languages": "en",
        "stream_type": "usenet",
        "upstream_limit": 20,
    },
    "http": {
        "timeout_seconds": 30.0,
        "user_agent": "orionzb/0.1.0",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}
