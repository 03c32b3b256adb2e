"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "showflix",
    "environment": "dev",
    "http": {
        "timeout_seconds": 30.0,
        "user_agent": "Showflix/0.1.0",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "backend": {
        "parse_base_url": "https://parse.showflix.shop/parse",
        "site_url": "https://showflix.xyz",
        "home_page_limit": 10,
        "scan_limit": 1000,
    },
    # Label -> regex. \Q...\E quotes the label for the backend's regex engine.
    "categories": {
        "Tamil": r"\QTamil\E",
        "Dubbed": r"\QTamil Dubbed\E",
        "English": r"\QEnglish\E",
        "Telugu": r"\QTelugu\E",
        "Hindi": r"\QHindi\E",
        "Malayalam": r"\QMalayalam\E",
    },
}
