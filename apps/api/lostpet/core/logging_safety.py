"""Utilities for safe structured logging fields."""

from __future__ import annotations

import hashlib
import logging
from typing import Any


def safe_log_identifier(value: Any, *, prefix: str) -> str:
    """Return a deterministic non-reversible token for log correlation fields."""
    text = str(value if value is not None else "").strip()
    if not text:
        return f"{prefix}-missing"

    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()[:12]
    return f"{prefix}-{digest}"


def mask_email(email: str | None) -> str:
    """Keep the first character and the domain, e.g. ``j***@doe.org``."""
    local, sep, domain = (email or "").strip().partition("@")
    if not local or not sep:
        return "email-missing"
    return f"{local[0]}***@{domain}"


def configure_logging(level: str) -> None:
    """Install a plain key=value console format on the root logger once."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=level.upper(),
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )
    else:
        root.setLevel(level.upper())
