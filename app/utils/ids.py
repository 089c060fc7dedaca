"""Opaque record identifiers."""

from __future__ import annotations

import uuid


def new_record_id() -> str:
    """Return a fresh opaque id for a scan, session or alert."""
    return uuid.uuid4().hex[:12]
