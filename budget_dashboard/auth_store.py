"""Stored session record (token, PV tier, default commission)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .config import AUTH_FILE

logger = logging.getLogger(__name__)

AUTH_FIELDS = ('token', 'pv', 'commission')


def load_auth(path: Path | None = None) -> Optional[Dict[str, Any]]:
    """Read the session record, or ``None`` when there is no usable record."""
    target = path or AUTH_FILE
    if not target.exists():
        return None
    try:
        with target.open('r', encoding='utf-8') as handle:
            data = json.load(handle)
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable auth record %s: %s", target, exc)
        return None
    if not isinstance(data, dict):
        return None
    return {k: data.get(k) for k in AUTH_FIELDS}


def save_auth(record: Dict[str, Any], path: Path | None = None) -> None:
    target = path or AUTH_FILE
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = {k: record.get(k) for k in AUTH_FIELDS}
    with target.open('w', encoding='utf-8') as handle:
        json.dump(payload, handle, indent=2, sort_keys=True)


def clear_auth(path: Path | None = None) -> None:
    target = path or AUTH_FILE
    if target.exists():
        target.unlink()
        logger.info("Removed auth record %s", target)
