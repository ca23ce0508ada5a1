# pyramath/games/core/game_core.py
from __future__ import annotations
from typing import Callable, Dict, Optional, TypeVar
import logging
import time
import uuid

from flask import current_app

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ============================================================
# Per-app stores
# ============================================================

def get_store(key: str, factory: Callable[[], T]) -> T:
    """Object kept in app.extensions[key], created on first use."""
    ext = current_app.extensions
    store = ext.get(key)
    if store is None:
        store = factory()
        ext[key] = store
    return store

# ============================================================
# Session & identity helpers
# ============================================================

def get_or_create_session_id(req) -> str:
    """
    Stable per-user (and optionally per-tab) session key:
      cookie 'session_id' (if present) else a new uuid4,
      optionally suffixed with ':<client_id>' (arg/body/header) to isolate tabs.
    """
    base = req.cookies.get("session_id") or str(uuid.uuid4())

    client = req.args.get("client_id")
    if not client and req.is_json:
        j = req.get_json(silent=True) or {}
        if isinstance(j, dict):
            client = j.get("client_id")
    if not client:
        client = req.headers.get("X-Client-Session")

    if client:
        return f"{base}:{str(client)[:64]}"
    return base


def base_session_id(sid: str) -> str:
    """Cookie part of a session key (drops the ':<client_id>' suffix)."""
    return sid.split(":", 1)[0]

# ============================================================
# Tiny utils
# ============================================================

def now_ms() -> int:
    return int(time.time() * 1000)


def fmt_mmss(seconds: Optional[int]) -> str:
    s = max(0, int(seconds or 0))
    return f"{s // 60:02d}:{s % 60:02d}"


__all__ = [
    "get_store",
    "get_or_create_session_id",
    "base_session_id",
    "now_ms",
    "fmt_mmss",
]
