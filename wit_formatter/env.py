from __future__ import annotations

import os


def env_truthy(name: str) -> bool:
    v = str(os.getenv(name, "")).strip().lower()
    return v in {"1", "true", "yes", "y", "on"}


def env_bool(name: str, default: bool) -> bool:
    raw = str(os.getenv(name, "")).strip()
    if not raw:
        return default
    return env_truthy(name)


def env_int(name: str, default: int) -> int:
    raw = str(os.getenv(name, "")).strip()
    if not raw:
        return default
    try:
        return int(raw)
    except Exception:
        return default


def env_str(name: str, default: str) -> str:
    raw = str(os.getenv(name, "")).strip()
    return raw or default
