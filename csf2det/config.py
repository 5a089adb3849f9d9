from __future__ import annotations

import os


def _bool_env(key: str) -> bool:
    val = os.environ.get(key, "").strip().lower()
    return val not in ("", "0", "false", "no", "off")


def _int_env(key: str, default: int) -> int:
    raw = os.environ.get(key, "").strip()
    if raw == "":
        return int(default)
    try:
        out = int(raw)
    except ValueError as e:
        raise ValueError(f"{key} must be an integer, got: {raw!r}") from e
    if out < 0:
        raise ValueError(f"{key} must be >= 0, got: {out}")
    return out


def default_verbose() -> int:
    """Default diagnostic level (``CSF2DET_VERBOSE``, 0 when unset)."""
    return _int_env("CSF2DET_VERBOSE", 0)


def default_max_combinations() -> int | None:
    """Cap on enumerated alpha/beta assignments (``CSF2DET_MAX_COMBINATIONS``).

    ``0`` or unset means unlimited and is returned as ``None``.
    """
    limit = _int_env("CSF2DET_MAX_COMBINATIONS", 0)
    return limit if limit > 0 else None


def json_output() -> bool:
    """Whether the CLI emits JSON by default (``CSF2DET_JSON``)."""
    return _bool_env("CSF2DET_JSON")
