"""
Layered settings source for :class:`payment_input.core.config.RuntimeConfig`.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Mapping, Optional

__all__ = ["build_environment"]


def _read_env_file(path: Path) -> Dict[str, str]:
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except FileNotFoundError:
        return {}

    values: Dict[str, str] = {}
    for raw_line in lines:
        line = raw_line.strip().removeprefix("export ").strip()
        if line.startswith("#") or "=" not in line:
            continue
        key, value = (part.strip() for part in line.split("=", 1))
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        values[key] = value
    return values


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Merge ``base`` (``os.environ`` when omitted), the ``env_file`` entries
    for keys not already set, and ``overrides``, which always win.
    """
    merged: Dict[str, str] = dict(os.environ if base is None else base)
    if env_file is not None:
        for key, value in _read_env_file(Path(env_file)).items():
            merged.setdefault(key, value)
    merged.update(overrides or {})
    return merged
