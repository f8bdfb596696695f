"""Find icon files in an application-provided icon directory, with a cache."""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

log = logging.getLogger(__name__)

_ICON_EXTENSIONS = ("png", "svg")

_cache: dict[str, dict[str, Path]] = {}
_cache_lock = threading.Lock()


def rsplit_file_at_dot(name: str) -> tuple[str | None, str | None]:
    """Split a file name into stem and extension at the last dot.

    A name without a dot has no stem; a dot-file or ``..`` has no extension.
    """
    if name == "..":
        return name, None
    before, dot, after = name.rpartition(".")
    if not dot:
        return None, name
    if before == "":
        return name, None
    return before, after


def _try_cached(icon_theme_path: str, icon_name: str) -> Path | None:
    with _cache_lock:
        return _cache.get(icon_theme_path, {}).get(icon_name)


def _insert_to_cache(icon_theme_path: str, icon_name: str, path: Path) -> None:
    with _cache_lock:
        _cache.setdefault(icon_theme_path, {})[icon_name] = path


def clear_cache() -> None:
    with _cache_lock:
        _cache.clear()


def _candidates(icon_theme_path: str) -> list[Path]:
    root = Path(icon_theme_path)
    try:
        with os.scandir(root) as entries:
            children = sorted(Path(entry.path) for entry in entries)
    except OSError as exc:
        log.error("Error walking dir: %s", exc)
        return []
    # directory contents first, then the directory itself
    return [*children, root]


def find_icon(icon_theme_path: str, icon_name: str) -> Path | None:
    """Find ``<icon_name>.png`` or ``<icon_name>.svg`` directly inside a directory."""
    cached = _try_cached(icon_theme_path, icon_name)
    if cached is not None:
        return cached

    for path in _candidates(icon_theme_path):
        before, after = rsplit_file_at_dot(path.name)
        if before is None or after is None:
            continue
        if after in _ICON_EXTENSIONS and before == icon_name:
            _insert_to_cache(icon_theme_path, icon_name, path)
            return path
    return None