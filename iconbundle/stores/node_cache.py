"""Persistent cache of target and source file info."""

from __future__ import annotations

from datetime import UTC, datetime
import json
import os
import threading
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..models import SourceFile

_CACHE_VERSION = 1


def _file_info(path: str | Path) -> Optional[Dict[str, object]]:
    try:
        stat_result = os.stat(path)
    except OSError:
        return None
    return {
        "path": str(path),
        "size": stat_result.st_size,
        "mtime_ns": stat_result.st_mtime_ns,
    }


class NodeCache:
    """Stores file fingerprints keyed by target name and cache key."""

    def __init__(self, path: Path | None) -> None:
        self._path = path
        self._entries: Dict[str, Dict[str, object]] = {}
        self._dirty = False
        self._lock = threading.Lock()
        if self._path is not None:
            self._load(self._path)

    def for_target(self, target: str) -> "TargetCache":
        return TargetCache(self, target)

    def get(self, target: str, key: str) -> object:
        with self._lock:
            entry = self._entries.get(target)
            if not entry:
                return None
            return entry.get(key)

    def put(self, target: str, key: str, value: object) -> None:
        with self._lock:
            entry = self._entries.setdefault(target, {})
            entry[key] = value
            entry["updated_at"] = datetime.now(UTC).isoformat().replace("+00:00", "Z")
            self._dirty = True

    def targets(self) -> List[str]:
        with self._lock:
            return sorted(self._entries)

    def persist(self) -> None:
        with self._lock:
            if not self._dirty or self._path is None:
                return
            payload = {
                "version": _CACHE_VERSION,
                "entries": self._entries,
            }
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8"
            )
            self._dirty = False

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._dirty = True

    # ------------------------------------------------------------------
    # Internal helpers

    def _load(self, path: Path) -> None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return
        except (OSError, json.JSONDecodeError):
            return
        if not isinstance(data, dict) or data.get("version") != _CACHE_VERSION:
            return
        entries = data.get("entries")
        if not isinstance(entries, dict):
            return
        self._entries = {
            key: raw
            for key, raw in entries.items()
            if isinstance(key, str) and isinstance(raw, dict)
        }
        self._dirty = False


class TargetCache:
    """Cache view scoped to a single target."""

    def __init__(self, store: NodeCache, target: str) -> None:
        self._store = store
        self._target = target

    def cache_file_info(self, key: str, path: str | Path) -> None:
        self._store.put(self._target, key, _file_info(path))

    def need_rebuild_file(self, key: str, path: str | Path) -> bool:
        current = _file_info(path)
        if current is None:
            return True
        return self._store.get(self._target, key) != current

    def cache_file_list(self, key: str, files: Sequence[SourceFile]) -> None:
        self._store.put(self._target, key, _list_info(files))

    def need_rebuild_file_list(self, key: str, files: Sequence[SourceFile]) -> bool:
        cached = self._store.get(self._target, key)
        if not isinstance(cached, list):
            return True
        return cached != _list_info(files)


def _list_info(files: Sequence[SourceFile]) -> List[Dict[str, object]]:
    result: List[Dict[str, object]] = []
    for source in files:
        info: Dict[str, object] = dict(source.info())
        stat_info = _file_info(source.fullname)
        if stat_info is not None:
            info["size"] = stat_info["size"]
            info["mtime_ns"] = stat_info["mtime_ns"]
        result.append(info)
    return result


__all__ = ["NodeCache", "TargetCache"]
