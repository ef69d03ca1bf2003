"""Minimal build node: paths, target bookkeeping and source lookup."""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from .errors import UnknownTargetError
from .models import IMAGE_EXTENSIONS
from .stores import NodeCache, TargetCache

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".iconbundle",
}

_EXCLUDED_FILES = {
    ".DS_Store",
    "Thumbs.db",
}

PENDING = "pending"
RESOLVED = "resolved"
REJECTED = "rejected"


@dataclass
class TargetState:
    """Build status of a single registered target."""

    status: str = PENDING
    content: Optional[str] = None
    error: Optional[BaseException] = None


@dataclass
class SourceDir:
    """A level directory whose name carries the sources suffix."""

    path: Path
    files: List[Path] = field(default_factory=list)


class SourceIndex:
    """Files and directories found across the node levels, in level order."""

    def __init__(self, levels: Sequence[Path]) -> None:
        self._files: List[Path] = []
        self._dirs: List[Path] = []
        for level in levels:
            for path, is_dir in _walk_level(level):
                (self._dirs if is_dir else self._files).append(path)

    def files_by_suffix(self, suffixes: Iterable[str]) -> List[Path]:
        endings = tuple(f".{suffix}" for suffix in suffixes)
        return [path for path in self._files if path.name.endswith(endings)]

    def dirs_by_suffix(self, suffix: str) -> List[SourceDir]:
        ending = f".{suffix}"
        result: List[SourceDir] = []
        for path in self._dirs:
            if not path.name.endswith(ending):
                continue
            files = sorted(
                child
                for child in path.iterdir()
                if child.is_file() and _is_image(child)
            )
            result.append(SourceDir(path=path, files=files))
        return result


class BuildNode:
    """A build directory that techs read sources from and write targets into."""

    def __init__(
        self,
        root: Path | str,
        *,
        name: str | None = None,
        levels: Sequence[Path] | None = None,
        cache: NodeCache | None = None,
    ) -> None:
        self.root = Path(root).expanduser().resolve()
        self.name = name or self.root.name
        self.levels = [Path(level) for level in levels] if levels else [self.root]
        self.cache = cache or NodeCache(None)
        self._states: Dict[str, TargetState] = {}
        self._lock = threading.Lock()
        self._sources: SourceIndex | None = None

    # ------------------------------------------------------------------
    # Paths

    def unmask_target_name(self, target: str) -> str:
        return target.replace("?", self.name)

    def resolve_path(self, target: str) -> Path:
        return self.root / target

    def relative_path(self, path: str | Path) -> str:
        candidate = Path(path)
        try:
            return candidate.relative_to(self.root).as_posix()
        except ValueError:
            return os.path.relpath(candidate, self.root).replace(os.sep, "/")

    # ------------------------------------------------------------------
    # Sources

    def require_sources(self) -> SourceIndex:
        if self._sources is None:
            self._sources = SourceIndex(self.levels)
        return self._sources

    # ------------------------------------------------------------------
    # Targets

    def register_targets(self, targets: Iterable[str]) -> None:
        with self._lock:
            for target in targets:
                self._states.setdefault(target, TargetState())

    def is_valid_target(self, target: str) -> bool:
        with self._lock:
            if target not in self._states:
                raise UnknownTargetError(f"Target {target!r} is not registered on node {self.name!r}")
        return True

    def resolve_target(self, target: str, content: str | None = None) -> None:
        with self._lock:
            state = self._states.setdefault(target, TargetState())
            state.status = RESOLVED
            state.content = content
            state.error = None

    def reject_target(self, target: str, error: BaseException) -> None:
        with self._lock:
            state = self._states.setdefault(target, TargetState())
            state.status = REJECTED
            state.error = error

    def target_state(self, target: str) -> TargetState:
        self.is_valid_target(target)
        with self._lock:
            return self._states[target]

    def get_node_cache(self, target: str) -> TargetCache:
        return self.cache.for_target(target)


def _walk_level(level: Path) -> Iterator[tuple[Path, bool]]:
    if not level.is_dir():
        return
    for dirpath, dirnames, filenames in os.walk(level):
        current_dir = Path(dirpath)
        dirnames[:] = sorted(name for name in dirnames if name not in _EXCLUDED_DIRS)
        for name in dirnames:
            yield current_dir / name, True
        for filename in sorted(filenames):
            if filename in _EXCLUDED_FILES:
                continue
            yield current_dir / filename, False


def _is_image(path: Path) -> bool:
    return path.suffix.lower().lstrip(".") in IMAGE_EXTENSIONS and path.name not in _EXCLUDED_FILES


__all__ = [
    "BuildNode",
    "PENDING",
    "REJECTED",
    "RESOLVED",
    "SourceDir",
    "SourceIndex",
    "TargetState",
]
