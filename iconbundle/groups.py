"""Marker-based grouping of icons into separate stylesheets."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional, Pattern

from .errors import ConfigError


def _marker_pattern(marker: str) -> Pattern[str]:
    head = r"\b" if re.match(r"\w", marker) else ""
    tail = r"\b" if re.search(r"\w$", marker) else ""
    return re.compile(f"{head}{re.escape(marker)}{tail}")


class GroupRules:
    """Maps group names to file-name markers; a ``None`` marker is the default group."""

    def __init__(self, split_by_groups: Mapping[str, Any] | None = None) -> None:
        self._rules: Dict[str, Optional[str]] = {}
        if split_by_groups:
            if not isinstance(split_by_groups, Mapping):
                raise ConfigError("split_by_groups must be a mapping of group name to marker")
            for group, marker in split_by_groups.items():
                if marker is not None and not isinstance(marker, str):
                    raise ConfigError(f"Marker for group {group!r} must be a string or null")
                self._rules[str(group)] = marker or None
        self._patterns = {
            marker: _marker_pattern(marker) for marker in self.markers
        }

    @property
    def enabled(self) -> bool:
        return bool(self._rules)

    @property
    def markers(self) -> List[str]:
        return [marker for marker in self._rules.values() if marker is not None]

    def group_names(self) -> List[Optional[str]]:
        if not self.enabled:
            return [None]
        return list(self._rules)

    def marker_for(self, group: str) -> Optional[str]:
        return self._rules.get(group)

    def is_default(self, name: str) -> bool:
        """True when none of the markers occurs in ``name``."""
        return not any(pattern.search(name) for pattern in self._patterns.values())

    def matches(self, name: str, group: Optional[str]) -> bool:
        if not self.enabled or group is None:
            return True
        marker = self.marker_for(group)
        if marker:
            return bool(self._patterns[marker].search(name))
        return self.is_default(name)


__all__ = ["GroupRules"]
