"""Base classes for build techs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping

from ..config import normalise_options
from ..errors import ConfigError
from ..node import BuildNode

_MISSING = object()


class BaseTech(ABC):
    """Contract for techs that turn node sources into targets."""

    def __init__(self, node: BuildNode, options: Mapping[str, Any] | None = None) -> None:
        self.node = node
        self._options: Dict[str, Any] = normalise_options(options or {})

    @abstractmethod
    def get_name(self) -> str:
        """Return the tech identifier used in configuration."""

    @abstractmethod
    def configure(self) -> None:
        """Validate options and compute the targets this tech provides."""

    @abstractmethod
    def get_targets(self) -> List[str]:
        """Return the unmasked target names built by this tech."""

    @abstractmethod
    def build(self, *, force: bool = False) -> List[str]:
        """Build the targets and return the names that were written."""

    def get_option(self, name: str, default: Any = None) -> Any:
        value = self._options.get(name, _MISSING)
        if value is _MISSING or value is None:
            return default
        return value

    def get_required_option(self, name: str) -> Any:
        value = self._options.get(name)
        if value is None or value == "" or value == []:
            raise ConfigError(f'Option "{name}" is required for tech "{self.get_name()}"')
        return value
