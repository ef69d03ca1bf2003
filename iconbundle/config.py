"""Configuration loading for iconbundle (.iconbundle.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".iconbundle.yml"

DEFAULT_TECH = "base64-icons"

# Option names used by the original host configuration.
_OPTION_ALIASES = {
    "sourcesSuffix": "sources_suffix",
    "splitByGroups": "split_by_groups",
    "selectorPrefix": "selector_prefix",
    "fallbackPrefix": "fallback_prefix",
    "svgToBase64": "svg_to_base64",
    "maxDataURISize": "max_data_uri_size",
}


@dataclass
class TechConfig:
    """Options for a single tech entry."""

    name: str = DEFAULT_TECH
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SendConfig:
    """Remote locations and optimizer settings for the send script."""

    host_template: str = "{dev}.wdevx.yandex.net"
    remote_root_template: str = "/opt/www/morda-{dev}{instance}"
    svgo_passes: int = 5


@dataclass
class IconBundleConfig:
    """Represents the settings defined in .iconbundle.yml."""

    root: Path
    node: Optional[str] = None
    levels: List[Path] = field(default_factory=list)
    techs: List[TechConfig] = field(default_factory=list)
    send: SendConfig = field(default_factory=SendConfig)
    cache_dir: Optional[Path] = None

    @property
    def node_name(self) -> str:
        return self.node or self.root.name

    @property
    def cache_path(self) -> Path:
        base = self.cache_dir or (self.root / ".iconbundle")
        return base / "cache.json"


def load_config(config_path: Path) -> IconBundleConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return IconBundleConfig(root=root, levels=[root])

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    node = _as_str(data.get("node"))

    level_names = _as_str_list(data.get("levels")) or ["."]
    levels = [(root / name).resolve() for name in level_names]

    techs = [_parse_tech(entry) for entry in _tech_entries(data)]

    send = SendConfig()
    send_data = _as_dict(data.get("send"))
    if send_data:
        host_template = _as_str(send_data.get("host_template"))
        root_template = _as_str(send_data.get("remote_root_template"))
        passes = send_data.get("svgo_passes")
        if host_template:
            send.host_template = host_template
        if root_template:
            send.remote_root_template = root_template
        if passes is not None:
            if not isinstance(passes, int) or isinstance(passes, bool) or passes < 1:
                raise ConfigError("send.svgo_passes must be a positive integer")
            send.svgo_passes = passes

    cache_dir_name = _as_str(data.get("cache_dir"))
    cache_dir = root / cache_dir_name if cache_dir_name else None

    return IconBundleConfig(
        root=root,
        node=node,
        levels=levels,
        techs=techs,
        send=send,
        cache_dir=cache_dir,
    )


def normalise_options(options: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``options`` with camelCase aliases mapped to snake_case."""
    result: Dict[str, Any] = {}
    for key, value in options.items():
        result[_OPTION_ALIASES.get(str(key), str(key))] = value
    return result


def _tech_entries(data: Mapping[str, Any]) -> List[Any]:
    if "techs" in data:
        entries = data.get("techs")
        if entries is None:
            return []
        if not isinstance(entries, list):
            raise ConfigError("techs must be a list of mappings")
        return entries
    single = data.get("tech")
    return [single] if single is not None else []


def _parse_tech(entry: Any) -> TechConfig:
    if not isinstance(entry, dict):
        raise ConfigError("each tech entry must be a mapping")
    options = normalise_options(entry)
    name = _as_str(options.pop("name", None)) or DEFAULT_TECH
    return TechConfig(name=name, options=options)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "IconBundleConfig",
    "SendConfig",
    "TechConfig",
    "load_config",
    "normalise_options",
]
