"""base64-icons tech: writes icon sets as CSS rules, one file per type and group.

Options
-------

* ``sources_suffix`` (required): icons are files named ``<name>.<suffix>.<ext>``
  or any image inside a directory named ``<dir>.<suffix>``.
* ``types`` (required): output types, any of ``v`` (SVG data URI, bitmap
  fallback when no SVG exists), ``b`` (bitmap base64), ``ie`` (file links),
  ``ie6`` (AlphaImageLoader filters) and ``combo`` (SVG data URIs plus file
  links under the fallback prefix).
* ``target`` (required): target name with ``{type}`` and, when grouping,
  ``{group}`` placeholders, e.g. ``?.icons.{type}.{group}.css``.
* ``split_by_groups``: mapping of group name to file-name marker. The group
  with a ``null`` marker collects icons that match no marker::

      split_by_groups:
        extra: .extra-icon     # some-icon.extra-icon.png -> ?.icons.{type}.extra.css
        main: null             # everything else          -> ?.icons.{type}.main.css

* ``selector_prefix`` (default ``.``), ``fallback_prefix`` (default
  ``.i-ua_svg_no``), ``svg_to_base64`` (default ``false``) and
  ``max_data_uri_size`` (default ``32000``).
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Mapping, Optional, Sequence

from ..encoders import (
    DEFAULT_FALLBACK_PREFIX,
    DEFAULT_MAX_DATA_URI_SIZE,
    DEFAULT_SELECTOR_PREFIX,
    OUTPUT_TYPES,
    RuleEncoder,
)
from ..errors import ConfigError, IconReadError, UnknownTypeError
from ..groups import GroupRules
from ..logging import get_logger
from ..node import BuildNode
from ..models import IconLists, IconPair, SourceFile
from ..sources import collect_sources, split_lists, unique_pairs
from .base import BaseTech

_READ_TYPES = {"v", "b", "combo"}
_MAX_WORKERS = 8


class Base64IconsTech(BaseTech):
    """Encodes icon pairs into per-type, per-group stylesheets."""

    def __init__(self, node: BuildNode, options: Mapping[str, Any] | None = None) -> None:
        super().__init__(node, options)
        self.logger = get_logger("techs.base64_icons")
        self._types: List[str] = []
        self._groups = GroupRules()
        self._targets: List[str] = []
        self._need_read_files = False
        self._encoder: Optional[RuleEncoder] = None
        self._read_lock = threading.Lock()

    def get_name(self) -> str:
        return "base64-icons"

    def configure(self) -> None:
        self._sources_suffix = str(self.get_required_option("sources_suffix"))
        types = self.get_required_option("types")
        if isinstance(types, str):
            types = [types]
        self._types = [str(item) for item in types]
        unknown = [item for item in self._types if item not in OUTPUT_TYPES]
        if unknown:
            raise UnknownTypeError(f'Unknown target type "{unknown[0]}"')

        self._groups = GroupRules(self.get_option("split_by_groups"))
        target = str(self.get_required_option("target"))
        if self._groups.enabled:
            if "{group}" not in target:
                raise ConfigError(
                    "if split_by_groups option is defined, then you need to use "
                    "{group} placeholder in target option"
                )
            self._targets = [
                self._get_target(output_type, group)
                for output_type in self._types
                for group in self._groups.group_names()
            ]
        else:
            self._targets = [self._get_target(output_type) for output_type in self._types]

        self._need_read_files = any(item in _READ_TYPES for item in self._types)
        self._encoder = RuleEncoder(
            sources_suffix=self._sources_suffix,
            selector_prefix=str(self.get_option("selector_prefix") or DEFAULT_SELECTOR_PREFIX),
            fallback_prefix=str(self.get_option("fallback_prefix") or DEFAULT_FALLBACK_PREFIX),
            max_data_uri_size=self._max_data_uri_size(),
            svg_to_base64=bool(self.get_option("svg_to_base64", False)),
        )
        self.node.register_targets(self._targets)

    def get_targets(self) -> List[str]:
        return list(self._targets)

    def get_sources(self) -> List[IconPair]:
        """Collect, deduplicate and sort the icon sources visible to the node."""
        files = collect_sources(self.node, self._sources_suffix)
        return unique_pairs(files, self._targets)

    def build(self, *, force: bool = False) -> List[str]:
        if self._encoder is None:
            raise ConfigError(f'Tech "{self.get_name()}" must be configured before build')
        lists = split_lists(self.get_sources())
        jobs = [
            (output_type, group)
            for output_type in self._types
            for group in self._groups.group_names()
        ]
        built: List[str] = []
        errors: List[BaseException] = []
        with ThreadPoolExecutor(max_workers=min(_MAX_WORKERS, len(jobs) or 1)) as pool:
            futures = [
                pool.submit(self._build_target, lists, output_type, group, force)
                for output_type, group in jobs
            ]
            for future in futures:
                try:
                    target = future.result()
                except Exception as exc:
                    errors.append(exc)
                    continue
                if target is not None:
                    built.append(target)
        if errors:
            raise errors[0]
        return built

    # ------------------------------------------------------------------
    # Helpers

    def _get_target(self, output_type: str, group: str | None = None) -> str:
        target = str(self.get_required_option("target")).replace("{type}", output_type)
        if group:
            target = target.replace("{group}", group)
        return self.node.unmask_target_name(target)

    def _max_data_uri_size(self) -> int:
        value = self.get_option("max_data_uri_size", DEFAULT_MAX_DATA_URI_SIZE)
        if isinstance(value, bool):
            raise ConfigError("max_data_uri_size must be an integer")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigError("max_data_uri_size must be an integer") from None

    def _source_list(self, lists: IconLists, output_type: str) -> List[SourceFile]:
        if output_type == "v":
            return list(lists.v)
        if output_type == "combo":
            return lists.b + lists.v
        return list(lists.b)

    def _build_target(
        self, lists: IconLists, output_type: str, group: str | None, force: bool
    ) -> Optional[str]:
        target = self._get_target(output_type, group)
        sources = self._source_list(lists, output_type)

        if not force and not self._need_rebuild(target, sources):
            self.node.is_valid_target(target)
            self.node.resolve_target(target)
            self.logger.debug("%s is up to date", target)
            return None

        try:
            self._read_files(sources)
            rules = self._encode(output_type, group, lists)
            self._write(target, "\n".join(rules), sources)
        except Exception as exc:
            self.node.reject_target(target, exc)
            raise
        return target

    def _encode(self, output_type: str, group: str | None, lists: IconLists) -> List[str]:
        assert self._encoder is not None
        vectors = self._filter_group(lists.v, group)
        bitmaps = self._filter_group(lists.b, group)
        if output_type == "combo":
            fallback = self._encoder.with_fallback_prefix()
            return [self._encoder.to_svg(item) for item in vectors] + [
                fallback.to_link(item) for item in bitmaps
            ]
        encode = self._encoder.encoder_for(output_type)
        sources = vectors if output_type == "v" else bitmaps
        return [encode(item) for item in sources]

    def _filter_group(self, files: Sequence[SourceFile], group: str | None) -> List[SourceFile]:
        return [item for item in files if self._groups.matches(item.name, group)]

    def _need_rebuild(self, target: str, sources: Sequence[SourceFile]) -> bool:
        cache = self.node.get_node_cache(target)
        if cache.need_rebuild_file("target", self.node.resolve_path(target)):
            return True
        return cache.need_rebuild_file_list("list", sources)

    def _read_files(self, sources: Sequence[SourceFile]) -> None:
        if not self._need_read_files:
            return
        for source in sources:
            with self._read_lock:
                if source.data is not None:
                    continue
                try:
                    with open(source.fullname, "rb") as handle:
                        source.data = handle.read()
                except OSError as exc:
                    raise IconReadError(f"Can't read file \"{source.fullname}\": {exc}") from exc

    def _write(self, target: str, content: str, sources: Sequence[SourceFile]) -> None:
        path = self.node.resolve_path(target)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        self.node.resolve_target(target, content)
        cache = self.node.get_node_cache(target)
        cache.cache_file_info("target", path)
        cache.cache_file_list("list", sources)
        self.logger.info("Wrote %s (%d bytes)", target, len(content.encode("utf-8")))


__all__ = ["Base64IconsTech"]
