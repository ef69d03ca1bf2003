"""Helper utilities for constructing temporary icon trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from iconbundle.node import BuildNode
from iconbundle.stores import NodeCache

SVG = '<svg xmlns="http://www.w3.org/2000/svg" width="16" height="16">\n  <path fill="#f00" d="M0 0h16v16H0z"/>\n</svg>\n'
PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8


class IconTreeBuilder:
    """Utility for writing icon files into a throwaway node directory."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "page"
        self.root.mkdir()

    def write(self, files: Mapping[str, str | bytes]) -> None:
        """Write `path -> contents` entries below the node directory."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")

    def write_config(self, text: str) -> Path:
        path = self.root / ".iconbundle.yml"
        path.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
        return path

    def node(self, *levels: str) -> BuildNode:
        """Return a node rooted at the tree with an on-disk cache."""
        level_paths = [self.root / level for level in levels] or None
        cache = NodeCache(self.root / ".iconbundle" / "cache.json")
        return BuildNode(self.root, levels=level_paths, cache=cache)

    def read(self, relative: str) -> str:
        return (self.root / relative).read_text(encoding="utf-8")


__all__ = ["IconTreeBuilder", "PNG", "SVG"]
