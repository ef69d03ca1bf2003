"""Icon source collection, deduplication and slot assignment."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Iterable, List, Sequence

from .logging import get_logger
from .models import IMAGE_EXTENSIONS, IconLists, IconPair, SourceFile
from .node import BuildNode

logger = get_logger("sources")


def collect_sources(node: BuildNode, sources_suffix: str) -> List[SourceFile]:
    """Return suffixed image files and the contents of suffixed directories."""
    index = node.require_sources()
    suffixes = [f"{sources_suffix}.{ext}" for ext in IMAGE_EXTENSIONS]

    paths: List[Path] = list(index.files_by_suffix(suffixes))
    for source_dir in index.dirs_by_suffix(sources_suffix):
        paths.extend(source_dir.files)

    logger.debug("Found %d icon sources for suffix %r", len(paths), sources_suffix)
    return [to_source_file(node, path) for path in paths]


def to_source_file(node: BuildNode, path: Path) -> SourceFile:
    filename = node.relative_path(path)
    ext = os.path.splitext(filename)[1]
    name = os.path.basename(filename)[: -len(ext)] if ext else os.path.basename(filename)
    return SourceFile(fullname=str(path), filename=filename, ext=ext, name=name)


def unique_pairs(files: Iterable[SourceFile], targets: Sequence[str] = ()) -> List[IconPair]:
    """Collapse sources into one vector/bitmap pair per base name, sorted by name."""
    pairs: Dict[str, IconPair] = {}
    for source in files:
        pair = pairs.get(source.name)
        if pair is None:
            pair = pairs[source.name] = IconPair(name=source.name)
        if source.is_vector:
            pair.vector = source
        else:
            pair.bitmap = source

    target_list = ", ".join(targets)
    for key, pair in pairs.items():
        if pair.bitmap is None:
            logger.warning(
                'There is no degradation image file for "%s", targets: %s', key, target_list
            )
        if pair.vector is None:
            logger.warning('There is no vector image file for "%s", targets: %s', key, target_list)

    return sorted(pairs.values(), key=lambda pair: pair.name)


def split_lists(pairs: Iterable[IconPair]) -> IconLists:
    """Fill the vector slot (falling back to the bitmap) and the bitmap slot."""
    lists = IconLists()
    for pair in pairs:
        primary = pair.vector or pair.bitmap
        if primary is not None:
            lists.v.append(primary)
        if pair.bitmap is not None:
            lists.b.append(pair.bitmap)
    return lists


__all__ = ["collect_sources", "split_lists", "to_source_file", "unique_pairs"]
