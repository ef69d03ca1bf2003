"""Tests for the node cache store."""

from __future__ import annotations

import os
from pathlib import Path

from iconbundle.models import SourceFile
from iconbundle.stores import NodeCache


def _source(path: Path) -> SourceFile:
    return SourceFile(fullname=str(path), filename=path.name, ext=path.suffix, name=path.stem)


def test_file_info_round_trip(tmp_path: Path) -> None:
    target = tmp_path / "out.css"
    target.write_text("a", encoding="utf-8")
    cache_path = tmp_path / "cache.json"

    cache = NodeCache(cache_path)
    assert cache.for_target("out.css").need_rebuild_file("target", target) is True
    cache.for_target("out.css").cache_file_info("target", target)
    cache.persist()

    reloaded = NodeCache(cache_path)
    assert reloaded.for_target("out.css").need_rebuild_file("target", target) is False
    assert reloaded.targets() == ["out.css"]


def test_file_info_detects_changes_and_missing_files(tmp_path: Path) -> None:
    target = tmp_path / "out.css"
    target.write_text("a", encoding="utf-8")
    view = NodeCache(None).for_target("out.css")
    view.cache_file_info("target", target)

    target.write_text("changed", encoding="utf-8")
    assert view.need_rebuild_file("target", target) is True

    target.unlink()
    assert view.need_rebuild_file("target", target) is True


def test_file_list_detects_membership_and_mtime_changes(tmp_path: Path) -> None:
    first = tmp_path / "a.icon.svg"
    second = tmp_path / "b.icon.svg"
    first.write_text("<svg/>", encoding="utf-8")
    second.write_text("<svg/>", encoding="utf-8")
    view = NodeCache(None).for_target("out.css")
    files = [_source(first), _source(second)]

    assert view.need_rebuild_file_list("list", files) is True
    view.cache_file_list("list", files)
    assert view.need_rebuild_file_list("list", files) is False
    assert view.need_rebuild_file_list("list", files[:1]) is True
    assert view.need_rebuild_file_list("list", list(reversed(files))) is True

    stat = first.stat()
    os.utime(first, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))
    assert view.need_rebuild_file_list("list", files) is True


def test_cache_ignores_corrupt_payload(tmp_path: Path) -> None:
    cache_path = tmp_path / "cache.json"
    cache_path.write_text("{not json", encoding="utf-8")

    cache = NodeCache(cache_path)

    assert cache.targets() == []


def test_cache_clear_drops_entries(tmp_path: Path) -> None:
    target = tmp_path / "out.css"
    target.write_text("a", encoding="utf-8")
    cache = NodeCache(tmp_path / "cache.json")
    cache.for_target("out.css").cache_file_info("target", target)

    cache.clear()
    cache.persist()

    assert NodeCache(tmp_path / "cache.json").targets() == []
