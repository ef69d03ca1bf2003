"""Tests for icon source collection and pairing."""

from __future__ import annotations

import logging

import pytest

from iconbundle.models import SourceFile
from iconbundle.sources import collect_sources, split_lists, to_source_file, unique_pairs
from tests._fixtures.icon_tree import PNG, SVG, IconTreeBuilder


def _file(name: str, ext: str, level: str = "blocks") -> SourceFile:
    filename = f"{level}/{name}{ext}"
    return SourceFile(fullname=f"/node/{filename}", filename=filename, ext=ext, name=name)


def test_to_source_file_splits_name_and_extension(icon_tree: IconTreeBuilder) -> None:
    node = icon_tree.node()
    source = to_source_file(node, icon_tree.root / "blocks" / "logo.icon.svg")

    assert source.filename == "blocks/logo.icon.svg"
    assert source.ext == ".svg"
    assert source.name == "logo.icon"
    assert source.is_vector


def test_collect_sources_includes_suffixed_dirs(icon_tree: IconTreeBuilder) -> None:
    icon_tree.write(
        {
            "blocks/logo.icon.svg": SVG,
            "blocks/logo.icon.gif": PNG,
            "blocks/photo.jpg": PNG,
            "blocks/social.icon/vk.png": PNG,
        }
    )

    files = collect_sources(icon_tree.node(), "icon")

    assert [source.filename for source in files] == [
        "blocks/logo.icon.gif",
        "blocks/logo.icon.svg",
        "blocks/social.icon/vk.png",
    ]


def test_unique_pairs_later_levels_override(icon_tree: IconTreeBuilder) -> None:
    icon_tree.write(
        {
            "common/logo.icon.svg": SVG,
            "common/logo.icon.png": PNG,
            "touch/logo.icon.svg": SVG,
        }
    )
    node = icon_tree.node("common", "touch")

    pairs = unique_pairs(collect_sources(node, "icon"))

    assert len(pairs) == 1
    assert pairs[0].vector is not None and pairs[0].vector.filename == "touch/logo.icon.svg"
    assert pairs[0].bitmap is not None and pairs[0].bitmap.filename == "common/logo.icon.png"


def test_unique_pairs_sorts_and_warns_on_missing_variants(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    files = [
        _file("zeta.icon", ".png"),
        _file("alpha.icon", ".svg"),
        _file("mid.icon", ".svg"),
        _file("mid.icon", ".png"),
    ]
    caplog.set_level(logging.WARNING, logger="iconbundle")
    monkeypatch.setattr(logging.getLogger("iconbundle"), "propagate", True)

    pairs = unique_pairs(files, ["page.icons.v.css"])

    assert [pair.name for pair in pairs] == ["alpha.icon", "mid.icon", "zeta.icon"]
    messages = [record.getMessage() for record in caplog.records]
    assert any('no degradation image file for "alpha.icon"' in message for message in messages)
    assert any('no vector image file for "zeta.icon"' in message for message in messages)
    assert all("mid.icon" not in message for message in messages)
    assert all("page.icons.v.css" in message for message in messages)


def test_split_lists_falls_back_to_bitmap_for_vector_slot() -> None:
    pairs = unique_pairs(
        [_file("a.icon", ".svg"), _file("a.icon", ".png"), _file("b.icon", ".png"), _file("c.icon", ".svg")]
    )

    lists = split_lists(pairs)

    assert [source.filename for source in lists.v] == [
        "blocks/a.icon.svg",
        "blocks/b.icon.png",
        "blocks/c.icon.svg",
    ]
    assert [source.filename for source in lists.b] == ["blocks/a.icon.png", "blocks/b.icon.png"]
