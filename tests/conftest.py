from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.icon_tree import IconTreeBuilder


@pytest.fixture
def icon_tree(tmp_path: Path) -> IconTreeBuilder:
    """Provide a reusable icon tree rooted at the pytest tmp_path."""
    return IconTreeBuilder(tmp_path)
