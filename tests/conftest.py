import os
from pathlib import Path

import pytest


@pytest.fixture
def dark_omen_path():
    """Root of an installed copy of the game, from $DARK_OMEN_PATH."""
    v = os.environ.get("DARK_OMEN_PATH")
    if not v:
        pytest.skip("DARK_OMEN_PATH is not set")
    return Path(v)


@pytest.fixture
def game_data(dark_omen_path):
    return dark_omen_path / "DARKOMEN" / "DARKOMEN"
