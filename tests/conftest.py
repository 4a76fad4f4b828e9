from __future__ import annotations

from collections.abc import Iterator

import pytest

from tilemaze import config
from tilemaze.util import rng


@pytest.fixture(autouse=True)
def reseed_rng() -> Iterator[None]:
    """Reset all RNG streams to the configured seed before each test."""
    rng.init(config.RANDOM_SEED)
    yield
