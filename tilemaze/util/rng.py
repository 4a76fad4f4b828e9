"""Deterministic random number generation with isolated streams.

Each consumer of randomness gets its own stream derived from a master seed,
so that:

1. A maze is reproducible from the same master seed
2. Drawing more numbers in one consumer does not shift another's sequence

Usage:
    from tilemaze.util import rng
    rng.init(config.RANDOM_SEED)

    _rng = rng.get("maze.wilson")
    direction = _rng.choice(graph.directions(v))

    # After rng.reset(), cached references automatically use the new stream

Domain naming convention (hierarchical):
    - "maze.wilson"
    - "tests.<module>"
"""

from __future__ import annotations

import zlib
from collections.abc import MutableSequence, Sequence
from random import Random
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from tilemaze.types import RandomSeed

T = TypeVar("T")


class RNGStream:
    """The draws a maze generator needs, from the current RNG of a domain.

    Callers may cache the proxy; it looks up the provider's stream on every
    call and therefore keeps working after rng.reset().
    """

    def __init__(self, provider: RNGProvider, domain: str) -> None:
        self._provider = provider
        self._domain = domain

    def _rng(self) -> Random:
        return self._provider._get_raw(self._domain)

    def randrange(self, start: int, stop: int | None = None) -> int:
        return self._rng().randrange(start, stop)

    def choice(self, seq: Sequence[T]) -> T:
        return self._rng().choice(seq)

    def shuffle(self, x: MutableSequence) -> None:
        self._rng().shuffle(x)


# Functions that accept either a plain Random or a stream proxy.
type RNG = Random | RNGStream


class RNGProvider:
    """Hands out one Random per domain, all derived from a master seed."""

    def __init__(self, master_seed: RandomSeed = None) -> None:
        self._master_seed = master_seed
        self._streams: dict[str, Random] = {}
        self._proxies: dict[str, RNGStream] = {}

    def get(self, domain: str) -> RNGStream:
        """Get a cacheable stream proxy for the named domain."""
        if domain not in self._proxies:
            self._proxies[domain] = RNGStream(self, domain)
        return self._proxies[domain]

    def _get_raw(self, domain: str) -> Random:
        if domain not in self._streams:
            if self._master_seed is None:
                self._streams[domain] = Random()
            else:
                # crc32 rather than hash(): hash() of str is salted per process
                derived_seed = zlib.crc32(f"{self._master_seed}:{domain}".encode())
                self._streams[domain] = Random(derived_seed)
        return self._streams[domain]

    def reset(self, master_seed: RandomSeed = None) -> None:
        """Reset all streams with a new master seed. Existing proxies stay valid."""
        self._master_seed = master_seed
        self._streams.clear()


# =============================================================================
# Module-level API
# =============================================================================

_provider: RNGProvider | None = None


def init(master_seed: RandomSeed = None) -> None:
    """Initialize (or reset) the shared provider with a master seed."""
    global _provider
    if _provider is not None:
        _provider.reset(master_seed)
    else:
        _provider = RNGProvider(master_seed)


def get(domain: str) -> RNGStream:
    """Get a stream for the named domain, creating an unseeded provider on demand."""
    global _provider
    if _provider is None:
        _provider = RNGProvider(None)
    return _provider.get(domain)


def reset(master_seed: RandomSeed = None) -> None:
    """Reset all streams with a new master seed.

    Raises:
        RuntimeError: if init() has not been called.
    """
    if _provider is None:
        raise RuntimeError("RNG not initialized - call rng.init() first")
    _provider.reset(master_seed)
