"""Seed generation: random positions, the colour index counter, seed lists.

All randomness comes from one numpy Generator per process. It is seeded
from platform entropy the first time it is used, or explicitly through
reseed() when a run must be reproducible. Callers that need isolation
pass their own Generator via the `rng` argument instead.
"""

import logging

import numpy as np

from vorogen.core.palette import get_color
from vorogen.core.types import Palette, Point, PreconditionError, Seed

logger = logging.getLogger(__name__)

# Counter start values are drawn from [0, COUNTER_START_RANGE)
COUNTER_START_RANGE = 100

_rng: np.random.Generator | None = None


def get_rng() -> np.random.Generator:
    """Return the shared random source, creating it from OS entropy on first use."""
    global _rng
    if _rng is None:
        _rng = np.random.default_rng()
    return _rng


def reseed(seed: int | None) -> np.random.Generator:
    """Replace the shared random source. None re-seeds from OS entropy."""
    global _rng
    _rng = np.random.default_rng(seed)
    logger.debug('Random source reseeded (seed=%s)', seed)
    return _rng


def random_position(max_width: int, max_height: int, rng: np.random.Generator | None = None) -> Point:
    """Uniform random point with 0 <= x < max_width and 0 <= y < max_height."""
    if max_width <= 0 or max_height <= 0:
        raise PreconditionError(f'Bounds must be positive, got {max_width}x{max_height}')
    rng = rng or get_rng()
    x = int(rng.integers(0, max_width))
    y = int(rng.integers(0, max_height))
    return Point(x, y)


class ColorIndexCounter:
    """Strictly increasing palette index, +1 per read, no upper bound.

    Starting from a random offset spreads palette picks across runs while
    keeping neighbouring seeds from repeating a colour. Not thread-safe.
    """

    def __init__(self, start: int | None = None, rng: np.random.Generator | None = None):
        if start is None:
            start = int((rng or get_rng()).integers(0, COUNTER_START_RANGE))
        self._next = start

    @property
    def current(self) -> int:
        """The value the next call to next_index() will return."""
        return self._next

    def next_index(self) -> int:
        value = self._next
        self._next += 1
        return value


def create_seeds(
    count: int,
    max_width: int,
    max_height: int,
    palette: Palette,
    counter: ColorIndexCounter | None = None,
    rng: np.random.Generator | None = None,
) -> list[Seed]:
    """Build `count` seeds at random positions, coloured by the counter.

    List order is construction order.
    """
    if count < 1:
        raise PreconditionError(f'Seed count must be at least 1, got {count}')
    if not palette:
        raise PreconditionError('Palette must contain at least one colour')
    rng = rng or get_rng()
    if counter is None:
        counter = ColorIndexCounter(rng=rng)

    seeds = []
    for _ in range(count):
        point = random_position(max_width, max_height, rng)
        color = get_color(palette, counter.next_index())
        seeds.append(Seed(point=point, color=color))

    logger.debug('Created %d seeds in %dx%d (next colour index %d)', count, max_width, max_height, counter.current)
    return seeds
