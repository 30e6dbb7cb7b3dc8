"""Rasterizer: colour every pixel with its nearest seed.

Two renderers produce the same buffer:

  build_image   - per-pixel scan in pure Python, works with any DistanceFn.
  render_array  - numpy version for Metrics that carry a vectorized form.
                  Evaluates all seeds against a band of rows at once and
                  takes argmin over the seed axis.

Tie-break: the first seed in list order wins. The scalar scan only
replaces its best on a strictly smaller distance, and numpy.argmin
returns the first minimum, so both renderers agree byte for byte.
"""

import logging
from collections.abc import Sequence

import numpy as np

from vorogen.core.types import DistanceFn, Metric, PixelBuffer, Point, PreconditionError, Seed

logger = logging.getLogger(__name__)

# Upper bound on distances held in memory per band (seeds * rows * width)
BAND_BUDGET = 4_000_000


def _check_dimensions(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise PreconditionError(f'Image dimensions must be positive, got {width}x{height}')


def _closest_index(pixel: Point, seeds: Sequence[Seed], distance_fn: DistanceFn) -> int:
    best = 0
    best_dist = distance_fn(pixel, seeds[0].point)
    for i in range(1, len(seeds)):
        dist = distance_fn(pixel, seeds[i].point)
        if dist < best_dist:
            best = i
            best_dist = dist
    return best


def _scan_row(y: int, width: int, seeds: Sequence[Seed], distance_fn: DistanceFn) -> list[int]:
    """Nearest-seed index for each pixel of row y, left to right."""
    return [_closest_index(Point(x, y), seeds, distance_fn) for x in range(width)]


def get_closest_seed(pixel: Point, seeds: Sequence[Seed], distance_fn: DistanceFn) -> Seed:
    """Return the seed nearest to pixel. Earlier seeds win ties."""
    if not seeds:
        raise PreconditionError('Cannot search an empty seed list')
    return seeds[_closest_index(pixel, seeds, distance_fn)]


def build_image(seeds: Sequence[Seed], width: int, height: int, distance_fn: DistanceFn) -> PixelBuffer:
    """Rasterize row by row (y outer, x inner) into a PixelBuffer."""
    _check_dimensions(width, height)
    if not seeds:
        raise PreconditionError('Cannot rasterize without seeds')

    pixels = []
    for y in range(height):
        pixels.extend(seeds[i].color for i in _scan_row(y, width, seeds, distance_fn))

    logger.debug('Rasterized %dx%d with %d seeds (scalar)', width, height, len(seeds))
    return PixelBuffer(width=width, height=height, pixels=pixels)


def _band_rows(seed_count: int, width: int) -> int:
    return max(1, BAND_BUDGET // max(1, seed_count * width))


def label_map(
    seeds: Sequence[Seed],
    width: int,
    height: int,
    distance_fn: DistanceFn,
    band_rows: int | None = None,
) -> np.ndarray:
    """Return a (height, width) array of nearest-seed indices."""
    _check_dimensions(width, height)
    if not seeds:
        raise PreconditionError('Cannot rasterize without seeds')

    labels = np.zeros((height, width), dtype=np.intp)

    if not (isinstance(distance_fn, Metric) and distance_fn.vectorized):
        for y in range(height):
            labels[y] = _scan_row(y, width, seeds, distance_fn)
        return labels

    coords = np.array([(s.point.x, s.point.y) for s in seeds], dtype=np.int64)
    seed_xs = coords[:, 0][:, None, None]
    seed_ys = coords[:, 1][:, None, None]
    xs = np.arange(width, dtype=np.int64)[None, None, :]

    rows = band_rows or _band_rows(len(seeds), width)
    for y0 in range(0, height, rows):
        y1 = min(height, y0 + rows)
        ys = np.arange(y0, y1, dtype=np.int64)[None, :, None]
        dists = np.broadcast_to(distance_fn.grid(xs, ys, seed_xs, seed_ys), (len(seeds), y1 - y0, width))
        labels[y0:y1] = np.argmin(dists, axis=0)

    return labels


def render_array(
    seeds: Sequence[Seed],
    width: int,
    height: int,
    distance_fn: DistanceFn,
    band_rows: int | None = None,
) -> PixelBuffer:
    """Vectorized equivalent of build_image.

    Falls back to the scalar scan when distance_fn has no numpy form.
    """
    if not (isinstance(distance_fn, Metric) and distance_fn.vectorized):
        return build_image(seeds, width, height, distance_fn)

    labels = label_map(seeds, width, height, distance_fn, band_rows=band_rows)
    colors = np.array([s.color for s in seeds], dtype=np.uint8)
    logger.debug('Rasterized %dx%d with %d seeds (%s, vectorized)', width, height, len(seeds), distance_fn.name)
    return PixelBuffer.from_array(colors[labels])
