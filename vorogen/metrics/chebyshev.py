"""Chebyshev (chessboard) distance: max(|x1-x2|, |y1-y2|).

Cells are built from axis-aligned and 45-degree edges. Ties are common
with this metric, so the first-seed-wins rule shapes the boundaries.

Example:
    vorogen chebyshev out.ppm --seeds 24
"""

import numpy as np

from vorogen.core.types import Metric, Point

metric = Metric(
    name='chebyshev',
    help='Chessboard distance max(|dx|, |dy|). Square-ish cells.',
)


@metric.distance
def chebyshev(start: Point, end: Point) -> int:
    return max(abs(start.x - end.x), abs(start.y - end.y))


@metric.field
def chebyshev_field(xs, ys, seed_xs, seed_ys):
    return np.maximum(np.abs(xs - seed_xs), np.abs(ys - seed_ys))
