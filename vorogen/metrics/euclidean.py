"""Squared Euclidean distance: (x1-x2)^2 + (y1-y2)^2.

Deliberately not square-rooted. Only the ordering of distances decides
the nearest seed and squaring preserves it, so the result stays an exact
integer. Cells are the classic convex polygons.

Example:
    vorogen euclidean out.png --seeds 64 --random-seed 7
"""

from vorogen.core.types import Metric, Point

metric = Metric(
    name='euclidean',
    help='Squared Euclidean distance dx^2 + dy^2. Classic convex cells.',
)


@metric.distance
def squared_euclidean(start: Point, end: Point) -> int:
    dx = start.x - end.x
    dy = start.y - end.y
    return dx * dx + dy * dy


@metric.field
def squared_euclidean_field(xs, ys, seed_xs, seed_ys):
    dx = xs - seed_xs
    dy = ys - seed_ys
    return dx * dx + dy * dy
