"""Manhattan (taxicab) distance: |x1-x2| + |y1-y2|.

Integer arithmetic only. Cells come out as diamonds and axis-aligned
staircases rather than the straight bisectors of the Euclidean metric.

Example:
    vorogen manhattan out.ppm --width 640 --height 480 --seeds 32
"""

from vorogen.core.types import Metric, Point

metric = Metric(
    name='manhattan',
    help='Taxicab distance |dx| + |dy|. Diamond-shaped cells.',
)


@metric.distance
def manhattan(start: Point, end: Point) -> int:
    return abs(start.x - end.x) + abs(start.y - end.y)


@metric.field
def manhattan_field(xs, ys, seed_xs, seed_ys):
    return abs(xs - seed_xs) + abs(ys - seed_ys)
