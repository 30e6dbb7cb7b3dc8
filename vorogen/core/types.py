"""Shared types for vorogen: Point, Seed, PixelBuffer, Metric."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass

import numpy as np
from PIL import Image

Color = tuple[int, int, int]
Palette = Sequence[Color]
DistanceFn = Callable[['Point', 'Point'], float]


class PreconditionError(ValueError):
    """A caller broke an input contract (empty palette, zero size, no seeds...)."""


@dataclass(frozen=True)
class Point:
    """An integer pixel position."""

    x: int
    y: int


@dataclass(frozen=True)
class Seed:
    """A (location, colour) pair anchoring one Voronoi cell."""

    point: Point
    color: Color


class PixelBuffer:
    """A width x height grid of colours in row-major order.

    Backed by a (height, width, 3) uint8 array. `pixels` materializes the
    colours as tuples on demand; byte and array views never go through it.
    """

    def __init__(self, width: int, height: int, pixels: Iterable[Color] = ()):
        self.width = width
        self.height = height
        flat = np.array(list(pixels), dtype=np.uint8).reshape(-1)
        if flat.size != width * height * 3:
            raise PreconditionError(f'Expected {width * height} pixels for {width}x{height}, got {flat.size // 3}')
        self._array = flat.reshape(height, width, 3)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> PixelBuffer:
        """Wrap a (height, width, 3) array without copying it per pixel."""
        buffer = cls.__new__(cls)
        buffer.height, buffer.width = arr.shape[:2]
        buffer._array = np.ascontiguousarray(arr, dtype=np.uint8)
        return buffer

    @property
    def pixels(self) -> list[Color]:
        return list(map(tuple, self._array.reshape(-1, 3).tolist()))

    def __len__(self) -> int:
        return self.width * self.height

    def __iter__(self) -> Iterator[Color]:
        return iter(self.pixels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (self.width, self.height) == (other.width, other.height) and np.array_equal(self._array, other._array)

    def __repr__(self) -> str:
        return f'PixelBuffer({self.width}x{self.height})'

    def at(self, x: int, y: int) -> Color:
        return tuple(self._array[y, x].tolist())

    def row(self, y: int) -> list[Color]:
        return list(map(tuple, self._array[y].tolist()))

    def to_bytes(self) -> bytes:
        """r,g,b byte triples, row 0 first, left to right."""
        return self._array.tobytes()

    def to_array(self) -> np.ndarray:
        """The backing (height, width, 3) uint8 array."""
        return self._array

    def to_image(self) -> Image.Image:
        return Image.fromarray(self._array)


class Metric:
    """A self-registering distance policy.

    Usage in a metric module:

        metric = Metric(name='manhattan', help='Taxicab distance')

        @metric.distance
        def manhattan(start, end):
            ...

        @metric.field
        def manhattan_field(xs, ys, seed_xs, seed_ys):
            ...

    A Metric is itself a DistanceFn, so it can be handed straight to
    build_image or get_closest_seed.
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._distance_fn: DistanceFn | None = None
        self._field_fn: Callable | None = None

    def distance(self, fn: DistanceFn) -> DistanceFn:
        """Decorator to register the scalar (Point, Point) distance."""
        self._distance_fn = fn
        return fn

    def field(self, fn: Callable) -> Callable:
        """Decorator to register the vectorized numpy form.

        The function receives pixel coordinate grids and seed coordinate
        columns that broadcast against each other, and returns distances
        with the broadcast shape.
        """
        self._field_fn = fn
        return fn

    @property
    def scalar(self) -> bool:
        return self._distance_fn is not None

    @property
    def vectorized(self) -> bool:
        return self._field_fn is not None

    def __call__(self, start: Point, end: Point) -> float:
        if self._distance_fn is None:
            raise RuntimeError(f'Metric {self.name} has no distance function')
        return self._distance_fn(start, end)

    def grid(self, xs: np.ndarray, ys: np.ndarray, seed_xs: np.ndarray, seed_ys: np.ndarray) -> np.ndarray:
        """Evaluate the vectorized form over broadcast coordinate arrays."""
        if self._field_fn is None:
            raise RuntimeError(f'Metric {self.name} has no vectorized form')
        return self._field_fn(xs, ys, seed_xs, seed_ys)

    def __repr__(self) -> str:
        return f'Metric({self.name!r})'
