"""Tests for vorogen.core.raster — nearest-seed search and both rasterizers."""

import numpy as np
import pytest
from vorogen.core.raster import build_image, get_closest_seed, label_map, render_array
from vorogen.core.seeds import ColorIndexCounter, create_seeds
from vorogen.core.types import PixelBuffer, Point, PreconditionError, Seed
from vorogen.metrics.chebyshev import metric as chebyshev
from vorogen.metrics.euclidean import metric as euclidean
from vorogen.metrics.manhattan import manhattan, metric as manhattan_metric

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)

ALL_METRICS = [manhattan_metric, euclidean, chebyshev]


def _random_seeds(count: int, width: int, height: int, rng_seed: int) -> list[Seed]:
    palette = [RED, GREEN, BLUE, (10, 20, 30), (200, 100, 50)]
    return create_seeds(count, width, height, palette, counter=ColorIndexCounter(0), rng=np.random.default_rng(rng_seed))


class TestGetClosestSeed:
    def test_single_seed(self):
        seed = Seed(Point(3, 3), RED)
        assert get_closest_seed(Point(0, 0), [seed], manhattan) is seed

    def test_picks_nearest(self):
        near = Seed(Point(1, 1), RED)
        far = Seed(Point(8, 8), BLUE)
        assert get_closest_seed(Point(7, 7), [near, far], manhattan) is far

    def test_tie_goes_to_first(self):
        left = Seed(Point(0, 0), RED)
        right = Seed(Point(2, 0), BLUE)
        assert get_closest_seed(Point(1, 0), [left, right], manhattan) is left
        assert get_closest_seed(Point(1, 0), [right, left], manhattan) is right

    def test_tie_with_later_duplicate(self):
        a = Seed(Point(5, 5), RED)
        b = Seed(Point(5, 5), GREEN)
        assert get_closest_seed(Point(5, 5), [a, b], euclidean) is a

    def test_empty_raises(self):
        with pytest.raises(PreconditionError):
            get_closest_seed(Point(0, 0), [], manhattan)


class TestBuildImage:
    def test_single_seed_fills_grid(self):
        seeds = [Seed(Point(0, 0), RED)]
        for metric in ALL_METRICS:
            buffer = build_image(seeds, 2, 2, metric)
            assert buffer.pixels == [RED] * 4

    def test_two_seeds_on_a_row(self):
        seeds = [Seed(Point(0, 0), RED), Seed(Point(9, 0), BLUE)]
        buffer = build_image(seeds, 10, 1, manhattan)
        assert buffer.pixels == [RED] * 5 + [BLUE] * 5

    def test_size_is_width_times_height(self):
        buffer = build_image(_random_seeds(4, 7, 5, 1), 7, 5, manhattan)
        assert len(buffer) == 35
        assert (buffer.width, buffer.height) == (7, 5)

    def test_row_major_order(self):
        # Left half red, right half blue, identical on every row
        seeds = [Seed(Point(0, 1), RED), Seed(Point(3, 1), BLUE)]
        buffer = build_image(seeds, 4, 3, euclidean)
        for y in range(3):
            assert buffer.row(y) == [RED, RED, BLUE, BLUE]
        assert buffer.at(3, 2) == BLUE

    def test_vertical_split_is_row_major(self):
        seeds = [Seed(Point(0, 0), RED), Seed(Point(0, 3), BLUE)]
        buffer = build_image(seeds, 2, 4, euclidean)
        assert buffer.pixels == [RED, RED, RED, RED, BLUE, BLUE, BLUE, BLUE]

    def test_deterministic(self):
        seeds = _random_seeds(6, 16, 12, 2)
        a = build_image(seeds, 16, 12, euclidean)
        b = build_image(seeds, 16, 12, euclidean)
        assert a.to_bytes() == b.to_bytes()

    def test_seed_list_untouched(self):
        seeds = _random_seeds(5, 10, 10, 3)
        before = list(seeds)
        build_image(seeds, 10, 10, chebyshev)
        assert seeds == before

    def test_every_seed_colours_itself(self):
        seeds = [Seed(Point(1, 1), RED), Seed(Point(6, 2), GREEN), Seed(Point(3, 5), BLUE)]
        buffer = build_image(seeds, 8, 8, euclidean)
        for s in seeds:
            assert buffer.at(s.point.x, s.point.y) == s.color

    def test_plain_function_distance(self):
        seeds = [Seed(Point(0, 0), RED), Seed(Point(9, 0), BLUE)]
        buffer = build_image(seeds, 10, 1, lambda a, b: abs(a.x - b.x))
        assert buffer.pixels == [RED] * 5 + [BLUE] * 5

    def test_bad_dimensions_raise(self):
        seeds = [Seed(Point(0, 0), RED)]
        with pytest.raises(PreconditionError):
            build_image(seeds, 0, 4, manhattan)
        with pytest.raises(PreconditionError):
            build_image(seeds, 4, -2, manhattan)

    def test_no_seeds_raise(self):
        with pytest.raises(PreconditionError):
            build_image([], 4, 4, manhattan)


class TestRenderArray:
    @pytest.mark.parametrize('metric', ALL_METRICS, ids=lambda m: m.name)
    def test_matches_build_image(self, metric):
        seeds = _random_seeds(9, 23, 17, 11)
        expected = build_image(seeds, 23, 17, metric)
        got = render_array(seeds, 23, 17, metric, band_rows=4)
        assert got.to_bytes() == expected.to_bytes()

    @pytest.mark.parametrize('metric', ALL_METRICS, ids=lambda m: m.name)
    def test_ties_match_build_image(self, metric):
        # Symmetric layout: many pixels are equidistant from several seeds
        seeds = [
            Seed(Point(2, 2), RED),
            Seed(Point(8, 2), GREEN),
            Seed(Point(2, 8), BLUE),
            Seed(Point(8, 8), RED),
            Seed(Point(5, 5), GREEN),
        ]
        expected = build_image(seeds, 11, 11, metric)
        assert render_array(seeds, 11, 11, metric).pixels == expected.pixels

    def test_two_seeds_on_a_row(self):
        seeds = [Seed(Point(0, 0), RED), Seed(Point(9, 0), BLUE)]
        buffer = render_array(seeds, 10, 1, manhattan_metric)
        assert buffer.pixels == [RED] * 5 + [BLUE] * 5

    def test_falls_back_for_plain_function(self):
        seeds = _random_seeds(3, 6, 6, 4)
        expected = build_image(seeds, 6, 6, manhattan)
        assert render_array(seeds, 6, 6, manhattan).pixels == expected.pixels

    def test_no_seeds_raise(self):
        with pytest.raises(PreconditionError):
            render_array([], 4, 4, euclidean)


class TestLabelMap:
    def test_shape_and_values(self):
        seeds = [Seed(Point(0, 0), RED), Seed(Point(9, 0), BLUE)]
        labels = label_map(seeds, 10, 2, manhattan_metric)
        assert labels.shape == (2, 10)
        assert labels[0].tolist() == [0] * 5 + [1] * 5

    def test_scalar_and_vectorized_agree(self):
        seeds = _random_seeds(5, 12, 9, 5)
        vec = label_map(seeds, 12, 9, euclidean, band_rows=2)
        scalar = label_map(seeds, 12, 9, lambda a, b: euclidean(a, b))
        assert np.array_equal(vec, scalar)

    def test_plain_function_labels_give_build_image_colours(self):
        seeds = _random_seeds(4, 7, 5, 8)
        labels = label_map(seeds, 7, 5, manhattan)
        colours = [seeds[i].color for i in labels.reshape(-1).tolist()]
        assert colours == build_image(seeds, 7, 5, manhattan).pixels

    def test_plain_function_keeps_first_seed_on_ties(self):
        seeds = [Seed(Point(0, 0), RED), Seed(Point(2, 0), BLUE)]
        labels = label_map(seeds, 3, 1, manhattan)
        assert labels[0].tolist() == [0, 0, 1]


class TestPixelBuffer:
    def test_to_bytes_row_major(self):
        buffer = PixelBuffer(width=2, height=1, pixels=[RED, BLUE])
        assert buffer.to_bytes() == bytes([255, 0, 0, 0, 0, 255])

    def test_to_array_shape(self):
        buffer = PixelBuffer(width=3, height=2, pixels=[RED] * 3 + [BLUE] * 3)
        arr = buffer.to_array()
        assert arr.shape == (2, 3, 3)
        assert arr.dtype == np.uint8
        assert arr[1, 0].tolist() == list(BLUE)

    def test_from_array_inverse(self):
        buffer = PixelBuffer(width=2, height=2, pixels=[RED, GREEN, BLUE, RED])
        assert PixelBuffer.from_array(buffer.to_array()) == buffer

    def test_to_image(self):
        img = PixelBuffer(width=2, height=1, pixels=[RED, BLUE]).to_image()
        assert img.size == (2, 1)
        assert img.getpixel((1, 0)) == BLUE

    def test_from_array_shares_memory(self):
        arr = np.zeros((3, 4, 3), dtype=np.uint8)
        buffer = PixelBuffer.from_array(arr)
        assert (buffer.width, buffer.height) == (4, 3)
        assert np.shares_memory(buffer.to_array(), arr)

    def test_from_array_casts_dtype(self):
        buffer = PixelBuffer.from_array(np.full((1, 2, 3), 7, dtype=np.int64))
        assert buffer.to_array().dtype == np.uint8
        assert buffer.at(1, 0) == (7, 7, 7)

    def test_full_hd_to_bytes(self):
        arr = np.zeros((1080, 1920, 3), dtype=np.uint8)
        arr[-1, -1] = BLUE
        data = PixelBuffer.from_array(arr).to_bytes()
        assert len(data) == 1920 * 1080 * 3
        assert data[-3:] == bytes(BLUE)

    def test_wrong_pixel_count_raises(self):
        with pytest.raises(PreconditionError, match='Expected 4 pixels'):
            PixelBuffer(width=2, height=2, pixels=[RED] * 3)

    def test_at_and_row_return_tuples(self):
        buffer = PixelBuffer(width=2, height=2, pixels=[RED, GREEN, BLUE, RED])
        assert buffer.at(1, 0) == GREEN
        assert isinstance(buffer.at(0, 1), tuple)
        assert buffer.row(1) == [BLUE, RED]
        assert buffer.pixels == [RED, GREEN, BLUE, RED]

    def test_equality(self):
        a = PixelBuffer(width=2, height=1, pixels=[RED, BLUE])
        assert a == PixelBuffer(width=2, height=1, pixels=[RED, BLUE])
        assert a != PixelBuffer(width=2, height=1, pixels=[BLUE, RED])
        assert a != PixelBuffer(width=1, height=2, pixels=[RED, BLUE])
        assert a != 'not a buffer'
