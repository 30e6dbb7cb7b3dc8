"""One-shot generation: seeds from the config, then the raster."""

import logging

from vorogen.core.config import GenerationConfig
from vorogen.core.raster import render_array
from vorogen.core.seeds import ColorIndexCounter, create_seeds, get_rng, reseed
from vorogen.core.types import DistanceFn, PixelBuffer, Seed

logger = logging.getLogger(__name__)


def generate(config: GenerationConfig, distance_fn: DistanceFn) -> tuple[list[Seed], PixelBuffer]:
    """Build the seed list and rasterize it.

    A config with random_seed set reseeds the shared random source first,
    so the same config always yields the same image.
    """
    config.validate()
    rng = reseed(config.random_seed) if config.random_seed is not None else get_rng()
    counter = ColorIndexCounter(rng=rng)
    seeds = create_seeds(config.seeds, config.width, config.height, config.palette, counter=counter, rng=rng)
    buffer = render_array(seeds, config.width, config.height, distance_fn)
    logger.info(
        'Generated %dx%d image from %d seeds (%s)',
        config.width,
        config.height,
        len(seeds),
        getattr(distance_fn, 'name', None) or getattr(distance_fn, '__name__', '?'),
    )
    return seeds, buffer
