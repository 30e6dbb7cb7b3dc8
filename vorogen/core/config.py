"""Generation settings for vorogen.

Each setting resolves in this order (first wins):
  1. Command-line flag.
  2. VOROGEN_* variable already in the OS environment.
  3. VOROGEN_* line from a .env file (--env-file, or the nearest .env at or
     above cwd that does not lie beyond a .git boundary).
  4. Built-in default.

Only VOROGEN_* keys are taken from a .env file; anything else in it belongs
to some other tool sharing the file.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from vorogen.core.palette import default_palette, parse_palette
from vorogen.core.types import Color, PreconditionError

DEFAULT_WIDTH = 640
DEFAULT_HEIGHT = 480
DEFAULT_SEEDS = 32
DEFAULT_METRIC = 'euclidean'

ENV_PREFIX = 'VOROGEN_'


@dataclass
class GenerationConfig:
    """Everything one image generation run needs."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    seeds: int = DEFAULT_SEEDS
    metric: str = DEFAULT_METRIC  # registry name, looked up by the CLI's render command
    palette: list[Color] = field(default_factory=default_palette)
    random_seed: int | None = None
    output: str | None = None

    def validate(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise PreconditionError(f'Image dimensions must be positive, got {self.width}x{self.height}')
        if self.seeds < 1:
            raise PreconditionError(f'Seed count must be at least 1, got {self.seeds}')
        if not self.palette:
            raise PreconditionError('Palette must contain at least one colour')
        if self.random_seed is not None and self.random_seed < 0:
            raise PreconditionError(f'Random seed must be non-negative, got {self.random_seed}')
        if not self.metric:
            raise PreconditionError('Metric name must not be empty')


def find_dotenv(start: Path) -> Path | None:
    """Nearest .env at or above start. A directory holding .git is the last one searched."""
    here = start.resolve()
    for directory in (here, *here.parents):
        if (directory / '.env').is_file():
            return directory / '.env'
        if (directory / '.git').exists():
            return None
    return None


def read_dotenv(path: Path) -> dict[str, str]:
    """VOROGEN_* assignments from a .env file, surrounding quotes removed."""
    settings: dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        key, sep, value = line.strip().partition('=')
        key = key.strip()
        if sep and key.startswith(ENV_PREFIX):
            settings[key] = value.strip().strip('"\'')
    return settings


def load_env(env_file: str | None = None) -> Path | None:
    """Copy .env settings into os.environ without overriding existing variables.

    Returns the file that was read, or None.
    """
    path = Path(env_file) if env_file else find_dotenv(Path.cwd())
    if path is None or not path.is_file():
        return None
    for key, value in read_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path


def _env_int(env: Mapping[str, str], name: str) -> int | None:
    raw = env.get(ENV_PREFIX + name, '').strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise PreconditionError(f'{ENV_PREFIX}{name} must be an integer, got {raw!r}') from exc


def _env_str(env: Mapping[str, str], name: str) -> str | None:
    return env.get(ENV_PREFIX + name, '').strip() or None


def _first(*values):
    return next((v for v in values if v is not None), None)


def resolve_config(
    *,
    width: int | None = None,
    height: int | None = None,
    seeds: int | None = None,
    metric: str | None = None,
    palette: str | None = None,
    random_seed: int | None = None,
    output: str | None = None,
    env: Mapping[str, str] | None = None,
) -> GenerationConfig:
    """Merge explicit values over VOROGEN_* environment variables and defaults."""
    env = os.environ if env is None else env

    palette_text = _first(palette, _env_str(env, 'PALETTE'))
    config = GenerationConfig(
        width=_first(width, _env_int(env, 'WIDTH'), DEFAULT_WIDTH),
        height=_first(height, _env_int(env, 'HEIGHT'), DEFAULT_HEIGHT),
        seeds=_first(seeds, _env_int(env, 'SEEDS'), DEFAULT_SEEDS),
        metric=_first(metric, _env_str(env, 'METRIC'), DEFAULT_METRIC),
        palette=parse_palette(palette_text) if palette_text is not None else default_palette(),
        random_seed=_first(random_seed, _env_int(env, 'RANDOM_SEED')),
        output=output,
    )
    config.validate()
    return config
