"""vorogen — Voronoi tessellation images from random coloured seeds.

Usage: vorogen <metric> <output> [options]
       vorogen render <output> [--metric NAME] [options]

Metrics are auto-discovered from vorogen/metrics/.
Each metric module's docstring is its documentation.
Run `vorogen help <metric>` for full module docs.

`render` takes its metric from --metric, then VOROGEN_METRIC, then the
default (euclidean).

Environment variables / .env loading:
  Command-line flags win, then OS environment variables, then .env.
  If a variable is not set, vorogen looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import logging
import sys

from vorogen import registry
from vorogen.core.config import DEFAULT_METRIC, load_env, resolve_config
from vorogen.core.generate import generate
from vorogen.core.palette import DEFAULT_PALETTE
from vorogen.core.report import Report, format_json, format_text
from vorogen.core.types import PreconditionError
from vorogen.core.writer import save_image

RENDER = 'render'


def _load_metric_module(name: str) -> object:
    """Load the raw module for a metric (for docstring access)."""
    return importlib.import_module(f'vorogen.metrics.{name}')


def _short_doc(name: str) -> str:
    mod = _load_metric_module(name)
    doc = (mod.__doc__ or '').strip()
    return doc.splitlines()[0] if doc else registry.get(name).help


def _add_generation_args(p: argparse.ArgumentParser) -> None:
    p.add_argument('output', help='Output image path (.ppm, .png, or any format PIL can write)')
    p.add_argument('-W', '--width', type=int, default=None, help='Image width in pixels')
    p.add_argument('-H', '--height', type=int, default=None, help='Image height in pixels')
    p.add_argument('-n', '--seeds', type=int, default=None, help='Number of seeds')
    p.add_argument('-p', '--palette', default=None, help='Comma-separated hex colours')
    p.add_argument('-s', '--random-seed', type=int, default=None, help='Non-negative seed for reproducible output')
    p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')


def _build_parser() -> argparse.ArgumentParser:
    metrics = registry.all_metrics()

    epilog = (
        'Examples:\n'
        '  vorogen euclidean out.ppm\n'
        '  vorogen manhattan out.png --width 800 --height 600 --seeds 48\n'
        '  vorogen chebyshev out.ppm --palette "#000,#fff,#f00" --random-seed 7 --json\n'
        '  vorogen render out.png --metric manhattan\n'
        '  vorogen help manhattan\n'
        '  vorogen palette\n'
        '\n'
        'Env vars (set in .env or environment):\n'
        '  VOROGEN_WIDTH, VOROGEN_HEIGHT, VOROGEN_SEEDS, VOROGEN_RANDOM_SEED\n'
        '  VOROGEN_METRIC=manhattan (used by render)\n'
        '  VOROGEN_PALETTE=#ff0000,#00ff00,#0000ff\n'
    )
    parser = argparse.ArgumentParser(
        prog='vorogen',
        description='Voronoi tessellation images from random coloured seeds.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging on stderr')
    sub = parser.add_subparsers(dest='metric', help='Distance metric')

    for name in sorted(metrics):
        _add_generation_args(sub.add_parser(name, help=_short_doc(name)))

    render = sub.add_parser(RENDER, help='Render with the metric named by --metric or VOROGEN_METRIC')
    _add_generation_args(render)
    render.add_argument(
        '-m',
        '--metric',
        dest='metric_name',
        default=None,
        help=f'Metric name (default: VOROGEN_METRIC, then {DEFAULT_METRIC})',
    )

    help_parser = sub.add_parser('help', help='Print full docs for a metric')
    help_parser.add_argument('command', nargs='?', help='Metric name')

    sub.add_parser('palette', help='Print the default palette')

    return parser


def _print_help(command: str | None) -> None:
    """Print full module docstring for a metric."""
    metrics = registry.all_metrics()

    if command is None:
        print('Available metrics:\n')
        for name in sorted(metrics):
            print(f'  {name:<12} {_short_doc(name)}')
        print('\nRun: vorogen help <metric> for full docs.')
        return

    if command not in metrics:
        print(f'Unknown metric: {command}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(metrics))}', file=sys.stderr)
        sys.exit(1)

    doc = (_load_metric_module(command).__doc__ or '').strip()
    if not doc:
        print(f'(No module docs for {command!r})')
        return
    print(doc)


def _print_palette() -> None:
    for name, hex_val in DEFAULT_PALETTE.items():
        print(f'  {name:<12} {hex_val}')


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )

    # .env must be loaded before settings resolve; OS env vars always win
    env_path = load_env(env_file=args.env_file)
    if env_path:
        print(f'vorogen: loaded {env_path}', file=sys.stderr)

    if not args.metric:
        parser.print_help()
        sys.exit(1)

    if args.metric == 'help':
        _print_help(getattr(args, 'command', None))
        return

    if args.metric == 'palette':
        _print_palette()
        return

    requested = args.metric_name if args.metric == RENDER else args.metric
    try:
        config = resolve_config(
            width=args.width,
            height=args.height,
            seeds=args.seeds,
            metric=requested,
            palette=args.palette,
            random_seed=args.random_seed,
            output=args.output,
        )
        metric = registry.get(config.metric)
        seeds, buffer = generate(config, metric)
        save_image(buffer, args.output)
    except PreconditionError as exc:
        print(f'Error: {exc}', file=sys.stderr)
        sys.exit(1)
    except KeyError as exc:
        print(f'Error: {exc.args[0]}', file=sys.stderr)
        sys.exit(1)
    except OSError as exc:
        print(f'Error: cannot write {args.output}: {exc}', file=sys.stderr)
        sys.exit(1)

    report = Report.from_buffer(buffer, seeds, metric.name, output_path=args.output, random_seed=config.random_seed)
    if args.json:
        print(format_json(report))
    else:
        print(format_text(report))


if __name__ == '__main__':
    main()
