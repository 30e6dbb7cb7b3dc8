"""Report builder — text and JSON summaries of a generation run."""

import json
import os
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from vorogen.core.palette import rgb_to_hex
from vorogen.core.types import PixelBuffer, Seed

CENSUS_TOP = 10


@dataclass
class Report:
    """What was generated: where, how big, which seeds, which colours."""

    output_path: str = ''
    width: int = 0
    height: int = 0
    metric: str = ''
    random_seed: int | None = None
    seeds: list[dict[str, Any]] = field(default_factory=list)
    census: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_buffer(
        cls,
        buffer: PixelBuffer,
        seeds: list[Seed],
        metric: str,
        output_path: str = '',
        random_seed: int | None = None,
    ) -> 'Report':
        colours, counts = np.unique(buffer.to_array().reshape(-1, 3), axis=0, return_counts=True)
        order = np.argsort(-counts, kind='stable')
        total = len(buffer)
        census = []
        for i in order:
            n = int(counts[i])
            colour = (int(colours[i][0]), int(colours[i][1]), int(colours[i][2]))
            census.append({'hex': rgb_to_hex(colour), 'pixels': n, 'pct': round(n / total * 100, 1)})
        return cls(
            output_path=output_path,
            width=buffer.width,
            height=buffer.height,
            metric=metric,
            random_seed=random_seed,
            seeds=[{'x': s.point.x, 'y': s.point.y, 'hex': rgb_to_hex(s.color)} for s in seeds],
            census=census,
        )


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    dim = f'{report.width}×{report.height}'
    name = os.path.basename(report.output_path) if report.output_path else '(memory)'
    lines = [f'vorogen: {name} ({dim}) — {report.metric}, {len(report.seeds)} seeds']
    if report.random_seed is not None:
        lines.append(f'random seed: {report.random_seed}')
    lines.append('')

    lines.append('── seeds')
    for i, s in enumerate(report.seeds):
        lines.append(f'  {i:>3}  ({s["x"]},{s["y"]})  {s["hex"]}')
    lines.append('')

    lines.append('── census')
    for c in report.census[:CENSUS_TOP]:
        lines.append(f'  {c["hex"]}  {c["pct"]:5.1f}%  ({c["pixels"]} px)')
    remaining = len(report.census) - CENSUS_TOP
    if remaining > 0:
        lines.append(f'  ... {remaining} more colour(s)')
    return '\n'.join(lines)


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'output': report.output_path,
        'dimensions': {'width': report.width, 'height': report.height},
        'metric': report.metric,
    }
    if report.random_seed is not None:
        obj['random_seed'] = report.random_seed
    obj['seeds'] = report.seeds
    obj['census'] = report.census
    return json.dumps(obj, indent=2)
