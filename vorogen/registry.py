"""Metric registry.

discover() imports every public module under vorogen/metrics/ and registers
the module-level `metric` object it defines. A metric must carry both its
scalar distance and its numpy field form, and names must be unique.
"""

import importlib
import logging
import pkgutil

from vorogen.core.types import Metric

logger = logging.getLogger(__name__)


class MetricRegistry:
    """Metrics keyed by name."""

    def __init__(self) -> None:
        self._metrics: dict[str, Metric] = {}

    def register(self, metric: Metric, source: str = '') -> None:
        if metric.name in self._metrics:
            raise ValueError(f'Duplicate metric name: {metric.name} ({source or "registered twice"})')
        forms = {'distance': metric.scalar, 'field': metric.vectorized}
        missing = [form for form, present in forms.items() if not present]
        if missing:
            raise ValueError(f'Metric {metric.name} has no {" or ".join(missing)} function')
        self._metrics[metric.name] = metric
        logger.debug('Registered metric %s from %s', metric.name, source or '(direct)')

    def get(self, name: str) -> Metric:
        if name not in self._metrics:
            raise KeyError(f'Unknown metric: {name}. Available: {", ".join(self.names())}')
        return self._metrics[name]

    def names(self) -> list[str]:
        return sorted(self._metrics)

    def all(self) -> dict[str, Metric]:
        return dict(self._metrics)

    def __contains__(self, name: object) -> bool:
        return name in self._metrics

    def __len__(self) -> int:
        return len(self._metrics)


_registry: MetricRegistry | None = None


def discover() -> MetricRegistry:
    """Import all metric modules once and return the shared registry."""
    global _registry
    if _registry is not None:
        return _registry

    import vorogen.metrics as pkg

    found = MetricRegistry()
    for _importer, modname, _ispkg in pkgutil.iter_modules(pkg.__path__):
        if modname.startswith('_'):
            continue
        module = importlib.import_module(f'{pkg.__name__}.{modname}')
        metric = getattr(module, 'metric', None)
        if isinstance(metric, Metric):
            found.register(metric, source=module.__name__)
    _registry = found
    return _registry


def get(name: str) -> Metric:
    """Get a metric by name."""
    return discover().get(name)


def all_metrics() -> dict[str, Metric]:
    """Return all registered metrics."""
    return discover().all()
