"""Pacote exporter: dump em texto, push para Pushgateway e soma de métricas vetoriais.

Re-exports das operações públicas.
"""

from .aggregate import sum_metric_values
from .errors import DecodeError, EncodeError, GatherError, PromExportError
from .push import push_metrics
from .text import dump_metrics_for_test, dump_metrics_from

__all__ = [
    "dump_metrics_from",
    "dump_metrics_for_test",
    "push_metrics",
    "sum_metric_values",
    "PromExportError",
    "GatherError",
    "EncodeError",
    "DecodeError",
]
