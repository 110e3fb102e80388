"""promexport: exportação de métricas do registry Prometheus.

Dump em texto filtrado, push para Pushgateway e soma de métricas vetoriais.
"""

from .exporter import dump_metrics_for_test, dump_metrics_from, push_metrics, sum_metric_values

__all__ = ["dump_metrics_from", "dump_metrics_for_test", "push_metrics", "sum_metric_values"]
