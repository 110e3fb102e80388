"""Coletor customizado de métricas do host via psutil.

Expõe CPU por núcleo, memória e bytes de rede por interface como famílias
``prometheus_client``. Usado pela CLI (``--system``) para ter métricas reais
para dump, push e soma; ``system_cpu_percent`` e ``system_network_bytes``
são métricas vetoriais somáveis com ``sum_metric_values``.
"""

import logging

import psutil
from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily

logger = logging.getLogger(__name__)


class SystemCollector:
    """Coletor ``prometheus_client`` com métricas do host.

    Cada grupo é coletado de forma independente: falha do psutil num grupo
    é registrada em debug e o grupo é omitido do snapshot.
    """

    def collect(self):
        for build in (self._cpu, self._memory, self._network):
            try:
                families = build()
            except (psutil.Error, OSError) as exc:
                logger.debug("SystemCollector: falha em %s: %s", build.__name__, exc, exc_info=True)
                continue
            yield from families

    def _cpu(self):
        cpu = GaugeMetricFamily("system_cpu_percent", "Uso de CPU por núcleo (%)", labels=["cpu"])
        # interval=None: não bloqueia; compara com a chamada anterior
        for idx, pct in enumerate(psutil.cpu_percent(interval=None, percpu=True)):
            cpu.add_metric([str(idx)], float(pct))
        return [cpu]

    def _memory(self):
        mem = psutil.virtual_memory()
        return [
            GaugeMetricFamily("system_memory_used_bytes", "Memória em uso (bytes)", value=float(mem.used)),
            GaugeMetricFamily("system_memory_total_bytes", "Memória total (bytes)", value=float(mem.total)),
            GaugeMetricFamily("system_memory_percent", "Uso de memória (%)", value=float(mem.percent)),
        ]

    def _network(self):
        net = CounterMetricFamily(
            "system_network_bytes",
            "Bytes transferidos por interface",
            labels=["nic", "direction"],
        )
        for nic, counters in sorted(psutil.net_io_counters(pernic=True).items()):
            net.add_metric([nic, "sent"], float(counters.bytes_sent))
            net.add_metric([nic, "recv"], float(counters.bytes_recv))
        return [net]
