"""Soma de todas as séries de uma métrica vetorial (GaugeVec/CounterVec).

A coleta segue um modelo produtor/consumidor: o thread chamador executa
``collector.collect()`` e envia cada observação para uma fila sem limite;
um thread consumidor drena a fila para uma lista. Depois do sentinel de
fechamento o chamador espera o sinal de conclusão do consumidor (sem
timeout) antes de ler a lista.

Só faz sentido para coletores com uma família plana de séries do mesmo
formato; outros formatos têm comportamento não especificado.
"""

from dataclasses import dataclass
import logging
import queue
import threading
from typing import Any, Union

from .encoder import exposed_name
from .errors import DecodeError

logger = logging.getLogger(__name__)

# Fecha o canal de observações
_CLOSE = object()

_AUXILIARY_SUFFIXES = ("_created",)


@dataclass(frozen=True)
class GaugeValue:
    value: float


@dataclass(frozen=True)
class CounterValue:
    value: float


@dataclass(frozen=True)
class UntypedValue:
    value: float


Payload = Union[GaugeValue, CounterValue, UntypedValue]

_PAYLOAD_BY_KIND = {
    "gauge": GaugeValue,
    "counter": CounterValue,
    "unknown": UntypedValue,
    "untyped": UntypedValue,
}


@dataclass(frozen=True)
class Observation:
    """Uma série coletada: nome e tipo da família mais a amostra bruta."""

    name: str
    kind: str
    sample: Any


class FamilyCollector:
    """Expõe uma única família de ``source`` como coletor.

    Permite somar uma família de um registry pelo nome interno do
    ``prometheus_client`` (``jobs``) ou pelo nome exposto (``jobs_total``).
    """

    def __init__(self, source, name: str):
        self.source = source
        self.name = name

    def collect(self):
        for family in self.source.collect():
            if self.name in (family.name, exposed_name(family)):
                yield family


def _is_auxiliary(family, sample) -> bool:
    return any(sample.name == family.name + suffix for suffix in _AUXILIARY_SUFFIXES)


def _drain(channel: queue.Queue, sink: list, done: threading.Event) -> None:
    while True:
        item = channel.get()
        if item is _CLOSE:
            break
        sink.append(item)
    done.set()


def collect_observations(collector) -> list[Observation]:
    """Coleta todas as observações de ``collector`` via fila e thread consumidor.

    Bloqueia até o consumidor drenar tudo; um ``collect()`` que nunca
    termina bloqueia indefinidamente.
    """
    channel: queue.Queue = queue.Queue()
    observations: list[Observation] = []
    done = threading.Event()
    consumer = threading.Thread(
        target=_drain, args=(channel, observations, done), name="promexport-collect", daemon=True
    )
    consumer.start()
    try:
        for family in collector.collect():
            for sample in family.samples:
                if _is_auxiliary(family, sample):
                    continue
                channel.put(Observation(family.name, family.type, sample))
    finally:
        channel.put(_CLOSE)
    done.wait()
    consumer.join()
    return observations


def decode_observation(obs: Observation) -> Payload:
    """Converte a observação no payload gauge, counter ou untyped."""
    payload_cls = _PAYLOAD_BY_KIND.get(obs.kind)
    if payload_cls is None:
        raise DecodeError(f"tipo de métrica não suportado: {obs.kind}")
    try:
        value = float(obs.sample.value)
    except (AttributeError, TypeError, ValueError) as exc:
        raise DecodeError(f"valor inválido: {exc}") from exc
    return payload_cls(value)


def sum_metric_values(collector) -> float:
    """Soma os valores de todas as séries de ``collector``.

    Observações que não decodificam são registradas e contam como zero.
    Famílias de outros tipos (histogram, summary, ...) contam como zero e
    são registradas uma única vez, em debug.
    """
    total = 0.0
    unsupported = set()
    for obs in collect_observations(collector):
        if obs.kind not in _PAYLOAD_BY_KIND:
            if obs.name not in unsupported:
                unsupported.add(obs.name)
                logger.debug("Ignorando família '%s' do tipo %s", obs.name, obs.kind)
            continue
        try:
            payload = decode_observation(obs)
        except DecodeError as exc:
            logger.error("Falha ao ler métrica '%s': %s", obs.name, exc)
            continue
        total += payload.value
    return total
