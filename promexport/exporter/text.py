"""Dump de métricas em texto (formato .prom) com filtros.

Funções principais:
- dump_metrics_from: coleta uma fonte (``CollectorRegistry`` ou qualquer
  objeto com ``collect()``) e devolve o texto filtrado
- dump_metrics_for_test: atalho sem comentários, usado em testes
- filter_lines: filtros de comentários e de valores zero

Falhas de coleta ou serialização são fatais: são registradas em CRITICAL e
propagadas como ``GatherError``/``EncodeError``.
"""

import logging
from typing import Iterable

from prometheus_client import REGISTRY

from .encoder import exposed_name, family_to_text
from .errors import EncodeError, GatherError

logger = logging.getLogger(__name__)

ZERO_VALUE_SUFFIX = " 0"


def _gather(source) -> list:
    """Materializa as famílias de ``source`` na ordem definida pela fonte."""
    try:
        return list(source.collect())
    except Exception as exc:
        logger.critical("Falha ao coletar métricas: %s", exc)
        raise GatherError(f"falha ao coletar métricas: {exc}") from exc


def _encode(family, encoder) -> str:
    try:
        return encoder(family)
    except Exception as exc:
        logger.critical("Falha ao exportar '%s': %s", family.name, exc)
        raise EncodeError(f"falha ao exportar '{family.name}': {exc}") from exc


def filter_lines(lines: Iterable[str], skip_comments: bool, skip_zero_values: bool) -> list[str]:
    """Remove comentários e/ou linhas com valor literal ``0``.

    A comparação de zero é textual: só o sufixo exato ``" 0"`` é removido;
    ``0.0``, ``-0`` ou ``0e+00`` permanecem.
    """
    kept = []
    for ln in lines:
        if skip_comments and ln.startswith("#"):
            continue
        if skip_zero_values and ln.endswith(ZERO_VALUE_SUFFIX):
            continue
        kept.append(ln)
    return kept


def dump_metrics_from(
    source,
    prefix: str = "",
    skip_comments: bool = False,
    skip_zero_values: bool = False,
    encoder=family_to_text,
) -> str:
    """Exporta as famílias de ``source`` cujo nome exposto começa com ``prefix``.

    O nome exposto é o que aparece no texto (``requests_total`` para um
    counter ``requests``), via ``exposed_name``.
    As famílias mantêm a ordem da fonte. Os filtros operam sobre o texto
    concatenado, linha a linha, e as linhas restantes são unidas com
    ``\\n`` sem normalizar o newline final.
    """
    chunks = []
    for family in _gather(source):
        if not exposed_name(family).startswith(prefix):
            continue
        chunks.append(_encode(family, encoder))
    lines = "".join(chunks).split("\n")
    return "\n".join(filter_lines(lines, skip_comments, skip_zero_values))


def dump_metrics_for_test(prefix: str = "", skip_zero_values: bool = False, registry=REGISTRY) -> str:
    """Dump sem comentários; por padrão lê o registry global do processo.

    Apenas para testes.
    """
    return dump_metrics_from(registry, prefix, True, skip_zero_values)
