"""Exceções do exportador de métricas.

``GatherError`` e ``EncodeError`` são fatais: indicam defeito de
configuração ou programação no registry local e nunca são suprimidas.
``DecodeError`` é local a uma observação e tratada pelo agregador.
"""


class PromExportError(Exception):
    """Base para erros do promexport."""


class GatherError(PromExportError):
    """Falha ao coletar o snapshot de métricas da fonte."""


class EncodeError(PromExportError):
    """Falha ao serializar uma família de métricas em texto."""


class DecodeError(PromExportError):
    """Observação sem payload numérico gauge/counter/untyped legível."""
