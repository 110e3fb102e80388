"""Pacote system: coletor de métricas do host e escrita de textfiles.

Re-exports úteis para a CLI.
"""

from .collectors import SystemCollector
from .textfile import write_textfile

__all__ = ["SystemCollector", "write_textfile"]
