"""Ponto de entrada da CLI ``promexport``.

Realiza parsing de argumentos, carga de configurações, configuração de
logging e despacho para os subcomandos ``dump``, ``push`` e ``sum``.
A lógica de exportação vive em ``exporter`` para facilitar testes e reuso.
"""

import logging as _logging
import sys

from prometheus_client import REGISTRY

from .config.settings import load_settings
from .core.args import apply_settings, get_log_config, parse_args
from .exporter.aggregate import FamilyCollector, sum_metric_values
from .exporter.encoder import format_value
from .exporter.errors import PromExportError
from .exporter.push import push_metrics
from .exporter.text import dump_metrics_from
from .system.collectors import SystemCollector
from .system.textfile import write_textfile

logger = _logging.getLogger(__name__)


def main(argv: list[str] | None = None, registry=None) -> int:
    """Executa a CLI e retorna o código de saída.

    Args:
        argv: Lista de argumentos (usada em testes). Quando ``None`` usa os
            argumentos do processo.
        registry: Registry a exportar; ``None`` usa o registry global do
            ``prometheus_client``.

    """
    args = parse_args(argv)
    try:
        settings = load_settings()
    except ValueError as exc:
        print(f"promexport: configuração inválida: {exc}", file=sys.stderr)
        return 2
    apply_settings(args, settings)

    log_conf = get_log_config(args, settings)
    level = getattr(_logging, log_conf.get("level", "WARNING"), _logging.WARNING)
    _logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if registry is None:
        registry = REGISTRY
    if args.system_collector:
        registry.register(SystemCollector())

    if args.command == "dump":
        return _run_dump(args, registry)
    if args.command == "push":
        return _run_push(args, registry)
    return _run_sum(args, registry)


def _run_dump(args, registry) -> int:
    try:
        text = dump_metrics_from(registry, args.prefix, args.skip_comments, args.skip_zero_values)
    except PromExportError:
        # já registrado em CRITICAL pelo exporter
        return 1
    if args.output:
        return 0 if write_textfile(args.output, text) else 1
    sys.stdout.write(text)
    return 0


def _run_push(args, registry) -> int:
    if not args.push_url:
        print("promexport: informe --url ou PROMEXPORT_PUSH_URL", file=sys.stderr)
        return 2
    return 0 if push_metrics(args.push_url, args.push_job, registry) else 1


def _run_sum(args, registry) -> int:
    total = sum_metric_values(FamilyCollector(registry, args.name))
    logger.debug("Soma de %s: %s", args.name, total)
    print(format_value(total))
    return 0


def cli() -> None:
    """Entry point do console script."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
