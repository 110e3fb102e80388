"""Parser de argumentos da CLI ``promexport``.

Subcomandos:
- dump: imprime (ou grava em textfile) o dump filtrado do registry
- push: envia o registry para um Pushgateway
- sum: soma todas as séries de uma família

Opções não informadas ficam ``None`` e são preenchidas por
``apply_settings`` a partir de ``config.settings`` (CLI tem precedência).
"""

import argparse
from typing import Sequence

# ========================
# 0. Configuração do parser
# ========================


def configure_argparser() -> argparse.ArgumentParser:
    """Cria e retorna ArgumentParser configurado para o promexport."""
    parser = argparse.ArgumentParser(
        prog="promexport",
        description="Exporta métricas Prometheus: dump em texto, push para Pushgateway e soma de séries",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Aumenta a verbosidade (-v, -vv)",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        type=str,
        default=None,
        help="Nível de logging (DEBUG/INFO/WARNING/ERROR). Substitui PROMEXPORT_LOG_LEVEL",
    )
    parser.add_argument(
        "--system",
        dest="system_collector",
        action="store_true",
        default=None,
        help="Registra o coletor de métricas do host (psutil)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    dump = sub.add_parser("dump", help="Imprime as métricas no formato .prom")
    dump.add_argument("--prefix", type=str, default=None, help="Inclui apenas famílias com este prefixo")
    dump.add_argument("--skip-comments", dest="skip_comments", action="store_true", default=None)
    dump.add_argument("--skip-zero-values", dest="skip_zero_values", action="store_true", default=None)
    dump.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Grava o dump neste ficheiro (textfile collector) em vez do stdout",
    )

    push = sub.add_parser("push", help="Envia o registry para um Pushgateway")
    push.add_argument("--url", dest="push_url", type=str, default=None, help="URL base do Pushgateway")
    push.add_argument("--job", dest="push_job", type=str, default=None, help="Nome do job")

    total = sub.add_parser("sum", help="Soma todas as séries de uma família")
    total.add_argument("name", type=str, help="Nome da família")

    return parser


# ========================
# 1. Análise e combinação com settings
# ========================


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Analisa argv e retorna Namespace (sem aplicar settings)."""
    return configure_argparser().parse_args(argv)


def apply_settings(args: argparse.Namespace, settings: dict) -> argparse.Namespace:
    """Preenche opções ausentes da CLI com valores de ``settings``."""
    for key in ("system_collector", "prefix", "skip_comments", "skip_zero_values", "push_url", "push_job"):
        if getattr(args, key, None) is None:
            setattr(args, key, settings.get(key))
    return args


# ========================
# 2. Configuração de logging
# ========================


def get_log_config(args: argparse.Namespace, settings: dict | None = None) -> dict:
    """Retorna dict com o nível de logging ('level').

    Ordem: ``--log-level``, depois ``-v`` (INFO, -vv DEBUG), depois settings.
    """
    if getattr(args, "log_level", None):
        level = str(args.log_level).upper()
    else:
        v = getattr(args, "verbose", 0) or 0
        if v >= 2:
            level = "DEBUG"
        elif v == 1:
            level = "INFO"
        else:
            level = (settings or {}).get("log_level", "WARNING")
    return {"level": level}
