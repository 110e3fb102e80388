"""Configurações do promexport.

Carrega valores a partir de ``DEFAULT_SETTINGS`` e permite overrides via
arquivo ``.env`` ou variáveis de ambiente (prefixo ``PROMEXPORT_*``).
As funções públicas principais são:

- ``load_settings()`` -> dicionário com chaves: "log_level", "prefix",
  "skip_comments", "skip_zero_values", "push_url", "push_job",
  "system_collector".
- ``validate_settings()`` -> normaliza tipos e rejeita valores inválidos.
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

# ========================
# Constantes e padrões globais
# ========================

ENV_PREFIX = "PROMEXPORT_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_SETTINGS = {
    "log_level": "INFO",
    "prefix": "",
    "skip_comments": False,
    "skip_zero_values": False,
    "push_url": None,
    "push_job": "promexport",
    "system_collector": False,
}

_BOOL_KEYS = ("skip_comments", "skip_zero_values", "system_collector")
_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


# ========================
# 1. Carregamento das configurações
# ========================


def load_settings() -> dict:
    """Carrega configurações combinando DEFAULTS + .env + ambiente.

    As variáveis em ambiente sobrescrevem valores do arquivo `.env`.
    """
    project_root = Path(__file__).resolve().parents[2]
    env_path = Path(os.getenv("PROMEXPORT_ENV_FILE", project_root / ".env"))

    env_items = _merge_env_items(env_path)
    settings = dict(DEFAULT_SETTINGS)
    for key in DEFAULT_SETTINGS:
        env_key = ENV_PREFIX + key.upper()
        if env_key in env_items:
            settings[key] = env_items[env_key]
    return validate_settings(settings)


# ========================
# 2. Funções auxiliares para ambiente
# ========================


def _read_env_file(path: Path | str) -> dict:
    """Lê um arquivo `.env` e devolve um dicionário chave->valor.

    Linhas vazias e comentários (começando com '#') são ignorados.
    """
    result: dict[str, str] = {}
    p = Path(path)
    if not p.exists():
        return result
    try:
        with p.open("r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                if "=" not in line:
                    continue
                key, val = line.split("=", 1)
                result[key.strip()] = val.strip().strip('"').strip("'")
    except OSError as exc:
        logger.debug("Falha ao ler .env em %s: %s", p, exc)
        return {}
    return result


def _merge_env_items(env_path: Path) -> dict:
    """Retorna um mapeamento combinado de `.env` e env vars do processo."""
    env_items = _read_env_file(env_path)
    if env_items == {} and env_path.exists():
        logger.warning("Erro ou ficheiro .env vazio em %s", env_path)
    env_items.update({k: v for k, v in os.environ.items() if k.startswith(ENV_PREFIX)})
    return env_items


def _as_bool(key: str, raw) -> bool:
    if isinstance(raw, bool):
        return raw
    sval = str(raw).strip().lower()
    if sval in _TRUE_VALUES:
        return True
    if sval in _FALSE_VALUES:
        return False
    raise ValueError(f"{ENV_PREFIX}{key.upper()} inválido: {raw!r}")


# ========================
# 3. Validação e normalização
# ========================


def validate_settings(settings: dict) -> dict:
    """Normaliza e valida o dicionário de configurações.

    Levanta ``ValueError`` para nível de log desconhecido, job vazio ou
    booleanos ilegíveis.
    """
    if not isinstance(settings, dict):
        raise TypeError("settings deve ser um dict")
    for key, default in DEFAULT_SETTINGS.items():
        settings.setdefault(key, default)

    level = str(settings["log_level"]).strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"nível de log desconhecido: {settings['log_level']!r}")
    settings["log_level"] = level

    for key in _BOOL_KEYS:
        settings[key] = _as_bool(key, settings[key])

    settings["prefix"] = str(settings["prefix"] or "")

    job = str(settings["push_job"] or "").strip()
    if not job:
        raise ValueError("push_job não pode ser vazio")
    settings["push_job"] = job

    url = settings["push_url"]
    if url is not None:
        # string vazia no .env equivale a ausente
        url = str(url).strip() or None
    settings["push_url"] = url

    logger.debug("Configurações validadas e normalizadas")
    return settings
