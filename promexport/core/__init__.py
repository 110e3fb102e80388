"""Pacote core: parsing de argumentos da CLI."""

from .args import apply_settings, get_log_config, parse_args

__all__ = ["apply_settings", "get_log_config", "parse_args"]
