"""Pacote config: configurações via defaults, .env e variáveis de ambiente."""

from .settings import load_settings, validate_settings

__all__ = ["load_settings", "validate_settings"]
