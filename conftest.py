# conftest.py
# Configuração global para pytest: adiciona a raiz do projeto ao sys.path e
# fornece um CollectorRegistry isolado por teste
import sys
from pathlib import Path

import pytest
from prometheus_client import CollectorRegistry

ROOT_PATH = Path(__file__).parent
if str(ROOT_PATH) not in sys.path:
    sys.path.insert(0, str(ROOT_PATH))


@pytest.fixture
def registry():
    """Registry vazio, sem os coletores padrão do processo."""
    return CollectorRegistry()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Evita que um .env local ou PROMEXPORT_* do ambiente afetem os testes."""
    import os

    for key in list(os.environ):
        if key.startswith("PROMEXPORT_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("PROMEXPORT_ENV_FILE", str(tmp_path / "missing.env"))
