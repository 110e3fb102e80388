"""Escrita de dumps em ficheiros .prom para o textfile collector do node_exporter.

O conteúdo é gravado num ficheiro temporário no mesmo diretório e movido
com ``os.replace``; leitores nunca veem um ficheiro parcial. Escritores
concorrentes são serializados por um lock exclusivo (``portalocker``) num
ficheiro ``.lock`` ao lado do destino.
"""

import logging
import os
from pathlib import Path

import portalocker

logger = logging.getLogger(__name__)

LOCK_SUFFIX = ".lock"
LOCK_TIMEOUT_SECONDS = 5.0


def _lock_path(path: Path) -> Path:
    return path.with_name(path.name + LOCK_SUFFIX)


def write_textfile(path: Path | str, text: str) -> bool:
    """Grava ``text`` em ``path`` de forma atômica, sob lock exclusivo.

    Retorna True em caso de sucesso. Falhas de I/O ou de lock são
    registradas e retornam False.
    """
    p = Path(path)
    tmp = p.with_name(f"{p.name}.{os.getpid()}.tmp")
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        with portalocker.Lock(str(_lock_path(p)), "a", timeout=LOCK_TIMEOUT_SECONDS):
            with tmp.open("w", encoding="utf-8") as fh:
                fh.write(text)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp, p)
    except portalocker.exceptions.LockException as exc:
        logger.error("write_textfile: lock indisponível em %s: %s", p, exc)
        return False
    except OSError as exc:
        logger.error("write_textfile: falhou em %s: %s", p, exc, exc_info=True)
        if tmp.exists():
            tmp.unlink(missing_ok=True)
        return False
    logger.debug("write_textfile: %d bytes gravados em %s", len(text), p)
    return True
