import logging

import portalocker

from promexport.system import textfile as textfile_mod


def test_write_textfile_creates_file_atomically(tmp_path):
    """Grava o conteúdo e não deixa ficheiros temporários."""
    target = tmp_path / "collector" / "app.prom"
    assert textfile_mod.write_textfile(target, "queue_depth 3\n") is True
    assert target.read_text(encoding="utf-8") == "queue_depth 3\n"
    assert not list(target.parent.glob("*.tmp"))


def test_write_textfile_replaces_previous_content(tmp_path):
    """Uma nova escrita substitui o conteúdo anterior por completo."""
    target = tmp_path / "app.prom"
    textfile_mod.write_textfile(target, "a 1\nb 2\n")
    textfile_mod.write_textfile(str(target), "a 5\n")
    assert target.read_text(encoding="utf-8") == "a 5\n"


def test_write_textfile_lock_failure(monkeypatch, tmp_path, caplog):
    """Lock indisponível é registrado e retorna False."""

    class BusyLock:
        def __init__(self, *a, **k):
            pass

        def __enter__(self):
            raise portalocker.exceptions.AlreadyLocked("ocupado")

        def __exit__(self, *exc):
            return False

    monkeypatch.setattr(textfile_mod.portalocker, "Lock", BusyLock)
    caplog.set_level(logging.ERROR)
    target = tmp_path / "app.prom"

    assert textfile_mod.write_textfile(target, "x 1\n") is False
    assert not target.exists()
    assert any("lock indisponível" in r.message for r in caplog.records)


def test_write_textfile_os_error(tmp_path, caplog):
    """Diretório pai inválido (é um ficheiro) retorna False."""
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    caplog.set_level(logging.ERROR)
    assert textfile_mod.write_textfile(blocker / "app.prom", "x 1\n") is False
    assert any("write_textfile: falhou" in r.message for r in caplog.records)
