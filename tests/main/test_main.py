import importlib
from types import SimpleNamespace

from prometheus_client import Counter, Gauge

main_mod = importlib.import_module("promexport.main")


def test_main_dump_to_stdout(registry, capsys):
    """dump imprime o texto filtrado no stdout."""
    Counter("requests_total", "Requests", registry=registry)
    Gauge("queue_depth", "Fila", registry=registry).set(3)

    rc = main_mod.main(["dump", "--skip-comments", "--skip-zero-values"], registry=registry)

    assert rc == 0
    assert capsys.readouterr().out == "queue_depth 3\n"


def test_main_dump_uses_settings_prefix(monkeypatch, registry, capsys):
    """Prefixo vem de PROMEXPORT_PREFIX quando não informado na CLI."""
    Gauge("app_up", "App", registry=registry).set(1)
    Gauge("db_up", "DB", registry=registry).set(1)
    monkeypatch.setenv("PROMEXPORT_PREFIX", "db_")
    monkeypatch.setenv("PROMEXPORT_SKIP_COMMENTS", "1")

    assert main_mod.main(["dump"], registry=registry) == 0
    assert capsys.readouterr().out == "db_up 1\n"


def test_main_dump_to_textfile(registry, tmp_path):
    """dump --output grava o ficheiro .prom."""
    Gauge("queue_depth", "Fila", registry=registry).set(3)
    target = tmp_path / "out.prom"

    assert main_mod.main(["dump", "--skip-comments", "-o", str(target)], registry=registry) == 0
    assert target.read_text(encoding="utf-8") == "queue_depth 3\n"


def test_main_dump_fatal_error_exit_code():
    """Falha de coleta encerra com código 1."""

    def broken():
        raise RuntimeError("quebrado")

    assert main_mod.main(["dump"], registry=SimpleNamespace(collect=broken)) == 1


def test_main_push_requires_url(registry, capsys):
    """push sem URL configurada retorna 2."""
    assert main_mod.main(["push"], registry=registry) == 2
    assert "PROMEXPORT_PUSH_URL" in capsys.readouterr().err


def test_main_push_uses_settings(monkeypatch, registry):
    """push usa URL e job das configurações e reflete o resultado no código de saída."""
    calls = []

    def fake_push(url, job, reg):
        calls.append((url, job, reg))
        return len(calls) == 1

    monkeypatch.setattr(main_mod, "push_metrics", fake_push)
    monkeypatch.setenv("PROMEXPORT_PUSH_URL", "http://gw:9091")

    assert main_mod.main(["push"], registry=registry) == 0
    assert main_mod.main(["push", "--job", "batch"], registry=registry) == 1
    assert calls[0] == ("http://gw:9091", "promexport", registry)
    assert calls[1][1] == "batch"


def test_main_sum_prints_total(registry, capsys):
    """sum imprime a soma de todas as séries da família."""
    g = Gauge("inflight", "Em andamento", ["route"], registry=registry)
    g.labels("a").set(1.5)
    g.labels("b").set(2)

    assert main_mod.main(["sum", "inflight"], registry=registry) == 0
    assert capsys.readouterr().out.strip() == "3.5"


def test_main_invalid_settings(monkeypatch, registry, capsys):
    """Configuração inválida retorna 2 sem executar o comando."""
    monkeypatch.setenv("PROMEXPORT_LOG_LEVEL", "barulhento")
    assert main_mod.main(["dump"], registry=registry) == 2
    assert "configuração inválida" in capsys.readouterr().err


def test_main_system_flag_registers_collector(monkeypatch, registry):
    """--system registra o SystemCollector no registry."""
    registered = []
    monkeypatch.setattr(registry, "register", lambda c: registered.append(c))
    monkeypatch.setattr(main_mod, "sum_metric_values", lambda collector: 0.0)

    assert main_mod.main(["--system", "sum", "system_cpu_percent"], registry=registry) == 0
    assert len(registered) == 1
    assert isinstance(registered[0], main_mod.SystemCollector)


def test_main_sum_accepts_exposed_counter_name(registry, capsys):
    """sum aceita o nome do counter com _total."""
    c = Counter("jobs_total", "Jobs", ["q"], registry=registry)
    c.labels("a").inc(4)

    assert main_mod.main(["sum", "jobs_total"], registry=registry) == 0
    assert capsys.readouterr().out.strip() == "4"
