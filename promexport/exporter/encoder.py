"""Serialização de uma família de métricas no formato texto do Prometheus (0.0.4).

Segue a mesma estrutura de ``prometheus_client.exposition.generate_latest``
(nomes de counter com ``_total``, ``unknown`` exposto como ``untyped``,
amostras ``_gsum``/``_gcount`` em gauges separados), mas formata os valores
como o encoder de referência em Go: ``0``, ``3``, ``1.5``, ``1e+06``.
O filtro de valores zero em ``text.py`` depende desse formato.

Amostras ``_created`` (exclusivas do OpenMetrics) não fazem parte do
formato clássico e são omitidas.
"""

from decimal import Decimal
import math

_TYPE_MUNGING = {
    "info": "gauge",
    "stateset": "gauge",
    "gaugehistogram": "histogram",
    "unknown": "untyped",
}

_OM_SUFFIXES = ("_gsum", "_gcount")
_SKIPPED_SUFFIXES = ("_created",)


def format_value(value) -> str:
    """Formata um valor como ``strconv.FormatFloat(f, 'g', -1, 64)``.

    Usa a menor representação decimal que preserva o float; notação
    exponencial quando o expoente decimal é < -4 ou >= 6, como em Go.
    """
    f = float(value)
    if f == 0:
        return "0"
    if f == 1:
        return "1"
    if f == -1:
        return "-1"
    if math.isnan(f):
        return "NaN"
    if math.isinf(f):
        return "+Inf" if f > 0 else "-Inf"

    sign = "-" if f < 0 else ""
    dec = Decimal(repr(abs(f))).normalize()
    _, digit_tuple, exponent = dec.as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    nd = len(digits)
    dp = nd + exponent  # posição do ponto decimal
    exp10 = dp - 1

    if exp10 < -4 or exp10 >= 6:
        mantissa = digits[0]
        if nd > 1:
            mantissa += "." + digits[1:]
        exp_sign = "-" if exp10 < 0 else "+"
        return f"{sign}{mantissa}e{exp_sign}{abs(exp10):02d}"

    if dp <= 0:
        return f"{sign}0.{'0' * -dp}{digits}"
    if dp >= nd:
        return f"{sign}{digits}{'0' * (dp - nd)}"
    return f"{sign}{digits[:dp]}.{digits[dp:]}"


def _escape_help(text: str) -> str:
    return text.replace("\\", r"\\").replace("\n", r"\n")


def _escape_label_value(text: str) -> str:
    return text.replace("\\", r"\\").replace("\n", r"\n").replace('"', r"\"")


def sample_line(sample) -> str:
    """Compõe a linha de texto de uma amostra, terminada em newline."""
    if sample.labels:
        pairs = ",".join(f'{k}="{_escape_label_value(str(v))}"' for k, v in sorted(sample.labels.items()))
        labelstr = "{" + pairs + "}"
    else:
        labelstr = ""
    timestamp = ""
    if sample.timestamp is not None:
        # milissegundos, como no formato texto clássico
        timestamp = f" {int(float(sample.timestamp) * 1000):d}"
    return f"{sample.name}{labelstr} {format_value(sample.value)}{timestamp}\n"


def exposed_name(family) -> str:
    """Nome da família como aparece no texto: ``_total`` em counters, ``_info`` em info."""
    if family.type == "counter":
        return family.name + "_total"
    if family.type == "info":
        return family.name + "_info"
    return family.name


def family_to_text(family) -> str:
    """Serializa uma família (``prometheus_client`` ``Metric``) em bloco de texto.

    Retorna cabeçalhos ``# HELP``/``# TYPE`` seguidos das amostras, cada linha
    terminada em ``\\n``.
    """
    mname = exposed_name(family)
    mtype = _TYPE_MUNGING.get(family.type, family.type)

    output = [
        f"# HELP {mname} {_escape_help(family.documentation)}\n",
        f"# TYPE {mname} {mtype}\n",
    ]
    om_samples: dict[str, list[str]] = {}
    for s in family.samples:
        if any(s.name == family.name + suffix for suffix in _SKIPPED_SUFFIXES):
            continue
        for suffix in _OM_SUFFIXES:
            if s.name == family.name + suffix:
                om_samples.setdefault(suffix, []).append(sample_line(s))
                break
        else:
            output.append(sample_line(s))

    for suffix, lines in sorted(om_samples.items()):
        output.append(f"# HELP {family.name}{suffix} {_escape_help(family.documentation)}\n")
        output.append(f"# TYPE {family.name}{suffix} gauge\n")
        output.extend(lines)
    return "".join(output)
