"""Envio do registry completo para um Pushgateway.

O envio usa ``prometheus_client.push_to_gateway`` com um transporte próprio
baseado em ``requests.Session`` e timeout fixo de 20 segundos. Falhas são
registradas e nunca propagadas: o push é best-effort e sem retry.
"""

import logging

import requests  # type: ignore[import-untyped]
from prometheus_client import REGISTRY, push_to_gateway

logger = logging.getLogger(__name__)

PUSH_METRICS_TIMEOUT = 20.0


def session_handler(session: requests.Session):
    """Adapta uma ``requests.Session`` ao contrato de handler do pushgateway.

    O handler recebe ``url, method, timeout, headers, data`` e devolve uma
    função sem argumentos que faz o request; respostas não-2xx levantam
    ``requests.HTTPError``.
    """

    def handler(url, method, timeout, headers, data):
        def send():
            resp = session.request(method, url, data=data, headers=dict(headers), timeout=timeout)
            resp.raise_for_status()

        return send

    return handler


def push_metrics(url: str, job: str, registry=REGISTRY) -> bool:
    """Envia todas as métricas de ``registry`` para o pushgateway em ``url``.

    ``url`` deve ser a URL base do pushgateway oficial, sem path. Retorna
    True quando o envio foi aceito e False quando falhou (a falha já foi
    registrada em log).
    """
    with requests.Session() as session:
        try:
            push_to_gateway(
                url,
                job=job,
                registry=registry,
                timeout=PUSH_METRICS_TIMEOUT,
                handler=session_handler(session),
            )
        except requests.RequestException as exc:
            logger.error("Falha ao enviar métricas para %s (job=%s): %s", url, job, exc)
            return False
        except Exception as exc:
            logger.error("Erro inesperado ao enviar métricas para %s (job=%s): %s", url, job, exc)
            return False
    logger.debug("Métricas enviadas para %s (job=%s)", url, job)
    return True
