"""
Tests para la traducción RetryPolicy → google.api_core y para los
reintentos del InMemoryEventBus, que pasan por el mismo Retry.

El reloj simulado de conftest reemplaza time.sleep y time.monotonic, así
un timeout total de 600 s se agota sin esperar.
"""

import pytest
from google.api_core import exceptions as api_exceptions
from google.api_core.timeout import ExponentialTimeout

from cnab_extractor.adapters.output.event_buses.api_retry import (
    exception_for,
    status_of,
    to_api_retry,
    to_api_timeout,
)
from cnab_extractor.adapters.output.event_buses.in_memory_event_bus import InMemoryEventBus
from cnab_extractor.domain.exceptions import PublishError
from cnab_extractor.domain.models.retry_policy import DEFAULT_RETRY_POLICY, RetryPolicy, StatusCode


class TestTraduccionDePolitica:
    """RetryPolicy → objetos de google.api_core."""

    def test_predicado_reintenta_solo_codigos_de_la_politica(self):
        retry = to_api_retry(DEFAULT_RETRY_POLICY)
        assert retry._predicate(api_exceptions.ServiceUnavailable("x"))
        assert retry._predicate(api_exceptions.Aborted("x"))
        assert not retry._predicate(api_exceptions.PermissionDenied("x"))
        assert not retry._predicate(api_exceptions.InvalidArgument("x"))

    def test_parametros_del_backoff(self):
        retry = to_api_retry(DEFAULT_RETRY_POLICY)
        assert retry._initial == 0.1
        assert retry._multiplier == 1.3
        assert retry._maximum == 60.0
        assert retry.timeout == 600.0

    def test_codigos_propios(self):
        retry = to_api_retry(RetryPolicy(retry_codes=frozenset({StatusCode.NOT_FOUND})))
        assert retry._predicate(api_exceptions.NotFound("x"))
        assert not retry._predicate(api_exceptions.ServiceUnavailable("x"))

    def test_timeout_por_intento(self):
        timeout = to_api_timeout(DEFAULT_RETRY_POLICY)
        assert isinstance(timeout, ExponentialTimeout)
        assert timeout._initial == 5.0
        assert timeout._multiplier == 1.0


class TestStatusOf:
    """Pruebas para status_of."""

    @pytest.mark.parametrize(
        "error,expected",
        [
            (api_exceptions.DeadlineExceeded("x"), StatusCode.DEADLINE_EXCEEDED),
            (api_exceptions.InternalServerError("x"), StatusCode.INTERNAL),
            (api_exceptions.NotFound("x"), StatusCode.NOT_FOUND),
            (api_exceptions.RetryError("x", None), StatusCode.DEADLINE_EXCEEDED),
            (api_exceptions.RetryError("x", api_exceptions.Aborted("y")), StatusCode.ABORTED),
        ],
    )
    def test_codigos(self, error, expected):
        assert status_of(error) is expected

    def test_error_desconocido(self):
        assert status_of(RuntimeError("x")) is StatusCode.UNKNOWN

    def test_excepcion_de_cada_codigo(self):
        for code in StatusCode:
            if code is StatusCode.OK:
                continue
            assert status_of(exception_for(code, "x")) is code

    def test_ok_no_es_un_error(self):
        with pytest.raises(ValueError):
            exception_for(StatusCode.OK, "x")


class TestReintentosDelBusEnMemoria:
    """InMemoryEventBus reintenta con el Retry de google.api_core."""

    def test_exito_al_primer_intento(self, reloj):
        bus = InMemoryEventBus()
        assert bus.publish("boletos", b"[]", DEFAULT_RETRY_POLICY) == "1"
        assert bus.attempts == 1
        assert reloj.sleeps == []

    def test_recupera_tras_fallas_transitorias(self, reloj):
        bus = InMemoryEventBus(failures={1: [StatusCode.UNAVAILABLE, StatusCode.ABORTED]})

        assert bus.publish("boletos", b"[]", DEFAULT_RETRY_POLICY) == "1"
        assert bus.attempts == 3
        # Dos esperas, con jitter y sin pasar el tope
        assert len(reloj.sleeps) == 2
        assert all(0 <= s <= DEFAULT_RETRY_POLICY.max_retry_delay for s in reloj.sleeps)

    def test_no_reintenta_codigo_no_reintentable(self, reloj):
        bus = InMemoryEventBus(failures={1: StatusCode.PERMISSION_DENIED})

        with pytest.raises(PublishError) as exc_info:
            bus.publish("boletos", b"[]", DEFAULT_RETRY_POLICY)
        assert exc_info.value.status is StatusCode.PERMISSION_DENIED
        assert exc_info.value.topic == "boletos"
        assert isinstance(exc_info.value.__cause__, api_exceptions.PermissionDenied)
        assert bus.attempts == 1
        assert reloj.sleeps == []

    def test_agota_el_timeout_total(self, reloj):
        bus = InMemoryEventBus(failures={1: StatusCode.UNAVAILABLE})

        with pytest.raises(PublishError) as exc_info:
            bus.publish("boletos", b"[]", DEFAULT_RETRY_POLICY)
        # El código es el del último intento, no DEADLINE_EXCEEDED
        assert exc_info.value.status is StatusCode.UNAVAILABLE
        assert isinstance(exc_info.value.__cause__, api_exceptions.RetryError)
        assert bus.attempts > 1
        assert reloj.now <= DEFAULT_RETRY_POLICY.total_timeout
        assert bus.messages == []

    def test_timeout_total_corto(self, reloj):
        policy = RetryPolicy(initial_retry_delay=1.0, total_timeout=0.5)
        bus = InMemoryEventBus(failures={1: StatusCode.UNAVAILABLE})

        with pytest.raises(PublishError):
            bus.publish("boletos", b"[]", policy)
        assert reloj.now <= 0.5

    def test_la_falla_es_por_publicacion(self):
        bus = InMemoryEventBus(failures={1: StatusCode.INVALID_ARGUMENT})

        with pytest.raises(PublishError):
            bus.publish("boletos", b"[1]", DEFAULT_RETRY_POLICY)
        assert bus.publish("boletos", b"[2]", DEFAULT_RETRY_POLICY) == "1"
        assert bus.batches() == [[2]]
