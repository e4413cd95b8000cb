"""
Adaptador de salida: Event bus en memoria.

Guarda los mensajes publicados en una lista. Se usa en:
- Tests del pipeline (sin red, sin credenciales).
- El modo --dry-run del CLI: se procesa el archivo completo y se reporta
  qué se hubiera publicado.

Permite programar fallas por número de publicación, para probar la regla
de "parar ante el primer lote que no se pudo publicar":

    bus = InMemoryEventBus(failures={2: StatusCode.PERMISSION_DENIED})
    # la 2da publicación falla siempre con PERMISSION_DENIED

    bus = InMemoryEventBus(failures={1: [StatusCode.UNAVAILABLE, StatusCode.UNAVAILABLE]})
    # la 1ra publicación falla 2 veces y al 3er intento funciona

Cada falla programada se lanza como la excepción de google.api_core de ese
código, y los reintentos pasan por el mismo Retry que usa PubSubEventBus.
"""

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from google.api_core import exceptions as api_exceptions

from cnab_extractor.adapters.output.event_buses.api_retry import exception_for, status_of, to_api_retry
from cnab_extractor.domain.exceptions import PublishError
from cnab_extractor.domain.models.retry_policy import RetryPolicy, StatusCode
from cnab_extractor.domain.ports.event_bus import EventBus


@dataclass(frozen=True)
class PublishedMessage:
    """Un mensaje aceptado por el bus."""

    topic: str
    payload: bytes
    message_id: str

    def decode(self) -> list[dict[str, Any]]:
        """Payload como lista de boletos (dicts)."""
        return json.loads(self.payload.decode("utf-8"))


class InMemoryEventBus(EventBus):
    """Bus que acumula los mensajes en memoria."""

    def __init__(self, failures: Mapping[int, StatusCode | Sequence[StatusCode]] | None = None) -> None:
        """
        Args:
            failures: Número de publicación (desde 1) → código con el que
                      falla siempre, o lista de códigos para los primeros
                      intentos (después funciona).
        """
        self._failures = dict(failures or {})
        self.messages: list[PublishedMessage] = []
        self.attempts: int = 0
        self._calls: int = 0

    def publish(self, topic: str, payload: bytes, retry_policy: RetryPolicy) -> str:
        self._calls += 1
        call_number = self._calls
        scripted = self._failures.get(call_number)
        pending = list(scripted) if isinstance(scripted, Sequence) else []
        message = f"falla programada en publicación #{call_number}"

        def attempt() -> str:
            self.attempts += 1
            if isinstance(scripted, StatusCode):
                raise exception_for(scripted, message)
            if pending:
                raise exception_for(pending.pop(0), message)
            message_id = str(len(self.messages) + 1)
            self.messages.append(PublishedMessage(topic, payload, message_id))
            return message_id

        try:
            return to_api_retry(retry_policy)(attempt)()
        except (api_exceptions.GoogleAPICallError, api_exceptions.RetryError) as e:
            raise PublishError(topic, status_of(e), str(e)) from e

    def batches(self) -> list[list[dict[str, Any]]]:
        """Todos los lotes publicados, decodificados."""
        return [m.decode() for m in self.messages]
