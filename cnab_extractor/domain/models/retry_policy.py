"""
Modelo de dominio: Política de reintentos de una publicación.

Se aplica POR LLAMADA a publish, no por archivo. Los valores por defecto
reproducen la configuración con la que el servicio corre en producción:

    delay:   100 ms, x1.3 por intento, tope 60 s
    timeout: 5 s por intento, sin crecer (x1.0), tope 600 s
    total:   600 s para toda la secuencia de reintentos

Los tiempos se guardan en SEGUNDOS (float), como los esperan
google.api_core.retry.Retry y google.api_core.timeout.ExponentialTimeout.
"""

from dataclasses import dataclass, field
from enum import IntEnum


class StatusCode(IntEnum):
    """Códigos canónicos de gRPC que puede devolver el event bus."""

    OK = 0
    CANCELLED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16


DEFAULT_RETRY_CODES: frozenset[StatusCode] = frozenset(
    {
        StatusCode.ABORTED,
        StatusCode.CANCELLED,
        StatusCode.DEADLINE_EXCEEDED,
        StatusCode.INTERNAL,
        StatusCode.RESOURCE_EXHAUSTED,
        StatusCode.UNAVAILABLE,
        StatusCode.UNKNOWN,
    }
)


@dataclass(frozen=True)
class RetryPolicy:
    """Backoff exponencial con timeout por intento y timeout total."""

    retry_codes: frozenset[StatusCode] = field(default=DEFAULT_RETRY_CODES)
    """Códigos de estado que se consideran transitorios."""

    initial_retry_delay: float = 0.1
    retry_delay_multiplier: float = 1.3
    max_retry_delay: float = 60.0

    initial_rpc_timeout: float = 5.0
    rpc_timeout_multiplier: float = 1.0
    max_rpc_timeout: float = 600.0

    total_timeout: float = 600.0
    """Tiempo total desde el primer intento. Pasado este tiempo el error
    se devuelve aunque el código sea reintentable."""

    def __post_init__(self) -> None:
        if self.initial_retry_delay < 0:
            raise ValueError(f"initial_retry_delay no puede ser negativo: {self.initial_retry_delay}")
        if self.retry_delay_multiplier < 1.0 or self.rpc_timeout_multiplier < 1.0:
            raise ValueError("Los multiplicadores deben ser >= 1.0")
        if self.total_timeout <= 0:
            raise ValueError(f"total_timeout debe ser positivo: {self.total_timeout}")

    def is_retryable(self, status: StatusCode) -> bool:
        return status in self.retry_codes


DEFAULT_RETRY_POLICY = RetryPolicy()
