"""
Traducción entre la RetryPolicy del dominio y google.api_core.

Los dos event bus (Pub/Sub y en memoria) reintentan con el mismo
mecanismo: un google.api_core.retry.Retry construido desde la política.

    RetryPolicy.retry_codes        → Retry(predicate=if_exception_type(...))
    initial/multiplier/max delay   → Retry(initial, multiplier, maximum)
    total_timeout                  → Retry(timeout=...)
    rpc timeouts                   → ExponentialTimeout(...)

Y en sentido inverso, status_of lleva una excepción de google.api_core de
vuelta al StatusCode del dominio, que es lo que viaja en PublishError.
"""

from google.api_core import exceptions as api_exceptions
from google.api_core import retry as api_retry
from google.api_core.timeout import ExponentialTimeout

from cnab_extractor.domain.models.retry_policy import RetryPolicy, StatusCode

# Excepción de google.api_core que corresponde a cada código de gRPC.
_EXCEPTIONS_BY_CODE: dict[StatusCode, type[api_exceptions.GoogleAPICallError]] = {
    StatusCode.CANCELLED: api_exceptions.Cancelled,
    StatusCode.UNKNOWN: api_exceptions.Unknown,
    StatusCode.INVALID_ARGUMENT: api_exceptions.InvalidArgument,
    StatusCode.DEADLINE_EXCEEDED: api_exceptions.DeadlineExceeded,
    StatusCode.NOT_FOUND: api_exceptions.NotFound,
    StatusCode.ALREADY_EXISTS: api_exceptions.AlreadyExists,
    StatusCode.PERMISSION_DENIED: api_exceptions.PermissionDenied,
    StatusCode.RESOURCE_EXHAUSTED: api_exceptions.ResourceExhausted,
    StatusCode.FAILED_PRECONDITION: api_exceptions.FailedPrecondition,
    StatusCode.ABORTED: api_exceptions.Aborted,
    StatusCode.OUT_OF_RANGE: api_exceptions.OutOfRange,
    StatusCode.UNIMPLEMENTED: api_exceptions.MethodNotImplemented,
    StatusCode.INTERNAL: api_exceptions.InternalServerError,
    StatusCode.UNAVAILABLE: api_exceptions.ServiceUnavailable,
    StatusCode.DATA_LOSS: api_exceptions.DataLoss,
    StatusCode.UNAUTHENTICATED: api_exceptions.Unauthenticated,
}


def exception_for(status: StatusCode, message: str) -> api_exceptions.GoogleAPICallError:
    """Excepción de google.api_core equivalente a un código de estado.

    Raises:
        ValueError: Si status es OK (no es un error).
    """
    if status not in _EXCEPTIONS_BY_CODE:
        raise ValueError(f"{status.name} no corresponde a un error")
    return _EXCEPTIONS_BY_CODE[status](message)


def to_api_retry(policy: RetryPolicy) -> api_retry.Retry:
    """Construye el Retry de google.api_core equivalente a la política."""
    retryable = tuple(_EXCEPTIONS_BY_CODE[code] for code in sorted(policy.retry_codes) if code in _EXCEPTIONS_BY_CODE)
    return api_retry.Retry(
        predicate=api_retry.if_exception_type(*retryable),
        initial=policy.initial_retry_delay,
        maximum=policy.max_retry_delay,
        multiplier=policy.retry_delay_multiplier,
        timeout=policy.total_timeout,
    )


def to_api_timeout(policy: RetryPolicy) -> ExponentialTimeout:
    """Timeout por intento: empieza en initial_rpc_timeout y crece con el multiplicador."""
    return ExponentialTimeout(
        initial=policy.initial_rpc_timeout,
        maximum=policy.max_rpc_timeout,
        multiplier=policy.rpc_timeout_multiplier,
        deadline=policy.total_timeout,
    )


def status_of(error: Exception) -> StatusCode:
    """Extrae el código de estado de un error de google.api_core.

    RetryError (reintentos agotados por tiempo) no trae código propio: se
    usa el de la última causa, o DEADLINE_EXCEEDED si no hay causa.
    """
    if isinstance(error, api_exceptions.RetryError):
        if error.cause is not None:
            return status_of(error.cause)
        return StatusCode.DEADLINE_EXCEEDED
    grpc_code = getattr(error, "grpc_status_code", None)
    if grpc_code is not None and grpc_code.name in StatusCode.__members__:
        return StatusCode[grpc_code.name]
    for code, exc_type in _EXCEPTIONS_BY_CODE.items():
        if type(error) is exc_type:
            return code
    return StatusCode.UNKNOWN
