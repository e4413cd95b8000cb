"""
Servicio de dominio: Agrupador de boletos en lotes acotados.

El número de boletos de un archivo no se conoce de antemano con certeza:
se ESTIMA como líneas - 2 (un encabezado y un trailer). Con esa estimación
y el tamaño máximo de lote se decide cuándo un lote está completo:

    (a) tiene max_batch_size boletos, o
    (b) los boletos que faltan por enviar (esperados - m * max) son menos
        que max_batch_size y el lote ya tiene exactamente esa cantidad
        (es el último lote del archivo, posiblemente corto).

Donde m es la cantidad de lotes ya entregados.

Es PURO y PEREZOSO: no publica nada, y no pide el siguiente boleto hasta
que el consumidor pide el siguiente lote. Si el consumidor se detiene (un
publish falló), el resto del archivo nunca se decodifica.
"""

from collections.abc import Iterable, Iterator

from cnab_extractor.domain.exceptions import ConfigurationError
from cnab_extractor.domain.models.bank_slip import BankSlipDetail

Batch = tuple[BankSlipDetail, ...]


def is_batch_complete(batch_size: int, batches_sent: int, expected_details: int, max_batch_size: int) -> bool:
    """Condición de cierre de lote, evaluada después de cada append.

    Ejemplos (esperados = 7, max = 3):
        >>> is_batch_complete(3, 0, 7, 3)   # lleno
        True
        >>> is_batch_complete(1, 2, 7, 3)   # quedaba 1, ya está
        True
        >>> is_batch_complete(1, 1, 7, 3)   # quedan 4, falta llenar
        False
    """
    if batch_size == max_batch_size:
        return True
    remaining = expected_details - batches_sent * max_batch_size
    return remaining < max_batch_size and batch_size == remaining


def iter_batches(
    details: Iterable[BankSlipDetail],
    expected_details: int,
    max_batch_size: int,
) -> Iterator[Batch]:
    """Agrupa los boletos en lotes de a lo sumo max_batch_size.

    Args:
        details: Boletos en orden de archivo (normalmente un generador).
        expected_details: Boletos esperados (líneas del archivo - 2).
        max_batch_size: Tamaño máximo de cada lote.

    Yields:
        Cada lote como tupla inmutable. Solo el último puede ser más corto.

    Si los boletos reales no coinciden con expected_details (el archivo no
    tiene exactamente un encabezado y un trailer), lo que quede acumulado
    al terminar la entrada se entrega como lote final, para que ningún
    boleto procesado se pierda.

    Raises:
        ConfigurationError: Si max_batch_size < 1.
    """
    if max_batch_size < 1:
        raise ConfigurationError("max_batch_size", f"debe ser >= 1, se recibió {max_batch_size}")

    current: list[BankSlipDetail] = []
    batches_sent = 0

    for detail in details:
        current.append(detail)
        if is_batch_complete(len(current), batches_sent, expected_details, max_batch_size):
            yield tuple(current)
            batches_sent += 1
            current = []

    if current:
        yield tuple(current)
