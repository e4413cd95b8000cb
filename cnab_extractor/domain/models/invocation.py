"""
Modelos de dominio: Evento de disparo y contexto de una invocación.

El procesamiento de un archivo no comparte NADA con el de otro archivo.
El nombre del archivo en curso y los parámetros de decodificación viajan
explícitamente en InvocationContext, que se crea por evento y se descarta
al terminar. No hay estado de módulo.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from cnab_extractor.domain.exceptions import ConfigurationError


@dataclass(frozen=True)
class StorageEvent:
    """Notificación de objeto creado en el blob store."""

    bucket: str
    name: str

    @classmethod
    def from_cloud_event(cls, payload: Mapping[str, Any]) -> "StorageEvent":
        """Construye el evento desde el dict que entrega el trigger de storage.

        Raises:
            ValueError: Si falta 'bucket' o 'name'.
        """
        bucket = payload.get("bucket")
        name = payload.get("name")
        if not bucket or not name:
            raise ValueError(f"Evento de storage incompleto: bucket={bucket!r}, name={name!r}")
        return cls(bucket=str(bucket), name=str(name))


@dataclass(frozen=True)
class InvocationContext:
    """Parámetros de una invocación. Se pasa a cada operación del pipeline."""

    file_name: str
    """Nombre del archivo CNAB. Va en cnabFileName de cada boleto."""

    line_length: int
    """Largo fijo de cada línea del formato (400 en CNAB 400)."""

    max_batch_size: int
    """Cantidad máxima de boletos por mensaje."""

    bank_slip_type: str
    """Etiqueta 'type' que se pone en cada boleto."""

    bucket: str = ""
    """Bucket de origen. Vacío cuando el archivo viene del disco local."""

    def __post_init__(self) -> None:
        if self.line_length <= 0:
            raise ConfigurationError("line_length", f"debe ser positivo: {self.line_length}")
        if self.max_batch_size <= 0:
            raise ConfigurationError("max_batch_size", f"debe ser positivo: {self.max_batch_size}")
