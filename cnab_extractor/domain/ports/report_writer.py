"""
Puerto de salida: Escritor de reportes.

Define el contrato para escribir los boletos decodificados de un archivo en
algún formato legible para personas (hoy Excel). Se usa desde el CLI para
revisar un archivo antes de publicarlo (--dry-run) o para auditar lo que
se publicó.

¿Por qué es un puerto y no una función en el CLI?
Porque el dominio (decoder, pipeline) no decide NI conoce el formato del
reporte. Hoy es Excel; mañana podría ser CSV o una tabla en BigQuery.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from cnab_extractor.domain.models.bank_slip import BankSlipDetail
from cnab_extractor.domain.models.publish_outcome import PublishOutcome


class ReportWriter(ABC):
    """Interfaz para escribir reportes de boletos."""

    @abstractmethod
    def write(
        self,
        details: Sequence[BankSlipDetail],
        output_path: Path,
        outcome: PublishOutcome | None = None,
    ) -> Path:
        """Escribe el reporte de un archivo CNAB.

        Args:
            details: Boletos decodificados, en orden de archivo.
            output_path: Ruta donde crear el reporte.
            outcome: Resultado de la publicación, si la hubo. Se incluye
                     en la hoja de resumen.

        Returns:
            Ruta real del archivo creado (puede diferir si se añadió extensión).

        Raises:
            ReportError: Si falla la escritura (permisos, disco lleno, etc.)
        """
        ...
