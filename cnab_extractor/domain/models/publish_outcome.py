"""
Modelo de dominio: Resultado agregado de publicar un archivo.

Responde la única pregunta que le importa al orquestador: ¿TODOS los lotes
del archivo quedaron publicados? Solo en ese caso el archivo se mueve a la
etapa final. Si no, se queda en la etapa de procesamiento para reproceso
manual.
"""

from dataclasses import dataclass, field
from enum import Enum


class PipelineState(Enum):
    """Estados del pipeline de un archivo.

    ACCUMULATING → (lote completo) → PUBLISHING → ACCUMULATING | FAILED

    Terminales: COMPLETED (todas las líneas procesadas, todos los publish
    exitosos) y FAILED (un publish agotó sus reintentos).
    """

    ACCUMULATING = "accumulating"
    PUBLISHING = "publishing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class PublishOutcome:
    """Resultado de procesar un archivo completo."""

    file_name: str
    total_lines: int
    batches_sent: int
    details_sent: int
    state: PipelineState
    message_ids: tuple[str, ...] = field(default_factory=tuple)
    """IDs devueltos por el event bus, en el orden de publicación."""

    skipped: bool = False
    """True cuando el archivo tenía menos de 3 líneas (no-op, no error)."""

    @property
    def success(self) -> bool:
        return self.state is PipelineState.COMPLETED

    @property
    def expected_details(self) -> int:
        """Boletos esperados según la suposición encabezado + trailer."""
        return max(self.total_lines - 2, 0)

    def __post_init__(self) -> None:
        if self.state not in (PipelineState.COMPLETED, PipelineState.FAILED):
            raise ValueError(f"Un resultado debe estar en estado terminal, no {self.state.name}")
        if len(self.message_ids) != self.batches_sent:
            raise ValueError(
                f"batches_sent ({self.batches_sent}) no coincide con "
                f"los message_ids recibidos ({len(self.message_ids)})"
            )
