"""
Modelo de dominio: Resultado de atender un evento de archivo.

Un error al mover el archivo entre buckets no aborta el procesamiento:
cada move produce un MoveResult y el resultado del evento los conserva
todos, para que quien invoca decida si escala.
"""

from dataclasses import dataclass, field

from cnab_extractor.domain.models.invocation import StorageEvent
from cnab_extractor.domain.models.publish_outcome import PublishOutcome


@dataclass(frozen=True)
class MoveResult:
    """Resultado de mover un objeto de un bucket a otro."""

    source_bucket: str
    key: str
    destination_bucket: str
    ok: bool
    error: str = ""


@dataclass(frozen=True)
class FileProcessingResult:
    """Todo lo que pasó con un archivo en una invocación."""

    event: StorageEvent
    outcome: PublishOutcome | None = None
    """None si el archivo no se pudo leer o venía vacío."""

    moves: tuple[MoveResult, ...] = field(default_factory=tuple)
    read_error: str = ""

    @property
    def published(self) -> bool:
        return self.outcome is not None and self.outcome.success

    @property
    def has_move_failures(self) -> bool:
        return any(not m.ok for m in self.moves)

    @property
    def ok(self) -> bool:
        """True solo si se publicó todo y todos los moves funcionaron."""
        return self.published and not self.has_move_failures and not self.read_error
