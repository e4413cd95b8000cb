"""
Servicio de dominio: Procesador de un evento de archivo CNAB.

Orquesta el ciclo de vida de un archivo a través de las etapas (buckets):

    entrada ──move──▶ procesamiento ──(todo publicado)──move──▶ final

1. Lee el archivo completo del bucket de entrada.
2. Lo mueve a la etapa de procesamiento.
3. Ejecuta el BatchPublishPipeline.
4. SOLO si todos los lotes se publicaron, lo mueve a la etapa final.

¿Por qué no poner esta lógica en la Cloud Function?
Porque "un archivo solo llega a la etapa final si se publicó completo" es
una regla del negocio. La Cloud Function solo traduce el evento y arma
las dependencias; el CLI hace lo mismo con un blob store local.
"""

from cnab_extractor.domain.exceptions import BlobStoreError
from cnab_extractor.domain.models.file_processing_result import FileProcessingResult, MoveResult
from cnab_extractor.domain.models.invocation import InvocationContext, StorageEvent
from cnab_extractor.domain.ports.blob_store import BlobStore
from cnab_extractor.domain.ports.process_logger import ProcessLogger
from cnab_extractor.domain.services.batch_publisher import BatchPublishPipeline


class CnabFileProcessor:
    """Atiende eventos de archivo creado.

    Como BatchPublishPipeline, no guarda estado de ningún archivo.
    """

    def __init__(
        self,
        blob_store: BlobStore,
        pipeline: BatchPublishPipeline,
        logger: ProcessLogger,
        processing_bucket: str,
        final_bucket: str,
        line_length: int,
        max_batch_size: int,
        bank_slip_type: str,
    ) -> None:
        self._blob_store = blob_store
        self._pipeline = pipeline
        self._logger = logger
        self._processing_bucket = processing_bucket
        self._final_bucket = final_bucket
        self._line_length = line_length
        self._max_batch_size = max_batch_size
        self._bank_slip_type = bank_slip_type

    def handle(self, event: StorageEvent) -> FileProcessingResult:
        """Procesa un archivo de punta a punta.

        Returns:
            FileProcessingResult con el resultado de la publicación y de
            cada move. Un move fallido NO aborta el procesamiento, pero
            queda registrado para que quien invoca lo escale.

        Raises:
            RecordDecodeError: Si el archivo tiene una línea de detalle
                               inválida. El archivo queda en procesamiento.
        """
        self._logger.log_file_received(event.bucket, event.name)

        try:
            raw = self._blob_store.read_all(event.bucket, event.name)
        except BlobStoreError as e:
            self._logger.log_error(event.name, e)
            return FileProcessingResult(event=event, read_error=str(e))

        if not raw:
            self._logger.log_no_content(event.name, "archivo vacío")
            return FileProcessingResult(event=event)

        moves = [self._move(event.bucket, event.name, self._processing_bucket)]

        ctx = InvocationContext(
            file_name=event.name,
            line_length=self._line_length,
            max_batch_size=self._max_batch_size,
            bank_slip_type=self._bank_slip_type,
            bucket=event.bucket,
        )
        outcome = self._pipeline.run(raw, ctx)

        if outcome.success:
            # Si el primer move falló, el archivo sigue en el bucket de
            # entrada: se mueve desde ahí para no dejarlo a medio camino.
            source = self._processing_bucket if moves[0].ok else event.bucket
            moves.append(self._move(source, event.name, self._final_bucket))

        return FileProcessingResult(event=event, outcome=outcome, moves=tuple(moves))

    def _move(self, bucket: str, key: str, destination: str) -> MoveResult:
        try:
            self._blob_store.move(bucket, key, destination)
        except BlobStoreError as e:
            self._logger.log_move_failed(key, destination, e)
            return MoveResult(bucket, key, destination, ok=False, error=str(e))
        return MoveResult(bucket, key, destination, ok=True)
