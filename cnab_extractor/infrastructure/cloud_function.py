"""
Punto de entrada de la Cloud Function: extract_cnab.

Se dispara con cada objeto creado en el bucket de entrada. Despliegue:

    gcloud functions deploy extractCnab \\
        --entry-point extract_cnab \\
        --trigger-bucket <bucket-de-entrada> \\
        --set-env-vars PROJECT=...,TOPIC=...,PROCESSING_BUCKET=...,...

Este módulo es el lugar donde se ensamblan los componentes de producción:
- Crea los adaptadores concretos (GcsBlobStore, PubSubEventBus, ...).
- Los inyecta en el CnabFileProcessor.
- Traduce el evento y devuelve.

No contiene lógica de negocio, solo "fontanería" (wiring).

Los clientes de GCS y Pub/Sub se crean una sola vez por instancia (son
caros y no guardan estado de ningún archivo). Todo lo demás se crea por
invocación.
"""

import logging
from functools import lru_cache
from typing import Any

from cnab_extractor.adapters.input.blob_stores.gcs_blob_store import GcsBlobStore
from cnab_extractor.adapters.output.event_buses.pubsub_event_bus import PubSubEventBus
from cnab_extractor.adapters.output.loggers.logging_logger import LoggingProcessLogger
from cnab_extractor.domain.models.file_processing_result import FileProcessingResult
from cnab_extractor.domain.models.invocation import StorageEvent
from cnab_extractor.domain.ports.blob_store import BlobStore
from cnab_extractor.domain.ports.event_bus import EventBus
from cnab_extractor.domain.ports.process_logger import ProcessLogger
from cnab_extractor.domain.services.batch_publisher import BatchPublishPipeline
from cnab_extractor.domain.services.file_processor import CnabFileProcessor
from cnab_extractor.infrastructure.settings import Settings

logger = logging.getLogger(__name__)


def build_processor(
    settings: Settings,
    blob_store: BlobStore,
    event_bus: EventBus,
    process_logger: ProcessLogger,
) -> CnabFileProcessor:
    """Arma el procesador con los adaptadores dados."""
    pipeline = BatchPublishPipeline(
        event_bus=event_bus,
        topic=settings.topic,
        logger=process_logger,
    )
    return CnabFileProcessor(
        blob_store=blob_store,
        pipeline=pipeline,
        logger=process_logger,
        processing_bucket=settings.processing_bucket,
        final_bucket=settings.final_bucket,
        line_length=settings.line_length,
        max_batch_size=settings.max_batch_size,
        bank_slip_type=settings.bank_slip_type,
    )


@lru_cache(maxsize=1)
def _settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=1)
def _blob_store() -> GcsBlobStore:
    return GcsBlobStore()


@lru_cache(maxsize=1)
def _event_bus(project: str) -> PubSubEventBus:
    return PubSubEventBus(project)


def extract_cnab(event: dict[str, Any], context: Any = None) -> FileProcessingResult:
    """Handler del trigger de objeto creado.

    Args:
        event: Payload del evento de storage ({'bucket': ..., 'name': ...}).
        context: Metadatos del evento (no se usan).

    Returns:
        El FileProcessingResult. Los moves fallidos se reportan como error
        para que aparezcan en las alertas de Cloud Logging.

    Raises:
        RecordDecodeError: Si el archivo tiene una línea inválida. Se deja
                           propagar para que la invocación figure como fallida.
    """
    logging.basicConfig(level=logging.INFO)

    settings = _settings()
    storage_event = StorageEvent.from_cloud_event(event)
    processor = build_processor(
        settings,
        blob_store=_blob_store(),
        event_bus=_event_bus(settings.project),
        process_logger=LoggingProcessLogger(),
    )

    result = processor.handle(storage_event)

    if result.has_move_failures:
        logger.error(
            "El archivo %s quedó en un estado de storage inconsistente: %s",
            storage_event.name,
            [m for m in result.moves if not m.ok],
        )
    return result
