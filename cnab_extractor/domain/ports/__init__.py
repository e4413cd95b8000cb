"""
Puertos (interfaces) del dominio.

Los puertos definen QUÉ necesita el dominio, sin decir CÓMO se implementa.
Cada puerto tiene uno o más adaptadores que lo implementan.

Uso:
    from cnab_extractor.domain.ports import BlobStore, EventBus, ProcessLogger
"""

from cnab_extractor.domain.ports.blob_store import BlobStore
from cnab_extractor.domain.ports.event_bus import EventBus
from cnab_extractor.domain.ports.process_logger import ProcessLogger
from cnab_extractor.domain.ports.report_writer import ReportWriter

__all__ = [
    "BlobStore",
    "EventBus",
    "ProcessLogger",
    "ReportWriter",
]
