"""
Puerto de salida: Event bus.

Define el contrato para publicar UN mensaje (un lote serializado) en un
tópico. Hoy es Google Cloud Pub/Sub; en tests es un bus en memoria.

    EventBus (interfaz)
    ├── PubSubEventBus     → google-cloud-pubsub
    └── InMemoryEventBus   → lista en memoria con fallas programables

¿Por qué la política de reintentos viaja en cada llamada?
Porque los reintentos son POR PUBLICACIÓN, no por archivo. El pipeline
decide la política; el adaptador decide cómo aplicarla con su transporte.
"""

from abc import ABC, abstractmethod

from cnab_extractor.domain.models.retry_policy import RetryPolicy


class EventBus(ABC):
    """Interfaz para publicar mensajes."""

    @abstractmethod
    def publish(self, topic: str, payload: bytes, retry_policy: RetryPolicy) -> str:
        """Publica un mensaje y espera la confirmación.

        Args:
            topic: Nombre del tópico (el adaptador lo resuelve a su ruta).
            payload: Bytes del mensaje. Un lote completo.
            retry_policy: Política a aplicar a esta publicación.

        Returns:
            ID del mensaje asignado por el bus.

        Raises:
            PublishError: Si la publicación falló de forma definitiva
                          (código no reintentable o reintentos agotados).
        """
        ...
