"""
Adaptador de salida: Event bus sobre Google Cloud Pub/Sub.

El PublisherClient recibe el Retry y el ExponentialTimeout construidos
desde la RetryPolicy del dominio (ver api_retry). Los reintentos los hace
google.api_core dentro del cliente; este adaptador solo traduce el error
final a PublishError.
"""

from google.api_core import exceptions as api_exceptions
from google.cloud import pubsub_v1

from cnab_extractor.adapters.output.event_buses.api_retry import status_of, to_api_retry, to_api_timeout
from cnab_extractor.domain.exceptions import PublishError
from cnab_extractor.domain.models.retry_policy import RetryPolicy
from cnab_extractor.domain.ports.event_bus import EventBus


class PubSubEventBus(EventBus):
    """Publica mensajes en tópicos de un proyecto de GCP."""

    def __init__(self, project: str, client: pubsub_v1.PublisherClient | None = None) -> None:
        """
        Args:
            project: ID del proyecto de GCP dueño de los tópicos.
            client: Cliente de publicación. Si es None se crea uno con
                    las credenciales por defecto del entorno.
        """
        self._project = project
        self._client = client if client is not None else pubsub_v1.PublisherClient()

    def topic_path(self, topic: str) -> str:
        """Acepta el nombre corto del tópico o la ruta completa projects/.../topics/..."""
        if topic.startswith("projects/"):
            return topic
        return self._client.topic_path(self._project, topic)

    def publish(self, topic: str, payload: bytes, retry_policy: RetryPolicy) -> str:
        path = self.topic_path(topic)
        try:
            future = self._client.publish(
                path,
                payload,
                retry=to_api_retry(retry_policy),
                timeout=to_api_timeout(retry_policy),
            )
            return future.result()
        except (api_exceptions.GoogleAPICallError, api_exceptions.RetryError) as e:
            raise PublishError(path, status_of(e), str(e)) from e
