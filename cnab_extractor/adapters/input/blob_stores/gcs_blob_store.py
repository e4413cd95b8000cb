"""
Adaptador de entrada: Blob store sobre Google Cloud Storage.

Implementa BlobStore con google-cloud-storage:
- read_all: descarga el objeto completo a memoria (download_as_bytes).
- move: copia al bucket destino y borra el original. GCS no tiene un
  "move" entre buckets; copy + delete es lo que hacen todos los clientes.

Los errores de la librería se envuelven en BlobStoreError para que el
dominio no dependa de Google:
- GoogleAPICallError: respuestas de error de la API (NotFound, Forbidden, ...).
- GoogleAuthError: credenciales ausentes o token que no se pudo renovar.
- requests.RequestException: fallas de transporte (conexión, timeout).
"""

import requests
from google.api_core.exceptions import GoogleAPICallError
from google.auth.exceptions import GoogleAuthError
from google.cloud import storage

from cnab_extractor.domain.exceptions import BlobStoreError
from cnab_extractor.domain.ports.blob_store import BlobStore

_STORAGE_ERRORS = (GoogleAPICallError, GoogleAuthError, requests.RequestException)


class GcsBlobStore(BlobStore):
    """Lee y mueve objetos en buckets de GCS."""

    def __init__(self, client: storage.Client | None = None) -> None:
        """
        Args:
            client: Cliente de storage. Si es None se crea uno con las
                    credenciales por defecto del entorno (Application
                    Default Credentials), que es lo normal en Cloud Functions.
        """
        self._client = client if client is not None else storage.Client()

    def read_all(self, bucket: str, key: str) -> bytes:
        try:
            return self._client.bucket(bucket).blob(key).download_as_bytes()
        except _STORAGE_ERRORS as e:
            raise BlobStoreError("lectura", bucket, key, str(e)) from e

    def move(self, bucket: str, key: str, destination_bucket: str) -> None:
        source = self._client.bucket(bucket)
        destination = self._client.bucket(destination_bucket)
        blob = source.blob(key)
        try:
            source.copy_blob(blob, destination, key)
        except _STORAGE_ERRORS as e:
            raise BlobStoreError("copia", bucket, key, str(e)) from e

        # Si el delete falla el objeto queda en ambos buckets. Es preferible
        # a perderlo, pero se reporta igual para que alguien limpie el origen.
        try:
            blob.delete()
        except _STORAGE_ERRORS as e:
            raise BlobStoreError("borrado", bucket, key, str(e)) from e
