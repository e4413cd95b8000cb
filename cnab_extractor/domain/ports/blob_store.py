"""
Puerto de entrada: Blob store.

Define el contrato para leer un archivo CNAB completo y para moverlo entre
buckets (etapas). Cada backend de almacenamiento tiene su adaptador:

    BlobStore (interfaz)
    ├── GcsBlobStore      → Google Cloud Storage (producción)
    └── LocalBlobStore    → Directorios en disco (corridas locales, tests)

¿Por qué mover en lugar de copiar/marcar?
Porque la etapa en la que está el archivo ES su estado: en el bucket de
procesamiento = se está publicando o falló; en el bucket final = publicado
completo. No hace falta otra base de datos.
"""

from abc import ABC, abstractmethod


class BlobStore(ABC):
    """Interfaz para leer y mover objetos del storage."""

    @abstractmethod
    def read_all(self, bucket: str, key: str) -> bytes:
        """Lee el objeto completo a memoria.

        Raises:
            BlobStoreError: Si el objeto no existe o no se puede leer.
        """
        ...

    @abstractmethod
    def move(self, bucket: str, key: str, destination_bucket: str) -> None:
        """Mueve el objeto `key` de `bucket` a `destination_bucket`, mismo nombre.

        Raises:
            BlobStoreError: Si el move falla. El objeto debe quedar en el
                            origen o en el destino, nunca perderse.
        """
        ...
