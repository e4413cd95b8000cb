"""
Adaptador de entrada: Blob store sobre el sistema de archivos local.

Cada "bucket" es un subdirectorio de una carpeta raíz:

    raiz/
    ├── entrada/          ← bucket de entrada
    ├── procesando/       ← PROCESSING_BUCKET
    └── procesados/       ← FINAL_BUCKET

Útil para:
- Correr el pipeline completo desde el CLI sin credenciales de GCP.
- Tests del orquestador con tmp_path.
"""

import shutil
from pathlib import Path

from cnab_extractor.domain.exceptions import BlobStoreError
from cnab_extractor.domain.ports.blob_store import BlobStore


class LocalBlobStore(BlobStore):
    """Buckets como directorios bajo `root`."""

    def __init__(self, root: Path) -> None:
        self._root = root

    def path_for(self, bucket: str, key: str) -> Path:
        return self._root / bucket / key

    def read_all(self, bucket: str, key: str) -> bytes:
        path = self.path_for(bucket, key)
        try:
            return path.read_bytes()
        except OSError as e:
            raise BlobStoreError("lectura", bucket, key, str(e)) from e

    def move(self, bucket: str, key: str, destination_bucket: str) -> None:
        source = self.path_for(bucket, key)
        target = self.path_for(destination_bucket, key)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(source), str(target))
        except OSError as e:
            raise BlobStoreError("move", bucket, key, str(e)) from e
