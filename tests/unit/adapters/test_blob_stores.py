"""
Tests para los adaptadores de BlobStore.

GcsBlobStore se prueba con un storage.Client simulado (Mock); LocalBlobStore
con directorios reales en tmp_path.
"""

from unittest.mock import MagicMock

import pytest
import requests
from google.api_core import exceptions as api_exceptions
from google.auth import exceptions as google_auth_exceptions

from cnab_extractor.adapters.input.blob_stores.gcs_blob_store import GcsBlobStore
from cnab_extractor.adapters.input.blob_stores.local_blob_store import LocalBlobStore
from cnab_extractor.domain.exceptions import BlobStoreError


@pytest.fixture
def gcs_client():
    buckets: dict[str, MagicMock] = {}

    def bucket(name):
        return buckets.setdefault(name, MagicMock(name=f"bucket-{name}"))

    client = MagicMock()
    client.bucket.side_effect = bucket
    client.buckets = buckets
    return client


class TestGcsBlobStore:
    """Pruebas para GcsBlobStore."""

    def test_lee_el_objeto_completo(self, gcs_client):
        store = GcsBlobStore(client=gcs_client)
        gcs_client.bucket("entrada").blob.return_value.download_as_bytes.return_value = b"CNAB"

        assert store.read_all("entrada", "A.REM") == b"CNAB"
        gcs_client.buckets["entrada"].blob.assert_called_with("A.REM")

    def test_objeto_inexistente(self, gcs_client):
        blob = gcs_client.bucket("entrada").blob.return_value
        blob.download_as_bytes.side_effect = api_exceptions.NotFound("no existe")

        with pytest.raises(BlobStoreError) as exc_info:
            GcsBlobStore(client=gcs_client).read_all("entrada", "A.REM")
        assert exc_info.value.operacion == "lectura"
        assert exc_info.value.key == "A.REM"

    def test_move_copia_y_borra(self, gcs_client):
        GcsBlobStore(client=gcs_client).move("entrada", "A.REM", "procesando")

        source = gcs_client.buckets["entrada"]
        blob = source.blob.return_value
        source.copy_blob.assert_called_once_with(blob, gcs_client.buckets["procesando"], "A.REM")
        blob.delete.assert_called_once_with()

    def test_copia_fallida_no_borra(self, gcs_client):
        source = gcs_client.bucket("entrada")
        source.copy_blob.side_effect = api_exceptions.Forbidden("sin permisos")

        with pytest.raises(BlobStoreError) as exc_info:
            GcsBlobStore(client=gcs_client).move("entrada", "A.REM", "procesando")
        assert exc_info.value.operacion == "copia"
        source.blob.return_value.delete.assert_not_called()

    def test_borrado_fallido(self, gcs_client):
        gcs_client.bucket("entrada").blob.return_value.delete.side_effect = (
            api_exceptions.ServiceUnavailable("x")
        )

        with pytest.raises(BlobStoreError) as exc_info:
            GcsBlobStore(client=gcs_client).move("entrada", "A.REM", "procesando")
        assert exc_info.value.operacion == "borrado"

    @pytest.mark.parametrize(
        "error",
        [
            requests.ConnectionError("conexión rechazada"),
            requests.Timeout("sin respuesta"),
            google_auth_exceptions.TransportError("no se pudo renovar el token"),
            google_auth_exceptions.DefaultCredentialsError("sin credenciales"),
        ],
    )
    def test_fallas_de_transporte_y_credenciales_en_lectura(self, gcs_client, error):
        gcs_client.bucket("entrada").blob.return_value.download_as_bytes.side_effect = error

        with pytest.raises(BlobStoreError) as exc_info:
            GcsBlobStore(client=gcs_client).read_all("entrada", "A.REM")
        assert exc_info.value.operacion == "lectura"
        assert exc_info.value.__cause__ is error

    def test_falla_de_transporte_en_copia(self, gcs_client):
        source = gcs_client.bucket("entrada")
        source.copy_blob.side_effect = google_auth_exceptions.TransportError("sin red")

        with pytest.raises(BlobStoreError) as exc_info:
            GcsBlobStore(client=gcs_client).move("entrada", "A.REM", "procesando")
        assert exc_info.value.operacion == "copia"
        source.blob.return_value.delete.assert_not_called()

    def test_falla_de_transporte_en_borrado(self, gcs_client):
        blob = gcs_client.bucket("entrada").blob.return_value
        blob.delete.side_effect = requests.ConnectionError("conexión cortada")

        with pytest.raises(BlobStoreError) as exc_info:
            GcsBlobStore(client=gcs_client).move("entrada", "A.REM", "procesando")
        assert exc_info.value.operacion == "borrado"


class TestLocalBlobStore:
    """Pruebas para LocalBlobStore."""

    def test_lee_y_mueve(self, tmp_path):
        (tmp_path / "entrada").mkdir()
        (tmp_path / "entrada" / "A.REM").write_bytes(b"CNAB")
        store = LocalBlobStore(tmp_path)

        assert store.read_all("entrada", "A.REM") == b"CNAB"
        store.move("entrada", "A.REM", "procesando")

        assert store.path_for("procesando", "A.REM").read_bytes() == b"CNAB"
        assert not store.path_for("entrada", "A.REM").exists()

    def test_lectura_inexistente(self, tmp_path):
        with pytest.raises(BlobStoreError, match="lectura"):
            LocalBlobStore(tmp_path).read_all("entrada", "NO.REM")

    def test_move_inexistente(self, tmp_path):
        with pytest.raises(BlobStoreError):
            LocalBlobStore(tmp_path).move("entrada", "NO.REM", "procesando")
