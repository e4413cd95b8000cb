"""
Tests para Settings.from_env.
"""

import pytest

from cnab_extractor.domain.exceptions import ConfigurationError
from cnab_extractor.infrastructure.settings import Settings

BASE_ENV = {
    "PROJECT": "mi-proyecto",
    "TOPIC": "boletos",
    "PROCESSING_BUCKET": "cnab-procesando",
    "FINAL_BUCKET": "cnab-procesados",
    "BANKSLIP_TYPE": "BANKSLIP",
}


class TestSettings:
    """Pruebas para la lectura de variables de entorno."""

    def test_valores_por_defecto(self):
        settings = Settings.from_env(BASE_ENV)
        assert settings.line_length == 400
        assert settings.max_batch_size == 100
        assert settings.topic == "boletos"

    def test_enteros_configurables(self):
        settings = Settings.from_env({**BASE_ENV, "LINE_LENGTH": "240", "BANKSLIP_BLOCK": "50"})
        assert settings.line_length == 240
        assert settings.max_batch_size == 50

    def test_topic_test_como_alias(self):
        env = {k: v for k, v in BASE_ENV.items() if k != "TOPIC"}
        assert Settings.from_env({**env, "TOPIC_TEST": "boletos-test"}).topic == "boletos-test"

    def test_topic_tiene_prioridad(self):
        assert Settings.from_env({**BASE_ENV, "TOPIC_TEST": "otro"}).topic == "boletos"

    @pytest.mark.parametrize("faltante", ["PROJECT", "TOPIC", "PROCESSING_BUCKET", "FINAL_BUCKET"])
    def test_variable_obligatoria(self, faltante):
        env = {k: v for k, v in BASE_ENV.items() if k != faltante}
        with pytest.raises(ConfigurationError) as exc_info:
            Settings.from_env(env)
        assert exc_info.value.parametro == faltante

    @pytest.mark.parametrize("valor", ["abc", "0", "-5", "1.5"])
    def test_entero_invalido(self, valor):
        with pytest.raises(ConfigurationError, match="BANKSLIP_BLOCK"):
            Settings.from_env({**BASE_ENV, "BANKSLIP_BLOCK": valor})

    def test_lee_os_environ(self, monkeypatch):
        for key, value in BASE_ENV.items():
            monkeypatch.setenv(key, value)
        monkeypatch.setenv("LINE_LENGTH", "400")
        assert Settings.from_env().project == "mi-proyecto"
