"""
Configuración del servicio, leída de variables de entorno.

Variables:
    PROJECT             Proyecto de GCP dueño del tópico.
    TOPIC               Tópico de Pub/Sub donde se publican los lotes.
    PROCESSING_BUCKET   Bucket de la etapa "procesando".
    FINAL_BUCKET        Bucket de la etapa "procesado".
    LINE_LENGTH         Largo fijo de cada línea (por defecto 400, CNAB 400).
    BANKSLIP_BLOCK      Boletos máximos por mensaje (por defecto 100).
    BANKSLIP_TYPE       Etiqueta 'type' de cada boleto.

TOPIC_TEST se acepta como alias de TOPIC, que es el nombre con el que
quedaron configuradas las funciones ya desplegadas.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from cnab_extractor.domain.exceptions import ConfigurationError

DEFAULT_LINE_LENGTH = 400
DEFAULT_BANKSLIP_BLOCK = 100


@dataclass(frozen=True)
class Settings:
    """Parámetros de despliegue. Se leen una vez al arrancar."""

    project: str
    topic: str
    processing_bucket: str
    final_bucket: str
    bank_slip_type: str
    line_length: int = DEFAULT_LINE_LENGTH
    max_batch_size: int = DEFAULT_BANKSLIP_BLOCK

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Construye la configuración desde el entorno.

        Args:
            environ: Mapeo de variables. Por defecto os.environ.

        Raises:
            ConfigurationError: Si falta una variable obligatoria o un
                                entero no es válido.
        """
        env = os.environ if environ is None else environ
        return cls(
            project=_required(env, "PROJECT"),
            topic=_topic(env),
            processing_bucket=_required(env, "PROCESSING_BUCKET"),
            final_bucket=_required(env, "FINAL_BUCKET"),
            bank_slip_type=_required(env, "BANKSLIP_TYPE"),
            line_length=_positive_int(env, "LINE_LENGTH", DEFAULT_LINE_LENGTH),
            max_batch_size=_positive_int(env, "BANKSLIP_BLOCK", DEFAULT_BANKSLIP_BLOCK),
        )


def _required(env: Mapping[str, str], name: str) -> str:
    value = env.get(name, "").strip()
    if not value:
        raise ConfigurationError(name, "variable de entorno obligatoria no definida")
    return value


def _topic(env: Mapping[str, str]) -> str:
    topic = env.get("TOPIC", "").strip() or env.get("TOPIC_TEST", "").strip()
    if not topic:
        raise ConfigurationError("TOPIC", "variable de entorno obligatoria no definida")
    return topic


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(name, f"se esperaba un entero, se recibió '{raw}'")
    if value <= 0:
        raise ConfigurationError(name, f"debe ser positivo, se recibió {value}")
    return value
