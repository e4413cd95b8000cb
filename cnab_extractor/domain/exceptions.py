"""
Excepciones de dominio del proyecto cnab-extractor.

¿Por qué excepciones propias en lugar de usar ValueError/RuntimeError?
Porque permiten que el orquestador (CnabFileProcessor) distinga entre
"no pude leer el archivo del bucket" y "Pub/Sub rechazó el lote" y tome
acciones diferentes para cada caso (abortar sin mover el archivo vs
dejarlo en la etapa de procesamiento para reproceso manual).

Jerarquía:
    CnabBaseError
    ├── ConfigurationError     → Configuración inválida o faltante
    ├── RecordDecodeError      → Una línea de detalle no se puede decodificar
    ├── BlobStoreError         → Error al leer o mover un objeto del storage
    ├── PublishError           → Pub/Sub falló después de agotar reintentos
    └── ReportError            → No se pudo escribir el reporte Excel
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cnab_extractor.domain.models.retry_policy import StatusCode


class CnabBaseError(Exception):
    """Excepción base del proyecto. Todas las demás heredan de esta."""


class ConfigurationError(CnabBaseError):
    """Se lanza cuando un parámetro de configuración es inválido.

    Ejemplos:
    - LINE_LENGTH no es un entero o es <= 0.
    - BANKSLIP_BLOCK es 0 (no se podría formar ningún lote).
    - Falta el tópico de Pub/Sub.
    """

    def __init__(self, parametro: str, detalle: str):
        self.parametro = parametro
        self.detalle = detalle
        super().__init__(f"Configuración inválida '{parametro}': {detalle}")


class RecordDecodeError(CnabBaseError):
    """Se lanza cuando una línea de detalle (marcador '7') no se puede decodificar.

    Esto puede pasar porque:
    - La línea es más corta que la región que se decodifica.
    - Los dígitos del monto no son numéricos.

    Es fatal para toda la invocación: no se intenta recuperar línea por línea.
    """

    def __init__(self, line_index: int, campo: str, causa: str):
        self.line_index = line_index
        self.campo = campo
        self.causa = causa
        super().__init__(f"Error decodificando línea {line_index} (campo '{campo}'): {causa}")


class BlobStoreError(CnabBaseError):
    """Se lanza cuando falla una operación contra el blob store.

    Esto puede pasar porque:
    - El objeto no existe (fue movido por otra invocación).
    - No hay permisos sobre el bucket.
    - Error de red con el storage.
    """

    def __init__(self, operacion: str, bucket: str, key: str, causa: str):
        self.operacion = operacion
        self.bucket = bucket
        self.key = key
        self.causa = causa
        super().__init__(f"Error en {operacion} de '{bucket}/{key}': {causa}")


class PublishError(CnabBaseError):
    """Se lanza cuando la publicación de un lote falla de forma definitiva.

    "Definitiva" significa que la política de reintentos ya se agotó, o que
    el código de estado no es reintentable (ej: PERMISSION_DENIED).
    """

    def __init__(self, topic: str, status: "StatusCode", causa: str = ""):
        self.topic = topic
        self.status = status
        self.causa = causa
        mensaje = f"Error publicando en '{topic}' ({status.name})"
        if causa:
            mensaje += f": {causa}"
        super().__init__(mensaje)


class ReportError(CnabBaseError):
    """Se lanza cuando no se puede generar el reporte Excel.

    Esto puede pasar porque:
    - El directorio de salida no se puede crear (ej: hay un archivo con ese nombre).
    - No hay permisos de escritura.
    - El archivo está abierto en otro programa.
    """

    def __init__(self, ruta_salida: str, causa: str):
        self.ruta_salida = ruta_salida
        self.causa = causa
        super().__init__(f"Error generando el reporte en '{ruta_salida}': {causa}")
