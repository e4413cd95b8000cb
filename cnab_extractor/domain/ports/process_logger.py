"""
Puerto de salida: Bitácora de procesamiento (Process Logger).

Define el contrato para registrar eventos durante el procesamiento de un
archivo CNAB.

¿Por qué no usar simplemente el módulo `logging` de Python?
Porque `logging` es una herramienta de infraestructura (HOW), mientras que
este puerto define los EVENTOS de negocio (WHAT):
- "Se publicó el lote #3 con 100 boletos" (no "INFO: published")
- "No se pudo mover el archivo a la etapa final" (no "ERROR: move")

La implementación puede usar `logging` internamente (LoggingProcessLogger,
para la Cloud Function), pero el dominio solo conoce los eventos. Esto
permite:
- En la Cloud Function: logging estándar, que Cloud Logging recoge.
- En el CLI: imprimir a consola con un resumen final.
- En tests: acumular en memoria y hacer asserts.
"""

from abc import ABC, abstractmethod


class ProcessLogger(ABC):
    """Interfaz para la bitácora de procesamiento."""

    # --- Recepción ---

    @abstractmethod
    def log_file_received(self, bucket: str, file_name: str) -> None:
        """Registra que llegó un evento de archivo creado."""
        ...

    @abstractmethod
    def log_no_content(self, file_name: str, reason: str) -> None:
        """Registra que el archivo no tiene contenido procesable (no-op).

        Args:
            file_name: Nombre del archivo.
            reason: Ej: "archivo vacío", "2 líneas (mínimo 3)".
        """
        ...

    @abstractmethod
    def log_lines_retrieved(self, file_name: str, num_lines: int) -> None:
        """Registra cuántas líneas de ancho fijo tiene el archivo."""
        ...

    # --- Publicación ---

    @abstractmethod
    def log_batch_published(
        self,
        file_name: str,
        message_id: str,
        message_number: int,
        batch_size: int,
        sent_so_far: int,
        expected: int,
    ) -> None:
        """Registra un lote publicado.

        Args:
            message_id: ID devuelto por el event bus.
            message_number: Número de lote, empezando en 1.
            batch_size: Boletos en este lote.
            sent_so_far: Boletos publicados acumulados (incluye este lote).
            expected: Boletos esperados (líneas - 2).
        """
        ...

    @abstractmethod
    def log_publish_failed(self, file_name: str, message_number: int, error: Exception) -> None:
        """Registra que un lote no se pudo publicar. El archivo queda FAILED."""
        ...

    @abstractmethod
    def log_detail_count_mismatch(self, file_name: str, expected: int, actual: int) -> None:
        """Registra que los boletos encontrados no coinciden con líneas - 2.

        Indica que el archivo no tiene exactamente un encabezado y un trailer.
        """
        ...

    @abstractmethod
    def log_file_completed(self, file_name: str, batches_sent: int, details_sent: int, success: bool) -> None:
        """Registra el fin del procesamiento de un archivo."""
        ...

    # --- Storage ---

    @abstractmethod
    def log_move_failed(self, file_name: str, destination_bucket: str, error: Exception) -> None:
        """Registra que un move falló. No aborta el pipeline."""
        ...

    @abstractmethod
    def log_error(self, file_name: str, error: Exception) -> None:
        """Registra un error que aborta el procesamiento del archivo.

        Se espera que la implementación capture el traceback completo
        para facilitar debugging.
        """
        ...

    # --- Resumen ---

    @abstractmethod
    def get_summary(self) -> dict:
        """Devuelve un resumen de todo lo registrado.

        Returns:
            Diccionario con métricas:
            {
                'archivos_recibidos': int,
                'archivos_completados': int,
                'archivos_fallidos': int,
                'lotes_publicados': int,
                'boletos_publicados': int,
                'errores': List[dict],  # [{archivo, error}]
            }
        """
        ...
