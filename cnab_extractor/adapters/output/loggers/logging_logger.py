"""
Adaptador de salida: Logger sobre el módulo logging.

Implementación de ProcessLogger para la Cloud Function. El runtime de
Cloud Functions envía a Cloud Logging todo lo que se escribe en
stdout/stderr, y respeta el nivel (INFO, WARNING, ERROR) cuando la línea
sale de un handler de logging.

A diferencia de ConsoleLogger, los contadores del resumen son por
instancia y la Cloud Function crea una instancia por invocación, así que
el resumen corresponde a un solo archivo.
"""

import logging

from cnab_extractor.domain.ports.process_logger import ProcessLogger

_log = logging.getLogger("cnab_extractor")


class LoggingProcessLogger(ProcessLogger):
    """Escribe los eventos de procesamiento con logging."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._log = logger if logger is not None else _log
        self._summary: dict = {
            "archivos_recibidos": 0,
            "archivos_completados": 0,
            "archivos_fallidos": 0,
            "lotes_publicados": 0,
            "boletos_publicados": 0,
            "errores": [],
        }

    def log_file_received(self, bucket: str, file_name: str) -> None:
        self._summary["archivos_recibidos"] += 1
        self._log.info("Evento recibido. Archivo: %s (bucket %s)", file_name, bucket)

    def log_no_content(self, file_name: str, reason: str) -> None:
        self._log.info("Datos no disponibles en %s: %s", file_name, reason)

    def log_lines_retrieved(self, file_name: str, num_lines: int) -> None:
        self._log.info("Líneas leídas de %s: %d", file_name, num_lines)

    def log_batch_published(
        self,
        file_name: str,
        message_id: str,
        message_number: int,
        batch_size: int,
        sent_so_far: int,
        expected: int,
    ) -> None:
        self._summary["lotes_publicados"] += 1
        self._summary["boletos_publicados"] += batch_size
        self._log.info(
            "Mensaje %s publicado. Boletos enviados = %d/%d - mensaje #%d",
            message_id,
            sent_so_far,
            expected,
            message_number,
        )

    def log_publish_failed(self, file_name: str, message_number: int, error: Exception) -> None:
        self._summary["errores"].append({"archivo": file_name, "error": str(error)})
        self._log.error(
            "Error publicando el lote #%d de %s en pub/sub",
            message_number,
            file_name,
            exc_info=error,
        )

    def log_detail_count_mismatch(self, file_name: str, expected: int, actual: int) -> None:
        self._log.warning(
            "%s: se esperaban %d boletos (líneas - 2) y se publicaron %d",
            file_name,
            expected,
            actual,
        )

    def log_file_completed(self, file_name: str, batches_sent: int, details_sent: int, success: bool) -> None:
        key = "archivos_completados" if success else "archivos_fallidos"
        self._summary[key] += 1
        level = logging.INFO if success else logging.ERROR
        self._log.log(
            level,
            "Total de boletos enviados de %s: %d en %d mensajes (éxito=%s)",
            file_name,
            details_sent,
            batches_sent,
            success,
        )

    def log_move_failed(self, file_name: str, destination_bucket: str, error: Exception) -> None:
        self._summary["errores"].append({"archivo": file_name, "error": str(error)})
        self._log.error("No se pudo mover %s a %s", file_name, destination_bucket, exc_info=error)

    def log_error(self, file_name: str, error: Exception) -> None:
        self._summary["errores"].append({"archivo": file_name, "error": str(error)})
        self._log.error("Error procesando %s", file_name, exc_info=error)

    def get_summary(self) -> dict:
        return {**self._summary, "errores": list(self._summary["errores"])}
