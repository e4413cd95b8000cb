"""
Adaptador de salida: Logger a consola.

Implementación simple de ProcessLogger que imprime eventos a stdout, con
un formato consistente y un resumen final.

Útil para:
- Corridas locales desde el CLI.
- Desarrollo y debugging.

En la Cloud Function se usa LoggingProcessLogger, que implementa la misma
interfaz sobre el módulo logging.
"""

from cnab_extractor.domain.ports.process_logger import ProcessLogger


class ConsoleLogger(ProcessLogger):
    """Logger que imprime eventos de procesamiento a consola."""

    def __init__(self) -> None:
        self._archivos_recibidos: int = 0
        self._archivos_completados: int = 0
        self._archivos_fallidos: int = 0
        self._lotes_publicados: int = 0
        self._boletos_publicados: int = 0
        self._errores: list[dict] = []

    # --- Recepción ---

    def log_file_received(self, bucket: str, file_name: str) -> None:
        self._archivos_recibidos += 1
        print(f"  📄 Recibido: {file_name} ({bucket})")

    def log_no_content(self, file_name: str, reason: str) -> None:
        print(f"  ⏭️  Sin contenido procesable: {file_name}: {reason}")

    def log_lines_retrieved(self, file_name: str, num_lines: int) -> None:
        print(f"  🔍 Líneas leídas de {file_name}: {num_lines}")

    # --- Publicación ---

    def log_batch_published(
        self,
        file_name: str,
        message_id: str,
        message_number: int,
        batch_size: int,
        sent_so_far: int,
        expected: int,
    ) -> None:
        self._lotes_publicados += 1
        self._boletos_publicados += batch_size
        print(
            f"  ✅ Mensaje {message_id} publicado. "
            f"Boletos enviados = {sent_so_far}/{expected} - mensaje #{message_number}"
        )

    def log_publish_failed(self, file_name: str, message_number: int, error: Exception) -> None:
        self._errores.append({"archivo": file_name, "error": f"lote #{message_number}: {error}"})
        print(f"  ❌ Error publicando lote #{message_number} de {file_name}: {error}")

    def log_detail_count_mismatch(self, file_name: str, expected: int, actual: int) -> None:
        print(
            f"  ⚠️  Discrepancia en {file_name}: "
            f"boletos esperados: {expected}, encontrados: {actual}"
        )

    def log_file_completed(self, file_name: str, batches_sent: int, details_sent: int, success: bool) -> None:
        if success:
            self._archivos_completados += 1
        else:
            self._archivos_fallidos += 1
        estado = "completo" if success else "INCOMPLETO"
        print(f"  📦 {file_name}: {batches_sent} mensajes, {details_sent} boletos ({estado})")

    # --- Storage ---

    def log_move_failed(self, file_name: str, destination_bucket: str, error: Exception) -> None:
        self._errores.append({"archivo": file_name, "error": f"move a {destination_bucket}: {error}"})
        print(f"  ⚠️  No se pudo mover {file_name} a {destination_bucket}: {error}")

    def log_error(self, file_name: str, error: Exception) -> None:
        self._errores.append({"archivo": file_name, "error": str(error)})
        print(f"  ❌ Error: {file_name}: {error}")

    # --- Resumen ---

    def get_summary(self) -> dict:
        return {
            "archivos_recibidos": self._archivos_recibidos,
            "archivos_completados": self._archivos_completados,
            "archivos_fallidos": self._archivos_fallidos,
            "lotes_publicados": self._lotes_publicados,
            "boletos_publicados": self._boletos_publicados,
            "errores": self._errores,
        }

    def print_summary(self) -> None:
        """Imprime el resumen final del procesamiento."""
        print("\n" + "=" * 60)
        print("RESUMEN DE PROCESAMIENTO")
        print("=" * 60)
        print(f"  Archivos recibidos:   {self._archivos_recibidos}")
        print(f"  Archivos completados: {self._archivos_completados}")
        print(f"  Archivos fallidos:    {self._archivos_fallidos}")
        print(f"  Lotes publicados:     {self._lotes_publicados}")
        print(f"  Boletos publicados:   {self._boletos_publicados}")

        if self._errores:
            print("\n  ERRORES:")
            for err in self._errores:
                print(f"    - {err['archivo']}: {err['error']}")

        print("=" * 60)
