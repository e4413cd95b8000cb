"""
Servicio de dominio: Pipeline de publicación por lotes.

Orquesta la parte central del procesamiento de un archivo:
1. Normaliza el contenido y cuenta las líneas (< 3 → no-op).
2. Lee la cuenta del encabezado.
3. Decodifica perezosamente los boletos (record_decoder).
4. Los agrupa en lotes acotados (batcher).
5. Publica cada lote como UN mensaje, con la política de reintentos.
6. Devuelve el resultado agregado (PublishOutcome).

Los lotes se publican de a uno y cada publish se espera antes de seguir,
porque la condición de cierre de lote y la regla de "parar ante el primer
fallo" dependen del orden estricto.

¿Qué pasa si un publish falla?
El archivo queda FAILED y se deja de procesar EN ESE MOMENTO: no se
decodifican más líneas ni se arman más lotes. Los lotes ya publicados NO
se deshacen; el archivo se queda en la etapa de procesamiento para que
alguien lo revise y reprocese.
"""

import json
from collections.abc import Sequence

from cnab_extractor.domain.exceptions import PublishError
from cnab_extractor.domain.models.bank_slip import BankSlipDetail
from cnab_extractor.domain.models.invocation import InvocationContext
from cnab_extractor.domain.models.publish_outcome import PipelineState, PublishOutcome
from cnab_extractor.domain.models.retry_policy import DEFAULT_RETRY_POLICY, RetryPolicy
from cnab_extractor.domain.ports.event_bus import EventBus
from cnab_extractor.domain.ports.process_logger import ProcessLogger
from cnab_extractor.domain.services.batcher import iter_batches
from cnab_extractor.domain.services.record_decoder import (
    MIN_LINES,
    iter_details,
    line_count,
    normalize,
)


def serialize_batch(batch: Sequence[BankSlipDetail]) -> bytes:
    """Serializa un lote como arreglo JSON en UTF-8 (el payload del mensaje).

    Formato compacto (sin espacios), igual al que ya consumen los
    suscriptores del tópico.
    """
    payloads = [detail.to_payload() for detail in batch]
    return json.dumps(payloads, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


class BatchPublishPipeline:
    """Publica los boletos de un archivo en lotes.

    Recibe sus dependencias por constructor (Dependency Injection). No
    guarda estado de ningún archivo: todo lo de una invocación vive en el
    InvocationContext y en variables locales de run(). Por eso una misma
    instancia puede atender varias invocaciones a la vez.
    """

    def __init__(
        self,
        event_bus: EventBus,
        topic: str,
        logger: ProcessLogger,
        retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    ) -> None:
        """
        Args:
            event_bus: Adaptador del bus donde se publican los lotes.
            topic: Tópico destino.
            logger: Bitácora de procesamiento.
            retry_policy: Política aplicada a CADA publicación.
        """
        self._event_bus = event_bus
        self._topic = topic
        self._logger = logger
        self._retry_policy = retry_policy

    def run(self, raw: bytes | str, ctx: InvocationContext) -> PublishOutcome:
        """Procesa el contenido completo de un archivo.

        Args:
            raw: Contenido del archivo tal como se leyó del storage.
            ctx: Contexto de la invocación.

        Returns:
            PublishOutcome con lotes y boletos enviados y el estado final.

        Raises:
            RecordDecodeError: Si una línea de detalle no se puede decodificar.
                               Es fatal para la invocación.
        """
        buffer = normalize(raw)
        total_lines = line_count(buffer, ctx.line_length)

        if total_lines < MIN_LINES:
            self._logger.log_no_content(
                ctx.file_name, f"{total_lines} líneas (mínimo {MIN_LINES})"
            )
            return PublishOutcome(
                file_name=ctx.file_name,
                total_lines=total_lines,
                batches_sent=0,
                details_sent=0,
                state=PipelineState.COMPLETED,
                skipped=True,
            )

        self._logger.log_lines_retrieved(ctx.file_name, total_lines)

        expected = total_lines - 2
        message_ids: list[str] = []
        details_sent = 0
        state = PipelineState.ACCUMULATING

        batches = iter_batches(iter_details(buffer, ctx), expected, ctx.max_batch_size)
        for batch in batches:
            state = PipelineState.PUBLISHING
            try:
                message_id = self._event_bus.publish(
                    self._topic, serialize_batch(batch), self._retry_policy
                )
            except PublishError as e:
                state = PipelineState.FAILED
                self._logger.log_publish_failed(ctx.file_name, len(message_ids) + 1, e)
                break

            message_ids.append(message_id)
            details_sent += len(batch)
            state = PipelineState.ACCUMULATING
            self._logger.log_batch_published(
                ctx.file_name,
                message_id,
                len(message_ids),
                len(batch),
                details_sent,
                expected,
            )

        if state is not PipelineState.FAILED:
            state = PipelineState.COMPLETED
            if details_sent != expected:
                self._logger.log_detail_count_mismatch(ctx.file_name, expected, details_sent)

        self._logger.log_file_completed(
            ctx.file_name, len(message_ids), details_sent, state is PipelineState.COMPLETED
        )
        return PublishOutcome(
            file_name=ctx.file_name,
            total_lines=total_lines,
            batches_sent=len(message_ids),
            details_sent=details_sent,
            state=state,
            message_ids=tuple(message_ids),
        )
