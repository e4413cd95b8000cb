"""
Punto de entrada CLI: cnab-extractor.

Uso:
    # Revisar un archivo sin publicar nada (bus en memoria) y generar Excel
    cnab-extractor /ruta/COB240101.REM --type BANKSLIP --report /ruta/boletos.xlsx

    # Publicar en Pub/Sub (usa las credenciales por defecto de gcloud)
    cnab-extractor /ruta/COB240101.REM --type BANKSLIP --project mi-proyecto --topic boletos

    # Igual que la Cloud Function: mover el archivo por las etapas
    # (carpetas hermanas 'procesando/' y 'procesados/')
    cnab-extractor /ruta/entrada/COB240101.REM --type BANKSLIP --stages

Códigos de salida:
    0  todo publicado
    1  el archivo no se pudo leer o algún lote no se publicó
    2  se publicó todo pero algún move entre etapas falló

Este módulo es el ÚNICO lugar (junto con la Cloud Function) donde se
ensamblan los componentes. No contiene lógica de negocio.
"""

import argparse
import sys
from pathlib import Path

from cnab_extractor.adapters.input.blob_stores.local_blob_store import LocalBlobStore
from cnab_extractor.adapters.output.event_buses.in_memory_event_bus import InMemoryEventBus
from cnab_extractor.adapters.output.loggers.console_logger import ConsoleLogger
from cnab_extractor.adapters.output.writers.excel_writer import ExcelReportWriter
from cnab_extractor.domain.exceptions import CnabBaseError
from cnab_extractor.domain.models.invocation import InvocationContext, StorageEvent
from cnab_extractor.domain.ports.event_bus import EventBus
from cnab_extractor.domain.services.batch_publisher import BatchPublishPipeline
from cnab_extractor.domain.services.file_processor import CnabFileProcessor
from cnab_extractor.domain.services.record_decoder import iter_details, normalize
from cnab_extractor.infrastructure.settings import DEFAULT_BANKSLIP_BLOCK, DEFAULT_LINE_LENGTH

PROCESSING_DIR = "procesando"
FINAL_DIR = "procesados"


def main(argv: list[str] | None = None) -> int:
    """Punto de entrada principal del CLI."""
    args = _parse_args(argv)
    input_path = Path(args.input_path)

    if not input_path.is_file():
        print(f"❌ El archivo no existe: {input_path}")
        return 1

    # --- Ensamblar componentes ---
    logger = ConsoleLogger()
    event_bus = _build_event_bus(args)
    topic = args.topic or "dry-run"
    pipeline = BatchPublishPipeline(event_bus=event_bus, topic=topic, logger=logger)

    print("=" * 60)
    print("CNAB EXTRACTOR")
    print("=" * 60)
    print(f"  Entrada:        {input_path}")
    print(f"  Largo de línea: {args.line_length}")
    print(f"  Boletos/lote:   {args.batch_size}")
    print(f"  Destino:        {topic if args.topic else 'en memoria (dry-run)'}")
    print()

    # El Excel se arma re-decodificando el archivo (el decoder es puro),
    # así que el contenido se lee aquí antes de que --stages lo mueva.
    raw = input_path.read_bytes()
    ctx = InvocationContext(
        file_name=input_path.name,
        line_length=args.line_length,
        max_batch_size=args.batch_size,
        bank_slip_type=args.bank_slip_type,
    )

    try:
        if args.stages:
            blob_store = LocalBlobStore(input_path.parent.parent)
            processor = CnabFileProcessor(
                blob_store=blob_store,
                pipeline=pipeline,
                logger=logger,
                processing_bucket=PROCESSING_DIR,
                final_bucket=FINAL_DIR,
                line_length=args.line_length,
                max_batch_size=args.batch_size,
                bank_slip_type=args.bank_slip_type,
            )
            result = processor.handle(StorageEvent(bucket=input_path.parent.name, name=input_path.name))
            outcome = result.outcome
            exit_code = 0 if result.ok else (2 if result.published else 1)
        else:
            outcome = pipeline.run(raw, ctx)
            exit_code = 0 if outcome.success else 1

        if args.report:
            details = list(iter_details(normalize(raw), ctx))
            report = ExcelReportWriter().write(details, Path(args.report), outcome)
            print(f"\n📁 Excel generado: {report}")
    except CnabBaseError as e:
        logger.log_error(input_path.name, e)
        exit_code = 1

    logger.print_summary()
    return exit_code


def _build_event_bus(args: argparse.Namespace) -> EventBus:
    if not args.topic:
        return InMemoryEventBus()
    # Import tardío: sin --topic no hace falta inicializar el cliente de Pub/Sub.
    from cnab_extractor.adapters.output.event_buses.pubsub_event_bus import PubSubEventBus

    return PubSubEventBus(args.project)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    """Parsea los argumentos de línea de comandos."""
    parser = argparse.ArgumentParser(
        description="Extrae los boletos de un archivo CNAB y los publica en lotes",
        epilog="Ejemplo: cnab-extractor COB240101.REM --type BANKSLIP --report boletos.xlsx",
    )

    parser.add_argument("input_path", help="Ruta al archivo CNAB")

    parser.add_argument(
        "--type",
        dest="bank_slip_type",
        required=True,
        help="Etiqueta 'type' que se pone en cada boleto",
    )
    parser.add_argument(
        "--line-length",
        type=int,
        default=DEFAULT_LINE_LENGTH,
        help=f"Largo fijo de cada línea (por defecto {DEFAULT_LINE_LENGTH})",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=DEFAULT_BANKSLIP_BLOCK,
        help=f"Boletos máximos por mensaje (por defecto {DEFAULT_BANKSLIP_BLOCK})",
    )
    parser.add_argument("--project", help="Proyecto de GCP del tópico")
    parser.add_argument(
        "--topic",
        help="Tópico de Pub/Sub. Si no se especifica, los lotes se publican en memoria (dry-run).",
    )
    parser.add_argument("--report", help="Ruta del Excel con los boletos decodificados")
    parser.add_argument(
        "--stages",
        action="store_true",
        help=f"Mover el archivo a '{PROCESSING_DIR}/' y luego a '{FINAL_DIR}/' "
        "(carpetas hermanas de la del archivo), igual que la Cloud Function",
    )

    args = parser.parse_args(argv)
    if args.topic and not args.project:
        parser.error("--topic requiere --project")
    if args.line_length <= 0 or args.batch_size <= 0:
        parser.error("--line-length y --batch-size deben ser positivos")
    return args


if __name__ == "__main__":
    sys.exit(main())
