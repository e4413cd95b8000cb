"""
Adaptador de salida: Reporte de boletos en Excel.

Genera un archivo Excel con el layout de 2 hojas:
- Hoja 1 (Resumen): archivo, cuenta, boletos, monto total y, si hubo
  publicación, lotes enviados y estado.
- Hoja 2 (Boletos): una fila por boleto con los campos decodificados.

Se usa desde el CLI para revisar un archivo CNAB antes de publicarlo
(--dry-run) o para dejar constancia de lo que se publicó.
"""

from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from cnab_extractor.domain.exceptions import ReportError
from cnab_extractor.domain.models.bank_slip import BankSlipDetail
from cnab_extractor.domain.models.publish_outcome import PublishOutcome
from cnab_extractor.domain.ports.report_writer import ReportWriter
from cnab_extractor.domain.shared.amount import cents_to_decimal

BOLETOS_COLUMNS = [
    "Archivo",
    "Agencia",
    "Cuenta",
    "Código de control",
    "Nuestro número",
    "Alias",
    "Número de documento",
    "Vencimiento",
    "Monto",
    "Documento pagador",
    "Nombre",
    "Dirección",
    "Ciudad",
    "UF",
    "CEP",
    "Tipo",
]


class ExcelReportWriter(ReportWriter):
    """Genera reportes Excel de boletos con formato estandarizado."""

    def write(
        self,
        details: Sequence[BankSlipDetail],
        output_path: Path,
        outcome: PublishOutcome | None = None,
    ) -> Path:
        """Escribe el reporte de un archivo.

        Args:
            details: Boletos decodificados.
            output_path: Ruta donde crear el archivo. Si no termina en .xlsx,
                        se le agrega la extensión.
            outcome: Resultado de la publicación (None en --dry-run sin bus).

        Returns:
            Ruta del archivo creado.

        Raises:
            ReportError: Si no se puede crear el directorio o escribir el archivo.
        """
        # Asegurar extensión .xlsx
        if output_path.suffix.lower() != ".xlsx":
            output_path = output_path.with_suffix(".xlsx")

        df_boletos = self.boletos_frame(details)
        df_resumen = self.resumen_frame(details, outcome)

        try:
            self._write_workbook(df_resumen, df_boletos, output_path)
        except Exception as e:
            raise ReportError(str(output_path), str(e)) from e

        return output_path

    @staticmethod
    def _write_workbook(df_resumen: pd.DataFrame, df_boletos: pd.DataFrame, output_path: Path) -> None:
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with pd.ExcelWriter(output_path, engine="xlsxwriter") as writer:
            df_resumen.to_excel(writer, index=False, sheet_name="Resumen")
            df_boletos.to_excel(writer, index=False, sheet_name="Boletos")

            workbook = writer.book
            ws_resumen = writer.sheets["Resumen"]
            ws_boletos = writer.sheets["Boletos"]

            # Formato para texto (mantener ceros iniciales en cuenta, documento, CEP)
            text_format = workbook.add_format({"num_format": "@"})

            # Formato para montos (2 decimales con separador de miles)
            money_format = workbook.add_format({"num_format": "#,##0.00"})

            # --- Formato Hoja Resumen ---
            ws_resumen.set_column("A:A", 30)  # Archivo
            ws_resumen.set_column("B:C", 14, text_format)  # Agencia / Cuenta
            ws_resumen.set_column("D:D", 10)  # Boletos
            ws_resumen.set_column("E:E", 18, money_format)  # Monto total
            ws_resumen.set_column("F:H", 14)  # Lotes / Enviados / Estado

            # --- Formato Hoja Boletos ---
            ws_boletos.set_column("A:A", 30)  # Archivo
            ws_boletos.set_column("B:G", 16, text_format)  # Identificadores
            ws_boletos.set_column("H:H", 12, text_format)  # Vencimiento
            ws_boletos.set_column("I:I", 15, money_format)  # Monto
            ws_boletos.set_column("J:J", 16, text_format)  # Documento
            ws_boletos.set_column("K:L", 40)  # Nombre / Dirección
            ws_boletos.set_column("M:N", 15)  # Ciudad / UF
            ws_boletos.set_column("O:O", 10, text_format)  # CEP
            ws_boletos.set_column("P:P", 14)  # Tipo

    @staticmethod
    def boletos_frame(details: Sequence[BankSlipDetail]) -> pd.DataFrame:
        """Una fila por boleto. Los textos se recortan para lectura."""
        filas = []
        for detail in details:
            data = detail.data
            filas.append(
                {
                    "Archivo": detail.cnab_file_name,
                    "Agencia": data.account.branch,
                    "Cuenta": data.account.number,
                    "Código de control": detail.control_code.strip(),
                    "Nuestro número": detail.your_number.strip(),
                    "Alias": data.alias.strip(),
                    "Número de documento": data.document_number.strip(),
                    "Vencimiento": data.due_date,
                    # Excel solo maneja float; el valor ya viene redondeado a centavos
                    "Monto": float(data.amount),
                    "Documento pagador": data.payer.document,
                    "Nombre": data.payer.name.strip(),
                    "Dirección": data.payer.address.address_line.strip(),
                    "Ciudad": data.payer.address.city.strip(),
                    "UF": data.payer.address.state,
                    "CEP": data.payer.address.zip_code,
                    "Tipo": data.type,
                }
            )
        return pd.DataFrame(filas, columns=BOLETOS_COLUMNS)

    @staticmethod
    def resumen_frame(
        details: Sequence[BankSlipDetail],
        outcome: PublishOutcome | None,
    ) -> pd.DataFrame:
        """Una fila con los totales del archivo."""
        total_cents = sum(d.data.amount_cents for d in details)
        primero = details[0] if details else None
        fila = {
            "Archivo": primero.cnab_file_name if primero else (outcome.file_name if outcome else ""),
            "Agencia": primero.data.account.branch if primero else "",
            "Cuenta": primero.data.account.number if primero else "",
            "Boletos": len(details),
            "Monto total": float(cents_to_decimal(total_cents)),
            "Lotes enviados": outcome.batches_sent if outcome else 0,
            "Boletos enviados": outcome.details_sent if outcome else 0,
            "Estado": outcome.state.value if outcome else "no publicado",
        }
        return pd.DataFrame([fila])
