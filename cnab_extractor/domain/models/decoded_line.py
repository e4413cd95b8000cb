"""
Modelo de dominio: Resultado de clasificar una línea del archivo.

Cada línea produce un DecodedLine. Solo las de marcador '7' traen detail;
el resto (encabezado '0', trailer '9', u otros) solo trae el marcador y
se cuenta para el total de líneas pero no se publica.
"""

from dataclasses import dataclass

from cnab_extractor.domain.models.bank_slip import BankSlipDetail

DETAIL_MARKER = "7"


@dataclass(frozen=True)
class DecodedLine:
    """Una línea clasificada."""

    index: int
    """Posición de la línea en el archivo (0 = encabezado)."""

    marker: str
    detail: BankSlipDetail | None = None

    @property
    def is_detail(self) -> bool:
        return self.detail is not None
