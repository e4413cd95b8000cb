"""
Modelo de dominio: Referencia de la cuenta beneficiaria.

Se extrae UNA sola vez por archivo (del encabezado) y se comparte por
referencia entre todos los boletos del archivo. Por eso es frozen: si un
boleto pudiera modificarla, cambiaría la cuenta de todos los demás.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AccountRef:
    """Cuenta y agencia tal como vienen en el archivo CNAB."""

    number: str
    """Número de cuenta. Se guarda como string (no int) porque tiene ceros
    a la izquierda y el dígito verificador pegado al final."""

    branch: str
    """Agencia. Mismo razonamiento que number."""

    def to_payload(self) -> dict[str, str]:
        return {"number": self.number, "branch": self.branch}
