"""
Modelo de dominio: Boleto (bank slip) decodificado de una línea de detalle.

Un BankSlipDetail es la unidad que se publica downstream. Su forma en el
mensaje (to_payload) es el contrato con los consumidores de Pub/Sub, por
eso las claves del payload van en camelCase aunque los atributos de
Python vayan en snake_case.

Decisiones de diseño:
- El monto se guarda como ENTERO de centavos (amount_cents). Un float
  acumula errores de redondeo; el entero es exacto. Solo se convierte a
  Decimal (propiedad amount) y a número JSON (to_payload) en el borde.
- Todos los campos de texto son substrings crudos de la línea (con el
  relleno de espacios o ceros del formato). No se hace strip: el
  consumidor recibe exactamente lo que venía en el archivo.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from cnab_extractor.domain.models.account_ref import AccountRef
from cnab_extractor.domain.shared.amount import cents_to_decimal


@dataclass(frozen=True)
class Address:
    """Dirección del pagador."""

    address_line: str
    city: str
    state: str
    zip_code: str

    def to_payload(self) -> dict[str, str]:
        return {
            "addressLine": self.address_line,
            "city": self.city,
            "state": self.state,
            "zipCode": self.zip_code,
        }


@dataclass(frozen=True)
class Payer:
    """Pagador del boleto."""

    document: str
    """CPF o CNPJ. El ancho depende del tipo de inscripción de la línea:
    '01' (CPF) ocupa 11 posiciones, cualquier otro (CNPJ) ocupa 14."""

    name: str
    trade_name: str
    address: Address

    def to_payload(self) -> dict[str, Any]:
        return {
            "document": self.document,
            "name": self.name,
            "tradeName": self.trade_name,
            "address": self.address.to_payload(),
        }


@dataclass(frozen=True)
class BankSlipData:
    """Datos de cobranza del boleto."""

    alias: str
    document_number: str
    amount_cents: int
    """Monto en centavos: '00000000100' (enteros) + '50' (fracción) → 10050."""

    due_date: str
    """Vencimiento DDMMAA, tal como viene en la línea."""

    emission_fee: bool
    type: str
    """Etiqueta de tipo de boleto. Constante de configuración, no de la línea."""

    account: AccountRef
    payer: Payer

    @property
    def amount(self) -> Decimal:
        """Monto como Decimal con exactamente 2 decimales.

        Ejemplo:
            >>> BankSlipData(..., amount_cents=10050, ...).amount
            Decimal('100.50')
        """
        return cents_to_decimal(self.amount_cents)

    def to_payload(self) -> dict[str, Any]:
        return {
            "alias": self.alias,
            "documentNumber": self.document_number,
            # JSON no tiene tipo decimal. Con 13 dígitos significativos como
            # máximo (11 enteros + 2 decimales) el float es exacto al serializar.
            "amount": float(self.amount),
            "dueDate": self.due_date,
            "emissionFee": self.emission_fee,
            "type": self.type,
            "account": self.account.to_payload(),
            "payer": self.payer.to_payload(),
        }

    def __post_init__(self) -> None:
        if self.amount_cents < 0:
            raise ValueError(f"amount_cents no puede ser negativo: {self.amount_cents}")


@dataclass(frozen=True)
class BankSlipDetail:
    """Boleto completo, listo para publicarse."""

    cnab_file_name: str
    """Nombre del archivo CNAB de origen. Para trazabilidad downstream."""

    control_code: str
    your_number: str
    data: BankSlipData

    def to_payload(self) -> dict[str, Any]:
        return {
            "cnabFileName": self.cnab_file_name,
            "controlCode": self.control_code,
            "yourNumber": self.your_number,
            "data": self.data.to_payload(),
        }
