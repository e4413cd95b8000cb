"""
Utilidades para montos en formato de punto fijo.

CONTEXTO DEL PROBLEMA:
En CNAB el monto no trae separador decimal. Viene como 13 dígitos: 11 de
parte entera y 2 de fracción implícita:

    "0000000010050" → enteros "00000000100" + fracción "50" → 100.50

La versión anterior concatenaba "enteros.fracción" y lo convertía a float.
Eso funciona para un monto aislado, pero los consumidores suman miles de
boletos y el float acumula errores de redondeo.

SOLUCIÓN:
- El monto se decodifica a un ENTERO de centavos (exacto).
- Solo en el borde (payload JSON, Excel, logs) se convierte a Decimal.
- Dígitos no numéricos son un error, no un 0 silencioso.
"""

from decimal import Decimal

_CENTS = Decimal("0.01")


def parse_cents(integer_digits: str, fraction_digits: str) -> int:
    """Convierte las dos regiones de dígitos del monto a centavos.

    Args:
        integer_digits: Parte entera, con ceros a la izquierda.
        fraction_digits: Exactamente 2 dígitos de fracción.

    Returns:
        Monto en centavos (int >= 0).

    Raises:
        ValueError: Si alguna región está vacía o tiene algo que no sea dígito.
                    El mensaje incluye el valor original para debugging.

    Ejemplos:
        >>> parse_cents("00000000100", "50")
        10050
        >>> parse_cents("00000000000", "00")
        0
    """
    if not integer_digits or not integer_digits.isdigit():
        raise ValueError(f"Parte entera del monto no numérica: '{integer_digits}'")
    if len(fraction_digits) != 2 or not fraction_digits.isdigit():
        raise ValueError(f"Fracción del monto inválida: '{fraction_digits}'")
    return int(integer_digits) * 100 + int(fraction_digits)


def cents_to_decimal(cents: int) -> Decimal:
    """Convierte centavos a Decimal con exactamente 2 decimales.

    Ejemplos:
        >>> cents_to_decimal(10050)
        Decimal('100.50')
    """
    return (Decimal(cents) * _CENTS).quantize(_CENTS)


def format_amount(cents: int) -> str:
    """Formatea centavos como monto legible. Para logs y reportes.

    Ejemplos:
        >>> format_amount(123456789)
        '1,234,567.89'
        >>> format_amount(0)
        '0.00'
    """
    return f"{cents_to_decimal(cents):,.2f}"
