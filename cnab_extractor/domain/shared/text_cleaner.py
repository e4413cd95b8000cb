"""
Utilidades de limpieza de texto.

Funciones para normalizar el contenido crudo de un archivo CNAB antes de
que el decodificador lo procese.

Estas funciones NO tienen lógica de negocio (no saben de boletos ni
montos). Solo operan sobre strings y bytes.
"""

import re

CNAB_ENCODING = "latin-1"
"""Los archivos CNAB se generan en ISO-8859-1. latin-1 además decodifica
cualquier byte sin fallar, así que un carácter raro nunca aborta la lectura
ni cambia el largo de la línea."""

_CRLF = re.compile(r"\r?\n|\r")


def decode_bytes(raw: bytes | str) -> str:
    """Convierte el contenido leído del storage a str.

    Si ya es str se devuelve tal cual.
    """
    if isinstance(raw, bytes):
        return raw.decode(CNAB_ENCODING)
    return raw


def strip_crlf(text: str) -> str:
    """Elimina todos los saltos de línea (\\r\\n, \\n o \\r sueltos).

    El resultado es un solo stream continuo de ancho fijo: la línea i
    ocupa [i * largo, (i + 1) * largo).

    Ejemplos:
        >>> strip_crlf("0HEADER\\r\\n7DETALLE\\n9TRAILER\\r")
        '0HEADER7DETALLE9TRAILER'
    """
    return _CRLF.sub("", text)
