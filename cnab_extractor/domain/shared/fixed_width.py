"""
Utilidades para leer campos de ancho fijo.

En un archivo CNAB cada campo se identifica por su posición: "agencia va de
la 18 a la 22". Aquí se trabaja con offsets de Python (base 0, fin
exclusivo), así que ese campo es line[17:22].

¿Por qué no usar line[a:b] directamente?
Porque un slice de Python fuera de rango devuelve un string corto o vacío
sin avisar. Una línea truncada produciría boletos con campos vacíos que
nadie detecta. field() exige que el campo completo exista.
"""

from typing import NamedTuple


class FieldSpec(NamedTuple):
    """Posición de un campo: offsets [start, end) en base 0."""

    name: str
    start: int
    end: int

    @property
    def width(self) -> int:
        return self.end - self.start


def field(line: str, spec: FieldSpec) -> str:
    """Devuelve el campo crudo (sin strip) definido por spec.

    Raises:
        IndexError: Si la línea no alcanza el final del campo.

    Ejemplos:
        >>> field("7ABCDEF", FieldSpec("marker", 0, 1))
        '7'
    """
    if spec.end > len(line):
        raise IndexError(
            f"Campo '{spec.name}' [{spec.start},{spec.end}) fuera de la línea "
            f"de largo {len(line)}"
        )
    return line[spec.start : spec.end]

