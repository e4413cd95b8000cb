"""
Utilidades compartidas del dominio.

Estas funciones son usadas por el decodificador y por los adaptadores, y no
dependen de ninguna librería externa. Solo operan sobre tipos nativos de
Python.

Uso:
    from cnab_extractor.domain.shared.amount import parse_cents, cents_to_decimal
    from cnab_extractor.domain.shared.fixed_width import FieldSpec, field
    from cnab_extractor.domain.shared.text_cleaner import decode_bytes, strip_crlf
"""
