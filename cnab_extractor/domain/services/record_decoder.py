"""
Servicio de dominio: Decodificador de registros CNAB de ancho fijo.

Convierte el contenido crudo de un archivo en:
1. Una AccountRef compartida (leída una vez del encabezado).
2. Una secuencia PEREZOSA de líneas clasificadas (DecodedLine).

Layout de una línea de detalle (marcador '7'), offsets base 0, fin exclusivo:

    [0,1)      marcador                 [110,120)  nuestro número
    [3,17)     número de documento      [120,126)  vencimiento DDMMAA
    [17,22)    agencia                  [126,137)  monto, parte entera
    [22,31)    cuenta                   [137,139)  monto, 2 decimales
    [38,63)    código de control        [218,220)  tipo de inscripción
    [63,80)    alias                    [220,234)  CNPJ (o [223,234) CPF si '01')
    [234,271)  nombre / nombre comercial
    [274,314)  dirección   [326,334) CEP   [334,349) ciudad   [349,351) UF

Es PURO: sin I/O, sin estado. Los mismos bytes producen siempre los mismos
boletos. Por eso se puede re-decodificar un archivo para el reporte Excel
sin miedo a que difiera de lo publicado.
"""

from collections.abc import Iterator

from cnab_extractor.domain.exceptions import ConfigurationError, RecordDecodeError
from cnab_extractor.domain.models.account_ref import AccountRef
from cnab_extractor.domain.models.bank_slip import Address, BankSlipData, BankSlipDetail, Payer
from cnab_extractor.domain.models.decoded_line import DETAIL_MARKER, DecodedLine
from cnab_extractor.domain.models.invocation import InvocationContext
from cnab_extractor.domain.shared.amount import parse_cents
from cnab_extractor.domain.shared.fixed_width import FieldSpec, field
from cnab_extractor.domain.shared.text_cleaner import decode_bytes, strip_crlf

MIN_LINES = 3
"""Encabezado + al menos un detalle + trailer. Menos que eso es no-op."""

CPF_TYPE_CODE = "01"

# --- Encabezado (se lee del buffer completo) ---
HEADER_BRANCH = FieldSpec("branch", 26, 30)
HEADER_NUMBER = FieldSpec("number", 31, 40)

# --- Detalle ---
MARKER = FieldSpec("marker", 0, 1)
DOCUMENT_NUMBER = FieldSpec("documentNumber", 3, 17)
BRANCH = FieldSpec("branch", 17, 22)
NUMBER = FieldSpec("number", 22, 31)
CONTROL_CODE = FieldSpec("controlCode", 38, 63)
ALIAS = FieldSpec("alias", 63, 80)
YOUR_NUMBER = FieldSpec("yourNumber", 110, 120)
DUE_DATE = FieldSpec("dueDate", 120, 126)
AMOUNT_INTEGER = FieldSpec("amount", 126, 137)
AMOUNT_FRACTION = FieldSpec("amount", 137, 139)
PAYER_TYPE = FieldSpec("payerType", 218, 220)
DOCUMENT_CPF = FieldSpec("document", 223, 234)
DOCUMENT_CNPJ = FieldSpec("document", 220, 234)
NAME = FieldSpec("name", 234, 271)
ADDRESS_LINE = FieldSpec("addressLine", 274, 314)
ZIP_CODE = FieldSpec("zipCode", 326, 334)
CITY = FieldSpec("city", 334, 349)
STATE = FieldSpec("state", 349, 351)


def normalize(raw: bytes | str) -> str:
    """Quita todos los CR/LF y devuelve un solo stream de ancho fijo.

    Nunca falla por contenido corto: eso lo decide line_count.
    """
    return strip_crlf(decode_bytes(raw))


def line_count(buffer: str, line_length: int) -> int:
    """Cantidad de líneas completas del buffer: floor(len / line_length).

    Raises:
        ConfigurationError: Si line_length no es positivo.
    """
    if line_length <= 0:
        raise ConfigurationError("line_length", f"debe ser positivo, se recibió {line_length}")
    return len(buffer) // line_length


def extract_account(buffer: str) -> AccountRef:
    """Lee agencia y cuenta del encabezado.

    Los offsets se aplican sobre el buffer completo, no sobre la primera
    línea. Solo es correcto si el encabezado mide lo mismo que las demás
    líneas, lo cual el formato garantiza.

    Raises:
        RecordDecodeError: Si el buffer no alcanza a cubrir los campos.
    """
    return AccountRef(
        number=_read(buffer, HEADER_NUMBER, 0),
        branch=_read(buffer, HEADER_BRANCH, 0),
    )


def decode_line(
    line: str,
    *,
    file_name: str,
    bank_slip_type: str,
    account: AccountRef | None = None,
    index: int = 0,
) -> DecodedLine:
    """Clasifica una línea y, si es detalle, la decodifica a BankSlipDetail.

    Args:
        line: Una línea de ancho fijo, sin CR/LF.
        file_name: Va en cnabFileName del boleto.
        bank_slip_type: Etiqueta 'type' del boleto (configuración).
        account: Cuenta del archivo. Si se pasa, reemplaza la agencia/cuenta
                 que trae la propia línea.
        index: Posición de la línea en el archivo. Solo para mensajes de error.

    Raises:
        RecordDecodeError: Si una línea de detalle es más corta que los
                           campos que se leen o el monto no es numérico.
    """
    marker = _read(line, MARKER, index)
    if marker != DETAIL_MARKER:
        return DecodedLine(index=index, marker=marker)

    # El ancho del documento depende del tipo de inscripción:
    # '01' = CPF (11 dígitos), cualquier otro = CNPJ (14 dígitos).
    payer_type = _read(line, PAYER_TYPE, index)
    document_spec = DOCUMENT_CPF if payer_type == CPF_TYPE_CODE else DOCUMENT_CNPJ

    integer_digits = _read(line, AMOUNT_INTEGER, index)
    fraction_digits = _read(line, AMOUNT_FRACTION, index)
    try:
        amount_cents = parse_cents(integer_digits, fraction_digits)
    except ValueError as e:
        raise RecordDecodeError(index, AMOUNT_INTEGER.name, str(e)) from e

    name = _read(line, NAME, index)
    payer = Payer(
        document=_read(line, document_spec, index),
        name=name,
        trade_name=name,
        address=Address(
            address_line=_read(line, ADDRESS_LINE, index),
            city=_read(line, CITY, index),
            state=_read(line, STATE, index),
            zip_code=_read(line, ZIP_CODE, index),
        ),
    )

    if account is None:
        account = AccountRef(number=_read(line, NUMBER, index), branch=_read(line, BRANCH, index))

    detail = BankSlipDetail(
        cnab_file_name=file_name,
        control_code=_read(line, CONTROL_CODE, index),
        your_number=_read(line, YOUR_NUMBER, index),
        data=BankSlipData(
            alias=_read(line, ALIAS, index),
            document_number=_read(line, DOCUMENT_NUMBER, index),
            amount_cents=amount_cents,
            due_date=_read(line, DUE_DATE, index),
            emission_fee=False,
            type=bank_slip_type,
            account=account,
            payer=payer,
        ),
    )
    return DecodedLine(index=index, marker=marker, detail=detail)


def iter_lines(buffer: str, line_length: int) -> Iterator[str]:
    """Genera las líneas completas del buffer, en orden."""
    for index in range(line_count(buffer, line_length)):
        yield buffer[line_length * index : line_length * (index + 1)]


def iter_decoded_lines(buffer: str, ctx: InvocationContext) -> Iterator[DecodedLine]:
    """Genera cada línea clasificada, con la cuenta del archivo ya aplicada.

    Es perezoso: una línea no se decodifica hasta que se pide. Si quien
    consume deja de iterar (ej: falló un publish), el resto del archivo no
    se decodifica. Cada llamada devuelve un generador nuevo, así que la
    secuencia se puede recorrer de nuevo desde el principio.
    """
    if line_count(buffer, ctx.line_length) == 0:
        return
    account = extract_account(buffer)
    for index, line in enumerate(iter_lines(buffer, ctx.line_length)):
        yield decode_line(
            line,
            file_name=ctx.file_name,
            bank_slip_type=ctx.bank_slip_type,
            account=account,
            index=index,
        )


def iter_details(buffer: str, ctx: InvocationContext) -> Iterator[BankSlipDetail]:
    """Solo los boletos (líneas de marcador '7'), en orden de archivo."""
    for decoded in iter_decoded_lines(buffer, ctx):
        if decoded.detail is not None:
            yield decoded.detail


def _read(line: str, spec: FieldSpec, index: int) -> str:
    try:
        return field(line, spec)
    except IndexError as e:
        raise RecordDecodeError(index, spec.name, str(e)) from e
