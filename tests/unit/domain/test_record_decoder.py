"""
Tests para el decodificador de registros CNAB.

Verifican:
- Normalización (CR/LF) y conteo de líneas.
- Lectura de la cuenta del encabezado.
- Offsets de cada campo del detalle.
- Selección de documento CPF/CNPJ por tipo de inscripción.
- Monto en punto fijo (centavos exactos).
- Errores de decodificación fatales.
- Pureza: mismos bytes → mismos boletos.
"""

from decimal import Decimal

import pytest

from cnab_extractor.domain.exceptions import ConfigurationError, RecordDecodeError
from cnab_extractor.domain.models import AccountRef, InvocationContext
from cnab_extractor.domain.services.record_decoder import (
    decode_line,
    extract_account,
    iter_decoded_lines,
    iter_details,
    iter_lines,
    line_count,
    normalize,
)


def _ctx(file_name: str = "COB240101.REM", batch: int = 3) -> InvocationContext:
    return InvocationContext(
        file_name=file_name,
        line_length=400,
        max_batch_size=batch,
        bank_slip_type="BANKSLIP",
    )


class TestNormalize:
    """Pruebas para normalize y line_count."""

    def test_quita_crlf(self):
        assert normalize("AB\r\nCD\nEF\rGH") == "ABCDEFGH"

    def test_acepta_bytes_latin1(self):
        assert normalize("SÃO\r\nJOSÉ".encode("latin-1")) == "SÃOJOSÉ"

    def test_archivo_normalizado_tiene_lineas_exactas(self, cnab):
        buffer = normalize(cnab.file(3))
        assert len(buffer) == 5 * 400
        assert line_count(buffer, 400) == 5

    def test_linea_incompleta_al_final_no_cuenta(self):
        assert line_count("x" * 999, 400) == 2

    def test_buffer_vacio(self):
        assert line_count(normalize(b""), 400) == 0

    def test_largo_invalido_lanza_error(self):
        with pytest.raises(ConfigurationError, match="line_length"):
            line_count("abc", 0)

    def test_iter_lines_parte_el_buffer(self):
        assert list(iter_lines("aabbccd", 2)) == ["aa", "bb", "cc"]


class TestExtractAccount:
    """La cuenta se lee de [26,30) y [31,40) del buffer."""

    def test_lee_agencia_y_cuenta(self, cnab):
        buffer = normalize(cnab.file(1))
        assert extract_account(buffer) == AccountRef(number="001234567", branch="1234")

    def test_buffer_corto_lanza_error(self):
        with pytest.raises(RecordDecodeError):
            extract_account("0" * 30)


class TestDecodeLine:
    """Pruebas de decode_line sobre líneas individuales."""

    def _decode(self, line: str, **kwargs):
        return decode_line(line, file_name="COB240101.REM", bank_slip_type="BANKSLIP", **kwargs)

    def test_linea_no_detalle_solo_trae_marcador(self, cnab):
        decoded = self._decode(cnab.header())
        assert decoded.marker == "0"
        assert decoded.detail is None
        assert not decoded.is_detail

    def test_trailer_no_es_detalle(self, cnab):
        assert not self._decode(cnab.trailer()).is_detail

    def test_campos_del_detalle(self, cnab):
        decoded = self._decode(cnab.detail(), index=4)
        detail = decoded.detail

        assert decoded.is_detail
        assert decoded.index == 4
        assert detail.cnab_file_name == "COB240101.REM"
        assert detail.control_code == "CTRL-0000000000000000001".ljust(25)
        assert detail.your_number == "0000000001"
        assert detail.data.alias == "ALIAS-BOLETO-0001"
        assert detail.data.document_number == "DOC00000000001"
        assert detail.data.due_date == "150124"
        assert detail.data.emission_fee is False
        assert detail.data.type == "BANKSLIP"

    def test_campos_del_pagador(self, cnab):
        payer = self._decode(cnab.detail()).detail.data.payer

        assert payer.document == "12345678000199"
        assert payer.name == "EMPRESA PAGADORA LTDA".ljust(37)
        assert payer.trade_name == payer.name
        assert payer.address.address_line == "AV PAULISTA 1000".ljust(40)
        assert payer.address.zip_code == "01310100"
        assert payer.address.city == "SAO PAULO".ljust(15)
        assert payer.address.state == "SP"

    def test_monto_punto_fijo(self, cnab):
        """'00000000100' + '50' → 100.50 exacto."""
        data = self._decode(cnab.detail(amount="0000000010050")).detail.data
        assert data.amount_cents == 10050
        assert data.amount == Decimal("100.50")

    def test_monto_grande_sin_perder_centavos(self, cnab):
        data = self._decode(cnab.detail(amount="9999999999999")).detail.data
        assert data.amount == Decimal("99999999999.99")

    def test_documento_cpf_tipo_01(self, cnab):
        """Tipo '01' (CPF): documento en [223,234), 11 posiciones."""
        line = cnab.detail(payer_type="01", document="00012345678901")
        assert self._decode(line).detail.data.payer.document == "12345678901"

    def test_documento_cnpj_otro_tipo(self, cnab):
        """Cualquier otro tipo: documento en [220,234), 14 posiciones."""
        line = cnab.detail(payer_type="02", document="12345678000199")
        assert self._decode(line).detail.data.payer.document == "12345678000199"

    def test_cuenta_de_la_linea_sin_cuenta_de_archivo(self, cnab):
        account = self._decode(cnab.detail()).detail.data.account
        assert account == AccountRef(number="000098765", branch="01234")

    def test_cuenta_del_archivo_reemplaza_la_de_la_linea(self, cnab):
        shared = AccountRef(number="001234567", branch="1234")
        account = self._decode(cnab.detail(), account=shared).detail.data.account
        assert account is shared

    def test_monto_no_numerico_lanza_error(self, cnab):
        with pytest.raises(RecordDecodeError, match="amount"):
            self._decode(cnab.detail(amount="00000000ABC50"), index=2)

    def test_linea_truncada_lanza_error(self, cnab):
        with pytest.raises(RecordDecodeError) as exc_info:
            self._decode(cnab.detail()[:300], index=7)
        assert exc_info.value.line_index == 7

    def test_linea_vacia_lanza_error(self):
        with pytest.raises(RecordDecodeError, match="marker"):
            self._decode("")


class TestIterDetails:
    """Secuencias perezosas sobre el archivo completo."""

    def test_solo_devuelve_detalles(self, cnab):
        buffer = normalize(cnab.file(3))
        details = list(iter_details(buffer, _ctx()))
        assert len(details) == 3
        assert [d.your_number for d in details] == ["0000000001", "0000000002", "0000000003"]

    def test_clasifica_todas_las_lineas(self, cnab):
        buffer = normalize(cnab.file(2))
        markers = [d.marker for d in iter_decoded_lines(buffer, _ctx())]
        assert markers == ["0", "7", "7", "9"]

    def test_todos_comparten_la_misma_cuenta(self, cnab):
        buffer = normalize(cnab.file(4))
        accounts = [d.data.account for d in iter_details(buffer, _ctx())]
        assert all(a is accounts[0] for a in accounts)
        assert accounts[0] == AccountRef(number="001234567", branch="1234")

    def test_nombre_de_archivo_del_contexto(self, cnab):
        buffer = normalize(cnab.file(1))
        detail = next(iter_details(buffer, _ctx(file_name="OTRO.REM")))
        assert detail.cnab_file_name == "OTRO.REM"

    def test_archivo_sin_detalles(self, cnab):
        buffer = normalize(cnab.file(0, middle=[cnab.detail(marker="3")]))
        assert list(iter_details(buffer, _ctx())) == []

    def test_es_perezoso(self, cnab):
        """La línea inválida no se decodifica hasta que se pide."""
        buffer = normalize(cnab.file(1, middle=[cnab.detail(amount="XXXXXXXXXXXXX")]))
        details = iter_details(buffer, _ctx())
        assert next(details).your_number == "0000000001"
        with pytest.raises(RecordDecodeError):
            next(details)

    def test_es_reiniciable(self, cnab):
        buffer = normalize(cnab.file(2))
        assert list(iter_details(buffer, _ctx())) == list(iter_details(buffer, _ctx()))

    def test_determinista(self, cnab):
        """Decodificar los mismos bytes dos veces da payloads idénticos."""
        raw = cnab.file(5)
        first = [d.to_payload() for d in iter_details(normalize(raw), _ctx())]
        second = [d.to_payload() for d in iter_details(normalize(bytes(raw)), _ctx())]
        assert first == second

    def test_buffer_vacio_no_produce_nada(self):
        assert list(iter_decoded_lines("", _ctx())) == []
