"""
Fixtures compartidas: constructor de archivos CNAB sintéticos y reloj
simulado para los reintentos.

Los tests no usan archivos reales de clientes (tienen CPF/CNPJ y montos
reales). En su lugar se arman líneas de 400 posiciones con los campos en
los offsets del layout.
"""

import pytest

LINE_LENGTH = 400


class CnabFileBuilder:
    """Arma líneas y archivos CNAB de ancho fijo."""

    line_length = LINE_LENGTH

    @staticmethod
    def _line(marker: str, fields: dict[int, str]) -> str:
        chars = list(" " * LINE_LENGTH)
        chars[0] = marker
        for start, value in fields.items():
            chars[start : start + len(value)] = list(value)
        line = "".join(chars)
        assert len(line) == LINE_LENGTH
        return line

    def header(self, branch: str = "1234", number: str = "001234567") -> str:
        return self._line("0", {1: "1REMESSA01COBRANCA", 26: branch, 30: "-", 31: number})

    def trailer(self) -> str:
        return self._line("9", {394: "000099"})

    def detail(
        self,
        document_number: str = "DOC00000000001",
        control_code: str = "CTRL-0000000000000000001",
        alias: str = "ALIAS-BOLETO-0001",
        your_number: str = "0000000001",
        due_date: str = "150124",
        amount: str = "0000000010050",
        payer_type: str = "02",
        document: str = "12345678000199",
        name: str = "EMPRESA PAGADORA LTDA",
        address_line: str = "AV PAULISTA 1000",
        zip_code: str = "01310100",
        city: str = "SAO PAULO",
        state: str = "SP",
        marker: str = "7",
    ) -> str:
        return self._line(
            marker,
            {
                3: document_number,
                17: "01234",
                22: "000098765",
                38: control_code.ljust(25),
                63: alias.ljust(17),
                110: your_number,
                120: due_date,
                126: amount,
                218: payer_type,
                220: document,
                234: name.ljust(37),
                274: address_line.ljust(40),
                326: zip_code,
                334: city.ljust(15),
                349: state,
            },
        )

    def file(self, num_details: int, newline: str = "\r\n", middle: list[str] | None = None) -> bytes:
        """Encabezado + num_details detalles + trailer.

        Args:
            num_details: Cantidad de líneas de marcador '7'.
            newline: Separador de líneas.
            middle: Líneas extra (no detalle) que se agregan tras los detalles.
        """
        lines = [self.header()]
        lines += [
            self.detail(your_number=f"{i + 1:010d}", control_code=f"CTRL-{i + 1:020d}")
            for i in range(num_details)
        ]
        lines += middle or []
        lines.append(self.trailer())
        return (newline.join(lines) + newline).encode("latin-1")


@pytest.fixture
def cnab() -> CnabFileBuilder:
    return CnabFileBuilder()


class FakeClock:
    """Reloj simulado. sleep() avanza el tiempo en lugar de dormir."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture(autouse=True)
def reloj(monkeypatch) -> FakeClock:
    """Los reintentos de google.api_core esperan con time.sleep y miden con
    time.monotonic; ambos quedan sobre el reloj simulado."""
    clock = FakeClock()
    monkeypatch.setattr("time.sleep", clock.sleep)
    monkeypatch.setattr("time.monotonic", clock.monotonic)
    return clock
