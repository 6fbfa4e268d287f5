"""
Tests para la calculadora de saldo presupuestario.

Las funciones son puras: se prueban con objetos simples en lugar de filas de
base de datos.
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from cooperacion.services.balance_service import (
    balance_de_linea,
    calcular_balance,
    filtrar_solicitudes,
    seleccionar_linea,
)
from cooperacion.utils.formato import formato_colones, parse_monto, parse_monto_proyecto


def _linea(id, subpartida="10503", ano="2025", presupuesto="1000000"):
    return SimpleNamespace(
        id=id, subpartida=subpartida, ano_contrato=ano, presupuesto_asignado=Decimal(presupuesto)
    )


def _solicitud(linea_id, total):
    return SimpleNamespace(subpartida_contratacion_id=linea_id, total_factura=total)


class TestParseMonto:
    """Interpretación de ``total_factura``."""

    @pytest.mark.parametrize(
        "texto, esperado",
        [
            ("450000", Decimal("450000")),
            ("₡ 1,234.50", Decimal("1234.50")),
            ("abc", Decimal("0")),
            ("", Decimal("0")),
            (None, Decimal("0")),
            ("-2500", Decimal("-2500")),
            ("1.2.3", Decimal("0")),
        ],
    )
    def test_parse_monto(self, texto, esperado):
        assert parse_monto(texto) == esperado

    def test_numeros_se_respetan(self):
        assert parse_monto(1500) == Decimal("1500")
        assert parse_monto(Decimal("10.25")) == Decimal("10.25")

    @pytest.mark.parametrize(
        "texto, esperado",
        [
            ("$1,500,000", Decimal("1500000")),
            ("25000 aprox", Decimal("25000")),
            ("USD 300", Decimal("0")),
            (None, Decimal("0")),
        ],
    )
    def test_parse_monto_proyecto(self, texto, esperado):
        assert parse_monto_proyecto(texto) == esperado


class TestFormatoColones:
    def test_formato_con_miles(self):
        assert formato_colones(Decimal("1234.5")) == "₡ 1,234.50"

    def test_formato_negativo(self):
        assert formato_colones(Decimal("-200000")) == "-₡ 200,000.00"

    def test_formato_none(self):
        assert formato_colones(None) == "₡ 0.00"


class TestSeleccionLinea:
    """La primera línea que coincide decide la ficha."""

    def test_coincidencia_exacta_codigo_y_ano(self):
        lineas = [_linea(1, ano="2024"), _linea(2, ano="2025")]
        assert seleccionar_linea(lineas, "10503", "2025").id == 2

    def test_sin_ano_toma_la_primera(self):
        lineas = [_linea(1, ano="2024"), _linea(2, ano="2025")]
        assert seleccionar_linea(lineas, "10503").id == 1

    def test_ano_sin_coincidencia_cae_al_codigo(self):
        lineas = [_linea(1, ano="2024"), _linea(2, subpartida="10701", ano="2026")]
        assert seleccionar_linea(lineas, "10503", "2026").id == 1

    def test_codigo_inexistente(self):
        assert seleccionar_linea([_linea(1)], "99999") is None

    def test_filtro_de_ano_distinto_vacia_las_solicitudes(self):
        linea = _linea(1, ano="2024")
        assert filtrar_solicitudes(linea, [_solicitud(1, "100")], "2025") == []


class TestCalcularBalance:
    def test_saldo_con_dos_solicitudes(self):
        """Asignado 1 000 000, consumo 300 000 + 150 000: saldo 550 000."""
        lineas = [_linea(1)]
        solicitudes = [_solicitud(1, "300000"), _solicitud(1, "150000"), _solicitud(2, "999")]

        resultado = calcular_balance(lineas, solicitudes, "10503", "2025")

        assert resultado.monto_consumido == Decimal("450000")
        assert resultado.saldo == Decimal("550000")
        assert not resultado.sobregirado
        assert len(resultado.solicitudes) == 2

    def test_monto_ilegible_cuenta_cero(self):
        resultado = calcular_balance(
            [_linea(1)], [_solicitud(1, "abc"), _solicitud(1, "100000")], "10503"
        )
        assert resultado.monto_consumido == Decimal("100000")

    def test_sobregiro_no_se_recorta(self):
        resultado = calcular_balance(
            [_linea(1, presupuesto="500000")], [_solicitud(1, "700000")], "10503"
        )
        assert resultado.saldo == Decimal("-200000")
        assert resultado.sobregirado
        assert resultado.montos()["saldo_formateado"] == "-₡ 200,000.00"

    def test_linea_de_otro_ano_muestra_sin_consumo(self):
        lineas = [_linea(1, ano="2024")]
        resultado = calcular_balance(lineas, [_solicitud(1, "100000")], "10503", "2025")
        assert resultado.linea.id == 1
        assert resultado.monto_consumido == Decimal("0")
        assert resultado.saldo == Decimal("1000000")

    def test_sin_linea_retorna_none(self):
        assert calcular_balance([], [], "10503") is None

    def test_entradas_no_se_modifican(self):
        solicitud = _solicitud(1, "abc")
        balance_de_linea(_linea(1), [solicitud])
        assert solicitud.total_factura == "abc"
