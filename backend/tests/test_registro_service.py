"""Conversão de campos do corpo da requisição para a linha da tabela."""
from decimal import Decimal

import pytest

from controle_api.schemas.registro import RegistroPayload
from controle_api.services.registro_service import (
    missing_required,
    parse_decimal,
    parse_int,
    payload_to_values,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2020", 2020),
        (" 2020abc", 2020),
        (2021, 2021),
        (2019.9, 2019),
        ("-5", -5),
        ("abc", None),
        ("", None),
        (None, None),
        (True, None),
        (float("nan"), None),
    ],
)
def test_parse_int(value, expected):
    assert parse_int(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1500.50", Decimal("1500.50")),
        ("12.5x", Decimal("12.5")),
        (".5", Decimal(".5")),
        (300, Decimal("300")),
        (2.25, Decimal("2.25")),
        ("R$ 10", Decimal("0")),
        ("", Decimal("0")),
        (None, Decimal("0")),
        (False, Decimal("0")),
    ],
)
def test_parse_decimal(value, expected):
    assert parse_decimal(value) == expected


def test_missing_required():
    payload = RegistroPayload(lote="L1", anuncio="", ano=0, placa="P")
    assert missing_required(payload) == ["anuncio", "cliente", "telefone", "marca", "modelo", "ano"]


def test_payload_to_values_nulls_and_zeros():
    payload = RegistroPayload(lote="L1", telefone=119, ano="2020", banco=0, atpv="sim", venda="10")
    values = payload_to_values(payload)
    assert values["lote"] == "L1"
    assert values["telefone"] == "119"
    assert values["cliente"] is None
    assert values["ano"] == 2020
    assert values["banco"] is None
    assert values["atpv"] == "sim"
    assert values["venda"] == Decimal("10")
    assert values["lucro"] == Decimal("0")
    assert set(values) >= {"custo", "comissao", "valor_comissao", "data_evento"}
