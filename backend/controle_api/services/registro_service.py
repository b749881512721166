"""Registros: conversão de campos e uma instrução SQL por operação."""
import math
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncEngine

from controle_api.models import (
    MONEY_FIELDS,
    OPTIONAL_FIELDS,
    REQUIRED_FIELDS,
    SEARCH_FIELDS,
    TEXT_FIELDS,
    Registro,
)
from controle_api.schemas.registro import RegistroPayload

registros = Registro.__table__

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_DECIMAL_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_int(value: Any) -> Optional[int]:
    """Inteiro no início do valor ("2020", " 2020abc", 2020.9 → 2020); None se não houver."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    m = _INT_PREFIX.match(str(value))
    return int(m.group(1)) if m else None


def parse_decimal(value: Any) -> Decimal:
    """Número no início do valor; 0 quando ausente ou não numérico."""
    if value is None or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return Decimal("0")
        return Decimal(str(value))
    m = _DECIMAL_PREFIX.match(str(value))
    if not m:
        return Decimal("0")
    try:
        return Decimal(m.group(1))
    except InvalidOperation:
        return Decimal("0")


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _optional_text(value: Any) -> Optional[str]:
    # Valor "falso" (vazio, 0, false) vira NULL.
    return _text(value) if value else None


def missing_required(payload: RegistroPayload) -> List[str]:
    return [name for name in REQUIRED_FIELDS if not getattr(payload, name)]


def payload_to_values(payload: RegistroPayload) -> Dict[str, Any]:
    """Linha completa a gravar: opcionais ausentes → NULL, valores ausentes → 0.

    O ano é convertido pelo chamador (parse_int), que decide o que fazer com
    um valor inválido.
    """
    values: Dict[str, Any] = {}
    for name in TEXT_FIELDS:
        values[name] = _text(getattr(payload, name))
    values["ano"] = parse_int(payload.ano)
    for name in OPTIONAL_FIELDS:
        values[name] = _optional_text(getattr(payload, name))
    for name in MONEY_FIELDS:
        values[name] = parse_decimal(getattr(payload, name))
    return values


def row_to_dict(row) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in row._mapping.items():
        if isinstance(value, Decimal):
            value = float(value)
        elif isinstance(value, (datetime, date)):
            value = value.isoformat()
        out[key] = value
    return out


async def list_registros(
    engine: AsyncEngine,
    search: Optional[str],
    limit: int,
    offset: int,
) -> List[Dict[str, Any]]:
    q = select(registros)
    term = search.strip() if search else ""
    if term:
        q = q.where(or_(*(registros.c[name].contains(term, autoescape=True) for name in SEARCH_FIELDS)))
    q = q.order_by(registros.c.created_at.desc(), registros.c.id.desc()).limit(limit).offset(offset)
    async with engine.connect() as conn:
        rows = (await conn.execute(q)).all()
    return [row_to_dict(r) for r in rows]


async def get_registro(engine: AsyncEngine, registro_id: int) -> Optional[Dict[str, Any]]:
    async with engine.connect() as conn:
        row = (await conn.execute(select(registros).where(registros.c.id == registro_id))).first()
    return row_to_dict(row) if row is not None else None


async def create_registro(engine: AsyncEngine, values: Dict[str, Any]) -> int:
    async with engine.begin() as conn:
        result = await conn.execute(insert(registros).values(**values))
    return result.inserted_primary_key[0]


async def update_registro(engine: AsyncEngine, registro_id: int, values: Dict[str, Any]) -> bool:
    """Substitui a linha inteira. False se nenhum registro tem esse id."""
    q = (
        update(registros)
        .where(registros.c.id == registro_id)
        .values(**values, updated_at=func.now())
    )
    async with engine.begin() as conn:
        result = await conn.execute(q)
    return result.rowcount > 0


async def delete_registro(engine: AsyncEngine, registro_id: int) -> bool:
    async with engine.begin() as conn:
        result = await conn.execute(delete(registros).where(registros.c.id == registro_id))
    return result.rowcount > 0


async def get_estatisticas(engine: AsyncEngine) -> Dict[str, Any]:
    c = registros.c
    q = select(
        func.count().label("total_registros"),
        func.coalesce(func.sum(c.venda), 0).label("total_vendas"),
        func.coalesce(func.sum(c.valor_comissao), 0).label("total_comissoes"),
        func.coalesce(func.sum(c.lucro), 0).label("total_lucro"),
        func.coalesce(func.avg(c.venda), 0).label("media_vendas"),
        func.coalesce(func.avg(c.comissao), 0).label("media_comissao"),
    ).select_from(registros)
    async with engine.connect() as conn:
        row = (await conn.execute(q)).one()
    return {
        "total_registros": int(row.total_registros or 0),
        "total_vendas": float(row.total_vendas or 0),
        "total_comissoes": float(row.total_comissoes or 0),
        "total_lucro": float(row.total_lucro or 0),
        "media_vendas": float(row.media_vendas or 0),
        "media_comissao": float(row.media_comissao or 0),
    }


async def backup_registros(engine: AsyncEngine) -> List[Dict[str, Any]]:
    async with engine.connect() as conn:
        rows = (await conn.execute(select(registros).order_by(registros.c.id))).all()
    return [row_to_dict(r) for r in rows]
