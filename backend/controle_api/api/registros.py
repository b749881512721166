"""API de registros: listagem/pesquisa, CRUD, estatísticas e backup."""
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from controle_api.core.database import check_connection, get_engine
from controle_api.core.errors import (
    ConflictError,
    NotFoundError,
    QueryError,
    ValidationError,
    is_unique_violation,
)
from controle_api.core.logging_config import get_logger
from controle_api.models import REQUIRED_FIELDS
from controle_api.schemas.registro import Estatisticas, RegistroPayload
from controle_api.services import registro_service

logger = get_logger(__name__)
router = APIRouter(prefix="/api", tags=["registros"], dependencies=[Depends(check_connection)])


# Faixa de uma coluna INTEGER; id fora dela não existe na tabela.
MAX_INT = 2**31 - 1


def _parse_id(raw: str) -> int:
    # Id que não é inteiro não casa com nenhuma linha.
    try:
        rid = int(raw)
    except ValueError:
        raise NotFoundError("Registro não encontrado")
    if not -MAX_INT - 1 <= rid <= MAX_INT:
        raise NotFoundError("Registro não encontrado")
    return rid


def _values_or_400(payload: RegistroPayload) -> dict:
    values = registro_service.payload_to_values(payload)
    if payload.ano is not None and values["ano"] is None:
        raise ValidationError("Ano inválido", details=f"Valor não numérico para ano: {payload.ano!r}")
    return values


@router.get("/registros")
async def list_registros(
    search: Optional[str] = Query(None),
    limit: int = Query(100, ge=0, le=MAX_INT),
    offset: int = Query(0, ge=0, le=MAX_INT),
    engine: AsyncEngine = Depends(get_engine),
):
    """Todos os registros ou só os que contêm `search` em cliente, placa, marca, modelo, lote ou telefone."""
    try:
        rows = await registro_service.list_registros(engine, search, limit, offset)
    except SQLAlchemyError as e:
        logger.error("Erro ao buscar registros: %s", e)
        raise QueryError("Erro ao buscar registros", details=str(e))
    return {
        "success": True,
        "data": rows,
        "count": len(rows),
        "pagination": {"limit": limit, "offset": offset},
    }


@router.get("/registros/{registro_id}")
async def get_registro(registro_id: str, engine: AsyncEngine = Depends(get_engine)):
    rid = _parse_id(registro_id)
    try:
        row = await registro_service.get_registro(engine, rid)
    except SQLAlchemyError as e:
        logger.error("Erro ao buscar registro id=%s: %s", rid, e)
        raise QueryError("Erro ao buscar registro", details=str(e))
    if row is None:
        raise NotFoundError("Registro não encontrado")
    return {"success": True, "data": row}


@router.post("/registros", status_code=201)
async def create_registro(
    body: Optional[RegistroPayload] = None,
    engine: AsyncEngine = Depends(get_engine),
):
    body = body or RegistroPayload()
    if registro_service.missing_required(body):
        raise ValidationError("Campos obrigatórios não preenchidos", required=list(REQUIRED_FIELDS))
    values = _values_or_400(body)
    try:
        new_id = await registro_service.create_registro(engine, values)
    except SQLAlchemyError as e:
        logger.error("Erro ao criar registro: %s", e)
        if is_unique_violation(e):
            raise ConflictError("Registro duplicado", details="Já existe um registro com estes dados")
        raise QueryError("Erro ao criar registro", details=str(e))
    logger.info("Criado registro id=%s placa=%s", new_id, values["placa"])
    return {"success": True, "id": new_id, "message": "Registro criado com sucesso"}


@router.put("/registros/{registro_id}")
async def update_registro(
    registro_id: str,
    body: Optional[RegistroPayload] = None,
    engine: AsyncEngine = Depends(get_engine),
):
    """Substituição completa: campo opcional não enviado é gravado como NULL."""
    rid = _parse_id(registro_id)
    values = _values_or_400(body or RegistroPayload())
    try:
        found = await registro_service.update_registro(engine, rid, values)
    except SQLAlchemyError as e:
        logger.error("Erro ao atualizar registro id=%s: %s", rid, e)
        raise QueryError("Erro ao atualizar registro", details=str(e))
    if not found:
        raise NotFoundError("Registro não encontrado")
    logger.info("Atualizado registro id=%s", rid)
    return {"success": True, "message": "Registro atualizado com sucesso"}


@router.delete("/registros/{registro_id}")
async def delete_registro(registro_id: str, engine: AsyncEngine = Depends(get_engine)):
    rid = _parse_id(registro_id)
    try:
        found = await registro_service.delete_registro(engine, rid)
    except SQLAlchemyError as e:
        logger.error("Erro ao deletar registro id=%s: %s", rid, e)
        raise QueryError("Erro ao deletar registro", details=str(e))
    if not found:
        raise NotFoundError("Registro não encontrado")
    logger.info("Deletado registro id=%s", rid)
    return {"success": True, "message": "Registro deletado com sucesso"}


@router.get("/estatisticas")
async def get_estatisticas(engine: AsyncEngine = Depends(get_engine)):
    try:
        data = await registro_service.get_estatisticas(engine)
    except SQLAlchemyError as e:
        logger.error("Erro ao buscar estatísticas: %s", e)
        raise QueryError("Erro ao buscar estatísticas", details=str(e))
    return {"success": True, "data": Estatisticas(**data).model_dump()}


@router.get("/backup")
async def backup(engine: AsyncEngine = Depends(get_engine)):
    """Dump completo da tabela, ordenado por id."""
    try:
        rows = await registro_service.backup_registros(engine)
    except SQLAlchemyError as e:
        logger.error("Erro ao fazer backup: %s", e)
        raise QueryError("Erro ao fazer backup", details=str(e))
    return {
        "success": True,
        "backup_date": datetime.now(timezone.utc).isoformat(),
        "total_records": len(rows),
        "data": rows,
    }
