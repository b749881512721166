"""Corpo de criação/atualização de registro.

Os campos chegam como o front-end os manda (texto ou número); a conversão para
os tipos da tabela fica em services.registro_service.
"""
from typing import Any, Optional

from pydantic import BaseModel


class RegistroPayload(BaseModel):
    """Todos os campos opcionais no schema; obrigatoriedade é checada só na criação."""

    lote: Optional[Any] = None
    anuncio: Optional[Any] = None
    cliente: Optional[Any] = None
    telefone: Optional[Any] = None
    marca: Optional[Any] = None
    modelo: Optional[Any] = None
    ano: Optional[Any] = None
    placa: Optional[Any] = None

    autorizacao: Optional[Any] = None
    banco: Optional[Any] = None
    pagamento: Optional[Any] = None
    agendamento: Optional[Any] = None
    retirada: Optional[Any] = None
    retirado: Optional[Any] = None
    data_pagamento: Optional[Any] = None
    atpv: Optional[Any] = None
    nome_cv: Optional[Any] = None
    prazo_atpv: Optional[Any] = None
    atpv_entregue: Optional[Any] = None
    data_evento: Optional[Any] = None

    custo: Optional[Any] = None
    venda: Optional[Any] = None
    comissao: Optional[Any] = None
    valor_comissao: Optional[Any] = None
    lucro: Optional[Any] = None

    class Config:
        extra = "ignore"


class Estatisticas(BaseModel):
    """Agregados sobre a tabela inteira; zero quando a tabela está vazia."""

    total_registros: int
    total_vendas: float
    total_comissoes: float
    total_lucro: float
    media_vendas: float
    media_comissao: float
