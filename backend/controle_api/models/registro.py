"""Registro: uma venda/intermediação de veículo."""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from controle_api.core.database import Base

REQUIRED_FIELDS = ("lote", "anuncio", "cliente", "telefone", "marca", "modelo", "ano", "placa")
TEXT_FIELDS = ("lote", "anuncio", "cliente", "telefone", "marca", "modelo", "placa")
OPTIONAL_FIELDS = (
    "autorizacao", "banco", "pagamento", "agendamento", "retirada", "retirado",
    "data_pagamento", "atpv", "nome_cv", "prazo_atpv", "atpv_entregue", "data_evento",
)
MONEY_FIELDS = ("custo", "venda", "comissao", "valor_comissao", "lucro")
SEARCH_FIELDS = ("cliente", "placa", "marca", "modelo", "lote", "telefone")


class Registro(Base):
    __tablename__ = "registros"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    lote: Mapped[str] = mapped_column(String(100), nullable=False)
    anuncio: Mapped[str] = mapped_column(String(100), nullable=False)
    cliente: Mapped[str] = mapped_column(String(255), nullable=False)
    telefone: Mapped[str] = mapped_column(String(50), nullable=False)
    marca: Mapped[str] = mapped_column(String(100), nullable=False)
    modelo: Mapped[str] = mapped_column(String(100), nullable=False)
    ano: Mapped[int] = mapped_column(Integer, nullable=False)
    placa: Mapped[str] = mapped_column(String(20), nullable=False)

    autorizacao: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    banco: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    pagamento: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    agendamento: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    retirada: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    retirado: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    data_pagamento: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    atpv: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    nome_cv: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    prazo_atpv: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    atpv_entregue: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    data_evento: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    custo: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    venda: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    comissao: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    valor_comissao: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    lucro: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
