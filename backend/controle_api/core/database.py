"""Pool de conexões: engine assíncrono criado no lifespan e entregue aos handlers via Depends."""
from fastapi import Depends, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from controle_api.config import Settings
from controle_api.core.errors import ConnectivityError
from controle_api.core.logging_config import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    pass


def create_pool(settings: Settings) -> AsyncEngine:
    """Cria o pool: no máximo db_pool_size conexões, fila de espera sem limite."""
    url = settings.sqlalchemy_url
    kwargs = {}
    if url.get_backend_name() != "sqlite":
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=0,
            pool_timeout=None,
        )
    engine = create_async_engine(url, **kwargs)
    logger.info("Pool de conexões criado (%s)", url.render_as_string(hide_password=True))
    return engine


def get_engine(request: Request) -> AsyncEngine:
    return request.app.state.engine


async def ping(engine: AsyncEngine) -> None:
    """Pega uma conexão do pool, faz um round-trip e devolve a conexão."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def check_connection(engine: AsyncEngine = Depends(get_engine)) -> None:
    """Dependência de /api/*: interrompe a requisição com 500 se o banco não responde."""
    try:
        await ping(engine)
    except Exception as e:
        logger.error("Erro na conexão com o banco: %s", e)
        raise ConnectivityError("Erro de conexão com banco de dados", details=str(e))
