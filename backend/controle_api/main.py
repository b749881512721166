from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.exceptions import HTTPException as StarletteHTTPException

from controle_api.config import Settings, settings as default_settings
from controle_api.core.database import Base, create_pool, get_engine, ping
from controle_api.core.errors import ApiError
from controle_api.core.logging_config import get_logger, setup_logging
from controle_api.api.registros import router as registros_router

VERSION = "1.0.0"

logger = get_logger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _validation_details(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(x) for x in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = create_pool(settings)
        app.state.engine = engine
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Tabela registros verificada/criada")
        except Exception as e:
            # O servidor sobe mesmo sem banco; /health e /api/* reportam o problema.
            logger.warning("Verificação da tabela registros: %s", e)
        yield
        await engine.dispose()
        logger.info("Pool de conexões fechado")

    app = FastAPI(title="API Sistema de Controle", version=VERSION, lifespan=lifespan)

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "Dados inválidos", "details": _validation_details(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # Rota inexistente ou método não suportado: sempre 404.
        if exc.status_code in (404, 405):
            return JSONResponse(
                status_code=404,
                content={
                    "success": False,
                    "error": "Rota não encontrada",
                    "path": request.url.path,
                    "method": request.method,
                },
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": str(exc.detail)},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Erro não tratado: %s", exc)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "Erro interno do servidor",
                "details": str(exc) if settings.is_development else "Erro interno",
            },
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.include_router(registros_router)

    @app.get("/")
    def root():
        return {
            "message": "API Sistema de Controle funcionando!",
            "status": "OK",
            "timestamp": _now_iso(),
            "version": VERSION,
        }

    @app.get("/health")
    async def health(engine: AsyncEngine = Depends(get_engine)):
        try:
            await ping(engine)
        except Exception as e:
            logger.error("Health check falhou: %s", e)
            return JSONResponse(
                status_code=500,
                content={
                    "success": False,
                    "status": "unhealthy",
                    "database": "disconnected",
                    "error": str(e),
                    "timestamp": _now_iso(),
                },
            )
        return {"success": True, "status": "healthy", "database": "connected", "timestamp": _now_iso()}

    return app


app = create_app()


if __name__ == "__main__":
    logger.info("Servidor rodando na porta %s", default_settings.port)
    logger.info("Health check: http://localhost:%s/health", default_settings.port)
    uvicorn.run("controle_api.main:app", host="0.0.0.0", port=default_settings.port)
