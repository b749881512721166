"""Rota raiz, health check e respostas para rotas inexistentes."""
from fastapi.testclient import TestClient

from controle_api.config import Settings
from controle_api.main import create_app


def test_root_banner(client):
    """GET / devolve o banner com status OK e versão."""
    r = client.get("/")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "OK"
    assert data["version"] == "1.0.0"
    assert "timestamp" in data


def test_health(client):
    """GET /health com banco acessível: 200 e database connected."""
    r = client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["success"] is True
    assert data["status"] == "healthy"
    assert data["database"] == "connected"


def test_health_and_api_without_database(tmp_path):
    """Banco inacessível: /health e /api/* respondem 500 com envelope de erro."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'nao' / 'existe' / 'db.sqlite'}"
    app = create_app(Settings(database_url=url))
    with TestClient(app) as c:
        r = c.get("/health")
        assert r.status_code == 500
        data = r.json()
        assert data["status"] == "unhealthy"
        assert data["database"] == "disconnected"
        assert data["error"]

        r = c.get("/api/registros")
        assert r.status_code == 500
        data = r.json()
        assert data["success"] is False
        assert data["error"] == "Erro de conexão com banco de dados"
        assert data["details"]


def test_unknown_route(client):
    r = client.get("/nao-existe")
    assert r.status_code == 404
    data = r.json()
    assert data == {
        "success": False,
        "error": "Rota não encontrada",
        "path": "/nao-existe",
        "method": "GET",
    }


def test_unsupported_method_is_not_found(client):
    """Método sem rota (PATCH) cai no mesmo 404 de rota inexistente."""
    r = client.patch("/api/registros")
    assert r.status_code == 404
    assert r.json()["method"] == "PATCH"


def test_unhandled_error_hides_details(app):
    @app.get("/boom")
    def boom():
        raise RuntimeError("detalhe interno")

    with TestClient(app, raise_server_exceptions=False) as c:
        r = c.get("/boom")
    assert r.status_code == 500
    assert r.json() == {
        "success": False,
        "error": "Erro interno do servidor",
        "details": "Erro interno",
    }


def test_unhandled_error_details_in_development(db_path):
    app = create_app(Settings(database_url=f"sqlite+aiosqlite:///{db_path}", environment="development"))

    @app.get("/boom")
    def boom():
        raise RuntimeError("detalhe interno")

    with TestClient(app, raise_server_exceptions=False) as c:
        r = c.get("/boom")
    assert r.status_code == 500
    assert r.json()["details"] == "detalhe interno"
