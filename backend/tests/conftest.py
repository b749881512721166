"""Fixtures dos testes da API: cada teste roda contra um SQLite temporário."""
import pytest
from fastapi.testclient import TestClient

from controle_api.config import Settings
from controle_api.main import create_app

REGISTRO_MINIMO = {
    "lote": "L1",
    "anuncio": "A1",
    "cliente": "C1",
    "telefone": "T1",
    "marca": "Ford",
    "modelo": "Ka",
    "ano": "2020",
    "placa": "ABC123",
}


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "registros.db"


@pytest.fixture
def app(db_path):
    return create_app(Settings(database_url=f"sqlite+aiosqlite:///{db_path}"))


@pytest.fixture
def client(app):
    """Cliente de teste com lifespan ativo (pool criado e tabela verificada)."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_registro(client):
    """Cria um registro via API e devolve o id."""
    def _make(**fields):
        body = dict(REGISTRO_MINIMO)
        body.update(fields)
        r = client.post("/api/registros", json=body)
        assert r.status_code == 201, r.text
        return r.json()["id"]
    return _make
