# tests/conftest.py
"""
Fixtures compartilhadas pelos testes da API Chirpy.

As variáveis de ambiente obrigatórias são definidas antes de qualquer import
de `chirpy`, pois `chirpy.core.config` instancia `Settings` na importação.
O banco de dados é sempre substituído por um `AsyncMock`; nenhum teste
depende de um MongoDB em execução.
"""

# ========================
# --- Ambiente de Teste ---
# ========================
import os

os.environ.setdefault("MONGODB_URL", "mongodb://localhost:27017")
os.environ.setdefault("DATABASE_NAME", "chirpy_test_db")
os.environ.setdefault("JWT_SECRET_KEY", "segredo-de-teste-com-tamanho-suficiente-123")
os.environ.setdefault("PLATFORM", "dev")

# ========================
# --- Importações ---
# ========================
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Dict
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# --- Módulos da Aplicação ---
from chirpy.core.config import settings
from chirpy.core.security import make_access_token
from chirpy.db.mongodb_utils import get_database
from chirpy.main import app as fastapi_app
from chirpy.models.user import UserInDB

# ========================
# --- Configurações e Constantes ---
# ========================
logger = logging.getLogger(__name__)

TEST_SECRET = settings.JWT_SECRET_KEY

# ========================
# --- Fixtures de Banco de Dados ---
# ========================
@pytest.fixture
def mock_db() -> AsyncMock:
    """`AsyncMock` usado no lugar da instância Motor."""
    return AsyncMock()

# ========================
# --- Fixture Principal: Cliente de Teste HTTP ---
# ========================
@pytest_asyncio.fixture(scope="function")
async def test_async_client(mock_db: AsyncMock) -> AsyncGenerator[AsyncClient, None]:
    """
    Cliente HTTP assíncrono ligado diretamente à aplicação via `ASGITransport`.

    - Substitui a dependência `get_database` pelo `mock_db`.
    - Zera o contador de acessos antes e depois de cada teste.
    - O lifespan não é executado (não há conexão real com o MongoDB).
    """
    fastapi_app.dependency_overrides[get_database] = lambda: mock_db
    fastapi_app.state.metrics.reset()
    transport = ASGITransport(app=fastapi_app)
    try:
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client
    finally:
        fastapi_app.dependency_overrides.clear()
        fastapi_app.state.metrics.reset()

# ========================
# --- Fixtures de Usuário e Token ---
# ========================
@pytest.fixture
def sample_user_in_db() -> UserInDB:
    """Usuário armazenado com um hash fictício (não verificável)."""
    now = datetime.now(timezone.utc).replace(microsecond=0)
    return UserInDB(
        id=uuid.uuid4(),
        email="walt@breakingbad.com",
        hashed_password="$2b$10$hash.ficticio.apenas.para.testes.de.rota.xxxxxxxxxxxx",
        created_at=now,
        updated_at=now,
    )

@pytest.fixture
def access_token(sample_user_in_db: UserInDB) -> str:
    """Token válido por 5 minutos para o `sample_user_in_db`."""
    return make_access_token(sample_user_in_db.id, TEST_SECRET, timedelta(minutes=5))

@pytest.fixture
def auth_headers(access_token: str) -> Dict[str, str]:
    """Headers de autenticação com o token de teste."""
    return {"Authorization": f"Bearer {access_token}"}
