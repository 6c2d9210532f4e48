# tests/test_main.py

# ========================
# --- Importações ---
# ========================
import logging
from loguru import logger as loguru_logger_obj
from unittest.mock import AsyncMock, MagicMock
import pytest
from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from httpx import ASGITransport, AsyncClient

# --- Módulos da Aplicação ---
from chirpy.core import logging_config
from chirpy.core.config import Settings
from chirpy.core.exceptions import ChirpyAuthError, MalformedSubjectError
from chirpy.main import _setup_cors_middleware, auth_exception_handler, lifespan


# ===============================================
# --- Testes para a Função de Ciclo de Vida (Lifespan) ---
# ===============================================
@pytest.mark.asyncio
async def test_lifespan_handles_database_connection_failure_on_startup(mocker, caplog):
    # --- Arrange ---
    caplog.set_level(logging.CRITICAL, logger="chirpy.main")
    mock_connect_db = mocker.patch('chirpy.main.connect_to_mongo', return_value=None)
    mock_close_db = mocker.patch('chirpy.main.close_mongo_connection', new_callable=AsyncMock)
    mock_create_user_indexes_fn = mocker.patch('chirpy.main.create_user_indexes', new_callable=AsyncMock)
    mock_create_chirp_indexes_fn = mocker.patch('chirpy.main.create_chirp_indexes', new_callable=AsyncMock)

    test_app_instance = MagicMock(spec=FastAPI)
    test_app_instance.state = MagicMock()
    del test_app_instance.state.db

    # --- Act ---
    async with lifespan(test_app_instance):
        assert not hasattr(test_app_instance.state, "db"), \
            "app.state.db não deveria ser definido se a conexão falhou."

    # --- Assert ---
    mock_connect_db.assert_awaited_once()
    mock_create_user_indexes_fn.assert_not_called()
    mock_create_chirp_indexes_fn.assert_not_called()
    assert any(
        "Falha fatal ao conectar ao MongoDB" in record.getMessage()
        for record in caplog.records
        if record.name == "chirpy.main" and record.levelname == "CRITICAL"
    ), "Mensagem de log crítico para falha de conexão não encontrada."
    mock_close_db.assert_not_called()

@pytest.mark.asyncio
async def test_lifespan_handles_index_creation_failure_on_startup(mocker, caplog):
    # --- Arrange ---
    simulated_index_error = Exception("Erro simulado durante a criação do índice de usuário.")
    mock_db_connection_instance = AsyncMock()
    mocker.patch('chirpy.main.connect_to_mongo', return_value=mock_db_connection_instance)
    mock_close_db = mocker.patch('chirpy.main.close_mongo_connection', new_callable=AsyncMock)
    mock_create_user_idx_fn = mocker.patch('chirpy.main.create_user_indexes', side_effect=simulated_index_error)
    mock_create_chirp_idx_fn = mocker.patch('chirpy.main.create_chirp_indexes', new_callable=AsyncMock)

    mock_app_instance_for_lifespan = MagicMock(spec=FastAPI)
    mock_app_instance_for_lifespan.state = MagicMock()

    caplog.set_level(logging.ERROR, logger="chirpy.main")

    # --- Act ---
    try:
        async with lifespan(mock_app_instance_for_lifespan):
            assert mock_app_instance_for_lifespan.state.db == mock_db_connection_instance
    except Exception as e:
        pytest.fail(f"Lifespan levantou uma exceção inesperada para fora: {e}")

    # --- Assert ---
    mock_create_user_idx_fn.assert_awaited_once_with(mock_db_connection_instance)
    mock_create_chirp_idx_fn.assert_not_called()
    assert any(
        "Erro durante a criação de índices" in record.getMessage()
        for record in caplog.records
        if record.name == "chirpy.main" and record.levelname == "ERROR"
    ), "Mensagem de log de erro para falha na criação de índice não encontrada."
    mock_close_db.assert_awaited_once()

@pytest.mark.asyncio
async def test_lifespan_successful_startup_and_shutdown(mocker, caplog):
    """
    Caminho feliz do lifespan: conexão, criação dos dois conjuntos de índices
    e fechamento da conexão no shutdown.
    """
    # --- Arrange ---
    caplog.set_level(logging.INFO, logger="chirpy.main")
    mock_db_conn = AsyncMock(name="MockDBConnection")
    mock_connect_db = mocker.patch('chirpy.main.connect_to_mongo', return_value=mock_db_conn)
    mock_close_db = mocker.patch('chirpy.main.close_mongo_connection', new_callable=AsyncMock)
    mock_create_user_idx = mocker.patch('chirpy.main.create_user_indexes', new_callable=AsyncMock)
    mock_create_chirp_idx = mocker.patch('chirpy.main.create_chirp_indexes', new_callable=AsyncMock)

    test_app_instance = MagicMock(spec=FastAPI)
    test_app_instance.state = MagicMock()

    # --- Act ---
    async with lifespan(test_app_instance):
        assert test_app_instance.state.db == mock_db_conn, "app.state.db não foi definido corretamente."

    # --- Assert ---
    mock_connect_db.assert_awaited_once()
    mock_create_user_idx.assert_awaited_once_with(mock_db_conn)
    mock_create_chirp_idx.assert_awaited_once_with(mock_db_conn)
    mock_close_db.assert_awaited_once()

    logs = [record.getMessage() for record in caplog.records if record.name == "chirpy.main"]
    assert "Iniciando ciclo de vida da aplicação..." in logs
    assert "Aplicação iniciada e pronta." in logs
    assert "Aplicação encerrada." in logs

# ===============================================
# --- Testes dos Tratadores de Erro ---
# ===============================================
@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(test_async_client: AsyncClient):
    response = await test_async_client.get("/api/nao-existe")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Not Found"}

@pytest.mark.asyncio
async def test_unhandled_auth_error_is_converted_to_generic_message():
    """Falhas do núcleo que escapam de uma rota não vazam o detalhe interno."""
    # --- Arrange ---
    isolated_app = FastAPI()
    isolated_app.add_exception_handler(ChirpyAuthError, auth_exception_handler)

    @isolated_app.get("/erro-auth")
    async def failing_route():
        raise MalformedSubjectError("sub='abc' não é UUID")

    # --- Act ---
    async with AsyncClient(transport=ASGITransport(app=isolated_app), base_url="http://testserver") as client:
        response = await client.get("/erro-auth")

    # --- Assert ---
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"error": "unauthorized"}
    assert "abc" not in response.text

# ===============================================
# --- Testes Logging Config ---
# ===============================================
def test_intercept_handler_emit_unknown_level(mocker):
    handler = logging_config.InterceptHandler()
    mock_loguru_opt_log = mocker.patch.object(loguru_logger_obj, "opt", return_value=loguru_logger_obj)
    mock_loguru_log = mocker.patch.object(loguru_logger_obj, "log")
    numeric_level = 60
    record = logging.LogRecord(
        name='test.logger',
        level=numeric_level,
        pathname='/path/to/file.py',
        lineno=10,
        msg='Test message with invalid level name',
        args=[],
        exc_info=None,
        func='test_func'
    )
    record.levelname = "INVALIDLEVELNAME"

    handler.emit(record)

    mock_loguru_opt_log.assert_called_once()
    final_log_call_args, _ = mock_loguru_log.call_args
    assert final_log_call_args[0] == numeric_level
    assert final_log_call_args[1] == record.getMessage()

def test_setup_logging_disables_uvicorn_access_log(mocker):
    mocker.patch.object(loguru_logger_obj, "add")
    mocker.patch.object(loguru_logger_obj, "remove")
    mocker.patch("chirpy.core.logging_config.logging.basicConfig")

    logging_config.setup_logging("debug")

    assert logging.getLogger("uvicorn.access").disabled is True
    assert loguru_logger_obj.add.call_args.kwargs["level"] == "DEBUG"
    assert loguru_logger_obj.add.call_args.kwargs["diagnose"] is False

# ==================================================
# --- Testes para _setup_cors_middleware ---
# ==================================================
def test_setup_cors_middleware_with_empty_origins_logs_warning(caplog):
    mock_app = MagicMock(spec=FastAPI)
    mock_settings_empty_cors = Settings(
        MONGODB_URL="mongodb://testhost:27017/testdb",
        JWT_SECRET_KEY="testsecret",
        CORS_ALLOWED_ORIGINS=[]
    )
    caplog.set_level(logging.WARNING, logger="chirpy.main")

    _setup_cors_middleware(mock_app, mock_settings_empty_cors)

    mock_app.add_middleware.assert_not_called()
    assert any(
        "Nenhuma origem CORS configurada" in record.getMessage()
        for record in caplog.records
        if record.name == "chirpy.main" and record.levelname == "WARNING"
    ), "Warning de CORS para origens vazias não encontrado nos logs"

def test_setup_cors_middleware_with_origins_adds_middleware():
    mock_app = MagicMock(spec=FastAPI)
    mock_settings_with_cors = Settings(
        MONGODB_URL="mongodb://testhost:27017/testdb",
        JWT_SECRET_KEY="testsecret",
        CORS_ALLOWED_ORIGINS=["http://localhost:3000", "https://example.com"]
    )

    _setup_cors_middleware(mock_app, mock_settings_with_cors)

    mock_app.add_middleware.assert_called_once()
    args, kwargs = mock_app.add_middleware.call_args
    assert args[0] == CORSMiddleware
    assert kwargs.get("allow_origins") == ["http://localhost:3000", "https://example.com"]
    assert kwargs.get("allow_credentials") is True
