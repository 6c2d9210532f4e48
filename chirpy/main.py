# chirpy/main.py
"""
Ponto de entrada principal e configuração da aplicação FastAPI Chirpy.
Define a instância da aplicação, middlewares, rotas, arquivos estáticos,
tratadores de erro e o ciclo de vida (lifespan).
"""

# ========================
# --- Importações ---
# ========================
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

# --- Módulos da Aplicação ---
from chirpy.core.config import Settings, settings
from chirpy.core.exceptions import ChirpyAuthError
from chirpy.core.logging_config import setup_logging
from chirpy.core.metrics import FileserverMetrics, count_fileserver_hits
from chirpy.db.chirp_crud import create_chirp_indexes
from chirpy.db.mongodb_utils import close_mongo_connection, connect_to_mongo
from chirpy.db.user_crud import create_user_indexes
from chirpy.routers import admin, auth, chirps, health

# ========================
# --- Configuração de Logging ---
# ========================
setup_logging(log_level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# ========================
# --- Função de Setup do Middleware CORS ---
# ========================
def _setup_cors_middleware(app_instance: FastAPI, current_settings: Settings):
    """Configura o middleware CORS para a aplicação."""
    if current_settings.CORS_ALLOWED_ORIGINS:
        logger.info(f"Configurando CORS para origens: {current_settings.CORS_ALLOWED_ORIGINS}")
        app_instance.add_middleware(
            CORSMiddleware,
            allow_origins=current_settings.CORS_ALLOWED_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        logger.warning("Nenhuma origem CORS configurada (settings.CORS_ALLOWED_ORIGINS está vazia).")

# ========================
# --- Ciclo de Vida (Lifespan) ---
# ========================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Conecta ao MongoDB e cria índices no startup; fecha a conexão no shutdown.
    """
    logger.info("Iniciando ciclo de vida da aplicação...")
    db_connection = await connect_to_mongo()

    if db_connection is None:
        logger.critical("Falha fatal ao conectar ao MongoDB na inicialização. App pode não funcionar corretamente.")
        yield
        logger.info("Encerrando ciclo de vida (conexão DB falhou no início).")
        return

    app.state.db = db_connection
    try:
        await create_user_indexes(db_connection)
        await create_chirp_indexes(db_connection)
    except Exception as e:
        logger.error(f"Erro durante a criação de índices: {e}", exc_info=True)

    logger.info("Aplicação iniciada e pronta.") # pragma: no cover
    yield # pragma: no cover

    logger.info("Iniciando processo de encerramento...")
    await close_mongo_connection()
    logger.info("Aplicação encerrada.")

# ========================
# --- Instância FastAPI ---
# ========================
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="API de microblog (chirps) com autenticação por senha e token JWT.",
    version="0.1.0",
    license_info={
        "name": "MIT License",
        "url": "https://opensource.org/licenses/MIT",
    },
    lifespan=lifespan
)
app.state.metrics = FileserverMetrics()

# ========================
# --- Tratadores de Erro ---
# ========================
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Respostas de erro no formato `{"error": "<mensagem>"}`."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(ChirpyAuthError)
async def auth_exception_handler(request: Request, exc: ChirpyAuthError):
    """Falhas do núcleo que escapam das rotas viram a mensagem pública genérica."""
    logger.warning(f"Falha de autenticação não tratada na rota {request.url.path}: {type(exc).__name__}")
    return JSONResponse(status_code=exc.http_status, content={"error": exc.public_message})

# ========================
# --- Configuração de Middlewares ---
# ========================
_setup_cors_middleware(app, settings)
app.middleware("http")(count_fileserver_hits)

# ========================
# --- Rotas (Routers) ---
# ========================
app.include_router(health.router, prefix=settings.API_PREFIX)
app.include_router(auth.router, prefix=settings.API_PREFIX)
app.include_router(chirps.router, prefix=settings.API_PREFIX)
app.include_router(admin.router, prefix=settings.ADMIN_PREFIX)

# ========================
# --- Arquivos Estáticos ---
# ========================
app.mount("/app", StaticFiles(directory=settings.FILESERVER_DIR, html=True, check_dir=False), name="app")
app.mount("/assets", StaticFiles(directory=settings.ASSETS_DIR, check_dir=False), name="assets")

# ========================
# --- Execução (Uvicorn) ---
# ========================
if __name__ == "__main__": # pragma: no cover
    import uvicorn # pragma: no cover
    uvicorn.run( # pragma: no cover
        "chirpy.main:app", # pragma: no cover
        host="0.0.0.0", # pragma: no cover
        port=8080, # pragma: no cover
        reload=True, # pragma: no cover
        log_level=settings.LOG_LEVEL.lower() # pragma: no cover
    )
