# chirpy/routers/admin.py
"""
Rotas administrativas: página de métricas do servidor de arquivos e reset
do banco (apenas na plataforma "dev").
"""

# ========================
# --- Importações ---
# ========================
import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import HTMLResponse, PlainTextResponse

# --- Módulos da Aplicação ---
from chirpy.core.config import settings
from chirpy.core.dependencies import DbDep
from chirpy.core.metrics import MetricsDep
from chirpy.db import chirp_crud, user_crud

# ========================
# --- Configurações e Constantes ---
# ========================
logger = logging.getLogger(__name__)

METRICS_TEMPLATE = (
    "<html><body><h1>Welcome, Chirpy Admin</h1>"
    "<p>Chirpy has been visited {hits} times!</p></body></html>"
)

# ========================
# --- Configuração do Router ---
# ========================
router = APIRouter(tags=["Admin"])

# ========================
# --- Rotas ---
# ========================
@router.get("/metrics", response_class=HTMLResponse, summary="Contagem de acessos ao /app/")
async def read_metrics(metrics: MetricsDep):
    return HTMLResponse(content=METRICS_TEMPLATE.format(hits=metrics.hits))

@router.post("/reset", response_class=PlainTextResponse, summary="Apaga usuários e chirps (somente dev)")
async def reset(db: DbDep, metrics: MetricsDep):
    """
    Remove todos os chirps e usuários e zera o contador de acessos.
    Fora da plataforma "dev" responde 403 sem tocar no banco.
    """
    if settings.PLATFORM != "dev":
        logger.warning(f"Reset recusado na plataforma '{settings.PLATFORM}'.")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    chirps_removed = await chirp_crud.delete_all_chirps(db)
    users_removed = await user_crud.delete_all_users(db)
    metrics.reset()
    logger.info(f"Reset concluído: {users_removed} usuário(s) e {chirps_removed} chirp(s) removidos.")
    return PlainTextResponse("Database successfully reset.")
