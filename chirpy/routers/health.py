# chirpy/routers/health.py

# ========================
# --- Importações ---
# ========================
from fastapi import APIRouter
from fastapi.responses import JSONResponse, PlainTextResponse

from chirpy.db.mongodb_utils import check_mongo_connection


# ========================
# --- Configuração do Router ---
# ========================
router = APIRouter(tags=["Health"])


# ========================
# --- Rotas da API ---
# ========================
@router.get("/healthz", response_class=PlainTextResponse)
async def readiness():
    # Prontidão do processo; não depende do banco
    return PlainTextResponse("OK")


@router.get("/health/db")
async def database_health():
    if not await check_mongo_connection():
        return JSONResponse(content={"status": "error", "message": "MongoDB não está disponível"}, status_code=503)
    return JSONResponse(content={"status": "ok"})
