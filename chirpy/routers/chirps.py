# chirpy/routers/chirps.py
"""
Rotas de chirps: publicação (protegida por token), listagem e busca por ID.
"""

# ========================
# --- Importações ---
# ========================
import logging
import uuid
from typing import Annotated, List

from fastapi import APIRouter, Body, HTTPException, status

# --- Módulos da Aplicação ---
from chirpy.core.dependencies import CurrentUser, DbDep
from chirpy.core.utils import filter_profanity, is_chirp_too_long
from chirpy.db import chirp_crud
from chirpy.models.chirp import Chirp, ChirpCreate

# ========================
# --- Configurações e Constantes ---
# ========================
logger = logging.getLogger(__name__)

# ========================
# --- Configuração do Router ---
# ========================
router = APIRouter(
    prefix="/chirps",
    tags=["Chirps"],
    responses={
        status.HTTP_401_UNAUTHORIZED: {"description": "Token JWT ausente, inválido ou expirado."},
        status.HTTP_404_NOT_FOUND: {"description": "Chirp não encontrado."},
    },
)

# ========================
# --- Endpoint: Publicar Chirp ---
# ========================
@router.post(
    "",
    response_model=Chirp,
    status_code=status.HTTP_201_CREATED,
    summary="Publica um chirp em nome do usuário autenticado",
)
async def create_chirp(
    chirp_in: Annotated[ChirpCreate, Body(description="Texto do chirp.")],
    db: DbDep,
    current_user: CurrentUser,
):
    """
    Rejeita chirps acima do limite de caracteres, aplica o filtro de
    palavras e persiste o chirp com o autor vindo do token.
    """
    if is_chirp_too_long(chirp_in.body):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Chirp is too long")

    cleaned_body = filter_profanity(chirp_in.body)
    created_chirp = await chirp_crud.create_chirp(db=db, body=cleaned_body, user_id=current_user.id)
    if created_chirp is None:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="error creating chirp")

    logger.info(f"Chirp {created_chirp.id} criado pelo usuário {current_user.id}.")
    return created_chirp

# ========================
# --- Endpoint: Listar Chirps ---
# ========================
@router.get(
    "",
    response_model=List[Chirp],
    summary="Lista todos os chirps (mais antigos primeiro)",
)
async def list_chirps(db: DbDep):
    return await chirp_crud.get_chirps(db)

# ========================
# --- Endpoint: Buscar Chirp ---
# ========================
@router.get(
    "/{chirp_id}",
    response_model=Chirp,
    summary="Obtém um chirp pelo ID",
)
async def get_chirp(chirp_id: str, db: DbDep):
    """O ID inválido resulta em 400; ID desconhecido, em 404."""
    try:
        chirp_uuid = uuid.UUID(chirp_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid chirp ID")

    chirp = await chirp_crud.get_chirp_by_id(db, chirp_uuid)
    if chirp is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="chirp not found")
    return chirp
