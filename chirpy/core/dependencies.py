# chirpy/core/dependencies.py
"""
Define as dependências reutilizáveis para a aplicação FastAPI,
especialmente aquelas relacionadas à autenticação e acesso ao banco de dados.
"""

# ========================
# --- Importações ---
# ========================
import logging
import uuid
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, status
from motor.motor_asyncio import AsyncIOMotorDatabase

# --- Módulos da Aplicação ---
from chirpy.core.config import settings
from chirpy.core.exceptions import ChirpyAuthError
from chirpy.core.security import extract_bearer_token, validate_access_token
from chirpy.db import user_crud
from chirpy.db.mongodb_utils import get_database
from chirpy.models.user import UserInDB

# ========================
# --- Configuração do Logger ---
# ========================
logger = logging.getLogger(__name__)

# ========================
# --- Tipos de Dependência ---
# ========================
DbDep = Annotated[AsyncIOMotorDatabase, Depends(get_database)]

# ========================
# --- Conversão de Erros ---
# ========================
def auth_error_to_http(error: ChirpyAuthError) -> HTTPException:
    """
    Converte uma falha do núcleo de autenticação em HTTPException
    com mensagem genérica. O detalhe interno vai apenas para o log.
    """
    logger.info(f"Falha de autenticação: {type(error).__name__} ({error.detail})")
    headers = None
    if error.http_status == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return HTTPException(status_code=error.http_status, detail=error.public_message, headers=headers)

# ========================
# --- Dependência: ID do Usuário do Token ---
# ========================
async def get_current_user_id(
    authorization: Annotated[Optional[str], Header()] = None
) -> uuid.UUID:
    """
    Extrai o token do header `Authorization: Bearer <token>`, valida a
    assinatura e a expiração, e retorna o UUID do usuário (`sub`).

    Raises:
        HTTPException: 401 (token ausente, inválido ou expirado) ou
            400 (header malformado ou token curto demais).
    """
    try:
        token = extract_bearer_token(authorization, min_length=settings.BEARER_TOKEN_MIN_LENGTH)
        return validate_access_token(token, settings.JWT_SECRET_KEY)
    except ChirpyAuthError as e:
        raise auth_error_to_http(e) from e

CurrentUserId = Annotated[uuid.UUID, Depends(get_current_user_id)]

# ========================
# --- Dependência: Usuário Atual ---
# ========================
async def get_current_user(db: DbDep, user_id: CurrentUserId) -> UserInDB:
    """
    Busca no banco o usuário identificado pelo token.

    Raises:
        HTTPException: 401 se o usuário do token não existir mais.
    """
    user = await user_crud.get_user_by_id(db=db, user_id=user_id)
    if user is None:
        logger.info(f"Token válido para usuário inexistente: {user_id}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user

# ========================
# --- Tipos Anotados para Rotas ---
# ========================
CurrentUser = Annotated[UserInDB, Depends(get_current_user)]
