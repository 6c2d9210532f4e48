# chirpy/routers/auth.py
"""
Este módulo define as rotas de cadastro de usuários e de login.
O login bem-sucedido emite um token de acesso JWT.
"""

# ========================
# --- Importações ---
# ========================
import logging
from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Body, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from pymongo.errors import DuplicateKeyError

# --- Módulos da Aplicação ---
from chirpy.core.config import settings
from chirpy.core.dependencies import CurrentUser, DbDep
from chirpy.core.exceptions import (AuthenticationError, EmptyInputError,
                                    InternalError, InvalidPasswordError)
from chirpy.core.security import hash_password, make_access_token, verify_password
from chirpy.db import user_crud
from chirpy.models.user import User, UserCreate, UserLogin, UserWithToken

# ========================
# --- Configurações e Constantes ---
# ========================
logger = logging.getLogger(__name__)

UNAUTHORIZED_DETAIL = "Unauthorized"

# ========================
# --- Configuração do Router ---
# ========================
router = APIRouter(
    tags=["Authentication"],
)

# ========================
# --- Rotas da API ---
# ========================

# --- Endpoint de Cadastro ---
@router.post(
    "/users",
    response_model=User,
    status_code=status.HTTP_201_CREATED,
    summary="Cadastra um novo usuário",
    response_description="Dados do usuário recém-criado (sem senha).",
)
async def create_user(
    db: DbDep,
    user_in: Annotated[UserCreate, Body(description="E-mail e senha do novo usuário.")]
):
    """
    Hasheia a senha (bcrypt, fora do event loop) e cria o usuário.
    """
    try:
        hashed_password = await run_in_threadpool(hash_password, user_in.password)
    except EmptyInputError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Password must not be empty")
    except InvalidPasswordError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Password must be at most 72 bytes and must not contain NUL characters",
        )
    except InternalError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="error creating password")

    try:
        created_user = await user_crud.create_user(db=db, email=user_in.email, hashed_password=hashed_password)
    except DuplicateKeyError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="email already registered")

    if created_user is None:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="error creating user")
    return User.model_validate(created_user, from_attributes=True)

# --- Endpoint de Login ---
@router.post(
    "/login",
    response_model=UserWithToken,
    summary="Autentica o usuário e emite um token de acesso",
    response_description="Dados do usuário e o token JWT.",
)
async def login(
    db: DbDep,
    credentials: Annotated[UserLogin, Body(description="E-mail e senha.")]
):
    """
    Verifica e-mail e senha e, em caso de sucesso, emite um token com
    validade `ACCESS_TOKEN_EXPIRE_SECONDS`. E-mail desconhecido e senha
    incorreta recebem a mesma resposta 401.
    """
    user = await user_crud.get_user_by_email(db, credentials.email)
    if user is None:
        logger.info("Login recusado: e-mail não cadastrado.")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=UNAUTHORIZED_DETAIL,
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        await run_in_threadpool(verify_password, credentials.password, user.hashed_password)
    except AuthenticationError:
        logger.info(f"Login recusado: senha incorreta para usuário {user.id}.")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=UNAUTHORIZED_DETAIL,
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        token = make_access_token(
            user.id,
            settings.JWT_SECRET_KEY,
            timedelta(seconds=settings.ACCESS_TOKEN_EXPIRE_SECONDS),
        )
    except InternalError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="error creating token")

    logger.info(f"Login bem-sucedido para usuário {user.id}.")
    return UserWithToken(
        id=user.id,
        email=user.email,
        created_at=user.created_at,
        updated_at=user.updated_at,
        token=token,
    )

# --- Endpoint de Dados do Usuário Autenticado ---
@router.get(
    "/users/me",
    response_model=User,
    summary="Obtém dados do usuário autenticado",
)
async def read_users_me(current_user: CurrentUser) -> User:
    """Retorna o usuário identificado pelo token do header Authorization."""
    return User.model_validate(current_user, from_attributes=True)
