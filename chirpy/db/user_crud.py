# chirpy/db/user_crud.py
"""
Funções de acesso à coleção de usuários no MongoDB: busca por e-mail e por ID,
criação a partir de um hash já calculado, limpeza (reset) e índices.

Este módulo nunca recebe a senha em texto plano; o hash é gerado pelas rotas
através de `chirpy.core.security.hash_password`.
"""

# ========================
# --- Importações ---
# ========================
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase, AsyncIOMotorCollection
from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError

# --- Módulos da Aplicação ---
from chirpy.models.user import UserInDB

# ========================
# --- Configurações e Constantes ---
# ========================
logger = logging.getLogger(__name__)
USERS_COLLECTION = "users"

# ========================
# --- Funções Auxiliares (Internas) ---
# ========================
def _get_users_collection(db: AsyncIOMotorDatabase) -> AsyncIOMotorCollection:
    """Retorna a coleção de usuários do banco de dados."""
    return db[USERS_COLLECTION]

def _to_user(user_dict: Dict[str, Any], lookup: str) -> Optional[UserInDB]:
    """Converte um documento do Mongo em UserInDB; None se o documento for inválido."""
    user_dict.pop('_id', None)
    try:
        return UserInDB.model_validate(user_dict)
    except ValidationError as e:
        logger.error(f"DB Validation error {lookup}: {e.error_count()} erro(s)")
        return None

# ========================
# --- Consultas ---
# ========================
async def get_user_by_email(db: AsyncIOMotorDatabase, email: str) -> Optional[UserInDB]:
    """
    Busca um usuário pelo endereço de e-mail.

    Returns:
        UserInDB (com o hash da senha) ou None se não encontrado.
    """
    collection = _get_users_collection(db)
    user_dict = await collection.find_one({"email": email})
    if user_dict:
        return _to_user(user_dict, "get_user_by_email")
    return None

async def get_user_by_id(db: AsyncIOMotorDatabase, user_id: uuid.UUID) -> Optional[UserInDB]:
    """Busca um usuário pelo seu UUID."""
    collection = _get_users_collection(db)
    user_dict = await collection.find_one({"id": str(user_id)})
    if user_dict:
        return _to_user(user_dict, f"get_user_by_id {user_id}")
    return None

# ========================
# --- Escrita ---
# ========================
async def create_user(db: AsyncIOMotorDatabase, email: str, hashed_password: str) -> Optional[UserInDB]:
    """
    Cria um novo usuário com o hash de senha fornecido.

    Args:
        db: Instância da conexão com o banco de dados.
        email: E-mail do usuário (único).
        hashed_password: Hash bcrypt da senha.

    Returns:
        O UserInDB criado, ou None se o banco não confirmar a escrita ou falhar.

    Raises:
        DuplicateKeyError: Se o e-mail já estiver cadastrado.
    """
    now = datetime.now(timezone.utc)
    user_db_obj = UserInDB(
        id=uuid.uuid4(),
        email=email,
        hashed_password=hashed_password,
        created_at=now,
        updated_at=now,
    )
    collection = _get_users_collection(db)

    try:
        insert_result = await collection.insert_one(user_db_obj.model_dump(mode="json"))
        if not insert_result.acknowledged: # pragma: no cover
            logger.error(f"DB Insert User Acknowledged False para {email}")
            return None
        logger.info(f"Usuário {user_db_obj.id} criado.")
        return user_db_obj
    except DuplicateKeyError:
        logger.warning(f"Tentativa de criar usuário com e-mail duplicado: {email}")
        raise
    except Exception as e:
        logger.exception(f"Erro inesperado ao inserir usuário {email} no DB: {e}")
        return None

async def delete_all_users(db: AsyncIOMotorDatabase) -> int:
    """Remove todos os usuários. Retorna a quantidade removida."""
    collection = _get_users_collection(db)
    delete_result = await collection.delete_many({})
    logger.warning(f"Coleção '{USERS_COLLECTION}' limpa: {delete_result.deleted_count} usuário(s) removido(s).")
    return delete_result.deleted_count

# ========================
# --- Configuração de Índices do Banco de Dados ---
# ========================
async def create_user_indexes(db: AsyncIOMotorDatabase):
    """Cria os índices únicos de `id` e `email` (idempotente)."""
    collection = _get_users_collection(db)
    try:
        await collection.create_index("id", unique=True, name="id_unique_idx")
        await collection.create_index("email", unique=True, name="email_unique_idx")
        logger.info("Índices da coleção 'users' ('id', 'email') verificados/criados com sucesso.")
    except Exception as e:
        logger.error(f"Erro ao criar índices para a coleção 'users': {e}", exc_info=True)
