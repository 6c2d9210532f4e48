# chirpy/db/chirp_crud.py
"""
Funções de acesso à coleção de chirps no MongoDB.
"""

# ========================
# --- Importações ---
# ========================
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase, AsyncIOMotorCollection
from pymongo import ASCENDING
from pydantic import ValidationError

# --- Módulos da Aplicação ---
from chirpy.models.chirp import Chirp

# ========================
# --- Configurações e Constantes ---
# ========================
logger = logging.getLogger(__name__)
CHIRPS_COLLECTION = "chirps"

# ========================
# --- Funções Auxiliares (Internas) ---
# ========================
def _get_chirps_collection(db: AsyncIOMotorDatabase) -> AsyncIOMotorCollection:
    """Retorna a coleção de chirps do banco de dados."""
    return db[CHIRPS_COLLECTION]

# ========================
# --- Operações CRUD para Chirps ---
# ========================
async def create_chirp(db: AsyncIOMotorDatabase, body: str, user_id: uuid.UUID) -> Optional[Chirp]:
    """
    Persiste um novo chirp já filtrado.

    Args:
        db: Instância da conexão com o banco de dados.
        body: Texto do chirp (após validação de tamanho e filtro).
        user_id: Autor, extraído do token de acesso.

    Returns:
        O Chirp criado, ou None em caso de falha no banco.
    """
    now = datetime.now(timezone.utc)
    chirp = Chirp(id=uuid.uuid4(), body=body, user_id=user_id, created_at=now, updated_at=now)
    collection = _get_chirps_collection(db)
    try:
        insert_result = await collection.insert_one(chirp.model_dump(mode="json"))
        if insert_result.acknowledged:
            return chirp
        logger.warning(f"Criação de chirp para usuário {user_id} não foi reconhecida pelo DB.") # pragma: no cover
        return None # pragma: no cover
    except Exception as e:
        logger.exception(f"DB Error creating chirp for user {user_id}: {e}")
        return None

async def get_chirps(db: AsyncIOMotorDatabase) -> List[Chirp]:
    """Retorna todos os chirps, do mais antigo para o mais recente."""
    collection = _get_chirps_collection(db)
    chirps: List[Chirp] = []
    cursor = collection.find({}).sort("created_at", ASCENDING)
    async for chirp_dict in cursor:
        chirp_dict.pop('_id', None)
        try:
            chirps.append(Chirp.model_validate(chirp_dict))
        except ValidationError as e:
            logger.error(f"DB Validation error get_chirps (id={chirp_dict.get('id')}): {e}")
    return chirps

async def get_chirp_by_id(db: AsyncIOMotorDatabase, chirp_id: uuid.UUID) -> Optional[Chirp]:
    """Busca um chirp pelo seu UUID."""
    collection = _get_chirps_collection(db)
    chirp_dict = await collection.find_one({"id": str(chirp_id)})
    if chirp_dict:
        chirp_dict.pop('_id', None)
        try:
            return Chirp.model_validate(chirp_dict)
        except ValidationError as e:
            logger.error(f"DB Validation error get_chirp_by_id {chirp_id}: {e}")
            return None
    return None

async def delete_all_chirps(db: AsyncIOMotorDatabase) -> int:
    """Remove todos os chirps. Retorna a quantidade removida."""
    collection = _get_chirps_collection(db)
    delete_result = await collection.delete_many({})
    logger.warning(f"Coleção '{CHIRPS_COLLECTION}' limpa: {delete_result.deleted_count} chirp(s) removido(s).")
    return delete_result.deleted_count

# ========================
# --- Configuração de Índices do Banco de Dados ---
# ========================
async def create_chirp_indexes(db: AsyncIOMotorDatabase):
    """Cria os índices da coleção de chirps (idempotente)."""
    collection = _get_chirps_collection(db)
    try:
        await collection.create_index("id", unique=True, name="id_unique_idx")
        await collection.create_index([("created_at", ASCENDING)], name="created_at_asc_idx")
        await collection.create_index("user_id", name="user_id_idx")
        logger.info("Índices da coleção 'chirps' verificados/criados com sucesso.")
    except Exception as e:
        logger.error(f"Erro ao criar índices para a coleção 'chirps': {e}", exc_info=True)
