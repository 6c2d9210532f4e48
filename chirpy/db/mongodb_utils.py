# chirpy/db/mongodb_utils.py
"""
Este módulo gerencia a conexão com o MongoDB usando Motor (assíncrono):
abertura e fechamento do cliente, acesso à instância do banco e ping de saúde.
"""

# ========================
# --- Importações ---
# ========================
import logging
from typing import Optional
import motor.motor_asyncio
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

# --- Módulos da Aplicação ---
from chirpy.core.config import settings

# ========================
# --- Configuração do Logger ---
# ========================
logger = logging.getLogger(__name__)

# ========================
# --- Estado da Conexão ---
# ========================
# Criado no startup (lifespan) e somente lido depois disso.
db_client: Optional[AsyncIOMotorClient] = None
db_instance: Optional[AsyncIOMotorDatabase] = None

# ========================
# --- Função de Conexão ---
# ========================
async def connect_to_mongo() -> Optional[AsyncIOMotorDatabase]:
    """
    Abre o cliente Motor, confirma a conexão com `ping` e guarda a instância do banco.

    Returns:
        A instância AsyncIOMotorDatabase, ou None se a conexão falhar.
    """
    global db_client, db_instance
    logger.info("Conectando ao MongoDB...")
    try:
        db_client = motor.motor_asyncio.AsyncIOMotorClient(
            settings.MONGODB_URL,
            serverSelectionTimeoutMS=5000,
            uuidRepresentation="standard",
        )
        await db_client.admin.command('ping')
        db_instance = db_client[settings.DATABASE_NAME]
        logger.info(f"Conectado ao banco de dados: {settings.DATABASE_NAME}")
        return db_instance
    except Exception as e:
        logger.error(f"Não foi possível conectar ao MongoDB: {e}", exc_info=True)
        db_client = None
        db_instance = None
        return None

# ========================
# --- Função de Fechamento de Conexão ---
# ========================
async def close_mongo_connection():
    """Fecha o cliente Motor, se tiver sido inicializado."""
    global db_client, db_instance
    if db_client is None:
        logger.warning("Tentativa de fechar conexão com MongoDB, mas cliente não estava inicializado.")
        return
    db_client.close()
    db_client = None
    db_instance = None
    logger.info("Conexão com MongoDB fechada.")

# ========================
# --- Função de Acesso ao DB ---
# ========================
def get_database() -> AsyncIOMotorDatabase:
    """
    Retorna a instância do banco. Usada como dependência FastAPI.

    Raises:
        RuntimeError: Se chamada antes de `connect_to_mongo`.
    """
    if db_instance is None:
        logger.error("Tentativa de obter instância do DB antes da inicialização!")
        raise RuntimeError("A conexão com o banco de dados não foi inicializada.")
    return db_instance

# ========================
# --- Verificação de Saúde ---
# ========================
async def check_mongo_connection() -> bool:
    """Executa `ping` na conexão existente; False se indisponível."""
    if db_instance is None:
        return False
    try:
        await db_instance.command("ping")
        return True
    except Exception as e:
        logger.warning(f"Ping ao MongoDB falhou: {e}")
        return False
