# chirpy/core/config.py

# ========================
# --- Importações ---
# ========================
import os
import logging
from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field, ValidationError, field_validator
from dotenv import load_dotenv

# ===============================
# --- Configuração do Logger ---
# ===============================
logger = logging.getLogger(__name__)

# ===============================
# --- Carregamento do .env ---
# ===============================
# Raiz do projeto (diretório acima do pacote `chirpy`)
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
dotenv_path = os.path.join(PROJECT_ROOT, '.env')
# Carrega as variáveis do arquivo .env para o ambiente, se o arquivo existir
loaded = load_dotenv(dotenv_path=dotenv_path)

# ======================================
# --- Definição das Configurações ---
# ======================================
class Settings(BaseSettings):
    """
    Configurações da aplicação lidas do ambiente usando Pydantic BaseSettings.
    Procura variáveis de ambiente ou variáveis em um arquivo .env.
    """
    # =========================
    # --- Config Gerais ---
    # =========================
    PROJECT_NAME: str = Field("Chirpy API", description="Nome do Projeto")
    API_PREFIX: str = Field("/api", description="Prefixo das rotas públicas da API")
    ADMIN_PREFIX: str = Field("/admin", description="Prefixo das rotas administrativas")
    PLATFORM: str = Field("prod", description="Plataforma de execução ('dev' habilita o reset administrativo)")

    # =============================
    # --- Configurações MongoDB ---
    # =============================
    MONGODB_URL: str = Field(..., description="URL de conexão completa do MongoDB (obrigatória)")
    DATABASE_NAME: str = Field("chirpy_db", description="Nome do banco de dados MongoDB")

    # ===========================
    # --- Configurações JWT ---
    # ===========================
    JWT_SECRET_KEY: str = Field(..., min_length=1, description="Chave secreta para assinar tokens JWT (obrigatória)")
    ACCESS_TOKEN_EXPIRE_SECONDS: int = Field(60 * 60, gt=0, description="Validade do token de acesso em segundos (padrão: 1 hora)")
    BEARER_TOKEN_MIN_LENGTH: int = Field(30, ge=1, description="Comprimento mínimo aceito para o token do header Authorization")

    # ===============================
    # --- Configurações de Chirps ---
    # ===============================
    CHIRP_MAX_LENGTH: int = Field(140, gt=0, description="Número máximo de caracteres de um chirp")
    PROFANE_WORDS: List[str] = Field(
        default=["kerfuffle", "sharbert", "fornax"],
        description="Palavras substituídas por '****' no corpo dos chirps"
    )

    # =========================================
    # --- Configurações de Arquivos Estáticos ---
    # =========================================
    FILESERVER_DIR: str = Field(
        default=os.path.join(PROJECT_ROOT, "static"),
        description="Diretório servido em /app/ (contabilizado nas métricas)"
    )
    ASSETS_DIR: str = Field(
        default=os.path.join(PROJECT_ROOT, "static", "assets"),
        description="Diretório servido em /assets/"
    )

    # ===============================
    # --- Configuração de Logging ---
    # ===============================
    LOG_LEVEL: str = Field(default="INFO", description="Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL)")

    # ===================================
    # --- Configurações CORS ---
    # ===================================
    CORS_ALLOWED_ORIGINS: List[str] = Field(default=[], description="Lista de origens CORS permitidas")

    # ====================================================
    # --- Configuração do Modelo Pydantic BaseSettings ---
    # ====================================================
    model_config = {
        "case_sensitive": False,
    }

    # ===============================
    # --- Validadores ---
    # ===============================
    @field_validator("PROFANE_WORDS")
    @classmethod
    def normalize_profane_words(cls, value: List[str]) -> List[str]:
        """A comparação do filtro é feita em minúsculas."""
        return [word.strip().lower() for word in value if word.strip()]

    @field_validator("PLATFORM")
    @classmethod
    def normalize_platform(cls, value: str) -> str:
        return value.strip().lower()

# ================================
# --- Criação da Instância ---
# ================================
try:
    # Pydantic BaseSettings lê do ambiente ou .env na instanciação
    settings = Settings()
except ValidationError as e:
    # Campos obrigatórios faltando (MONGODB_URL, JWT_SECRET_KEY) ou tipos inválidos
    logger.critical(f"Erro fatal de validação ao carregar configurações: {e}")
    raise e
except Exception as e:
    logger.critical(f"Erro inesperado ao carregar configurações: {e}", exc_info=True)
    raise e
