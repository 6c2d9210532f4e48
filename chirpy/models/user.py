# chirpy/models/user.py
"""
Este módulo define os modelos Pydantic para a entidade Usuário (User).
Inclui os modelos de entrada (cadastro e login), a forma como o usuário
é armazenado no banco de dados e as representações retornadas pela API.
"""

# ========================
# --- Importações ---
# ========================
import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, EmailStr, Field, ConfigDict

# ========================
# --- Modelos Pydantic de User ---
# ========================

# --- Modelo para Criação de Usuário ---
class UserCreate(BaseModel):
    """
    Payload esperado no cadastro de um novo usuário.
    Senha vazia é recusada pelo núcleo de autenticação (400), não por este modelo.
    """
    email: EmailStr = Field(..., title="Endereço de E-mail")
    password: str = Field(..., title="Senha", description="Senha (será hasheada antes de salvar).")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "walt@breakingbad.com",
                    "password": "04234",
                }
            ]
        }
    }

# --- Modelo para Login ---
class UserLogin(BaseModel):
    """Credenciais enviadas no login."""
    email: EmailStr = Field(..., title="Endereço de E-mail")
    password: str = Field(..., title="Senha")

# --- Modelos para Representação no Banco de Dados e Respostas da API ---
class UserInDB(BaseModel):
    """
    Representação completa de um usuário como armazenado no banco de dados.
    Inclui a senha hasheada e é usado apenas internamente.
    """
    id: uuid.UUID = Field(..., title="ID Único do Usuário")
    email: EmailStr = Field(..., title="Endereço de E-mail")
    hashed_password: str = Field(..., title="Senha Hasheada")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), title="Data de Criação")
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), title="Data da Última Atualização")

    model_config = ConfigDict(from_attributes=True)

class User(BaseModel):
    """
    Modelo de usuário utilizado nas respostas da API.
    Omite a senha hasheada.
    """
    id: uuid.UUID = Field(..., title="ID Único do Usuário")
    email: EmailStr
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class UserWithToken(User):
    """Resposta do login: dados públicos do usuário mais o token de acesso."""
    token: str = Field(..., title="Token de Acesso JWT")
    token_type: str = Field(default="bearer", title="Tipo do Token")
