# chirpy/models/chirp.py
"""
Este módulo define os modelos Pydantic para a entidade Chirp,
a mensagem curta publicada por um usuário autenticado.
"""

# ========================
# --- Importações ---
# ========================
import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, Field, ConfigDict

# ========================
# --- Modelos Pydantic de Chirp ---
# ========================
class ChirpCreate(BaseModel):
    """
    Payload para publicar um chirp. O autor vem do token de acesso,
    nunca do corpo da requisição.
    """
    body: str = Field(..., title="Texto do Chirp")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"body": "I'm the one who knocks!"}
            ]
        }
    }

class Chirp(BaseModel):
    """Chirp como armazenado no banco de dados e retornado pela API."""
    id: uuid.UUID = Field(..., title="ID Único do Chirp")
    body: str = Field(..., title="Texto do Chirp")
    user_id: uuid.UUID = Field(..., title="ID do Autor")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), title="Data de Criação")
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), title="Data da Última Atualização")

    model_config = ConfigDict(from_attributes=True)
