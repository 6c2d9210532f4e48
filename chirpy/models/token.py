# chirpy/models/token.py
"""
Este módulo define os modelos Pydantic relacionados à autenticação por token:
os claims gravados no JWT emitido pela API.
"""

# ========================
# --- Importações ---
# ========================
from pydantic import BaseModel, Field

# ========================
# --- Modelos Pydantic Token ---
# ========================
class TokenClaims(BaseModel):
    """
    Claims registrados contidos dentro de um token JWT emitido pela API.
    Os timestamps são segundos desde a época Unix (UTC).
    """
    iss: str = Field(..., title="Emissor do Token")
    sub: str = Field(..., title="ID do Usuário (Subject)")
    iat: int = Field(..., title="Timestamp de Emissão")
    exp: int = Field(..., title="Timestamp de Expiração")
