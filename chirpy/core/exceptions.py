# chirpy/core/exceptions.py
"""
Hierarquia de exceções do núcleo de autenticação (hash de senhas e tokens).

Cada exceção carrega uma mensagem pública genérica e o status HTTP que a
camada de rotas deve usar. O texto detalhado (`detail`) é destinado apenas
aos logs internos e nunca deve conter a senha em texto plano, o segredo de
assinatura ou o hash armazenado.
"""

# ========================
# --- Importações ---
# ========================
from typing import Optional

from fastapi import status


# ========================
# --- Exceção Base ---
# ========================
class ChirpyAuthError(Exception):
    """Base para todas as falhas do núcleo de autenticação."""

    public_message: str = "unauthorized"
    http_status: int = status.HTTP_401_UNAUTHORIZED

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.public_message
        super().__init__(self.detail)


# ========================
# --- Falhas de Senha ---
# ========================
class EmptyInputError(ChirpyAuthError):
    """Entrada obrigatória (senha ou segredo) vazia."""

    public_message = "bad request"
    http_status = status.HTTP_400_BAD_REQUEST


class InvalidPasswordError(ChirpyAuthError):
    """Senha que o bcrypt não aceita: mais de 72 bytes ou contendo byte NUL."""

    public_message = "bad request"
    http_status = status.HTTP_400_BAD_REQUEST


class AuthenticationError(ChirpyAuthError):
    """A senha não corresponde ao hash armazenado (ou o hash é inválido)."""


# ========================
# --- Falhas de Token ---
# ========================
class InvalidSignatureError(ChirpyAuthError):
    """Assinatura inválida, algoritmo inesperado ou token ilegível."""


class ExpiredTokenError(ChirpyAuthError):
    """O claim `exp` do token já passou."""


class MalformedSubjectError(ChirpyAuthError):
    """O claim `sub` está ausente ou não é um UUID."""


# ========================
# --- Falhas do Header Authorization ---
# ========================
class MissingHeaderError(ChirpyAuthError):
    """Header `Authorization` ausente ou vazio."""


class MalformedHeaderError(ChirpyAuthError):
    """Header presente, mas sem o prefixo exato `Bearer `."""

    public_message = "bad request"
    http_status = status.HTTP_400_BAD_REQUEST


class TokenTooShortError(ChirpyAuthError):
    """Token extraído menor que o comprimento mínimo plausível."""

    public_message = "bad request"
    http_status = status.HTTP_400_BAD_REQUEST


# ========================
# --- Falha Interna ---
# ========================
class InternalError(ChirpyAuthError):
    """Falha inesperada da primitiva criptográfica subjacente."""

    public_message = "internal server error"
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
