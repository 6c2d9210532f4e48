# chirpy/core/security.py
"""
Núcleo de autenticação da aplicação: hashing/verificação de senhas (bcrypt)
e ciclo de vida dos tokens de acesso JWT (emissão, validação e extração
do header `Authorization`).

Todas as funções são puras em relação aos seus argumentos: o segredo de
assinatura é recebido explicitamente e nenhum estado é compartilhado entre
chamadas.
"""

# ========================
# --- Importações ---
# ========================
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JOSEError
from passlib.context import CryptContext
from passlib.exc import PasswordValueError

# --- Módulos da Aplicação ---
from chirpy.core.exceptions import (AuthenticationError, EmptyInputError,
                                    ExpiredTokenError, InternalError,
                                    InvalidPasswordError,
                                    InvalidSignatureError, MalformedHeaderError,
                                    MalformedSubjectError, MissingHeaderError,
                                    TokenTooShortError)
from chirpy.models.token import TokenClaims

# ========================
# --- Configuração do Logger ---
# ========================
logger = logging.getLogger(__name__)

# ========================
# --- Configuração Hashing de Senha ---
# ========================
# Custo fixo do bcrypt (2^10 rodadas). Não é configurável em tempo de execução.
BCRYPT_ROUNDS = 10
# O bcrypt só considera os primeiros 72 bytes (UTF-8) da senha.
BCRYPT_MAX_PASSWORD_BYTES = 72

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_ROUNDS,
    bcrypt__truncate_error=True,
)

# ========================
# --- Constantes JWT ---
# ========================
ALGORITHM = "HS256"
TOKEN_ISSUER = "chirpy"
BEARER_PREFIX = "Bearer "
# Tokens menores são recusados antes da verificação da assinatura.
MIN_BEARER_TOKEN_LENGTH = 30

# ========================
# --- Funções de Senha ---
# ========================
def _exceeds_bcrypt_limit(password: str) -> bool:
    return len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES

def hash_password(password: str) -> str:
    """
    Gera um hash bcrypt (com salt aleatório) para a senha fornecida.

    Senhas acima de 72 bytes são recusadas em vez de truncadas.

    Args:
        password: A senha em texto plano. Não pode ser vazia.

    Returns:
        A string do hash bcrypt. Duas chamadas com a mesma senha produzem
        hashes diferentes, ambos verificáveis com `verify_password`.

    Raises:
        EmptyInputError: Se a senha for vazia.
        InvalidPasswordError: Se a senha passar de 72 bytes ou contiver byte NUL.
        InternalError: Se a primitiva de hashing falhar.
    """
    if not password:
        raise EmptyInputError("Senha vazia não pode ser hasheada.")
    try:
        return pwd_context.hash(password)
    except PasswordValueError as e:
        logger.info(f"Senha recusada pelo bcrypt: {type(e).__name__}")
        raise InvalidPasswordError("Senha não aceita pelo bcrypt.") from e
    except (ValueError, TypeError) as e:
        logger.error(f"Falha inesperada no hashing de senha: {type(e).__name__}")
        raise InternalError("Falha ao gerar hash da senha.") from e

def verify_password(password: str, hashed_password: str) -> None:
    """
    Verifica se a senha em texto plano corresponde ao hash armazenado.

    Args:
        password: A senha fornecida pelo usuário.
        hashed_password: O hash bcrypt armazenado.

    Raises:
        AuthenticationError: Se a senha não corresponder, se passar de 72
            bytes, ou se o hash for vazio, malformado ou de outro formato.
    """
    if not password or not hashed_password:
        raise AuthenticationError("Senha ou hash vazio.")
    # O passlib trunca na verificação mesmo com truncate_error
    if _exceeds_bcrypt_limit(password):
        raise AuthenticationError("Senha acima do limite do bcrypt.")
    try:
        matches = pwd_context.verify(password, hashed_password)
    except PasswordValueError as e:
        raise AuthenticationError("Senha não aceita pelo bcrypt.") from e
    except (ValueError, TypeError) as e:
        # Hash em formato não reconhecido pelo passlib
        logger.warning("Tentativa de verificar senha com hash em formato inválido.")
        raise AuthenticationError("Hash em formato inválido.") from e
    if not matches:
        raise AuthenticationError("Senha não corresponde ao hash.")

# ========================
# --- Funções JWT ---
# ========================
def make_access_token(user_id: uuid.UUID, secret: str, expires_in: timedelta) -> str:
    """
    Emite um token de acesso JWT assinado com HMAC-SHA256.

    Args:
        user_id: Identificador do usuário, gravado no claim `sub`.
        secret: Segredo de assinatura (não vazio).
        expires_in: Validade do token a partir de agora.

    Returns:
        O token JWT compacto (header.claims.assinatura).

    Raises:
        EmptyInputError: Se o segredo for vazio.
        InternalError: Se a assinatura falhar, inclusive por segredo inutilizável como chave HMAC.
    """
    if not secret:
        raise EmptyInputError("Segredo de assinatura vazio.")

    issued_at = datetime.now(timezone.utc)
    claims = TokenClaims(
        iss=TOKEN_ISSUER,
        sub=str(user_id),
        iat=int(issued_at.timestamp()),
        exp=int((issued_at + expires_in).timestamp()),
    )
    try:
        return jwt.encode(claims.model_dump(), secret, algorithm=ALGORITHM)
    except JOSEError as e:
        logger.error(f"Falha ao assinar token JWT: {type(e).__name__}")
        raise InternalError("Falha ao assinar o token.") from e

def validate_access_token(token: str, secret: str) -> uuid.UUID:
    """
    Valida um token JWT e retorna o ID do usuário contido no claim `sub`.

    Apenas tokens HS256 são aceitos; qualquer outro algoritmo declarado no
    header é rejeitado antes da verificação da assinatura.

    Args:
        token: O token JWT compacto.
        secret: O segredo usado na emissão.

    Returns:
        O UUID do usuário.

    Raises:
        EmptyInputError: Se o segredo for vazio.
        InvalidSignatureError: Assinatura inválida, algoritmo inesperado,
            emissor desconhecido ou token ilegível.
        ExpiredTokenError: Se o token estiver expirado.
        MalformedSubjectError: Se `sub` estiver ausente ou não for um UUID.
        InternalError: Se o segredo não puder ser usado como chave HMAC.
    """
    if not secret:
        raise EmptyInputError("Segredo de assinatura vazio.")
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            issuer=TOKEN_ISSUER,
            options={"require_exp": True, "verify_sub": False},
        )
    except ExpiredSignatureError as e:
        logger.info("Token JWT expirado.")
        raise ExpiredTokenError("Token expirado.") from e
    except JWTError as e:
        logger.info(f"Token JWT rejeitado: {e}")
        raise InvalidSignatureError("Token inválido.") from e
    except JOSEError as e:
        # Segredo inutilizável como chave HMAC (ex: chave PEM ou SSH)
        logger.error(f"Falha ao carregar a chave de verificação JWT: {type(e).__name__}")
        raise InternalError("Segredo de assinatura inutilizável.") from e

    subject = payload.get("sub")
    if not isinstance(subject, str):
        raise MalformedSubjectError("Claim 'sub' ausente.")
    try:
        return uuid.UUID(subject)
    except ValueError as e:
        raise MalformedSubjectError("Claim 'sub' não é um UUID.") from e

# ========================
# --- Extração do Header Authorization ---
# ========================
def extract_bearer_token(
    header_value: Optional[str],
    min_length: int = MIN_BEARER_TOKEN_LENGTH,
) -> str:
    """
    Extrai o token de um valor de header `Authorization: Bearer <token>`.

    Args:
        header_value: Valor bruto do header (ou None se ausente).
        min_length: Comprimento mínimo aceito para o token extraído.

    Returns:
        O token, sem o prefixo e sem espaços nas extremidades.

    Raises:
        MissingHeaderError: Header ausente ou vazio.
        MalformedHeaderError: Valor não começa exatamente com `Bearer `.
        TokenTooShortError: Token menor que `min_length`.
    """
    if not header_value:
        raise MissingHeaderError("Header Authorization ausente.")

    value = header_value.strip()
    # Prefixo sensível a maiúsculas e com espaço obrigatório: "BearerXYZ" é inválido.
    if not value.startswith(BEARER_PREFIX):
        raise MalformedHeaderError("Header Authorization sem prefixo 'Bearer '.")

    token = value[len(BEARER_PREFIX):].strip()
    if len(token) < min_length:
        raise TokenTooShortError(f"Token com menos de {min_length} caracteres.")
    return token
