# chirpy/core/utils.py
"""
Módulo contendo funções utilitárias para o conteúdo dos chirps:
validação de tamanho e filtro de palavras bloqueadas.
"""

# ========================
# --- Importações ---
# ========================
import logging
from typing import Iterable, Optional

# --- Módulos da Aplicação ---
from chirpy.core.config import settings

# ========================
# --- Configuração do Logger ---
# ========================
logger = logging.getLogger(__name__)

CENSORED_WORD = "****"

# ========================
# --- Filtro de Palavras ---
# ========================
def filter_profanity(body: str, blocklist: Optional[Iterable[str]] = None) -> str:
    """
    Substitui por `****` as palavras do corpo presentes na lista de bloqueio.

    O texto é dividido em espaços simples e cada palavra é comparada em
    minúsculas. Palavras com pontuação colada (ex: "kerfuffle!") não são
    alteradas, e os espaços originais são preservados.

    Args:
        body: Texto do chirp.
        blocklist: Palavras bloqueadas (minúsculas). Usa `settings.PROFANE_WORDS` se None.

    Returns:
        O texto filtrado.
    """
    blocked = set(settings.PROFANE_WORDS if blocklist is None else blocklist)
    words = body.split(" ")
    replaced = 0
    for index, word in enumerate(words):
        if word.lower() in blocked:
            words[index] = CENSORED_WORD
            replaced += 1
    if replaced:
        logger.debug(f"Filtro de palavras substituiu {replaced} palavra(s).")
    return " ".join(words)

# ========================
# --- Validação de Tamanho ---
# ========================
def is_chirp_too_long(body: str, max_length: Optional[int] = None) -> bool:
    """Indica se o corpo excede o limite de caracteres configurado."""
    limit = settings.CHIRP_MAX_LENGTH if max_length is None else max_length
    return len(body) > limit
