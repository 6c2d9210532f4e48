# chirpy/core/metrics.py
"""
Contador de acessos ao servidor de arquivos estáticos (`/app/`).

O contador é um objeto explícito guardado em `app.state.metrics` e injetado
nas rotas administrativas via dependência, em vez de uma variável global.
"""

# ========================
# --- Importações ---
# ========================
import logging
import threading
from typing import Annotated, Awaitable, Callable

from fastapi import Depends, Request, Response

# ========================
# --- Configuração do Logger ---
# ========================
logger = logging.getLogger(__name__)

FILESERVER_PATH_PREFIX = "/app"

# ========================
# --- Contador de Acessos ---
# ========================
class FileserverMetrics:
    """Contador de acessos seguro para uso a partir de várias threads."""

    def __init__(self) -> None:
        self._hits = 0
        self._lock = threading.Lock()

    @property
    def hits(self) -> int:
        with self._lock:
            return self._hits

    def increment(self) -> int:
        with self._lock:
            self._hits += 1
            return self._hits

    def reset(self) -> None:
        with self._lock:
            self._hits = 0

# ========================
# --- Middleware ---
# ========================
async def count_fileserver_hits(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """
    Middleware HTTP que contabiliza toda requisição sob `/app`,
    inclusive as que resultam em 404.
    """
    path = request.url.path
    if path == FILESERVER_PATH_PREFIX or path.startswith(FILESERVER_PATH_PREFIX + "/"):
        metrics: FileserverMetrics = request.app.state.metrics
        metrics.increment()
    return await call_next(request)

# ========================
# --- Dependência ---
# ========================
def get_metrics(request: Request) -> FileserverMetrics:
    """Retorna o contador associado à instância da aplicação."""
    return request.app.state.metrics

MetricsDep = Annotated[FileserverMetrics, Depends(get_metrics)]
