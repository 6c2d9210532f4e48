# chirpy/core/logging_config.py
"""
Este módulo configura o sistema de logging da aplicação utilizando Loguru.
Inclui um InterceptHandler para redirecionar logs do sistema de logging
padrão do Python para o Loguru, garantindo um formato de log consistente.
"""

# ========================
# --- Importações ---
# ========================
import logging
import sys
from loguru import logger as loguru_logger

# ========================
# --- Handler de Intercepção ---
# ========================
class InterceptHandler(logging.Handler):
    """
    Handler do `logging` que redireciona mensagens para o Loguru,
    preservando o nível e a origem (módulo/função/linha) do registro.
    """
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while hasattr(frame, "f_code") and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back # pragma: no cover
            if frame is None: # pragma: no cover
                break # pragma: no cover
            depth += 1 # pragma: no cover

        loguru_logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())

# ========================
# --- Função de Setup ---
# ========================
def setup_logging(log_level: str = "INFO"):
    """
    Configura o logging global da aplicação.

    - Substitui os handlers do Loguru por um único sink em `sys.stderr`.
    - Encaminha o `logging` padrão para o Loguru via `InterceptHandler`.
    - Silencia o log de acesso do Uvicorn: o header `Authorization`
      não deve aparecer em logs, e as rotas já registram o que importa.

    Args:
        log_level: Nível mínimo de log a ser exibido (ex: "INFO", "DEBUG").
    """
    log_level = log_level.upper()

    loguru_logger.remove()

    loguru_logger.add(
        sys.stderr,
        level=log_level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        enqueue=True,
        diagnose=False   # tracebacks sem valores de variáveis locais (senhas, segredos)
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    logging.getLogger("uvicorn.access").disabled = True
    logging.getLogger("uvicorn.error").propagate = False
    # passlib emite avisos de versão do backend bcrypt que não são acionáveis
    logging.getLogger("passlib").setLevel(logging.ERROR)
