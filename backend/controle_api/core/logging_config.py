"""Configuração de logs da aplicação: um formato, saída em stdout."""
import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Instala o handler uma vez; o nível do logger raiz é aplicado a cada chamada."""
    global _configured
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    if not _configured:
        logging.basicConfig(format=LOG_FORMAT, level=numeric_level, stream=sys.stdout)
        _configured = True
    logging.getLogger().setLevel(numeric_level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
