from controle_api.core.database import Base
from controle_api.models.registro import (
    MONEY_FIELDS,
    OPTIONAL_FIELDS,
    REQUIRED_FIELDS,
    SEARCH_FIELDS,
    TEXT_FIELDS,
    Registro,
)

__all__ = [
    "Base",
    "Registro",
    "REQUIRED_FIELDS",
    "TEXT_FIELDS",
    "OPTIONAL_FIELDS",
    "MONEY_FIELDS",
    "SEARCH_FIELDS",
]
