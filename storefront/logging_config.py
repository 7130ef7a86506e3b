"""
Configuration du logging applicatif.
- Niveau pilote par LOG_LEVEL, sinon DEBUG hors production et INFO en production.
- Format unique pour les loggers de modules (logging.getLogger(__name__)).
"""
import logging

from storefront.config import IS_PRODUCTION, LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def setup_logging() -> None:
    level_name = (LOG_LEVEL or ("INFO" if IS_PRODUCTION else "DEBUG")).upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # httpx loggue chaque requête en INFO: trop bavard en production
    logging.getLogger("httpx").setLevel(logging.WARNING if IS_PRODUCTION else level)
