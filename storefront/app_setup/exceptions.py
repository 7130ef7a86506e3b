"""
Gestionnaires d'exceptions.
- Erreurs métier (StorefrontError): code HTTP porté par l'erreur, message court,
  détails uniquement hors production.
- Validation FastAPI (corps/paramètres): 400 "Données invalides" comme les erreurs métier.
- HTTPException: JSON standard {"detail": ...}.
- Toute autre exception: 500 générique, texte interne jamais exposé en production.
"""
import logging
from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError as FastAPIValidationError
from fastapi.responses import JSONResponse

from storefront.config import IS_PRODUCTION
from storefront.errors import ConfigurationError, StorefrontError

logger = logging.getLogger(__name__)

def _error_body(message: str, details=None) -> dict:
    body = {"error": message}
    if details is not None and not IS_PRODUCTION:
        body["details"] = jsonable_encoder(details)
    return body

def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StorefrontError)
    async def storefront_error(request: Request, exc: StorefrontError):
        if isinstance(exc, ConfigurationError):
            logger.critical("Configuration invalide sur %s: %s", request.url.path, exc.message)
        elif exc.status_code >= 500:
            logger.error("Erreur %s sur %s: %s", exc.status_code, request.url.path, exc.message)
        details = exc.details
        if details is None and exc.status_code >= 500:
            details = exc.message
        message = "Erreur interne du serveur" if exc.status_code >= 500 else exc.message
        return JSONResponse(status_code=exc.status_code, content=_error_body(message, details))

    @app.exception_handler(FastAPIValidationError)
    async def request_validation_error(request: Request, exc: FastAPIValidationError):
        return JSONResponse(status_code=400, content=_error_body("Données invalides", exc.errors()))

    @app.exception_handler(HTTPException)
    async def http_error(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception("Erreur inattendue sur %s", request.url.path)
        return JSONResponse(status_code=500, content=_error_body("Erreur interne du serveur", str(exc)))
