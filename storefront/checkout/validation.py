"""
Validation aux frontières: retourne un résultat (valeur, erreur) au lieu de lever.
Les vues décident elles-mêmes de la réponse à produire.
"""
import json
from typing import Any, NamedTuple, Optional

from pydantic import BaseModel, ValidationError

from storefront.errors import RequestValidationError
from .models import CheckoutRequest, WebhookPayload

class Validated(NamedTuple):
    value: Any = None
    error: Optional[RequestValidationError] = None
    text: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

def _validate(model: type[BaseModel], data: Any, message: str) -> Validated:
    if not isinstance(data, dict):
        return Validated(error=RequestValidationError(message, details=[{"loc": [], "msg": "objet JSON attendu"}]))
    try:
        return Validated(value=model.model_validate(data))
    except ValidationError as e:
        return Validated(error=RequestValidationError(message, details=e.errors(include_url=False, include_input=False, include_context=False)))

# module storefront.checkout.validation
def validate_checkout_request(data: Any) -> Validated:
    return _validate(CheckoutRequest, data, "Données invalides")

def parse_webhook_body(raw_body: bytes) -> Validated:
    """
    Décode le corps brut (déjà authentifié) en UTF-8 puis valide le schéma du webhook.
    - Corps non UTF-8 ou JSON illisible -> erreur "JSON invalide"
    - Schéma non respecté -> erreur "Données invalides du webhook"
    - Le texte décodé est renvoyé dans Validated.text (archivé tel quel dans webhook_data)
    """
    try:
        text = raw_body.decode("utf-8")
        data = json.loads(text)
    except (ValueError, UnicodeDecodeError):
        return Validated(error=RequestValidationError("JSON invalide"))
    return _validate(WebhookPayload, data, "Données invalides du webhook")._replace(text=text)
