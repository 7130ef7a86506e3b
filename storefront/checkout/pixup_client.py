"""
Adaptateur PixUp: centralise l'authentification et les appels HTTP au fournisseur PIX.
- Authentification HTTP Basic base64("client_id:client_secret") (documentation PixUp).
- Un seul appel par opération, sans retry: l'appelant décide du repli.
- Tout échec (transport, statut non-2xx, réponse illisible) est converti en ProviderError.
"""
import base64
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import httpx

from storefront.errors import ConfigurationError, ProviderError
from .settings import PixupSettings

logger = logging.getLogger(__name__)

PAYMENTS_PATH = "/api/v1/payments"
FALLBACK_PREFIX = "local_"

def basic_auth_header(client_id: str, client_secret: str) -> str:
    if not client_id or not client_secret:
        raise ConfigurationError("Identifiants PixUp non configurés")
    token = base64.b64encode(f"{client_id}:{client_secret}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"

class PixupClient:
    """
    Client REST PixUp.
    La construction échoue (ConfigurationError) si un identifiant manque:
    c'est une erreur de configuration, pas une erreur de requête.
    """

    def __init__(self, settings: PixupSettings, transport: Optional[httpx.BaseTransport] = None):
        self.settings = settings
        self._auth_header = basic_auth_header(settings.client_id, settings.client_secret)
        self.client = httpx.Client(
            base_url=settings.base_url,
            timeout=httpx.Timeout(settings.timeout_seconds),
            headers={"Authorization": self._auth_header, "Content-Type": "application/json"},
            transport=transport,
        )
        if not settings.production:
            logger.debug("PixUp Basic Auth client_id=%s...", settings.client_id[:8])

    def close(self) -> None:
        self.client.close()

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            response = self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise ProviderError(f"PixUp injoignable: {e.__class__.__name__}") from e

        if not response.is_success:
            if not self.settings.production:
                logger.error("PixUp API error status=%s body=%s", response.status_code, response.text[:500])
            raise ProviderError(f"PixUp API failed: {response.status_code}", status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError("Réponse PixUp illisible", status_code=response.status_code) from e
        if not isinstance(data, dict):
            raise ProviderError("Réponse PixUp inattendue", status_code=response.status_code)
        return data

    def create_payment(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST /api/v1/payments.
        Retour: descripteur PixUp (id|payment_id, checkout_url|payment_url, pix_code, qr_code, expires_at...).
        """
        return self._request("POST", PAYMENTS_PATH, json=payload)

    def get_payment(self, pixup_payment_id: str) -> Dict[str, Any]:
        """GET /api/v1/payments/{id}: statut courant côté PixUp."""
        return self._request("GET", f"{PAYMENTS_PATH}/{pixup_payment_id}")

def build_pixup_client(settings: PixupSettings) -> Optional[PixupClient]:
    """
    Construit le client partagé au démarrage.
    - Production: identifiants obligatoires (ConfigurationError sinon).
    - Développement: None si non configuré; le checkout passera par le descripteur de repli.
    """
    if not settings.has_credentials and not settings.production:
        return None
    return PixupClient(settings)

def is_fallback_id(pixup_payment_id: Optional[str]) -> bool:
    return bool(pixup_payment_id) and pixup_payment_id.startswith(FALLBACK_PREFIX)

def fallback_descriptor(*, order_id: str, payment_id: str, pending_url: str, expiry_minutes: int) -> Dict[str, Any]:
    """
    Descripteur de paiement local quand PixUp est indisponible.
    - id déterministe dérivé de la commande
    - checkout_url vers la page /pending du client (suivi par polling)
    - expiration à +expiry_minutes
    """
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=expiry_minutes)
    return {
        "id": f"{FALLBACK_PREFIX}{order_id}",
        "checkout_url": f"{pending_url}?payment_id={payment_id}",
        "status": "pending",
        "expires_at": expires_at.isoformat(),
        "fallback": True,
    }
