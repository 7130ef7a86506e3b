import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Header, Request
from starlette.concurrency import run_in_threadpool

from storefront.cart.views import SESSION_HEADER
from storefront.errors import RequestValidationError
from storefront.utils.rate_limit import optional_rate_limit
from . import service as checkout_service
from .dependencies import get_pixup_client, get_pixup_settings
from .pixup_client import PixupClient
from .settings import PixupSettings
from .signature import SIGNATURE_HEADERS
from .validation import validate_checkout_request

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/checkout", tags=["Checkout API"])

# module storefront.checkout.views
@router.post("/create-payment", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def create_payment(
    request: Request,
    settings: PixupSettings = Depends(get_pixup_settings),
    client: Optional[PixupClient] = Depends(get_pixup_client),
) -> Dict[str, Any]:
    """
    Crée la commande et le paiement PIX pour le panier de la session.
    - Entrée JSON: { "sessionId", "customer"?: {name?, email?, phone?}, "success_url", "cancel_url", "webhook_url" }
    - Les montants sont recalculés côté serveur; aucun prix du client n'est lu.
    - Sécurité: rate limit (10 req / 60s)
    - Erreurs: 400 panier vide / montant invalide / données invalides, 500 sinon
    """
    try:
        body = await request.json()
    except ValueError:
        raise RequestValidationError("JSON invalide")
    validated = validate_checkout_request(body)
    if not validated.ok:
        raise validated.error

    payment = await run_in_threadpool(
        checkout_service.create_payment, validated.value, settings=settings, client=client,
    )
    return {"success": True, "payment": payment}

@router.post("/webhook", include_in_schema=False)
async def pixup_webhook(request: Request, settings: PixupSettings = Depends(get_pixup_settings)) -> Dict[str, Any]:
    """
    Webhook PixUp: le corps est lu brut pour vérifier la signature HMAC avant tout parsing.
    - En-tête: pixup-signature (ou x-pixup-signature)
    - Réponses: 200 {received, payment_id, status}, 401 signature, 400 payload, 404 paiement inconnu
    """
    raw_body = await request.body()
    signature = next((request.headers.get(h) for h in SIGNATURE_HEADERS if request.headers.get(h)), None)
    return await run_in_threadpool(checkout_service.process_webhook, raw_body, signature, settings=settings)

@router.get("/payment/{payment_id}/status")
def payment_status(
    payment_id: str,
    cart_session_id: Optional[str] = Header(default=None, alias=SESSION_HEADER),
    settings: PixupSettings = Depends(get_pixup_settings),
    client: Optional[PixupClient] = Depends(get_pixup_client),
) -> Dict[str, Any]:
    """
    Statut d'un paiement pour la session propriétaire (interrogé toutes les 5s par la page /pending).
    - Réponse: {status, amount, currency}
    - Erreurs: 401 sans session, 404 si inconnu ou non possédé
    """
    return checkout_service.get_payment_status(payment_id, cart_session_id, settings=settings, client=client)
