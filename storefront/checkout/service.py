"""
Cas d'usage 'checkout': orchestre panier, repository, client PixUp et webhook.

- create_payment: recalcul du panier, appel PixUp (ou repli local), persistance transactionnelle.
- process_webhook: authentification HMAC, validation, transition de statut idempotente, vidage du panier.
- get_payment_status: lecture réservée à la session propriétaire, resynchronisation PixUp best-effort.
"""
import json
import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Dict, NamedTuple, Optional
from uuid import uuid4

from storefront.cart import service as cart_service
from storefront.errors import (
    AuthError,
    ConfigurationError,
    EmptyCartError,
    InvalidAmountError,
    NotFoundError,
    ProviderError,
)
from . import payload as checkout_payload
from . import repository
from . import state
from .models import CheckoutRequest, PaymentStatus
from .pixup_client import PixupClient, fallback_descriptor, is_fallback_id
from .settings import PixupSettings
from .signature import verify_signature
from .validation import parse_webhook_body

logger = logging.getLogger(__name__)

class TransitionResult(NamedTuple):
    status: str
    changed: bool

def _request_provider_payment(
    client: Optional[PixupClient],
    payload: Dict[str, Any],
    *,
    order_id: str,
    payment_id: str,
    success_url: str,
    settings: PixupSettings,
) -> Dict[str, Any]:
    """
    Appelle PixUp; en cas d'échec, retourne le descripteur de repli local.
    L'indisponibilité du fournisseur ne bloque pas le checkout.
    """
    try:
        if client is None:
            raise ProviderError("Client PixUp non configuré")
        descriptor = client.create_payment(payload)
        if not (descriptor.get("id") or descriptor.get("payment_id")):
            raise ProviderError("Réponse PixUp sans identifiant de paiement")
        return descriptor
    except ProviderError as e:
        logger.warning("PixUp indisponible, repli local order_id=%s cause=%s", order_id, e)
        return fallback_descriptor(
            order_id=order_id,
            payment_id=payment_id,
            pending_url=checkout_payload.pending_page_url(success_url),
            expiry_minutes=settings.payment_expiry_minutes,
        )

def create_payment(
    request: CheckoutRequest,
    *,
    settings: PixupSettings,
    client: Optional[PixupClient],
) -> Dict[str, Any]:
    """
    Crée commande + lignes + paiement pour le panier de la session et renvoie le descripteur normalisé.
    - Erreurs: EmptyCartError si panier vide, InvalidAmountError si total <= 0.
    - Le panier n'est pas vidé ici (uniquement à l'approbation, via le webhook).
    """
    totals = cart_service.calculate_cart_total(request.session_id)
    if not settings.production:
        logger.debug(
            "checkout.create_payment session=%s items=%s total=%s",
            request.session_id, len(totals.items), totals.total_amount,
        )
    if totals.is_empty:
        raise EmptyCartError()
    if totals.total_amount <= 0:
        raise InvalidAmountError()

    # Identifiants générés localement: la commande est corrélée à PixUp avant d'être écrite
    order_id = str(uuid4())
    payment_id = str(uuid4())
    currency = settings.currency
    customer = checkout_payload.normalize_customer(request.customer, settings.default_customer_name)

    pixup_request = checkout_payload.pixup_payload(
        order_id=order_id,
        session_id=request.session_id,
        totals=totals,
        currency=currency,
        customer=customer,
        success_url=request.success_url,
        cancel_url=request.cancel_url,
        webhook_url=request.webhook_url,
    )
    descriptor = _request_provider_payment(
        client,
        pixup_request,
        order_id=order_id,
        payment_id=payment_id,
        success_url=request.success_url,
        settings=settings,
    )
    pixup_id = str(descriptor.get("id") or descriptor.get("payment_id"))
    checkout_url = descriptor.get("checkout_url") or descriptor.get("payment_url")

    records = repository.create_checkout_order(
        order=checkout_payload.order_record(
            order_id=order_id,
            session_id=request.session_id,
            totals=totals,
            currency=currency,
            customer=customer,
        ),
        items=checkout_payload.order_item_records(totals),
        payment=checkout_payload.payment_record(
            payment_id=payment_id,
            pixup_payment_id=pixup_id,
            totals=totals,
            currency=currency,
            checkout_url=checkout_url,
        ),
    )
    payment = records["payment"]
    logger.info(
        "checkout.create_payment order_id=%s payment_id=%s pixup_id=%s fallback=%s",
        order_id, payment.get("id"), pixup_id, bool(descriptor.get("fallback")),
    )

    now = datetime.now(timezone.utc)
    expires_at = descriptor.get("expires_at") or (now + timedelta(minutes=settings.payment_expiry_minutes)).isoformat()
    return {
        "id": payment.get("id") or payment_id,
        "pixup_id": pixup_id,
        "order_id": order_id,
        "amount": float(totals.total_amount),
        "currency": currency,
        "status": PaymentStatus.PENDING.value,
        "checkout_url": checkout_url,
        "pix_code": descriptor.get("pix_code"),
        "qr_code": descriptor.get("qr_code"),
        "created_at": now.isoformat(),
        "expires_at": expires_at,
    }

def _sync_order_status(order_id: Optional[str], payment_status: str) -> None:
    """Aligne la commande sur le statut de paiement, sans jamais revenir en arrière."""
    target = state.order_status_for(payment_status)
    if not order_id or target is None:
        return
    order = repository.get_order(order_id)
    if not order:
        logger.error("checkout.sync_order commande introuvable order_id=%s", order_id)
        return
    current = order.get("status")
    if current == target.value or not state.can_transition_order(current, target.value):
        return
    repository.update_order_status(order_id, target.value)
    logger.info("checkout.sync_order order_id=%s %s -> %s", order_id, current, target.value)

def apply_payment_status(payment: Dict[str, Any], new_status: str, *, raw_data: Optional[str] = None) -> TransitionResult:
    """
    Applique une transition de paiement puis aligne la commande liée.
    - Même statut: no-op (rejeu), la commande est tout de même réalignée si elle est en retard.
    - Transition interdite (ex: approved -> pending): ignorée et journalisée.
    - UPDATE conditionnel sur le statut lu: si une autre écriture est passée avant,
      le premier écrivain gagne et le statut relu est renvoyé.
    """
    current = payment.get("status")
    order_id = payment.get("order_id")
    if new_status == current:
        _sync_order_status(order_id, current)
        return TransitionResult(current, False)
    if not state.can_transition(current, new_status):
        logger.warning(
            "checkout.transition ignorée payment_id=%s %s -> %s", payment.get("id"), current, new_status,
        )
        return TransitionResult(current, False)

    updated = repository.update_payment_status(
        payment["id"], new_status, expected_status=current, webhook_data=raw_data,
    )
    if updated is None:
        fresh = repository.get_payment(payment["id"]) or {}
        logger.info(
            "checkout.transition concurrente payment_id=%s attendu=%s courant=%s",
            payment.get("id"), current, fresh.get("status"),
        )
        return TransitionResult(fresh.get("status") or current, False)

    _sync_order_status(order_id, new_status)
    return TransitionResult(new_status, True)

def _reported_status(payment: Dict[str, Any]) -> Optional[str]:
    """Statut annoncé par le dernier webhook archivé (webhook_data), None si aucun."""
    try:
        data = json.loads(payment.get("webhook_data") or "null")
    except ValueError:
        return None
    return data.get("status") if isinstance(data, dict) else None

def process_webhook(raw_body: bytes, signature: Optional[str], *, settings: PixupSettings) -> Dict[str, Any]:
    """
    Réconcilie une notification PixUp.
    Ordre strict: signature -> JSON -> schéma -> recherche du paiement -> transition.
    Aucune écriture n'a lieu avant qu'une erreur puisse être renvoyée: un rejeu reste sûr.
    Le panier est vidé au premier webhook "approved" du paiement, même si le poller a déjà approuvé.
    """
    if settings.webhook_secret:
        verify_signature(raw_body, signature, settings.webhook_secret)
    elif settings.production:
        raise ConfigurationError("PIXUP_WEBHOOK_SECRET est requis en production")
    else:
        logger.warning("checkout.webhook signature non vérifiée (PIXUP_WEBHOOK_SECRET absent, mode développement)")

    validated = parse_webhook_body(raw_body)
    if not validated.ok:
        raise validated.error
    event = validated.value
    metadata = event.metadata

    if not settings.production:
        logger.debug(
            "checkout.webhook reçu payment_id=%s status=%s amount=%s metadata=%s",
            event.payment_id, event.status, event.amount, metadata.model_dump() if metadata else None,
        )

    payment = repository.get_payment_by_pixup_id(event.payment_id)
    if not payment:
        # Désynchronisation PixUp/local: à investiguer, jamais silencieux
        logger.error("checkout.webhook paiement introuvable pixup_id=%s", event.payment_id)
        raise NotFoundError("Paiement introuvable")

    approved = PaymentStatus.APPROVED.value
    already_reported = _reported_status(payment) == event.status
    result = apply_payment_status(payment, event.status, raw_data=validated.text)

    first_approval = event.status == approved and result.status == approved and (result.changed or not already_reported)
    if first_approval and not result.changed:
        # Approbation déjà appliquée par le poller (ou une écriture concurrente): on archive ce webhook
        repository.update_payment_status(payment["id"], approved, expected_status=approved, webhook_data=validated.text)
    if first_approval and metadata and metadata.session_id:
        cart_service.clear_cart(metadata.session_id)

    logger.info(
        "checkout.webhook payment_id=%s pixup_id=%s status=%s changed=%s",
        payment["id"], event.payment_id, result.status, result.changed,
    )
    return {"received": True, "payment_id": payment["id"], "status": result.status}

def _refresh_from_provider(client: PixupClient, payment: Dict[str, Any]) -> str:
    """
    Réinterroge PixUp et persiste un statut divergent. Best-effort:
    toute erreur est journalisée et le statut local est conservé.
    """
    current = payment.get("status")
    try:
        remote = client.get_payment(payment["pixup_payment_id"])
        remote_status = remote.get("status")
        if remote_status and remote_status != current:
            # webhook_data reste réservé aux notifications PixUp
            return apply_payment_status(payment, remote_status).status
    except ProviderError as e:
        logger.warning("checkout.status PixUp indisponible payment_id=%s cause=%s", payment.get("id"), e)
    except Exception:
        logger.exception("checkout.status resynchronisation échouée payment_id=%s", payment.get("id"))
    return current

def get_payment_status(
    payment_id: str,
    session_id: Optional[str],
    *,
    settings: PixupSettings,
    client: Optional[PixupClient],
) -> Dict[str, Any]:
    """
    Statut minimal d'un paiement pour la session propriétaire.
    - 401 sans session; 404 si le paiement n'existe pas OU appartient à une autre session
      (l'existence n'est jamais révélée).
    - Ne renvoie ni URL de checkout ni code PIX.
    """
    session_id = (session_id or "").strip()
    if not session_id:
        raise AuthError("Session requise")

    payment = repository.get_payment(payment_id)
    order = repository.get_order(payment["order_id"]) if payment and payment.get("order_id") else None
    if not payment or not order or order.get("session_id") != session_id:
        raise NotFoundError("Paiement introuvable")

    status = payment.get("status")
    pixup_id = payment.get("pixup_payment_id")
    if client is not None and settings.live_status_check and pixup_id and not is_fallback_id(pixup_id):
        status = _refresh_from_provider(client, payment)

    return {
        "status": status,
        "amount": float(Decimal(str(payment.get("amount") or "0"))),
        "currency": payment.get("currency") or settings.currency,
    }
