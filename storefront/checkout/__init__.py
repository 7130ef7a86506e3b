"""
Module 'checkout' (feature-first): point d'entrée public.
Réunit validation, signature webhook, client PixUp, repository BD et services.
"""

from .models import CheckoutRequest, WebhookPayload, PaymentStatus, OrderStatus
from .settings import PixupSettings, load_pixup_settings
from .validation import Validated, validate_checkout_request, parse_webhook_body
from .signature import compute_signature, verify_signature
from .pixup_client import PixupClient, build_pixup_client, fallback_descriptor
from .service import create_payment, process_webhook, get_payment_status, apply_payment_status

__all__ = [
    # models
    "CheckoutRequest",
    "WebhookPayload",
    "PaymentStatus",
    "OrderStatus",
    # settings
    "PixupSettings",
    "load_pixup_settings",
    # validation
    "Validated",
    "validate_checkout_request",
    "parse_webhook_body",
    # signature
    "compute_signature",
    "verify_signature",
    # pixup
    "PixupClient",
    "build_pixup_client",
    "fallback_descriptor",
    # services
    "create_payment",
    "process_webhook",
    "get_payment_status",
    "apply_payment_status",
]
