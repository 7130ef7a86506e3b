"""
Construction des enregistrements et du payload PixUp à partir des totaux recalculés.
Logique pure (pas de HTTP, pas de DB).
"""
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from storefront.cart import pricing
from storefront.cart.models import CartTotal
from .models import Customer

# module storefront.checkout.payload
def normalize_customer(customer: Optional[Customer], default_name: str) -> Dict[str, str]:
    """Champs client avec valeurs par défaut (nom générique, email/téléphone vides)."""
    customer = customer or Customer()
    return {
        "name": (customer.name or "").strip() or default_name,
        "email": (customer.email or "").strip(),
        "phone": (customer.phone or "").strip(),
    }

def order_record(*, order_id: str, session_id: str, totals: CartTotal, currency: str, customer: Dict[str, str]) -> Dict[str, Any]:
    return {
        "id": order_id,
        "session_id": session_id,
        "status": "pending",
        "total_amount": pricing.format_amount(totals.total_amount),
        "currency": currency,
        "payment_method": "pix",
        "customer_email": customer["email"],
        "customer_name": customer["name"],
        "customer_phone": customer["phone"],
    }

def order_item_records(totals: CartTotal) -> List[Dict[str, Any]]:
    """Une ligne de commande par ligne de panier, figée au prix recalculé."""
    return [
        {
            "product_id": item.product_id,
            "quantity": item.quantity,
            "unit_price": pricing.format_amount(item.unit_price),
            "total_price": pricing.format_amount(item.total_price),
        }
        for item in totals.items
    ]

def payment_record(*, payment_id: str, pixup_payment_id: str, totals: CartTotal, currency: str, checkout_url: Optional[str]) -> Dict[str, Any]:
    return {
        "id": payment_id,
        "pixup_payment_id": pixup_payment_id,
        "status": "pending",
        "amount": pricing.format_amount(totals.total_amount),
        "currency": currency,
        "payment_method": "pix",
        "pixup_checkout_url": checkout_url,
    }

def pixup_payload(
    *,
    order_id: str,
    session_id: str,
    totals: CartTotal,
    currency: str,
    customer: Dict[str, str],
    success_url: str,
    cancel_url: str,
    webhook_url: str,
) -> Dict[str, Any]:
    """
    Payload POST /api/v1/payments.
    - amount et items[].price en centimes (entiers)
    - metadata.orderId / metadata.sessionId: corrélation au retour du webhook
    """
    count = len(totals.items)
    return {
        "amount": pricing.to_cents(totals.total_amount),
        "currency": currency,
        "description": f"Pedido #{order_id} - {count} {'item' if count == 1 else 'itens'}",
        "customer": dict(customer),
        "items": [
            {
                "id": item.product_id,
                "name": item.product.get("name") or "Produto",
                "quantity": item.quantity,
                "price": pricing.to_cents(item.unit_price),
            }
            for item in totals.items
        ],
        "success_url": success_url,
        "cancel_url": cancel_url,
        "webhook_url": webhook_url,
        "metadata": {"orderId": order_id, "sessionId": session_id},
    }

def pending_page_url(success_url: str) -> str:
    """Page /pending sur la même origine que success_url (convention du front)."""
    parsed = urlparse(success_url)
    return f"{parsed.scheme}://{parsed.netloc}/pending"
