import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Header

from storefront.errors import RequestValidationError
from . import pricing
from . import service as cart_service
from .models import AddToCartRequest, ClearCartRequest, UpdateQuantityRequest

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/cart", tags=["Cart API"])

SESSION_HEADER = "cart-session-id"

def _require_session(session_id: Optional[str]) -> str:
    session_id = (session_id or "").strip()
    if not session_id:
        raise RequestValidationError("Session du panier requise")
    return session_id

# module storefront.cart.views
@router.get("")
def get_cart(
    cart_session_id: Optional[str] = Header(default=None, alias=SESSION_HEADER),
    sessionId: Optional[str] = None,
):
    """
    Lignes du panier de la session (en-tête cart-session-id, ou ?sessionId=...).
    - Erreurs: 400 si aucune session n'est fournie.
    """
    session_id = _require_session(cart_session_id or sessionId)
    return cart_service.list_cart(session_id)

@router.get("/total")
def get_cart_total(cart_session_id: Optional[str] = Header(default=None, alias=SESSION_HEADER)) -> Dict[str, Any]:
    """
    Totaux recalculés côté serveur (prix du catalogue courant), montants en chaînes "0.00".
    """
    session_id = _require_session(cart_session_id)
    totals = cart_service.calculate_cart_total(session_id)
    return {
        "items": [
            {
                "productId": item.product_id,
                "name": item.product.get("name") or "",
                "quantity": item.quantity,
                "unitPrice": pricing.format_amount(item.unit_price),
                "totalPrice": pricing.format_amount(item.total_price),
            }
            for item in totals.items
        ],
        "totalAmount": pricing.format_amount(totals.total_amount),
    }

@router.post("")
def add_to_cart(payload: AddToCartRequest):
    """
    Ajoute un produit au panier de la session (cumul si la ligne existe).
    - Entrée JSON: { "sessionId": "...", "productId": "...", "quantity": 1..99 }
    - Erreurs: 400 si données invalides ou quantité cumulée > 99, 404 si produit inconnu.
    """
    return cart_service.add_to_cart(payload.session_id, payload.product_id, payload.quantity)

@router.put("/{line_id}")
def update_cart_line(
    line_id: str,
    payload: UpdateQuantityRequest,
    cart_session_id: Optional[str] = Header(default=None, alias=SESSION_HEADER),
):
    session_id = _require_session(cart_session_id)
    return cart_service.update_quantity(session_id, line_id, payload.quantity)

# Route spécifique déclarée AVANT la route générique /{line_id}
@router.delete("/clear")
def clear_cart(payload: ClearCartRequest) -> Dict[str, Any]:
    removed = cart_service.clear_cart(payload.session_id)
    return {"success": True, "removed": removed}

@router.delete("/{line_id}")
def remove_cart_line(
    line_id: str,
    cart_session_id: Optional[str] = Header(default=None, alias=SESSION_HEADER),
) -> Dict[str, Any]:
    session_id = _require_session(cart_session_id)
    cart_service.remove_line(session_id, line_id)
    return {"success": True}
