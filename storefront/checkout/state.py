"""
Machine à états des paiements et correspondance vers le statut de commande.

    pending -> approved | cancelled | failed
    approved -> refunded

Aucun retour vers pending; réappliquer le statut courant est un no-op.
"""
from typing import Optional

from .models import OrderStatus, PaymentStatus

PAYMENT_TRANSITIONS = {
    PaymentStatus.PENDING: {PaymentStatus.APPROVED, PaymentStatus.CANCELLED, PaymentStatus.FAILED},
    PaymentStatus.APPROVED: {PaymentStatus.REFUNDED},
}

# cancelled et failed annulent tous deux la commande; refunded ne touche pas la commande
ORDER_STATUS_FOR_PAYMENT = {
    PaymentStatus.PENDING: OrderStatus.PENDING,
    PaymentStatus.APPROVED: OrderStatus.PROCESSING,
    PaymentStatus.CANCELLED: OrderStatus.CANCELLED,
    PaymentStatus.FAILED: OrderStatus.CANCELLED,
}

ORDER_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.COMPLETED},
}

def _payment_status(value) -> Optional[PaymentStatus]:
    try:
        return PaymentStatus(value)
    except ValueError:
        return None

def can_transition(current: str, new: str) -> bool:
    """Vrai si current -> new est une transition autorisée (et non un no-op)."""
    cur, nxt = _payment_status(current), _payment_status(new)
    if cur is None or nxt is None or cur == nxt:
        return False
    return nxt in PAYMENT_TRANSITIONS.get(cur, set())

def order_status_for(payment_status: str) -> Optional[OrderStatus]:
    status = _payment_status(payment_status)
    return ORDER_STATUS_FOR_PAYMENT.get(status) if status else None

def can_transition_order(current: str, new: str) -> bool:
    try:
        cur, nxt = OrderStatus(current), OrderStatus(new)
    except ValueError:
        return False
    return nxt in ORDER_TRANSITIONS.get(cur, set())
