"""
Accès aux données pour la feature 'checkout' (tables orders, order_items, payments).
- La création commande + lignes + paiement passe par la fonction Postgres
  create_checkout_order (RPC Supabase): une seule transaction, pas de commande sans paiement.
- Les changements de statut sont des UPDATE conditionnels sur une seule ligne
  (compare-and-set sur le statut attendu).
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging
import storefront.infra.supabase_client as supabase_client

logger = logging.getLogger(__name__)

def _now() -> str:
    return datetime.now(timezone.utc).isoformat()

def _first(res) -> Optional[dict]:
    rows = res.data or []
    if isinstance(rows, dict):
        return rows
    return rows[0] if rows else None

# module storefront.checkout.repository
def create_checkout_order(*, order: Dict[str, Any], items: List[Dict[str, Any]], payment: Dict[str, Any]) -> Dict[str, Any]:
    """
    Insère la commande, ses lignes et le paiement dans une transaction.
    Retour: {"order": {...}, "payment": {...}} tel que renvoyé par la fonction SQL.
    """
    res = (
        supabase_client.get_service_supabase()
        .rpc("create_checkout_order", {"p_order": order, "p_items": items, "p_payment": payment})
        .execute()
    )
    data = res.data
    if isinstance(data, list):
        data = data[0] if data else None
    if not data or not data.get("order") or not data.get("payment"):
        raise RuntimeError("create_checkout_order n'a renvoyé aucune ligne")
    return data

def get_order(order_id: str) -> Optional[dict]:
    res = (
        supabase_client.get_service_supabase()
        .table("orders")
        .select("*")
        .eq("id", order_id)
        .limit(1)
        .execute()
    )
    return _first(res)

def get_order_items(order_id: str) -> List[dict]:
    res = (
        supabase_client.get_service_supabase()
        .table("order_items")
        .select("*")
        .eq("order_id", order_id)
        .execute()
    )
    return res.data or []

def get_payment(payment_id: str) -> Optional[dict]:
    res = (
        supabase_client.get_service_supabase()
        .table("payments")
        .select("*")
        .eq("id", payment_id)
        .limit(1)
        .execute()
    )
    return _first(res)

def get_payment_by_pixup_id(pixup_payment_id: str) -> Optional[dict]:
    """Recherche par identifiant PixUp (colonne unique pixup_payment_id)."""
    res = (
        supabase_client.get_service_supabase()
        .table("payments")
        .select("*")
        .eq("pixup_payment_id", pixup_payment_id)
        .limit(1)
        .execute()
    )
    return _first(res)

def update_payment_status(
    payment_id: str,
    status: str,
    *,
    expected_status: Optional[str] = None,
    webhook_data: Optional[str] = None,
) -> Optional[dict]:
    """
    Met à jour le statut d'un paiement (et le payload brut reçu, pour audit).
    - expected_status: l'UPDATE ne s'applique que si le statut courant vaut encore cette valeur;
      retourne None si une autre écriture est passée entre-temps.
    """
    values: Dict[str, Any] = {"status": status, "updated_at": _now()}
    if webhook_data is not None:
        values["webhook_data"] = webhook_data
    query = (
        supabase_client.get_service_supabase()
        .table("payments")
        .update(values)
        .eq("id", payment_id)
    )
    if expected_status is not None:
        query = query.eq("status", expected_status)
    return _first(query.execute())

def update_order_status(order_id: str, status: str) -> Optional[dict]:
    res = (
        supabase_client.get_service_supabase()
        .table("orders")
        .update({"status": status, "updated_at": _now()})
        .eq("id", order_id)
        .execute()
    )
    return _first(res)
