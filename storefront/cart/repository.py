"""
Accès aux données pour la feature 'cart' (tables cart et products).
La colonne cart.user_id porte l'identifiant de session invité.
"""
from typing import Any, Dict, Iterable, List, Optional
import logging
import storefront.infra.supabase_client as supabase_client

logger = logging.getLogger(__name__)

# module storefront.cart.repository
def fetch_cart_lines(session_id: str) -> List[dict]:
    """
    Lignes de panier d'une session, dans l'ordre d'ajout.
    - Retourne [] si session_id vide.
    - Les erreurs d'accès remontent: un panier illisible n'est pas un panier vide.
    """
    if not session_id:
        return []
    res = (
        supabase_client.get_service_supabase()
        .table("cart")
        .select("id, user_id, product_id, quantity, created_at")
        .eq("user_id", session_id)
        .order("created_at")
        .execute()
    )
    return res.data or []

def get_cart_line(line_id: str) -> Optional[dict]:
    res = (
        supabase_client.get_service_supabase()
        .table("cart")
        .select("id, user_id, product_id, quantity, created_at")
        .eq("id", line_id)
        .limit(1)
        .execute()
    )
    rows = res.data or []
    return rows[0] if rows else None

def find_cart_line(session_id: str, product_id: str) -> Optional[dict]:
    res = (
        supabase_client.get_service_supabase()
        .table("cart")
        .select("id, user_id, product_id, quantity, created_at")
        .eq("user_id", session_id)
        .eq("product_id", product_id)
        .limit(1)
        .execute()
    )
    rows = res.data or []
    return rows[0] if rows else None

def insert_cart_line(*, session_id: str, product_id: str, quantity: int) -> Optional[dict]:
    res = (
        supabase_client.get_service_supabase()
        .table("cart")
        .insert({"user_id": session_id, "product_id": product_id, "quantity": quantity})
        .execute()
    )
    rows = res.data or []
    return rows[0] if rows else None

def update_cart_quantity(line_id: str, quantity: int) -> Optional[dict]:
    res = (
        supabase_client.get_service_supabase()
        .table("cart")
        .update({"quantity": quantity})
        .eq("id", line_id)
        .execute()
    )
    rows = res.data or []
    return rows[0] if rows else None

def delete_cart_line(line_id: str) -> bool:
    res = (
        supabase_client.get_service_supabase()
        .table("cart")
        .delete()
        .eq("id", line_id)
        .execute()
    )
    return bool(res.data)

def clear_cart(session_id: str) -> int:
    """
    Supprime toutes les lignes d'une session et retourne le nombre de lignes supprimées.
    - No-op (0) si session_id vide ou panier déjà vide.
    """
    if not session_id:
        return 0
    res = (
        supabase_client.get_service_supabase()
        .table("cart")
        .delete()
        .eq("user_id", session_id)
        .execute()
    )
    return len(res.data or [])

def fetch_products_by_ids(ids: List[str]) -> List[dict]:
    """
    Récupère les produits par leurs IDs (table 'products').
    - Retourne [] si ids vide ou en cas d'erreur: une jointure catalogue ratée ne doit pas lever.
    """
    if not ids:
        return []
    try:
        res = (
            supabase_client.get_service_supabase()
            .table("products")
            .select("*")
            .in_("id", [str(i) for i in ids])
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("cart.repository.fetch_products_by_ids failed ids=%s", ids)
        return []

def get_products_map(ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
    """
    Retourne un dict {id: produit} à partir d'une liste d'IDs.
    """
    products = fetch_products_by_ids(list(ids))
    return {str(p.get("id")): p for p in products}

def get_product(product_id: str) -> Optional[dict]:
    return get_products_map([product_id]).get(str(product_id))
