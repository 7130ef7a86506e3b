"""
Cas d'usage 'cart': panier invité par session et recalcul autoritaire des totaux.
"""
import logging
from typing import Any, Dict, List

from storefront.errors import NotFoundError, RequestValidationError
from . import pricing
from . import repository
from .models import CartTotal, CartTotalLine, MAX_QUANTITY

logger = logging.getLogger(__name__)

def calculate_cart_total(session_id: str) -> CartTotal:
    """
    Recalcule le panier d'une session à partir du catalogue courant.
    - Jointure interne lignes x produits: une ligne dont le produit est absent
      (ou dont le prix est illisible) est ignorée sans lever.
    - total_price = prix unitaire x quantité, en Decimal; total_amount = somme des lignes.
    - Aucun prix transmis par le client n'intervient ici.
    """
    lines = repository.fetch_cart_lines(session_id)
    if not lines:
        return CartTotal()

    products = repository.get_products_map({str(line.get("product_id")) for line in lines})
    items: List[CartTotalLine] = []
    total = pricing.ZERO
    for line in lines:
        product_id = str(line.get("product_id") or "")
        quantity = int(line.get("quantity") or 0)
        product = products.get(product_id)
        if not product or quantity <= 0:
            continue
        unit_price = pricing.price_from_product(product)
        if unit_price is None:
            logger.warning("cart.calculate_cart_total prix illisible product_id=%s", product_id)
            continue
        line_total = unit_price * quantity
        total += line_total
        items.append(CartTotalLine(
            product_id=product_id,
            quantity=quantity,
            product=product,
            unit_price=unit_price,
            total_price=line_total,
        ))
    return CartTotal(items=items, total_amount=total)

def list_cart(session_id: str) -> List[Dict[str, Any]]:
    return repository.fetch_cart_lines(session_id)

def add_to_cart(session_id: str, product_id: str, quantity: int) -> Dict[str, Any]:
    """
    Ajoute un produit au panier ou cumule la quantité d'une ligne existante.
    - Le produit doit exister au catalogue.
    - La quantité cumulée reste bornée à MAX_QUANTITY.
    """
    if not repository.get_product(product_id):
        raise NotFoundError("Produit introuvable")

    existing = repository.find_cart_line(session_id, product_id)
    if existing:
        merged = int(existing.get("quantity") or 0) + quantity
        if merged > MAX_QUANTITY:
            raise RequestValidationError("Quantité invalide", details=[{"loc": ["quantity"], "msg": f"max {MAX_QUANTITY}"}])
        row = repository.update_cart_quantity(existing["id"], merged)
    else:
        row = repository.insert_cart_line(session_id=session_id, product_id=product_id, quantity=quantity)
    if not row:
        raise RuntimeError("Impossible d'ajouter l'article au panier")
    logger.debug("cart.add_to_cart session=%s product=%s quantity=%s", session_id, product_id, row.get("quantity"))
    return row

def _owned_line(session_id: str, line_id: str) -> Dict[str, Any]:
    # Une ligne d'une autre session est rapportée comme introuvable
    line = repository.get_cart_line(line_id)
    if not line or line.get("user_id") != session_id:
        raise NotFoundError("Article du panier introuvable")
    return line

def update_quantity(session_id: str, line_id: str, quantity: int) -> Dict[str, Any]:
    _owned_line(session_id, line_id)
    row = repository.update_cart_quantity(line_id, quantity)
    if not row:
        raise NotFoundError("Article du panier introuvable")
    return row

def remove_line(session_id: str, line_id: str) -> bool:
    _owned_line(session_id, line_id)
    if not repository.delete_cart_line(line_id):
        raise RuntimeError("Impossible de supprimer l'article du panier")
    return True

def clear_cart(session_id: str) -> int:
    removed = repository.clear_cart(session_id)
    logger.info("cart.clear_cart session=%s removed=%s", session_id, removed)
    return removed
