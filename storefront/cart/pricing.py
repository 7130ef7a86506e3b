"""
Arithmétique monétaire pure (pas de DB, pas de HTTP).
Les montants circulent en Decimal à deux décimales; le passage en centimes
et en chaîne "94.90" ne se fait qu'aux frontières (payload PixUp, réponses JSON, colonnes numeric).
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Optional

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

# module storefront.cart.pricing
def to_decimal(value: Any) -> Optional[Decimal]:
    """
    Convertit un prix brut (str|int|float|Decimal) en Decimal à deux décimales.
    - Les float passent par str() pour ne pas hériter de leur représentation binaire.
    - Retourne None si la valeur est absente ou illisible.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite():
        return None
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)

def price_from_product(product: Dict[str, Any]) -> Optional[Decimal]:
    """Prix unitaire autoritaire d'un produit du catalogue (colonne price)."""
    return to_decimal((product or {}).get("price"))

def to_cents(amount: Decimal) -> int:
    """Montant en unités mineures (centimes), arrondi au plus proche."""
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

def format_amount(amount: Decimal) -> str:
    """Format colonne numeric(10,2): "94.90"."""
    return str(amount.quantize(CENT, rounding=ROUND_HALF_UP))
