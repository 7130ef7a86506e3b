"""
Signature des webhooks PixUp: HMAC-SHA256 hexadécimal du corps brut,
éventuellement préfixé par "sha256=".
"""
import hashlib
import hmac
from typing import Optional

from storefront.errors import AuthError

SIGNATURE_HEADERS = ("pixup-signature", "x-pixup-signature")
SIGNATURE_PREFIX = "sha256="

def compute_signature(raw_body: bytes, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()

def verify_signature(raw_body: bytes, signature: Optional[str], secret: str) -> None:
    """
    Lève AuthError si la signature est absente, mal formée ou ne correspond pas.
    La comparaison est à temps constant (hmac.compare_digest).
    """
    if not signature:
        raise AuthError("Signature requise")
    provided = signature.strip()
    if provided.startswith(SIGNATURE_PREFIX):
        provided = provided[len(SIGNATURE_PREFIX):]
    expected = compute_signature(raw_body, secret)
    try:
        valid = hmac.compare_digest(expected, provided.lower())
    except TypeError:
        # compare_digest refuse les chaînes non ASCII
        raise AuthError("Format de signature invalide")
    if not valid:
        raise AuthError("Signature invalide")
