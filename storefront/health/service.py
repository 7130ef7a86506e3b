"""
Sondes de santé: connectivité Supabase et résumé de configuration PixUp (sans secrets).
"""
import logging
from typing import Any, Dict

import storefront.infra.supabase_client as supabase_client
from storefront.config import SUPABASE_URL

logger = logging.getLogger(__name__)

def health_supabase_info() -> Dict[str, Any]:
    info: Dict[str, Any] = {"url_configured": bool(SUPABASE_URL), "connect_ok": False}
    try:
        supabase_client.get_service_supabase().table("products").select("id").limit(1).execute()
        info["connect_ok"] = True
    except Exception as e:
        logger.warning("health.supabase échec: %s", e)
        info["error"] = e.__class__.__name__
    return info
