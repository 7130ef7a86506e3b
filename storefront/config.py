# storefront.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=False)

"""
Configuration centrale de la boutique.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Normalise et expose les secrets/URLs (Supabase, PixUp)
- Expose le mode de déploiement (APP_ENV) qui pilote la verbosité des logs
  et l'exposition des détails d'erreurs
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _int_env(name: str, default: int) -> int:
    try:
        return int(_clean_env(os.getenv(name)) or default)
    except ValueError:
        return default

# Mode de déploiement: "production" active le mode strict
APP_ENV = _clean_env(os.getenv("APP_ENV") or os.getenv("ENVIRONMENT") or "development").lower()
IS_PRODUCTION = APP_ENV == "production"
LOG_LEVEL = _clean_env(os.getenv("LOG_LEVEL") or "")

# Supabase: URL et clé service (les tables panier/commandes ne sont pas exposées en RLS)
SUPABASE_URL = _clean_env(os.getenv("SUPABASE_URL") or "")
SUPABASE_SERVICE_KEY = _clean_env(os.getenv("SUPABASE_SERVICE_KEY") or os.getenv("SUPABASE_KEY") or "")

if SUPABASE_URL and not SUPABASE_URL.startswith("http"):
    SUPABASE_URL = "https://" + SUPABASE_URL
if SUPABASE_URL.endswith("/"):
    SUPABASE_URL = SUPABASE_URL.rstrip("/")

# PixUp: identifiants Basic Auth et secret partagé du webhook
PIXUP_BASE_URL = _clean_env(os.getenv("PIXUP_BASE_URL") or "https://api.pixupbr.com").rstrip("/")
PIXUP_CLIENT_ID = _clean_env(os.getenv("PIXUP_CLIENT_ID") or "")
PIXUP_CLIENT_SECRET = _clean_env(os.getenv("PIXUP_CLIENT_SECRET") or "")
PIXUP_WEBHOOK_SECRET = _clean_env(os.getenv("PIXUP_WEBHOOK_SECRET") or "")
PIXUP_TIMEOUT_SECONDS = _int_env("PIXUP_TIMEOUT_SECONDS", 15)

# Commande: devise, nom client par défaut, durée de validité du paiement
CURRENCY = _clean_env(os.getenv("CURRENCY") or "BRL")
DEFAULT_CUSTOMER_NAME = _clean_env(os.getenv("DEFAULT_CUSTOMER_NAME") or "Cliente")
PAYMENT_EXPIRY_MINUTES = _int_env("PAYMENT_EXPIRY_MINUTES", 30)

# CORS / hôtes autorisés
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()]
COOKIE_SECURE = (os.getenv("COOKIE_SECURE", "false").lower() == "true")
