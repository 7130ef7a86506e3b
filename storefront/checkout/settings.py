"""
Configuration explicite du paiement PixUp.
Construite une fois au démarrage (lifespan) puis passée au client PixUp,
au réconciliateur de webhook et au poller de statut: aucune lecture d'environnement
dans la logique métier.
"""
import logging
from dataclasses import dataclass

from storefront import config
from storefront.errors import ConfigurationError

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class PixupSettings:
    base_url: str
    client_id: str = ""
    client_secret: str = ""
    webhook_secret: str = ""
    production: bool = False
    timeout_seconds: float = 15.0
    currency: str = "BRL"
    default_customer_name: str = "Cliente"
    payment_expiry_minutes: int = 30

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)

    @property
    def live_status_check(self) -> bool:
        """Le poller ne réinterroge PixUp qu'en production avec des identifiants."""
        return self.production and self.has_credentials

    def validate(self) -> "PixupSettings":
        """
        Vérifie les secrets exigés en production.
        - PIXUP_WEBHOOK_SECRET: sans lui, les webhooks ne pourraient pas être authentifiés.
        - PIXUP_CLIENT_ID/PIXUP_CLIENT_SECRET: sans eux, aucun paiement réel ne peut être créé.
        Hors production, l'absence est tolérée (fallback local, webhook non signé) et signalée.
        """
        missing = []
        if not self.webhook_secret:
            missing.append("PIXUP_WEBHOOK_SECRET")
        if not self.has_credentials:
            missing.extend(n for n, v in (("PIXUP_CLIENT_ID", self.client_id), ("PIXUP_CLIENT_SECRET", self.client_secret)) if not v)
        if missing and self.production:
            raise ConfigurationError(f"Configuration PixUp manquante en production: {', '.join(missing)}")
        if missing:
            logger.warning("PixUp non configuré (%s): mode développement", ", ".join(missing))
        return self

    def summary(self) -> dict:
        return {
            "mode": "production" if self.production else "development",
            "base_url": self.base_url,
            "credentials": self.has_credentials,
            "webhook_secret": bool(self.webhook_secret),
            "live_status_check": self.live_status_check,
        }

def load_pixup_settings() -> PixupSettings:
    return PixupSettings(
        base_url=config.PIXUP_BASE_URL,
        client_id=config.PIXUP_CLIENT_ID,
        client_secret=config.PIXUP_CLIENT_SECRET,
        webhook_secret=config.PIXUP_WEBHOOK_SECRET,
        production=config.IS_PRODUCTION,
        timeout_seconds=float(config.PIXUP_TIMEOUT_SECONDS),
        currency=config.CURRENCY,
        default_customer_name=config.DEFAULT_CUSTOMER_NAME,
        payment_expiry_minutes=config.PAYMENT_EXPIRY_MINUTES,
    )
