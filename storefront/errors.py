"""
Taxonomie des erreurs métier.
Chaque erreur porte son code HTTP et un message court destiné à l'utilisateur;
les détails (erreurs de validation, texte interne) ne sont exposés qu'hors production
par les handlers de storefront.app_setup.exceptions.
"""
from typing import Any, Optional

class StorefrontError(Exception):
    status_code = 500
    message = "Erreur interne du serveur"

    def __init__(self, message: Optional[str] = None, *, details: Any = None):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.details = details

class RequestValidationError(StorefrontError):
    status_code = 400
    message = "Données invalides"

class EmptyCartError(RequestValidationError):
    message = "Panier vide"

class InvalidAmountError(RequestValidationError):
    message = "Montant invalide"

class AuthError(StorefrontError):
    status_code = 401
    message = "Non autorisé"

class NotFoundError(StorefrontError):
    status_code = 404
    message = "Introuvable"

class ProviderError(StorefrontError):
    """Appel PixUp en échec (transport ou statut non-2xx). Rattrapé localement par les services."""
    status_code = 502
    message = "Fournisseur de paiement indisponible"

    def __init__(self, message: Optional[str] = None, *, status_code: Optional[int] = None, details: Any = None):
        super().__init__(message, details=details)
        self.provider_status = status_code

class ConfigurationError(StorefrontError):
    """Secret ou identifiant requis absent: fatal, ne désactive jamais une vérification."""
    status_code = 500
    message = "Configuration invalide"
