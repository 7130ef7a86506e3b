"""
Registre central des routers (panier, checkout PixUp, health).
"""
from fastapi import FastAPI
from storefront.cart import views as cart_views
from storefront.checkout import views as checkout_views
from storefront.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    """
    Agrège tous les routers de l'application.
    - L'ordre n'a pas d'impact sauf conflits de chemins (évités par préfixes).
    """
    app.include_router(cart_views.router)
    app.include_router(checkout_views.router)
    # Health & monitoring
    app.include_router(health_router)
