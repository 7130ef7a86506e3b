from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from storefront.checkout.dependencies import get_pixup_settings
from storefront.checkout.settings import PixupSettings
from storefront.health import service as health_service
from storefront.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"ok": True}

@router.get("/supabase")
def health_supabase():
    return JSONResponse(health_service.health_supabase_info())

@router.get("/pixup")
def health_pixup(request: Request, settings: PixupSettings = Depends(get_pixup_settings)):
    return {**settings.summary(), "rate_limit": rate_limit_health_info(request)}
