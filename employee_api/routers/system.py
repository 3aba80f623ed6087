# employee_api/routers/system.py
from fastapi import APIRouter, Depends, status
from employee_api.core.config import get_settings, Settings

router = APIRouter()

@router.get("/health", tags=["System"], summary="Health check",
            responses={200: {"description": "Service healthy"}})
def health():
    return {"status": "ok"}

@router.get("/info", tags=["System"], summary="Información de la app",
            status_code=status.HTTP_200_OK)
def info(settings: Settings = Depends(get_settings)):
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "engine": f"SQLAlchemy + {settings.db_engine_name}",
    }
