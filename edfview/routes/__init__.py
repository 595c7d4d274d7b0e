from fastapi import APIRouter

from edfview.routes.edf import router as edf_router

router = APIRouter()
router.include_router(edf_router, prefix="/edf", tags=["edf"])

__all__ = ["router"]
