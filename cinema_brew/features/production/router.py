# cinema_brew/features/production/router.py
from fastapi import APIRouter, HTTPException
from cinema_brew.errors import ProductionError
from cinema_brew.logger import get_logger
from .schemas import ProductionRequest, ProductionPackage
from .service import generate_production_package

router = APIRouter(prefix="/api/v1", tags=["production"])
log = get_logger(__name__)

@router.post("/generate/production", response_model=ProductionPackage)
async def production_endpoint(req: ProductionRequest) -> ProductionPackage:
    try:
        return await generate_production_package(req.concept)
    except ProductionError:
        raise  # mapped to 429/502 by the app's exception handlers
    except Exception as e:
        log.exception(f"Production package generation failed: {e}")
        raise HTTPException(status_code=500, detail=f"Production package generation failed: {e}")
