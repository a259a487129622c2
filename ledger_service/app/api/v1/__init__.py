from fastapi import APIRouter

from .credits import router as credits_router
from .features import router as features_router
from .orders import router as orders_router
from .plans import router as plans_router
from .projects import router as projects_router
from .schedules import router as schedules_router

api_router = APIRouter()
api_router.include_router(credits_router, prefix="/credits", tags=["credits"])
api_router.include_router(orders_router, prefix="/orders", tags=["orders"])
api_router.include_router(plans_router, prefix="/plans", tags=["plans"])
api_router.include_router(features_router, prefix="/features", tags=["features"])
api_router.include_router(projects_router, prefix="/projects", tags=["projects"])
api_router.include_router(schedules_router, prefix="/schedules", tags=["schedules"])
