from fastapi import APIRouter

from . import plans, schedules, system

api_router = APIRouter()

api_router.include_router(system.router, prefix="/system", tags=["system"])
api_router.include_router(schedules.router, prefix="/schedules", tags=["schedules"])
api_router.include_router(plans.router, prefix="/plans", tags=["plans"])
