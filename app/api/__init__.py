"""
API routers module.
"""
from app.api.analytics import router as analytics_router
from app.api.appliances import router as appliances_router
from app.api.meter_readings import router as meter_readings_router
from app.api.profile import router as profile_router

__all__ = [
    "analytics_router",
    "appliances_router",
    "meter_readings_router",
    "profile_router",
]
