from fastapi import APIRouter

from app.api.endpoints import health, hub, rooms, smartthings

api_router = APIRouter()

# Include health endpoints
api_router.include_router(health.router, tags=["health"])

# Include aggregated room endpoints
api_router.include_router(rooms.router, tags=["rooms"])

# Include local hub diagnostics
api_router.include_router(hub.router, tags=["hub"])

# Include cloud registry diagnostics
api_router.include_router(smartthings.router, prefix="/st", tags=["smartthings"])
