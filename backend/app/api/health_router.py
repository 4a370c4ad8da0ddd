"""
Health API Router

Probe endpoints; responses are plain JSON, not the API envelope
"""

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.api.deps import get_health_service
from app.service.health_service import HealthService

health_router = APIRouter(prefix="/health", tags=["health"])


@health_router.get("", summary="Detailed health check", operation_id="health")
async def health(service: HealthService = Depends(get_health_service)):
    status_code, body = await service.detailed()
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


@health_router.get("/ping", summary="Ping", operation_id="health_ping")
async def ping(service: HealthService = Depends(get_health_service)):
    return service.ping()


@health_router.get("/ready", summary="Readiness probe", operation_id="health_ready")
async def ready(service: HealthService = Depends(get_health_service)):
    status_code, body = await service.ready()
    return JSONResponse(status_code=status_code, content=body)


@health_router.get("/live", summary="Liveness probe", operation_id="health_live")
async def live(service: HealthService = Depends(get_health_service)):
    return service.live()
