"""
Health checks - for load balancers, Kubernetes, and monitoring.
Fast liveness; readiness pings Elasticsearch.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from person_search.config import SettingsDep
from person_search.search.person_gateway import PersonGatewayDep

router = APIRouter()


@router.get("")
async def health(settings: SettingsDep):
    """Liveness: is the process up?"""
    return {"status": "ok", "app": settings.app_name}


@router.get("/ready")
async def ready(gateway: PersonGatewayDep):
    """Readiness: does Elasticsearch answer?"""
    if not await gateway.ping():
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ready"}
