"""
API router - aggregates the endpoint modules.
"""

from fastapi import APIRouter

from person_search.api.v1.endpoints import health, persons


def build_api_router(enable_name_search: bool = True) -> APIRouter:
    """Person routes at /person; the fuzzy name search route is optional."""
    api_router = APIRouter()
    api_router.include_router(health.router, prefix="/health", tags=["health"])
    api_router.include_router(persons.router, prefix="/person", tags=["person"])
    if enable_name_search:
        api_router.include_router(persons.search_router, prefix="/person", tags=["person"])
    return api_router
