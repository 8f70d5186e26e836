"""
Person endpoints - create fake persons, list, fuzzy search by first name, purge.
Thin controller: gateway results map to bare status codes, no error bodies.
"""

from fastapi import APIRouter, Query, Response, status

from person_search.config import Settings, SettingsDep
from person_search.schemas.person import Person
from person_search.search.person_gateway import PersonGatewayDep
from person_search.services.person_generator import generate_persons

router = APIRouter()
search_router = APIRouter()


def _page_size(limit: int | None, settings: Settings) -> int:
    """Default page when unset, capped at max_page_size."""
    if limit is None:
        return settings.default_page_size
    return min(limit, settings.max_page_size)


def _persons_or_404(persons: list[Person]) -> list[Person] | Response:
    if not persons:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return persons


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    responses={400: {"description": "Index could not be created or bulk insert failed"}},
)
async def create_persons(gateway: PersonGatewayDep, settings: SettingsDep):
    """Generate a batch of fake persons and bulk-index them."""
    persons = generate_persons(settings.persons_per_request)
    result = await gateway.bulk_index(persons)
    if not result.ok:
        return Response(status_code=status.HTTP_400_BAD_REQUEST)
    return Response(status_code=status.HTTP_201_CREATED)


@router.get(
    "",
    response_model=list[Person],
    responses={404: {"description": "No persons indexed (or search failed)"}},
)
async def list_persons(
    gateway: PersonGatewayDep,
    settings: SettingsDep,
    skip: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1),
):
    """All persons (match_all), paginated."""
    outcome = await gateway.search(skip=skip, limit=_page_size(limit, settings))
    return _persons_or_404(outcome.persons)


@router.delete(
    "/purge",
    response_class=Response,
    responses={400: {"description": "Index missing or delete rejected"}},
)
async def purge_persons(gateway: PersonGatewayDep):
    """Delete the whole persons index. Irreversible."""
    result = await gateway.purge()
    if not result.ok:
        return Response(status_code=status.HTTP_400_BAD_REQUEST)
    return Response(status_code=status.HTTP_200_OK)


@search_router.get(
    "/search",
    response_model=list[Person],
    responses={404: {"description": "No fuzzy match (or search failed)"}},
)
async def search_persons(
    gateway: PersonGatewayDep,
    settings: SettingsDep,
    name: str = Query(..., description="First name, matched with fuzziness AUTO"),
    skip: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1),
):
    """Fuzzy first-name search."""
    outcome = await gateway.search(name=name, skip=skip, limit=_page_size(limit, settings))
    return _persons_or_404(outcome.persons)
