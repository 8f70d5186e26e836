"""
Persons gateway - the four index operations the API needs (ensure, bulk, search, purge).
Every client error is caught, logged and returned as a result object; nothing is raised
to the caller, so the HTTP layer only has to map ok / not ok to a status code.
"""

import logging
from dataclasses import dataclass, field
from typing import Annotated

from elasticsearch import AsyncElasticsearch
from fastapi import Depends

from person_search.config import SettingsDep
from person_search.schemas.person import Person
from person_search.search.elasticsearch_client import get_elasticsearch, person_index_mappings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GatewayResult:
    ok: bool
    detail: str | None = None


@dataclass(frozen=True)
class SearchOutcome:
    ok: bool
    persons: list[Person] = field(default_factory=list)
    detail: str | None = None


def _body(response) -> dict:
    """ObjectApiResponse or plain dict -> dict."""
    return getattr(response, "body", response)


def _log_failure(operation: str, exc: Exception) -> str:
    """Log message and inner cause of a client error; return a one-line detail."""
    cause = exc.__cause__ or exc.__context__
    logger.warning("%s failed: %s", operation, exc)
    if cause is not None:
        logger.warning("%s cause: %s", operation, cause)
        return f"{type(exc).__name__}: {exc} (cause: {cause})"
    return f"{type(exc).__name__}: {exc}"


class PersonGateway:
    """Thin wrapper over the shared AsyncElasticsearch client for one index."""

    def __init__(
        self,
        client: AsyncElasticsearch,
        index: str = "persons",
        explicit_mapping: bool = False,
        refresh_on_write: bool = True,
    ):
        self.client = client
        self.index = index
        self.explicit_mapping = explicit_mapping
        self.refresh_on_write = refresh_on_write

    async def ensure_index(self) -> GatewayResult:
        """Create the index if it does not exist yet."""
        try:
            if await self.client.indices.exists(index=self.index):
                return GatewayResult(ok=True)
            logger.info("Creating '%s' index...", self.index)
            kwargs = {"index": self.index}
            if self.explicit_mapping:
                kwargs["mappings"] = person_index_mappings()
            response = await self.client.indices.create(**kwargs)
            if not _body(response).get("acknowledged", False):
                detail = f"create index '{self.index}' not acknowledged"
                logger.warning(detail)
                return GatewayResult(ok=False, detail=detail)
            return GatewayResult(ok=True)
        except Exception as e:
            return GatewayResult(ok=False, detail=_log_failure("ensure_index", e))

    async def bulk_index(self, persons: list[Person]) -> GatewayResult:
        """Index all persons in one _bulk request (ensures the index first)."""
        ensured = await self.ensure_index()
        if not ensured.ok:
            return ensured
        operations: list[dict] = []
        for person in persons:
            doc = person.to_document()
            operations.append({"index": {"_index": self.index, "_id": doc["id"]}})
            operations.append(doc)
        if not operations:
            return GatewayResult(ok=True)
        try:
            kwargs = {"operations": operations}
            if self.refresh_on_write:
                kwargs["refresh"] = "wait_for"
            response = await self.client.bulk(**kwargs)
        except Exception as e:
            return GatewayResult(ok=False, detail=_log_failure("bulk_index", e))
        body = _body(response)
        if body.get("errors"):
            failed = [
                item for item in body.get("items", [])
                if next(iter(item.values()), {}).get("error")
            ]
            detail = f"bulk insert into '{self.index}' rejected {len(failed)} of {len(persons)} documents"
            logger.warning(detail)
            return GatewayResult(ok=False, detail=detail)
        logger.info("Indexed %d persons into '%s'", len(persons), self.index)
        return GatewayResult(ok=True)

    async def search(self, name: str | None = None, skip: int = 0, limit: int = 10) -> SearchOutcome:
        """match_all without a name; fuzzy (AUTO) match on first_name with one."""
        logger.info("Searching for persons... name=%r", name)
        if name is None or not name.strip():
            query = {"match_all": {}}
        else:
            query = {"match": {"first_name": {"query": name, "fuzziness": "AUTO"}}}
        try:
            response = await self.client.search(index=self.index, query=query, from_=skip, size=limit)
            hits = _body(response)["hits"]["hits"]
            persons = [Person.model_validate(hit["_source"]) for hit in hits]
        except Exception as e:
            return SearchOutcome(ok=False, detail=_log_failure("search", e))
        if not persons:
            logger.info("search: name=%r returned 0 hits", name)
        return SearchOutcome(ok=True, persons=persons)

    async def purge(self) -> GatewayResult:
        """Delete the whole index. Fails when the index does not exist."""
        logger.info("Deleting '%s' index...", self.index)
        try:
            response = await self.client.indices.delete(index=self.index)
        except Exception as e:
            return GatewayResult(ok=False, detail=_log_failure("purge", e))
        if not _body(response).get("acknowledged", False):
            detail = f"delete index '{self.index}' not acknowledged"
            logger.warning(detail)
            return GatewayResult(ok=False, detail=detail)
        return GatewayResult(ok=True)

    async def ping(self) -> bool:
        try:
            return bool(await self.client.ping())
        except Exception as e:
            _log_failure("ping", e)
            return False


async def get_es_client(settings: SettingsDep) -> AsyncElasticsearch:
    """FastAPI dependency: the shared client. Overridden in tests."""
    return await get_elasticsearch(settings)


async def get_person_gateway(
    settings: SettingsDep,
    client: Annotated[AsyncElasticsearch, Depends(get_es_client)],
) -> PersonGateway:
    """FastAPI dependency: gateway configured from the app's settings."""
    return PersonGateway(
        client,
        index=settings.person_index,
        explicit_mapping=settings.person_index_explicit_mapping,
        refresh_on_write=settings.elasticsearch_refresh_on_write,
    )


# Type alias for FastAPI dependency injection
PersonGatewayDep = Annotated[PersonGateway, Depends(get_person_gateway)]
