"""
Pytest fixtures - in-memory Elasticsearch stand-in, gateway, HTTP client.
No real cluster in unit tests: the shared client dependency is overridden on the app.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from person_search.main import app
from person_search.search.person_gateway import PersonGateway, get_es_client


class IndexNotFound(Exception):
    """Raised by the fake the way the real client raises NotFoundError."""


def edit_distance(a: str, b: str) -> int:
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        current = [i]
        for j, cb in enumerate(b, 1):
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + (ca != cb)))
        previous = current
    return previous[-1]


def auto_fuzziness(term: str) -> int:
    # Elasticsearch AUTO: 0-2 chars exact, 3-5 one edit, more two edits
    if len(term) <= 2:
        return 0
    if len(term) <= 5:
        return 1
    return 2


class FakeIndices:
    def __init__(self, es: "FakeElasticsearch"):
        self.es = es

    async def exists(self, index: str) -> bool:
        return index in self.es.docs

    async def create(self, index: str, mappings: dict | None = None) -> dict:
        self.es.docs[index] = {}
        self.es.mappings[index] = mappings
        return {"acknowledged": True, "shards_acknowledged": True, "index": index}

    async def delete(self, index: str) -> dict:
        if index not in self.es.docs:
            raise IndexNotFound(f"no such index [{index}]")
        del self.es.docs[index]
        return {"acknowledged": True}


class FakeElasticsearch:
    """Just enough of AsyncElasticsearch for the persons gateway."""

    def __init__(self):
        self.docs: dict[str, dict[str, dict]] = {}
        self.mappings: dict[str, dict | None] = {}
        self.indices = FakeIndices(self)
        self.reject_bulk = False
        self.available = True

    async def bulk(self, operations: list[dict], refresh: str | None = None) -> dict:
        items = []
        for action, source in zip(operations[::2], operations[1::2]):
            meta = action["index"]
            if self.reject_bulk:
                items.append({"index": {"_id": meta["_id"], "status": 400, "error": {"type": "mapper_parsing_exception"}}})
                continue
            self.docs.setdefault(meta["_index"], {})[meta["_id"]] = dict(source)
            items.append({"index": {"_id": meta["_id"], "status": 201, "result": "created"}})
        return {"errors": self.reject_bulk, "items": items}

    async def search(self, index: str, query: dict, from_: int = 0, size: int = 10) -> dict:
        if index not in self.docs:
            raise IndexNotFound(f"no such index [{index}]")
        sources = list(self.docs[index].values())
        if "match" in query:
            ((field, params),) = query["match"].items()
            term = params["query"].lower()
            sources = [
                s for s in sources
                if edit_distance(s[field].lower(), term) <= auto_fuzziness(term)
            ]
        page = sources[from_:from_ + size]
        return {
            "hits": {
                "total": {"value": len(sources), "relation": "eq"},
                "hits": [{"_index": index, "_id": s["id"], "_source": s} for s in page],
            }
        }

    async def ping(self) -> bool:
        return self.available

    async def close(self) -> None:
        return None


@pytest.fixture
def fake_es() -> FakeElasticsearch:
    return FakeElasticsearch()


@pytest.fixture
def gateway(fake_es: FakeElasticsearch) -> PersonGateway:
    return PersonGateway(fake_es, index="persons")


@pytest.fixture
def override_es(fake_es: FakeElasticsearch):
    """Route the app's shared client dependency to the in-memory fake."""
    app.dependency_overrides[get_es_client] = lambda: fake_es
    yield fake_es
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(override_es):
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
