"""
Elasticsearch client - one shared async handle for the request path.
Sync client factory for the log shipper thread (no event loop there).
"""

import logging
from urllib.parse import urlparse

from elasticsearch import AsyncElasticsearch, Elasticsearch

from person_search.config import Settings, get_settings

logger = logging.getLogger(__name__)

_es_client: AsyncElasticsearch | None = None


def es_client_options(settings: Settings | None = None) -> dict:
    """Client options from settings; user:pass in ELASTICSEARCH_HOSTS becomes basic_auth."""
    settings = settings or get_settings()
    parsed = urlparse(settings.elasticsearch_hosts)
    opts = {
        "hosts": [settings.elasticsearch_hosts],
        "verify_certs": settings.elasticsearch_verify_certs,
        "request_timeout": settings.elasticsearch_request_timeout,
    }
    if parsed.username and parsed.password:
        host = parsed.netloc.rpartition("@")[2]
        opts["hosts"] = [parsed._replace(netloc=host).geturl()]
        opts["basic_auth"] = (parsed.username, parsed.password)
    return opts


async def get_elasticsearch(settings: Settings | None = None) -> AsyncElasticsearch:
    """Get the process-wide Elasticsearch client, creating it on first use."""
    global _es_client
    if _es_client is None:
        opts = es_client_options(settings)
        logger.info("Connecting to Elasticsearch at %s", opts["hosts"][0])
        _es_client = AsyncElasticsearch(**opts)
    return _es_client


async def close_elasticsearch() -> None:
    """Close the shared client (app shutdown)."""
    global _es_client
    if _es_client is not None:
        await _es_client.close()
        _es_client = None


def sync_es_client(settings: Settings | None = None, request_timeout: float | None = None) -> Elasticsearch:
    """New sync client; used by the log shipper thread."""
    opts = es_client_options(settings)
    if request_timeout is not None:
        opts["request_timeout"] = request_timeout
    return Elasticsearch(**opts)


def person_index_mappings() -> dict:
    """Explicit mapping for the persons index (only sent when enabled in settings)."""
    return {
        "properties": {
            "id": {"type": "keyword"},
            "first_name": {"type": "text", "fields": {"keyword": {"type": "keyword"}}},
            "last_name": {"type": "text", "fields": {"keyword": {"type": "keyword"}}},
            "email": {"type": "keyword"},
        }
    }
