"""
Logging setup - console output plus optional shipping to an Elasticsearch data stream.
Shipping runs on a QueueListener thread with a sync client, so request handlers
only pay for a queue put.
"""

import logging
import queue
from datetime import datetime, timezone
from logging.handlers import QueueHandler, QueueListener

from elasticsearch import Elasticsearch

from person_search.config import Settings
from person_search.search.elasticsearch_client import sync_es_client

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_installed: list[logging.Handler] = []


class ElasticsearchLogHandler(logging.Handler):
    """Writes ECS-style log documents into a data stream (op_type=create)."""

    def __init__(self, client: Elasticsearch, data_stream: str, level: int = logging.NOTSET):
        super().__init__(level)
        self.client = client
        self.data_stream = data_stream

    def to_document(self, record: logging.LogRecord) -> dict:
        doc = {
            "@timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "log": {"level": record.levelname, "logger": record.name},
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            doc["error"] = {"type": type(exc).__name__, "message": str(exc)}
        return doc

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.client.index(index=self.data_stream, document=self.to_document(record), op_type="create")
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        try:
            self.client.close()
        finally:
            super().close()


def configure_logging(settings: Settings) -> QueueListener | None:
    """
    Configure the root logger. Returns the started listener when logs are shipped
    to Elasticsearch (caller stops it on shutdown), else None.
    """
    root = logging.getLogger()
    root.setLevel(settings.log_level.upper())
    # Re-configuring (tests, reload) replaces what we installed before
    while _installed:
        root.removeHandler(_installed.pop())

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(console)
    _installed.append(console)

    if not settings.log_to_elasticsearch:
        return None

    client = sync_es_client(settings, request_timeout=settings.log_request_timeout)
    es_handler = ElasticsearchLogHandler(client, settings.log_data_stream)
    # Bounded: when the cluster is unreachable, overflow goes to handleError instead of piling up
    log_queue: queue.Queue = queue.Queue(maxsize=settings.log_queue_size)
    queue_handler = QueueHandler(log_queue)
    # The shipper's own client logs (elastic_transport) must not loop back into the queue
    queue_handler.addFilter(lambda record: not record.name.startswith(("elastic_transport", "elasticsearch")))
    root.addHandler(queue_handler)
    _installed.append(queue_handler)

    listener = QueueListener(log_queue, es_handler, respect_handler_level=True)
    listener.start()
    return listener


def shutdown_logging(listener: QueueListener | None) -> None:
    """Detach our handlers, then flush and stop the shipper thread."""
    root = logging.getLogger()
    while _installed:
        root.removeHandler(_installed.pop())
    if listener is None:
        return
    listener.stop()
    for handler in listener.handlers:
        handler.close()
