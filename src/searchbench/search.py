from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Dict

from opensearchpy import OpenSearch

from .config import Settings
from .errors import SetupError


@dataclass
class BenchDoc:
    id: int
    title: str
    timestamp: int  # epoch millis


def build_client(settings: Settings) -> OpenSearch:
    try:
        return OpenSearch(hosts=[settings.search_host], timeout=settings.request_timeout_seconds)
    except Exception as exc:  # noqa: BLE001
        raise SetupError(f"could not create search client for {settings.search_host}: {exc}") from exc


def bench_query(query: str = "*", size: int = 10) -> Dict[str, Any]:
    return {"query": {"query_string": {"query": query}}, "size": size}


def parse_hits(response: Dict[str, Any]) -> list[BenchDoc]:
    """Deserialize ``hits.hits[]._source`` into ``BenchDoc`` records.

    Missing or mistyped fields raise, failing the iteration that produced them.
    """
    docs: list[BenchDoc] = []
    for hit in (response.get("hits") or {}).get("hits", []):
        src = hit["_source"]
        docs.append(BenchDoc(id=int(src["id"]), title=str(src["title"]), timestamp=int(src["timestamp"])))
    return docs


def make_search_operation(
    settings: Settings,
    client: OpenSearch | None = None,
    client_factory: Callable[[Settings], OpenSearch] = build_client,
) -> Callable[[], Any]:
    """Return a zero-argument callable that issues the benchmark query once.

    With ``settings.client_per_call`` a fresh client is built inside every call,
    so construction is part of the measured time. The callable returns ``None``
    when the backend answers with an empty body.
    """
    body = bench_query(settings.query, settings.size)
    params: Dict[str, Any] = {}
    if settings.filter_path:
        params["filter_path"] = settings.filter_path
    if client is None and not settings.client_per_call:
        client = client_factory(settings)

    def _search() -> Any:
        c = client_factory(settings) if settings.client_per_call else client
        response = c.search(index=settings.search_index, body=body, **params)
        if not response:
            return None
        if settings.typed_response:
            return parse_hits(response)
        return response

    return _search


def bulk_body(index: str, docs: int = 1000) -> str:
    """NDJSON ``_bulk`` body indexing ``docs`` small documents into ``index``."""
    lines: list[str] = []
    for i in range(1, docs + 1):
        lines.append(json.dumps({"index": {"_index": index, "_id": str(i)}}))
        lines.append(json.dumps({"title": f"string value {i}"}))
    return "\n".join(lines) + "\n"


def make_bulk_operation(
    settings: Settings,
    client: OpenSearch | None = None,
    client_factory: Callable[[Settings], OpenSearch] = build_client,
) -> Callable[[], Any]:
    """Return a zero-argument callable that sends the same ``_bulk`` request once.

    The body is built here, outside the timed call. A response flagging item
    errors raises, failing the iteration.
    """
    body = bulk_body(settings.bulk_index, settings.bulk_docs)
    if client is None and not settings.client_per_call:
        client = client_factory(settings)

    def _bulk() -> Any:
        c = client_factory(settings) if settings.client_per_call else client
        response = c.bulk(body=body)
        if not response:
            return None
        if response.get("errors"):
            raise RuntimeError(f"bulk request into {settings.bulk_index} reported item errors")
        return response

    return _bulk


def make_operation(
    settings: Settings,
    client: OpenSearch | None = None,
    client_factory: Callable[[Settings], OpenSearch] = build_client,
) -> Callable[[], Any]:
    if settings.operation == "bulk":
        return make_bulk_operation(settings, client=client, client_factory=client_factory)
    return make_search_operation(settings, client=client, client_factory=client_factory)
