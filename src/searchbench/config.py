from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .errors import SetupError

DEFAULT_RUNS = 1000
OPERATIONS = ("search", "bulk")


@dataclass
class Settings:
    search_host: str = "http://localhost:9200"
    search_index: str = "bench_index"
    operation: str = "search"  # search|bulk
    # Query body
    query: str = "*"
    size: int = 10
    filter_path: str | None = None  # e.g. hits.hits._source
    # Bulk body
    bulk_index: str = "bench_bulk"
    bulk_docs: int = 1000
    # Timed unit
    client_per_call: bool = False
    typed_response: bool = True
    request_timeout_seconds: int = 30
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the environment.

        Malformed values raise ``SetupError`` so the run aborts before anything
        is measured.
        """
        try:
            settings = cls(
                search_host=os.environ.get("SEARCH_HOST", "http://localhost:9200"),
                search_index=os.environ.get("SEARCH_INDEX", "bench_index"),
                operation=os.environ.get("BENCH_OPERATION", "search").strip().lower(),
                query=os.environ.get("BENCH_QUERY", "*"),
                size=int(os.environ.get("BENCH_SIZE", "10")),
                filter_path=os.environ.get("BENCH_FILTER_PATH") or None,
                bulk_index=os.environ.get("BENCH_BULK_INDEX", "bench_bulk"),
                bulk_docs=int(os.environ.get("BENCH_BULK_DOCS", "1000")),
                client_per_call=os.environ.get("BENCH_CLIENT_PER_CALL", "0") == "1",
                typed_response=os.environ.get("BENCH_TYPED", "1") == "1",
                request_timeout_seconds=int(os.environ.get("REQUEST_TIMEOUT_SECONDS", "30")),
                log_level=os.environ.get("LOG_LEVEL", "WARNING").strip().upper(),
            )
        except ValueError as exc:
            raise SetupError(f"invalid numeric setting: {exc}") from exc

        if settings.operation not in OPERATIONS:
            raise SetupError(
                f"BENCH_OPERATION must be one of {'|'.join(OPERATIONS)}, got {settings.operation!r}"
            )
        if settings.bulk_docs < 1:
            raise SetupError(f"BENCH_BULK_DOCS must be positive, got {settings.bulk_docs}")
        # unknown names come back as the string "Level <name>"
        if not isinstance(logging.getLevelName(settings.log_level), int):
            raise SetupError(f"unknown LOG_LEVEL {settings.log_level!r}")
        return settings
