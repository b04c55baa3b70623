from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import httpx

from theoneapi import FailureReason, TheOneApi
from theoneapi.observability.logging import JsonFormatter, configure_logging
from theoneapi.observability.metrics import reset, snapshot


def _client(status_code: int) -> TheOneApi:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json={"docs": [{"_id": "5cd95395de30eff6ebccde5d"}], "total": 1})

    return TheOneApi(api_key="key", transport=httpx.MockTransport(handler))


def test_metrics_count_requests_and_failures() -> None:
    reset()

    asyncio.run(_client(200).movie.list())
    asyncio.run(_client(200).movie.by_id("5cd95395de30eff6ebccde5d").get())
    asyncio.run(_client(502).movie.by_id("5cd95395de30eff6ebccde5d").quotes())

    payload = snapshot()
    counters = payload["counters"]
    timers = payload["timers_ms"]

    assert counters["theoneapi.request{resource=movie,status=ok}"] == 2
    assert counters["theoneapi.request{resource=movie.quote,status=error}"] == 1
    assert counters["theoneapi.failure{reason=status,resource=movie.quote}"] == 1
    assert timers["theoneapi.latency_ms{resource=movie}"]["count"] == 2


def test_envelope_without_docs_is_counted_as_failure() -> None:
    reset()

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"total": 0})

    client = TheOneApi(api_key="key", transport=httpx.MockTransport(handler))
    result = asyncio.run(client.book.list_result())

    assert result.failure is FailureReason.DECODE
    counters = snapshot()["counters"]
    assert counters["theoneapi.request{resource=book,status=error}"] == 1
    assert counters["theoneapi.failure{reason=decode,resource=book}"] == 1
    assert "theoneapi.request{resource=book,status=ok}" not in counters


def test_failed_request_logs_structured_warning(caplog: Any) -> None:
    caplog.set_level("WARNING", logger="theoneapi")
    formatter = JsonFormatter()

    result = asyncio.run(_client(500).character.list({"filter": {"race": {"eq": "Hobbit"}}}))

    assert result is None

    json_logs = [json.loads(formatter.format(record)) for record in caplog.records if record.name.startswith("theoneapi.")]
    failures = [log for log in json_logs if log["message"] == "theoneapi.request.failed"]
    assert len(failures) == 1
    failure = failures[0]
    assert failure["level"] == "WARNING"
    assert failure["resource"] == "character"
    assert failure["path"] == "/character"
    assert failure["params"] == {"race": "Hobbit"}
    assert failure["status_code"] == 500
    assert failure["reason"] == "status"


def test_successful_request_logs_nothing_at_info(caplog: Any) -> None:
    caplog.set_level("INFO", logger="theoneapi")

    asyncio.run(_client(200).quote.list())

    assert [record for record in caplog.records if record.name.startswith("theoneapi.")] == []


def test_configure_logging_scopes_handler_to_package() -> None:
    package_logger = logging.getLogger("theoneapi")
    previous_handlers = list(package_logger.handlers)
    previous_level = package_logger.level
    try:
        configure_logging("DEBUG")

        assert package_logger.level == logging.DEBUG
        assert len(package_logger.handlers) == 1
        assert isinstance(package_logger.handlers[0].formatter, JsonFormatter)
        assert logging.getLogger().handlers is not package_logger.handlers
    finally:
        package_logger.handlers = previous_handlers
        package_logger.setLevel(previous_level)
