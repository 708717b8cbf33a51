"""Shared fixtures: environment configuration and a stubbed search service."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from indextank.clients.search.indextank.SearchClientIndextank import SearchClientIndextank
from indextank.helper.HelperConfig import HelperConfig

API_URL = "http://:secret@api.example.com"

Responder = Callable[[httpx.Request], httpx.Response]


class StubBackend:
    """Answers requests by (method, decoded path) and records every request it sees."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responders: dict[tuple[str, str], Responder] = {}

    def add(self, method: str, path: str, status: int = 200, json_body: Any = None, text: str | None = None) -> None:
        def responder(request: httpx.Request) -> httpx.Response:
            if json_body is not None:
                return httpx.Response(status, json=json_body)
            return httpx.Response(status, text=text or "")

        self._responders[(method, path)] = responder

    def add_responder(self, method: str, path: str, responder: Responder) -> None:
        self._responders[(method, path)] = responder

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responder = self._responders.get((request.method, request.url.path))
        if responder is None:
            return httpx.Response(501, text=f"no stub for {request.method} {request.url.path}")
        return responder(request)

    def payloads(self) -> list[Any]:
        return [json.loads(request.content) for request in self.requests if request.content]


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("indextank.tests")


@pytest.fixture
def helper_config(monkeypatch, logger) -> HelperConfig:
    monkeypatch.setenv("SEARCH_ENGINE", "indextank")
    monkeypatch.setenv("SEARCH_INDEXTANK_API_URL", API_URL)
    monkeypatch.delenv("SEARCH_INDEXTANK_PRIVATE_PASS", raising=False)
    monkeypatch.delenv("SEARCH_TIMEOUT", raising=False)
    for key in ("INDEXING_BATCH_SIZE", "INDEXING_MAX_RETRIES", "INDEXING_CONCURRENCY"):
        monkeypatch.delenv(key, raising=False)
    return HelperConfig(logger=logger)


@pytest.fixture
def backend() -> StubBackend:
    return StubBackend()


@pytest.fixture
def client(helper_config, backend) -> SearchClientIndextank:
    return SearchClientIndextank(helper_config=helper_config, transport=httpx.MockTransport(backend.handler))


@pytest.fixture
def run(client) -> Callable:
    """Boots the client, runs ``scenario(client)`` to completion and closes the client."""

    def _run(scenario: Callable) -> Any:
        async def _main() -> Any:
            async with client:
                return await scenario(client)

        return asyncio.run(_main())

    return _run
