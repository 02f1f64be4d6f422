"""Shared fixtures: sample schemas, tool contracts and an offline HTTP client."""

from __future__ import annotations

import json
from typing import Any, Callable, Iterator

import httpx
import pytest

from dtogen.loader import parse_schema
from dtogen.models import SchemaNode, ToolContract


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

PERSON_SCHEMA: dict[str, Any] = {
    "type": "object",
    "description": "Represents a person",
    "properties": {
        "name": {"type": "string", "description": "The person's name"},
        "age": {"type": "integer"},
        "address": {
            "type": "object",
            "properties": {
                "street": {"type": "string"},
                "city": {"type": "string"},
            },
        },
    },
    "required": ["name"],
}

ORDER_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "items": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer"},
                    "name": {"type": "string"},
                },
            },
        },
    },
}

WEATHER_PARAMETERS: dict[str, Any] = {
    "type": "object",
    "properties": {"city": {"type": "string"}},
    "required": ["city"],
}


@pytest.fixture
def person_schema() -> SchemaNode:
    return parse_schema(PERSON_SCHEMA)


@pytest.fixture
def order_schema() -> SchemaNode:
    return parse_schema(ORDER_SCHEMA)


@pytest.fixture
def weather_tool() -> ToolContract:
    return ToolContract(
        name="get_weather",
        description="Gets weather for a location",
        parameters_schema_json=json.dumps(WEATHER_PARAMETERS),
    )


# ---------------------------------------------------------------------------
# HTTP: serve documents from memory instead of the network
# ---------------------------------------------------------------------------

@pytest.fixture
def http_client() -> Iterator[Callable[[dict[str, httpx.Response]], httpx.Client]]:
    """Return a factory for httpx.Client objects backed by a URL -> response map.

    Usage in tests::

        client = http_client({"https://example.com/s.json": httpx.Response(200, json={...})})
    """
    clients: list[httpx.Client] = []

    def _make(routes: dict[str, httpx.Response]) -> httpx.Client:
        def handler(request: httpx.Request) -> httpx.Response:
            return routes.get(str(request.url), httpx.Response(404))

        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()
