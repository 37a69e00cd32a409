"""Route MCP tool calls and resource reads to the Codeforces client."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

import pydantic
from mcp import types

from codeforces_mcp.catalog import (
    RESOURCES,
    RESOURCES_BY_URI,
    TOOLS,
    TOOLS_BY_NAME,
    ToolSpec,
    operations_for,
)
from codeforces_mcp.codeforces_client import CodeforcesClient, CodeforcesError

log = logging.getLogger("codeforces-mcp")


class DispatchError(Exception):
    """Base class for failures detected before the upstream call."""


class ValidationError(DispatchError):
    """A tool argument is missing or has the wrong shape."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)

    @classmethod
    def from_pydantic(cls, exc: pydantic.ValidationError) -> ValidationError:
        """Describe the first failing field of a pydantic error."""
        error = exc.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else "arguments"
        if error["type"] == "missing":
            return cls(field, f"{field} parameter is required")
        if error["type"] == "extra_forbidden":
            return cls(field, f"Unexpected parameter: {field}")
        return cls(field, f"{field} parameter is invalid: {error['msg']}")


class RoutingError(DispatchError):
    """No tool is registered under the requested name."""


class UnknownResourceError(RoutingError):
    """No resource is registered under the requested URI."""


def _to_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def bind_arguments(spec: ToolSpec, arguments: Mapping[str, Any] | None) -> dict[str, Any]:
    """Validate *arguments* against *spec* and fill in declared defaults.

    ``null`` values count as absent, so optional arguments fall back to
    their defaults.
    """
    present = {k: v for k, v in (arguments or {}).items() if v is not None}
    try:
        model = spec.arguments_model.model_validate(present)
    except pydantic.ValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc
    return model.model_dump()


class Dispatcher:
    """Exposes the tool and resource catalogs and executes tool calls.

    The client is injected so tests can hand in one backed by a mock
    transport.
    """

    def __init__(self, client: CodeforcesClient) -> None:
        self._client = client

    def list_tools(self) -> list[types.Tool]:
        return [
            types.Tool(name=t.name, description=t.description, inputSchema=t.input_schema())
            for t in TOOLS
        ]

    def list_resources(self) -> list[types.Resource]:
        return [
            types.Resource(
                uri=r.uri,
                name=r.name,
                description=r.description,
                mimeType=r.mime_type,
            )
            for r in RESOURCES
        ]

    def read_resource(self, uri: str) -> str:
        """Return the static JSON document for *uri*.

        Raises:
            UnknownResourceError: *uri* is not registered.
        """
        resource = RESOURCES_BY_URI.get(uri)
        if resource is None:
            raise UnknownResourceError(f"Unknown resource: {uri}")
        return _to_json(
            {
                "description": resource.summary,
                "available_operations": operations_for(uri),
            }
        )

    async def invoke(
        self, name: str, arguments: Mapping[str, Any] | None = None
    ) -> list[types.TextContent]:
        """Run a tool and wrap its outcome in a single text item.

        Never raises: failures become an ``Error: <message>`` item.
        """
        try:
            payload = await self._run(name, arguments)
        except (DispatchError, CodeforcesError) as exc:
            log.info("Tool %s failed: %s", name, exc)
            return [_text(f"Error: {exc}")]
        except Exception as exc:
            log.exception("Unexpected failure in tool %s", name)
            return [_text(f"Error: {exc}")]
        return [_text(_to_json(payload))]

    async def _run(self, name: str, arguments: Mapping[str, Any] | None) -> Any:
        spec = TOOLS_BY_NAME.get(name)
        if spec is None:
            raise RoutingError(f"Unknown tool: {name}")
        kwargs = bind_arguments(spec, arguments)
        operation = getattr(self._client, spec.operation)
        result = await operation(**kwargs)
        return spec.shape(result)


def _text(text: str) -> types.TextContent:
    return types.TextContent(type="text", text=text)
