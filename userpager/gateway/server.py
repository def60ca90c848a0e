"""
HTTP surface of the mock GraphQL API.

POST {graphql_path} with a JSON body ``{"operationName": ..., "variables": {...}}``.
Successful requests answer 200 with ``{"data": ...}``; malformed ones answer
400 with ``{"data": null, "errors": [...]}``. Run with uvicorn, e.g.:

    uvicorn --factory userpager.gateway.server:create_default_app --port 4000
"""

from __future__ import annotations

from typing import Any, Optional

import fastapi
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError as PydanticValidationError

from userpager.config import Settings, get_settings
from userpager.datasource.factory import build_source
from userpager.errors import ValidationError
from userpager.gateway.executor import QueryGateway
from userpager.gateway.schema import SDL, GraphQLRequest
from userpager.utils.logging import get_logger

log = get_logger(__name__)


def create_app(gateway: QueryGateway, graphql_path: str = "/graphql") -> fastapi.FastAPI:
    """Mount the gateway on a FastAPI application."""
    app = fastapi.FastAPI(title="userpager mock GraphQL API")
    app.state.gateway = gateway

    @app.post(graphql_path)
    async def graphql(request: fastapi.Request) -> JSONResponse:
        try:
            body: Any = await request.json()
            gql_request = GraphQLRequest.model_validate(body)
        except ValueError as exc:
            # PydanticValidationError and json.JSONDecodeError are both ValueErrors
            details = exc.errors() if isinstance(exc, PydanticValidationError) else None
            error = ValidationError(
                "Request body must be a JSON object with 'operationName'",
                details=[{"reason": d["msg"]} for d in details] if details else None,
            )
            log.warning("Malformed request body", extra={"error": str(exc)})
            return JSONResponse({"data": None, "errors": [error.to_graphql()]}, status_code=400)

        envelope = await gateway.execute_request(gql_request)
        status_code = 400 if envelope.get("errors") else 200
        return JSONResponse(envelope, status_code=status_code)

    @app.get(f"{graphql_path}/schema", response_class=PlainTextResponse)
    async def schema() -> str:
        return SDL

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok", "source": gateway.source.name}

    return app


def create_default_app(settings: Optional[Settings] = None) -> fastapi.FastAPI:
    """Build the source from settings and mount it; used as the uvicorn factory."""
    settings = settings or get_settings()
    gateway = QueryGateway(build_source(settings))
    log.info(
        "GraphQL server configured",
        extra={"url": settings.graphql_url, "source": gateway.source.name},
    )
    return create_app(gateway, graphql_path=settings.graphql_path)


__all__ = ["create_app", "create_default_app"]
