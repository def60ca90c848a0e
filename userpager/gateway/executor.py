"""
Request execution for the mock GraphQL gateway.

`QueryGateway.execute` validates a request against the operation registry and
returns a GraphQL-style envelope. Malformed requests come back as an
``errors`` list instead of raising; a missing user is ``null`` data, never an
error.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from userpager.datasource.abstract import UserSource
from userpager.errors import ValidationError
from userpager.gateway.schema import OPERATIONS, GraphQLRequest, Operation
from userpager.utils.logging import get_logger

log = get_logger(__name__)

Envelope = Dict[str, Any]


def _details(exc: PydanticValidationError) -> list:
    return [
        {"argument": ".".join(str(p) for p in err["loc"]), "reason": err["msg"]}
        for err in exc.errors()
    ]


class QueryGateway:
    """
    Dispatch named operations to a user source.
    """

    def __init__(self, source: UserSource) -> None:
        self.source = source

    def prepare(
        self, operation_name: str, variables: Optional[Mapping[str, Any]] = None
    ) -> tuple[Operation, Any]:
        """
        Resolve the operation and validate its arguments.

        Raises
        ------
        ValidationError
            Unknown operation, missing argument or wrong primitive type.
        """
        operation = OPERATIONS.get(operation_name)
        if operation is None:
            raise ValidationError(
                f"Unknown operation '{operation_name}'. Available: {', '.join(OPERATIONS)}"
            )
        try:
            args = operation.args_model.model_validate(dict(variables or {}))
        except PydanticValidationError as exc:
            raise ValidationError(
                f"Invalid arguments for '{operation_name}'", details=_details(exc)
            ) from exc
        return operation, args

    async def execute(
        self, operation_name: str, variables: Optional[Mapping[str, Any]] = None
    ) -> Envelope:
        try:
            operation, args = self.prepare(operation_name, variables)
        except ValidationError as exc:
            log.warning(
                "Rejected request",
                extra={"operation": operation_name, "error": exc.message},
            )
            return {"data": None, "errors": [exc.to_graphql()]}

        result = await operation.resolver(self.source, args)
        log.debug("Resolved %s", operation_name, extra={"operation": operation_name})
        return {"data": {operation_name: result}}

    async def execute_request(self, request: GraphQLRequest) -> Envelope:
        return await self.execute(request.operation_name, request.variables)


__all__ = ["Envelope", "QueryGateway"]
