"""
Named query shapes served by the gateway.

Each operation pairs a strict argument model with a resolver against a
`UserSource`. Strict models give GraphQL-like input rules: `Int!` accepts only
integers (not strings, floats or booleans), `String!` only strings, and
unknown arguments are rejected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Type

from pydantic import BaseModel, ConfigDict, Field

from userpager.datasource.abstract import UserSource
from userpager.domain.models import UserRecord


class _Args(BaseModel):
    model_config = ConfigDict(strict=True, extra="forbid", frozen=True)


class ListPageArgs(_Args):
    page: int


class FindByKeyArgs(_Args):
    username: str


class SpammyUsersArgs(_Args):
    pass


class GraphQLRequest(BaseModel):
    """HTTP body accepted by the gateway endpoint."""

    operation_name: str = Field(..., alias="operationName")
    variables: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(populate_by_name=True)


Resolver = Callable[[UserSource, Any], Awaitable[Any]]


@dataclass(frozen=True)
class Operation:
    name: str
    args_model: Type[_Args]
    resolver: Resolver
    signature: str


def _dump(record: Optional[UserRecord]) -> Optional[Dict[str, Any]]:
    return record.model_dump() if record is not None else None


async def _resolve_list_page(source: UserSource, args: ListPageArgs) -> list:
    return [_dump(r) for r in await source.list_page(args.page)]


async def _resolve_find_by_key(source: UserSource, args: FindByKeyArgs) -> Optional[dict]:
    return _dump(await source.find_by_key(args.username))


async def _resolve_spammy_users(source: UserSource, args: SpammyUsersArgs) -> list:
    del args
    return [_dump(r) for r in await source.spammy_users()]


OPERATIONS: Dict[str, Operation] = {
    op.name: op
    for op in (
        Operation(
            name="listPage",
            args_model=ListPageArgs,
            resolver=_resolve_list_page,
            signature="listPage(page: Int!): [User!]!",
        ),
        Operation(
            name="findByKey",
            args_model=FindByKeyArgs,
            resolver=_resolve_find_by_key,
            signature="findByKey(username: String!): User",
        ),
        Operation(
            name="spammyUsers",
            args_model=SpammyUsersArgs,
            resolver=_resolve_spammy_users,
            signature="spammyUsers: [User!]!",
        ),
    )
}

SDL = "\n".join(
    [
        "type User {",
        "  username: String!",
        "  email: String!",
        "  timestamp: String!",
        "  spammy: Boolean!",
        "}",
        "type Query {",
        *(f"  {op.signature}" for op in OPERATIONS.values()),
        "}",
    ]
)


__all__ = [
    "FindByKeyArgs",
    "GraphQLRequest",
    "ListPageArgs",
    "OPERATIONS",
    "Operation",
    "SDL",
    "SpammyUsersArgs",
]
