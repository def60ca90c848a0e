from __future__ import annotations

import pytest

from userpager.errors import ValidationError
from userpager.gateway.schema import SDL

BAD_INPUT = "BAD_USER_INPUT"


@pytest.mark.asyncio
async def test_list_page_returns_serialized_records(gateway) -> None:
    envelope = await gateway.execute("listPage", {"page": 2})

    assert "errors" not in envelope
    rows = envelope["data"]["listPage"]
    assert [row["username"] for row in rows] == [f"user{i}" for i in range(11, 21)]
    assert set(rows[0]) == {"username", "email", "timestamp", "spammy"}


@pytest.mark.asyncio
async def test_list_page_beyond_collection_is_empty_not_error(gateway) -> None:
    envelope = await gateway.execute("listPage", {"page": 11})
    assert envelope == {"data": {"listPage": []}}


@pytest.mark.asyncio
async def test_find_by_key_absent_is_null(gateway) -> None:
    envelope = await gateway.execute("findByKey", {"username": "user999"})
    assert envelope == {"data": {"findByKey": None}}


@pytest.mark.asyncio
async def test_find_by_key_present(gateway) -> None:
    envelope = await gateway.execute("findByKey", {"username": "user57"})
    assert envelope["data"]["findByKey"]["username"] == "user57"


@pytest.mark.asyncio
async def test_spammy_users(gateway, users) -> None:
    envelope = await gateway.execute("spammyUsers")
    assert len(envelope["data"]["spammyUsers"]) == sum(u.spammy for u in users)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("operation", "variables"),
    [
        ("listPage", {}),
        ("listPage", {"page": "2"}),
        ("listPage", {"page": 2.5}),
        ("listPage", {"page": True}),
        ("listPage", {"page": 1, "size": 5}),
        ("findByKey", {}),
        ("findByKey", {"username": 57}),
        ("users", {"page": 1}),
    ],
)
async def test_malformed_requests_return_errors(gateway, operation, variables) -> None:
    envelope = await gateway.execute(operation, variables)

    assert envelope["data"] is None
    assert envelope["errors"][0]["extensions"]["code"] == BAD_INPUT


def test_prepare_raises_validation_error(gateway) -> None:
    with pytest.raises(ValidationError) as excinfo:
        gateway.prepare("listPage", {"page": "one"})
    assert excinfo.value.details[0]["argument"] == "page"


def test_sdl_lists_every_operation() -> None:
    assert "listPage(page: Int!): [User!]!" in SDL
    assert "findByKey(username: String!): User" in SDL
    assert "spammyUsers: [User!]!" in SDL
