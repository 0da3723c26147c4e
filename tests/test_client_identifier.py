# tests/test_client_identifier.py

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from oauth_gateway.application.use_cases.client_identifier import ClientIdentifier
from oauth_gateway.domain.models.request_context import RequestContext

CLIENT_ROW = {
    "client_id": "partner",
    "client_secret": "$2b$12$hash",
    "redirect_uri": None,
    "metadata": None,
    "name": "Partner",
    "request_limit": 100,
    "current_total_request": 3,
    "request_limit_until": datetime(2026, 10, 19, 13, 0, 0),
    "last_request_at": None,
}


@pytest.fixture
def store():
    store = AsyncMock()
    store.find_client.return_value = dict(CLIENT_ROW)
    store.find_session_by_token.return_value = None
    return store


@pytest.mark.asyncio
async def test_identifies_by_client_credentials(store):
    context = RequestContext(input={"client_id": "partner", "client_secret": "s3cret"})

    client = await ClientIdentifier(store).resolve(context)

    assert client.id == "partner"
    assert client.request_limit == 100
    store.find_client.assert_awaited_once_with("partner", "s3cret", None)
    store.find_session_by_token.assert_not_awaited()


@pytest.mark.asyncio
async def test_access_token_wins_over_client_id(store):
    store.find_session_by_token.return_value = {"client_id": "token-owner"}
    context = RequestContext(input={"client_id": "partner"}, bearer_token="abc")

    client = await ClientIdentifier(store).resolve(context)

    assert client.id == "token-owner"
    store.find_session_by_token.assert_awaited_once_with("abc")
    store.find_client.assert_awaited_once_with("token-owner", None, None)


@pytest.mark.asyncio
async def test_bearer_is_preferred_to_validation_field(store):
    store.find_session_by_token.return_value = {"client_id": "token-owner"}
    context = RequestContext(input={"validate_access_token": "from-input"}, bearer_token="from-header")

    await ClientIdentifier(store).resolve(context)

    store.find_session_by_token.assert_awaited_once_with("from-header")


@pytest.mark.asyncio
async def test_access_token_parameter_identifies_the_client(store):
    store.find_session_by_token.return_value = {"client_id": "token-owner"}
    context = RequestContext(input={"access_token": "from-query", "client_id": "partner"})

    client = await ClientIdentifier(store).resolve(context)

    assert client.id == "token-owner"
    store.find_session_by_token.assert_awaited_once_with("from-query")


@pytest.mark.asyncio
async def test_headers_only_ignores_access_token_parameter(store):
    context = RequestContext(input={"access_token": "from-query", "client_id": "partner"})

    client = await ClientIdentifier(store, headers_only=True).resolve(context)

    assert client.id == "partner"
    store.find_session_by_token.assert_not_awaited()


@pytest.mark.asyncio
async def test_validation_field_is_the_last_token_source(store):
    store.find_session_by_token.return_value = {"client_id": "token-owner"}
    context = RequestContext(input={"validate_access_token": "from-input"})

    await ClientIdentifier(store, headers_only=True).resolve(context)

    store.find_session_by_token.assert_awaited_once_with("from-input")


@pytest.mark.asyncio
async def test_unknown_token_falls_back_to_client_id(store):
    context = RequestContext(input={"client_id": "partner"}, bearer_token="stale")

    client = await ClientIdentifier(store).resolve(context)

    assert client.id == "partner"


@pytest.mark.asyncio
async def test_resolution_is_memoized_per_request(store):
    context = RequestContext(input={"client_id": "partner"})
    identifier = ClientIdentifier(store)

    first = await identifier.resolve(context)
    second = await identifier.resolve(context)

    assert first is second
    store.find_client.assert_awaited_once()


@pytest.mark.asyncio
async def test_unidentified_request_resolves_to_none_once(store):
    context = RequestContext(input={"client_id": ""})
    identifier = ClientIdentifier(store)

    assert await identifier.resolve(context) is None
    assert await identifier.resolve(context) is None
    assert context.client_resolved is True
    store.find_client.assert_not_awaited()


@pytest.mark.asyncio
async def test_failed_lookup_resolves_to_none(store):
    store.find_client.return_value = None
    context = RequestContext(input={"client_id": "partner", "client_secret": "wrong"})

    assert await ClientIdentifier(store).resolve(context) is None


@pytest.mark.asyncio
async def test_built_client_exposes_secret_and_utc_times(store):
    context = RequestContext(input={"client_id": "partner"})

    client = await ClientIdentifier(store).resolve(context)

    assert client.secret == "$2b$12$hash"
    assert client.name == "Partner"
    assert client.request_limit_until == datetime(2026, 10, 19, 13, 0, 0, tzinfo=timezone.utc)
    assert client.last_request_at is None
    assert not hasattr(client, "client_id")
