# tests/test_auth_server.py

import pytest

from oauth_gateway.adapters.outbound.oauth.auth_server import (
    ClientCredentialsAuthServer,
    parse_requested_scopes,
)
from oauth_gateway.adapters.outbound.persistence.repositories.session_repository import session_repository
from oauth_gateway.domain.models.results import Issued, ProtocolFailure


def token_request(registered_client, **overrides):
    data = {
        "grant_type": "client_credentials",
        "client_id": registered_client["client_id"],
        "client_secret": registered_client["client_secret"],
        "scope": "basic",
    }
    data.update(overrides)
    return data


def test_parse_requested_scopes():
    assert parse_requested_scopes("basic, write  basic") == ["basic", "write"]
    assert parse_requested_scopes("") == []
    assert parse_requested_scopes(None) == []


@pytest.mark.asyncio
async def test_issues_and_stores_token(async_session, registered_client):
    server = ClientCredentialsAuthServer(async_session, expires_in=600)

    result = await server.issue_access_token(token_request(registered_client, scope="basic,write"))

    assert isinstance(result, Issued)
    assert result.payload["token_type"] == "Bearer"
    assert result.payload["expires_in"] == 600
    assert result.payload["scope"] == "basic write"

    session = await session_repository.find_session_by_token(async_session, result.payload["access_token"])
    assert session["client_id"] == registered_client["client_id"]
    assert session["owner_type"] == "client"
    assert await session_repository.get_token_scopes(async_session, session["access_token_id"]) == ["basic", "write"]


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["grant_type", "client_id", "client_secret"])
async def test_missing_parameter(async_session, registered_client, missing):
    data = token_request(registered_client)
    del data[missing]

    result = await ClientCredentialsAuthServer(async_session).issue_access_token(data)

    assert isinstance(result, ProtocolFailure)
    assert result.error == "invalid_request"
    assert f'Check the "{missing}" parameter.' in result.description


@pytest.mark.asyncio
async def test_unsupported_grant_type(async_session, registered_client):
    result = await ClientCredentialsAuthServer(async_session).issue_access_token(
        token_request(registered_client, grant_type="password")
    )

    assert result.error == "unsupported_grant_type"


@pytest.mark.asyncio
async def test_wrong_secret_is_invalid_client(async_session, registered_client):
    result = await ClientCredentialsAuthServer(async_session).issue_access_token(
        token_request(registered_client, client_secret="nope")
    )

    assert result == ProtocolFailure(error="invalid_client", description="Client authentication failed")


@pytest.mark.asyncio
async def test_unknown_scope(async_session, registered_client):
    result = await ClientCredentialsAuthServer(async_session).issue_access_token(
        token_request(registered_client, scope="basic admin")
    )

    assert result.error == "invalid_scope"
    assert '"admin"' in result.description


def test_exception_http_headers():
    server = ClientCredentialsAuthServer(db=None)

    assert server.exception_http_headers("invalid_client") == {"WWW-Authenticate": 'Basic realm="OAuth"'}
    assert server.exception_http_headers("invalid_scope") == {}
