# tests/test_api.py

from datetime import timedelta

import pytest


async def request_token(async_client, registered_client, scope="basic", **overrides):
    data = {
        "grant_type": "client_credentials",
        "client_id": registered_client["client_id"],
        "client_secret": registered_client["client_secret"],
        "scope": scope,
    }
    data.update(overrides)
    return await async_client.post("/oauth/access_token", data=data)


@pytest.mark.asyncio
async def test_health(async_client):
    response = await async_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_token_request_with_form(async_client, registered_client):
    response = await request_token(async_client, registered_client)

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "Bearer"
    assert body["scope"] == "basic"
    assert body["access_token"]
    assert response.headers["X-Rate-Limit-Limit"] == "5"
    assert response.headers["X-Rate-Limit-Remaining"] == "4"


@pytest.mark.asyncio
async def test_token_request_with_json(async_client, registered_client):
    response = await async_client.post("/oauth/access_token", json={
        "grant_type": "client_credentials",
        "client_id": registered_client["client_id"],
        "client_secret": registered_client["client_secret"],
    })

    assert response.status_code == 200
    assert response.json()["scope"] == ""


@pytest.mark.asyncio
async def test_malformed_json_is_invalid_request(async_client, registered_client):
    response = await async_client.post(
        "/oauth/access_token",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "invalid_request"


@pytest.mark.asyncio
async def test_wrong_secret(async_client, registered_client):
    response = await request_token(async_client, registered_client, client_secret="wrong")

    assert response.status_code == 401
    assert response.json() == {"message": "invalid_client", "description": "Client authentication failed"}
    assert response.headers["WWW-Authenticate"] == 'Basic realm="OAuth"'
    assert "X-Rate-Limit-Limit" not in response.headers


@pytest.mark.asyncio
async def test_unsupported_grant_type(async_client, registered_client):
    response = await request_token(async_client, registered_client, grant_type="password")

    assert response.status_code == 501
    assert response.json()["message"] == "unsupported_grant_type"
    # The client is still identified by its credentials
    assert response.headers["X-Rate-Limit-Remaining"] == "4"


@pytest.mark.asyncio
async def test_read_current_client(async_client, registered_client):
    token = (await request_token(async_client, registered_client)).json()["access_token"]

    response = await async_client.get("/api/v1/client", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == registered_client["client_id"]
    assert body["name"] == "Partner"
    assert body["request_limit"] == 5
    assert body["current_total_request"] == 2
    assert "secret" not in body
    assert response.headers["X-Rate-Limit-Remaining"] == "3"


@pytest.mark.asyncio
async def test_missing_token_is_forbidden(async_client, registered_client):
    response = await async_client.get("/api/v1/client")

    assert response.status_code == 403
    assert response.json() == {"message": "forbidden", "description": "Access token is missing"}
    assert "X-Rate-Limit-Limit" not in response.headers


@pytest.mark.asyncio
async def test_invalid_token_is_forbidden(async_client, registered_client):
    response = await async_client.get("/api/v1/client", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 403
    assert response.json()["description"] == "Access token is not valid"


@pytest.mark.asyncio
async def test_missing_scope_is_forbidden(async_client, registered_client):
    token = (await request_token(async_client, registered_client, scope="write")).json()["access_token"]

    response = await async_client.get("/api/v1/client", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403
    assert response.json() == {
        "message": "forbidden",
        "description": "Only access token with scope basic can use this endpoint",
    }
    assert response.headers["X-Rate-Limit-Remaining"] == "3"


@pytest.mark.asyncio
async def test_rate_limit_exceeded(async_client, registered_client):
    token = (await request_token(async_client, registered_client)).json()["access_token"]
    headers = {"Authorization": f"Bearer {token}"}

    for _ in range(4):
        assert (await async_client.get("/api/v1/client", headers=headers)).status_code == 200

    response = await async_client.get("/api/v1/client", headers=headers)

    assert response.status_code == 429
    assert response.json()["message"] == "rate_limit_exceeded"
    assert response.headers["X-Rate-Limit-Limit"] == "5"
    assert response.headers["X-Rate-Limit-Remaining"] == "0"
    assert 0 < int(response.headers["X-Rate-Limit-Reset"]) <= 3600


@pytest.mark.asyncio
async def test_access_token_parameter_is_metered(async_client, registered_client):
    token = (await request_token(async_client, registered_client)).json()["access_token"]

    response = await async_client.get("/api/v1/client", params={"access_token": token})

    assert response.status_code == 200
    assert response.json()["id"] == registered_client["client_id"]
    assert response.headers["X-Rate-Limit-Limit"] == "5"
    assert response.headers["X-Rate-Limit-Remaining"] == "3"

    for _ in range(3):
        assert (await async_client.get("/api/v1/client", params={"access_token": token})).status_code == 200

    response = await async_client.get("/api/v1/client", params={"access_token": token})

    assert response.status_code == 429
    assert response.json()["message"] == "rate_limit_exceeded"
    assert response.headers["X-Rate-Limit-Remaining"] == "0"


@pytest.mark.asyncio
async def test_headers_only_refuses_access_token_parameter(async_client, registered_client, monkeypatch):
    from oauth_gateway.adapters.configuration.config import settings

    token = (await request_token(async_client, registered_client)).json()["access_token"]
    monkeypatch.setattr(settings, "HTTP_HEADERS_ONLY", True)

    response = await async_client.get("/api/v1/client", params={"access_token": token})

    assert response.status_code == 403
    assert response.json() == {"message": "forbidden", "description": "Access token is missing"}
    assert "X-Rate-Limit-Limit" not in response.headers

    response = await async_client.get("/api/v1/client", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_numeric_json_secret_is_invalid_client(async_client, registered_client):
    response = await async_client.post("/oauth/access_token", json={
        "grant_type": "client_credentials",
        "client_id": registered_client["client_id"],
        "client_secret": 123,
    })

    assert response.status_code == 401
    assert response.json()["message"] == "invalid_client"


@pytest.mark.asyncio
async def test_boolean_json_secret_is_invalid_client(async_client, registered_client):
    response = await async_client.post("/oauth/access_token", json={
        "grant_type": "client_credentials",
        "client_id": registered_client["client_id"],
        "client_secret": True,
    })

    assert response.status_code == 401
    assert response.json()["message"] == "invalid_client"


@pytest.mark.asyncio
async def test_error_responses_carry_identified_client_headers():
    from starlette.requests import Request

    from oauth_gateway.domain.exceptions import ResourceNotFoundException
    from oauth_gateway.domain.models.client_domain_model import Client
    from oauth_gateway.domain.models.request_context import RequestContext
    from oauth_gateway.main import gateway_exception_handler
    from oauth_gateway.shared.utils.clock import utcnow

    context = RequestContext(input={"client_id": "partner"})
    context.remember_client(Client(
        id="partner",
        request_limit=5,
        current_total_request=2,
        request_limit_until=utcnow() + timedelta(minutes=30),
    ))
    request = Request({
        "type": "http",
        "method": "GET",
        "path": "/api/v1/client",
        "headers": [],
        "state": {"oauth_context": context},
    })

    response = await gateway_exception_handler(request, ResourceNotFoundException())

    assert response.status_code == 404
    assert response.headers["X-Rate-Limit-Limit"] == "5"
    assert response.headers["X-Rate-Limit-Remaining"] == "3"


@pytest.mark.asyncio
async def test_error_responses_without_identified_client_keep_their_headers():
    from starlette.requests import Request

    from oauth_gateway.domain.exceptions import ForbiddenException
    from oauth_gateway.main import gateway_exception_handler

    request = Request({"type": "http", "method": "GET", "path": "/", "headers": []})

    response = await gateway_exception_handler(
        request, ForbiddenException(headers={"WWW-Authenticate": "Bearer"})
    )

    assert response.status_code == 403
    assert response.headers["WWW-Authenticate"] == "Bearer"
    assert "X-Rate-Limit-Limit" not in response.headers
