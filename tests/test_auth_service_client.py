from uuid import uuid4

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp import test_utils

from marketplace.shared.core.exceptions import UpstreamError
from marketplace.shared.infrastructure.external_apis.api_client import APIClient
from marketplace.modules.user_management.infrastructure.external.auth_service_client import (
    CREDENTIALS_ENDPOINT,
    AuthServiceClient,
)


class FakeAuthService:
    """Credential endpoint with a scripted response."""

    def __init__(self):
        self.status = 201
        self.body = None
        self.text = None
        self.received = []

    async def handle(self, request: web.Request) -> web.Response:
        payload = await request.json()
        self.received.append(payload)
        if self.text is not None:
            return web.Response(status=self.status, text=self.text)
        body = self.body if self.body is not None else {"userId": payload["userId"]}
        return web.json_response(body, status=self.status)


@pytest.fixture
def auth_service():
    return FakeAuthService()


@pytest_asyncio.fixture
async def client(auth_service):
    app = web.Application()
    app.router.add_post(CREDENTIALS_ENDPOINT, auth_service.handle)
    server = test_utils.TestServer(app)
    await server.start_server()

    api_client = APIClient(base_url=str(server.make_url("/")), api_name="auth-service", timeout=5)
    yield AuthServiceClient(api_client)

    await api_client.close()
    await server.close()


async def test_create_credentials_posts_payload(client, auth_service):
    user_id = uuid4()

    result = await client.create_credentials(user_id, "ada", "s3cret")

    assert result == user_id
    assert auth_service.received == [{"userId": str(user_id), "login": "ada", "password": "s3cret"}]


async def test_conflict_is_passed_through(client, auth_service):
    auth_service.status = 409
    auth_service.body = {"message": "Login ada already exists"}

    with pytest.raises(UpstreamError) as exc_info:
        await client.create_credentials(uuid4(), "ada", "pw")

    assert exc_info.value.status_code == 409
    assert exc_info.value.message == "Login ada already exists"
    assert exc_info.value.upstream_status == 409


async def test_other_statuses_become_internal_errors(client, auth_service):
    auth_service.status = 503
    auth_service.text = "maintenance"

    with pytest.raises(UpstreamError) as exc_info:
        await client.create_credentials(uuid4(), "ada", "pw")

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "maintenance"


async def test_response_without_user_id_is_rejected(client, auth_service):
    auth_service.body = {"status": "ok"}

    with pytest.raises(UpstreamError) as exc_info:
        await client.create_credentials(uuid4(), "ada", "pw")

    assert exc_info.value.status_code == 500


async def test_unreachable_service_raises_upstream_error():
    client = AuthServiceClient(APIClient(base_url="http://127.0.0.1:9", api_name="auth-service", timeout=2))
    try:
        with pytest.raises(UpstreamError) as exc_info:
            await client.create_credentials(uuid4(), "ada", "pw")
    finally:
        await client.close()

    assert exc_info.value.status_code == 500


async def test_client_keeps_request_statistics(client, auth_service):
    await client.create_credentials(uuid4(), "ada", "pw")
    auth_service.status = 409
    auth_service.body = {"message": "taken"}
    with pytest.raises(UpstreamError):
        await client.create_credentials(uuid4(), "ada", "pw")

    stats = client.api_client.get_stats()

    assert stats["total_requests"] == 2
    assert stats["successful_requests"] == 1
    assert stats["failed_requests"] == 1
    assert stats["error_rate"] == 50
