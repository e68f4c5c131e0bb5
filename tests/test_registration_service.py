from typing import List, Optional
from uuid import UUID, uuid4

import pytest

from marketplace.shared.core.exceptions import ConflictError, UpstreamError
from marketplace.modules.user_management.domain.services.registration_service import (
    CredentialProvider,
    RegistrationService,
)

from tests.fakes import user_details


class StubCredentialProvider(CredentialProvider):
    def __init__(self, error: Optional[Exception] = None, returned_id: Optional[UUID] = None):
        self.error = error
        self.returned_id = returned_id
        self.requests: List[tuple] = []

    async def create_credentials(self, user_id: UUID, login: str, password: str) -> UUID:
        self.requests.append((user_id, login, password))
        if self.error is not None:
            raise self.error
        return self.returned_id or user_id


async def test_register_creates_user_and_credentials(user_service, user_repository):
    provider = StubCredentialProvider()
    service = RegistrationService(user_service, provider)

    user = await service.register(user_details(email="a@x.com"), login="ada", password="s3cret")

    assert user.id in user_repository.users
    assert provider.requests == [(user.id, "ada", "s3cret")]


async def test_register_keeps_user_when_upstream_returns_other_id(user_service, user_repository):
    service = RegistrationService(user_service, StubCredentialProvider(returned_id=uuid4()))

    user = await service.register(user_details(), login="ada", password="pw")

    assert user.id in user_repository.users


@pytest.mark.parametrize("upstream_status", [409, 500, None])
async def test_upstream_failure_removes_local_user(user_service, user_repository, upstream_status):
    error = UpstreamError("Login already taken", service_name="auth-service", upstream_status=upstream_status)
    service = RegistrationService(user_service, StubCredentialProvider(error=error))

    with pytest.raises(UpstreamError) as exc_info:
        await service.register(user_details(), login="ada", password="pw")

    assert exc_info.value is error
    assert exc_info.value.message == "Login already taken"
    assert exc_info.value.status_code == (409 if upstream_status == 409 else 500)
    assert user_repository.users == {}


async def test_duplicate_email_never_calls_credential_service(user_service):
    await user_service.create_user(user_details(email="a@x.com"))
    provider = StubCredentialProvider()
    service = RegistrationService(user_service, provider)

    with pytest.raises(ConflictError):
        await service.register(user_details(email="a@x.com"), login="ada", password="pw")

    assert provider.requests == []


async def test_unexpected_provider_error_also_compensates(user_service, user_repository):
    service = RegistrationService(user_service, StubCredentialProvider(error=RuntimeError("boom")))

    with pytest.raises(RuntimeError):
        await service.register(user_details(), login="ada", password="pw")

    assert user_repository.users == {}
