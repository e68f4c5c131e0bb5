"""
HTTP surface tests: FastAPI TestClient with in-memory repositories, cache and clock.
"""

from datetime import timedelta
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from marketplace.main import create_application, validation_errors_to_fields
from marketplace.shared.core.clock import FixedClock
from marketplace.shared.core.exceptions import UpstreamError
from marketplace.shared.core.security import Role, get_security_manager
from marketplace.modules.user_management.presentation import dependencies as deps

from tests.fakes import TODAY, InMemoryCache, InMemoryCardRepository, InMemoryUserRepository
from tests.test_registration_service import StubCredentialProvider

API = "/api/v1"

USER_BODY = {
    "name": "Ada",
    "surname": "Lovelace",
    "birthDate": "1990-10-30",
    "email": "a@x.com",
}


class Backend:
    """The in-memory state behind one TestClient."""

    def __init__(self):
        self.cards = InMemoryCardRepository()
        self.users = InMemoryUserRepository(self.cards)
        self.cache = InMemoryCache()
        self.clock = FixedClock.on(TODAY)
        self.credentials = StubCredentialProvider()


@pytest.fixture
def backend():
    return Backend()


@pytest.fixture
def client(backend):
    app = create_application()
    app.dependency_overrides[deps.get_user_repository] = lambda: backend.users
    app.dependency_overrides[deps.get_card_repository] = lambda: backend.cards
    app.dependency_overrides[deps.get_cache] = lambda: backend.cache
    app.dependency_overrides[deps.get_request_cache] = lambda: backend.cache
    app.dependency_overrides[deps.get_clock] = lambda: backend.clock
    app.dependency_overrides[deps.get_credential_provider] = lambda: backend.credentials
    return TestClient(app)


def auth(user_id, role=Role.USER):
    token = get_security_manager().create_access_token(UUID(str(user_id)), role=role)
    return {"Authorization": f"Bearer {token}"}


ADMIN = auth(uuid4(), Role.ADMIN)


def create_user(client, **overrides):
    response = client.post(f"{API}/users", json={**USER_BODY, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


def add_card(client, user_id, number="1111", expiration="2030-01-31"):
    return client.post(
        f"{API}/users/{user_id}/cards",
        json={"cardNumber": number, "cardHolderName": "ADA LOVELACE", "expirationDate": expiration},
        headers=auth(user_id),
    )


# =========================================================================
# USERS
# =========================================================================

def test_create_user_is_public_and_conflicts_on_email(client):
    user = create_user(client)

    duplicate = client.post(f"{API}/users", json={**USER_BODY, "name": "Other"})

    assert user["email"] == "a@x.com"
    assert user["birthDate"] == "1990-10-30"
    assert duplicate.status_code == 409
    error = duplicate.json()["error"]
    assert error["code"] == "CONFLICT_ERROR"
    assert error["message"] == "User with email a@x.com already exists."


def test_invalid_body_returns_field_map(client):
    response = client.post(f"{API}/users", json={"name": "", "email": "not-an-email"})

    assert response.status_code == 400
    errors = response.json()["error"]["details"]["errors"]
    assert set(errors) == {"name", "email"}


def test_future_birth_date_is_rejected(client):
    tomorrow = (TODAY + timedelta(days=1)).isoformat()

    response = client.post(f"{API}/users", json={**USER_BODY, "birthDate": tomorrow})

    assert response.status_code == 400
    assert "birthDate" in response.json()["error"]["details"]["errors"]


def test_get_user_requires_token(client):
    user = create_user(client)

    response = client.get(f"{API}/users/{user['id']}")

    assert response.status_code == 401


def test_invalid_token_is_treated_as_anonymous(client):
    user = create_user(client)

    response = client.get(f"{API}/users/{user['id']}", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 401


def test_get_own_user_with_cards(client):
    user = create_user(client)
    add_card(client, user["id"])

    response = client.get(f"{API}/users/{user['id']}", headers=auth(user["id"]))

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == user["id"]
    assert [c["cardNumber"] for c in body["cards"]] == ["1111"]


def test_other_user_is_forbidden_even_if_resource_exists(client):
    owner = create_user(client)
    intruder = uuid4()

    for method in ("get", "delete"):
        response = getattr(client, method)(f"{API}/users/{owner['id']}", headers=auth(intruder))
        assert response.status_code == 403
    response = client.put(f"{API}/users/{owner['id']}", json=USER_BODY, headers=auth(intruder))
    assert response.status_code == 403


def test_update_and_delete_own_user(client, backend):
    user = create_user(client)
    headers = auth(user["id"])

    updated = client.put(
        f"{API}/users/{user['id']}",
        json={**USER_BODY, "name": "Grace", "email": "g@x.com"},
        headers=headers,
    )
    deleted = client.delete(f"{API}/users/{user['id']}", headers=headers)
    missing = client.get(f"{API}/users/{user['id']}", headers=headers)

    assert updated.status_code == 200
    assert updated.json()["name"] == "Grace"
    assert deleted.status_code == 204
    assert missing.status_code == 404
    assert missing.json()["error"]["message"] == f"User with id {user['id']} not found."


def test_delete_missing_self_returns_404(client, backend):
    missing = uuid4()

    response = client.delete(f"{API}/users/{missing}", headers=auth(missing))

    assert response.status_code == 404
    assert backend.users.writes == 0


def test_repeated_reads_hit_persistence_once(client, backend):
    user = create_user(client)
    headers = auth(user["id"])

    client.get(f"{API}/users/{user['id']}", headers=headers)
    client.get(f"{API}/users/{user['id']}", headers=headers)

    assert backend.users.calls["find_by_id"] == 1


# =========================================================================
# ADMIN QUERIES
# =========================================================================

def test_admin_queries_are_forbidden_for_users(client):
    user = create_user(client)
    headers = auth(user["id"])

    assert client.get(f"{API}/users", headers=headers).status_code == 403
    assert client.get(f"{API}/users?email=a@x.com", headers=headers).status_code == 403
    assert client.get(f"{API}/users/birthdays", headers=headers).status_code == 403
    assert client.get(f"{API}/cards?number=1111", headers=headers).status_code == 403
    assert client.get(f"{API}/cards?expiration-date=today", headers=headers).status_code == 403


def test_lookup_by_email(client):
    user = create_user(client)

    found = client.get(f"{API}/users", params={"email": "a@x.com"}, headers=ADMIN)
    missing = client.get(f"{API}/users", params={"email": "b@x.com"}, headers=ADMIN)

    assert found.status_code == 200
    assert found.json()["id"] == user["id"]
    assert found.json()["cards"] == []
    assert missing.status_code == 404


def test_search_and_list_users(client):
    create_user(client, email="ada@x.com", name="Ada")
    create_user(client, email="grace@navy.mil", name="Grace", surname="Hopper")

    search = client.get(f"{API}/users", params={"search": "hop"}, headers=ADMIN).json()
    listing = client.get(f"{API}/users", params={"page": 0, "size": 1}, headers=ADMIN).json()

    assert [u["name"] for u in search["content"]] == ["Grace"]
    assert listing["totalElements"] == 2
    assert listing["totalPages"] == 2
    assert listing["hasNext"] is True
    assert len(listing["content"]) == 1


def test_page_size_is_bounded(client):
    response = client.get(f"{API}/users", params={"size": 1000}, headers=ADMIN)

    assert response.status_code == 400


def test_birthdays_today(client):
    create_user(client, email="a@x.com", birthDate="1990-10-30")
    create_user(client, email="b@x.com", birthDate="2000-10-30")
    create_user(client, email="c@x.com", birthDate="1990-10-31")

    response = client.get(f"{API}/users/birthdays", headers=ADMIN)

    assert response.status_code == 200
    assert sorted(u["email"] for u in response.json()) == ["a@x.com", "b@x.com"]


# =========================================================================
# CARDS
# =========================================================================

def test_card_number_conflict_across_users(client):
    first = create_user(client, email="a@x.com")
    second = create_user(client, email="b@x.com")

    created = add_card(client, first["id"], number="1111")
    conflict = add_card(client, second["id"], number="1111")

    assert created.status_code == 201
    assert created.json()["userId"] == first["id"]
    assert conflict.status_code == 409
    assert conflict.json()["error"]["message"] == "Card with number 1111 already exists."


def test_card_for_missing_user(client):
    missing = uuid4()

    response = add_card(client, missing)

    assert response.status_code == 404


def test_card_with_past_expiration_is_rejected(client):
    user = create_user(client)

    response = add_card(client, user["id"], expiration=TODAY.isoformat())

    assert response.status_code == 400
    assert "expirationDate" in response.json()["error"]["details"]["errors"]


def test_card_access_by_owner_admin_and_stranger(client):
    user = create_user(client)
    card = add_card(client, user["id"]).json()
    url = f"{API}/cards/{card['id']}"

    assert client.get(url, headers=auth(user["id"])).status_code == 200
    assert client.get(url, headers=ADMIN).status_code == 200
    assert client.get(url, headers=auth(uuid4())).status_code == 403
    assert client.delete(url, headers=auth(uuid4())).status_code == 403
    assert client.delete(url, headers=auth(user["id"])).status_code == 204
    assert client.get(url, headers=ADMIN).status_code == 404


def test_missing_card_is_forbidden_for_non_admin(client):
    url = f"{API}/cards/{uuid4()}"

    assert client.get(url, headers=auth(uuid4())).status_code == 403
    assert client.get(url, headers=ADMIN).status_code == 404


def test_list_user_cards(client):
    user = create_user(client)
    add_card(client, user["id"], number="1")
    add_card(client, user["id"], number="2")

    response = client.get(f"{API}/users/{user['id']}/cards", headers=auth(user["id"]))

    assert sorted(c["cardNumber"] for c in response.json()) == ["1", "2"]


def test_card_queries(client, backend):
    user = create_user(client)
    add_card(client, user["id"], number="4111")

    by_number = client.get(f"{API}/cards", params={"number": "4111"}, headers=ADMIN)
    unknown = client.get(f"{API}/cards", params={"number": "0000"}, headers=ADMIN)
    expired = client.get(f"{API}/cards", params={"expiration-date": "today"}, headers=ADMIN)
    unsupported = client.get(f"{API}/cards", params={"expiration-date": "2020-01-01"}, headers=ADMIN)

    assert by_number.json()["cardHolderName"] == "ADA LOVELACE"
    assert unknown.status_code == 404
    assert expired.status_code == 200
    assert expired.json() == []
    assert unsupported.status_code == 400


# =========================================================================
# REGISTRATION
# =========================================================================

def test_registration_creates_user_and_credentials(client, backend):
    response = client.post(
        f"{API}/registration/users",
        json={**USER_BODY, "login": "ada", "password": "s3cret"},
    )

    assert response.status_code == 201
    user_id = UUID(response.json()["id"])
    assert backend.credentials.requests == [(user_id, "ada", "s3cret")]
    assert "password" not in response.json()


@pytest.mark.parametrize("upstream_status, expected", [(409, 409), (502, 500)])
def test_registration_upstream_failure(client, backend, upstream_status, expected):
    backend.credentials.error = UpstreamError(
        "Login ada already exists", service_name="auth-service", upstream_status=upstream_status
    )

    response = client.post(
        f"{API}/registration/users",
        json={**USER_BODY, "login": "ada", "password": "s3cret"},
    )

    assert response.status_code == expected
    assert response.json()["error"]["message"] == "Login ada already exists"
    assert backend.users.users == {}


# =========================================================================
# HEALTH
# =========================================================================

def test_health(client):
    response = client.get(f"{API}/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "X-Request-ID" in response.headers


def test_request_id_is_echoed(client):
    response = client.get(f"{API}/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_readiness_before_and_after_startup():
    app = create_application()

    not_started = TestClient(app).get(f"{API}/health/ready")
    with TestClient(app) as started:
        ready = started.get(f"{API}/health/ready")

    assert not_started.status_code == 503
    assert ready.status_code == 200
    assert ready.json()["checks"]["database"]["status"] == "healthy"


def test_validation_errors_collapse_to_field_map():
    errors = [
        {"loc": ("body", "birthDate"), "msg": "Input should be a valid date"},
        {"loc": ("body", "birthDate"), "msg": "second message"},
        {"loc": ("query", "size"), "msg": "Input should be less than or equal to 100"},
        {"loc": ("body",), "msg": "Field required"},
    ]

    assert validation_errors_to_fields(errors) == {
        "birthDate": "Input should be a valid date",
        "size": "Input should be less than or equal to 100",
        "body": "Field required",
    }


def test_token_round_trip():
    user_id = uuid4()
    manager = get_security_manager()

    principal = manager.verify_token(manager.create_access_token(user_id, role=Role.ADMIN))

    assert principal.user_id == user_id
    assert principal.is_admin
