from datetime import date, timedelta
from uuid import uuid4

import pytest

from marketplace.shared.config.redis import CacheConfig
from marketplace.shared.core.exceptions import ConflictError, NotFoundError, ValidationError
from marketplace.modules.user_management.domain.models.card import CardInfo
from marketplace.modules.user_management.domain.services.card_service import CardService

from tests.fakes import TODAY, card_details, user_details


@pytest.fixture
def lenient_card_service(card_repository, user_repository, cache, clock):
    return CardService(card_repository, user_repository, cache, clock, require_future_expiration=False)


async def test_same_number_for_other_user_conflicts(user_service, card_service, card_repository):
    owner = await user_service.create_user(user_details(email="a@x.com"))
    other = await user_service.create_user(user_details(email="b@x.com"))
    card = await card_service.create_card_for_user(owner.id, card_details(number="1111"))

    with pytest.raises(ConflictError) as exc_info:
        await card_service.create_card_for_user(other.id, card_details(number="1111"))

    assert exc_info.value.message == "Card with number 1111 already exists."
    assert list(card_repository.cards) == [card.id]


async def test_resubmitting_own_card_returns_existing(user_service, card_service, card_repository):
    owner = await user_service.create_user(user_details())
    first = await card_service.create_card_for_user(owner.id, card_details(number="1111"))

    again = await card_service.create_card_for_user(owner.id, card_details(number="1111"))

    assert again.id == first.id
    assert card_repository.calls["save"] == 1


async def test_card_for_missing_user_raises_not_found(card_service, card_repository):
    missing = uuid4()

    with pytest.raises(NotFoundError) as exc_info:
        await card_service.create_card_for_user(missing, card_details())

    assert exc_info.value.message == f"User with id {missing} not found."
    assert card_repository.writes == 0


@pytest.mark.parametrize("expiration", [TODAY, TODAY - timedelta(days=1)])
async def test_expiration_must_be_in_future(user_service, card_service, card_repository, expiration):
    owner = await user_service.create_user(user_details())

    with pytest.raises(ValidationError) as exc_info:
        await card_service.create_card_for_user(owner.id, card_details(expiration_date=expiration))

    assert "expirationDate" in exc_info.value.details["errors"]
    assert card_repository.writes == 0


async def test_past_expiration_allowed_when_rule_disabled(user_service, lenient_card_service, cache):
    owner = await user_service.create_user(user_details())
    await lenient_card_service.get_expired_cards()
    assert cache.has(CacheConfig.EXPIRED_CARDS, CacheConfig.SHARED_KEY)

    card = await lenient_card_service.create_card_for_user(
        owner.id, card_details(expiration_date=TODAY - timedelta(days=1))
    )

    assert card.is_expired(TODAY)
    assert not cache.has(CacheConfig.EXPIRED_CARDS, CacheConfig.SHARED_KEY)


async def test_create_card_evicts_owner_entry(user_service, card_service, cache):
    owner = await user_service.create_user(user_details())
    before = await user_service.get_user_by_id(owner.id)
    assert before.cards == []

    await card_service.create_card_for_user(owner.id, card_details())
    after = await user_service.get_user_by_id(owner.id)

    assert (CacheConfig.USERS, str(owner.id)) in cache.evicted
    assert len(after.cards) == 1


async def test_delete_card_evicts_owner_and_expired_cache(user_service, card_service, card_repository, cache):
    owner = await user_service.create_user(user_details())
    card = await card_service.create_card_for_user(owner.id, card_details())
    await user_service.get_user_by_id(owner.id)
    await card_service.get_expired_cards()

    await card_service.delete_card(card.id)

    assert card.id not in card_repository.cards
    assert not cache.has(CacheConfig.USERS, owner.id)
    assert not cache.has(CacheConfig.EXPIRED_CARDS, CacheConfig.SHARED_KEY)


async def test_delete_missing_card_raises_not_found(card_service, card_repository):
    missing = uuid4()

    with pytest.raises(NotFoundError) as exc_info:
        await card_service.delete_card(missing)

    assert exc_info.value.message == f"Card with id {missing} not found."
    assert card_repository.writes == 0


async def test_get_card_by_id_and_number(user_service, card_service):
    owner = await user_service.create_user(user_details())
    card = await card_service.create_card_for_user(owner.id, card_details(number="4111"))

    assert (await card_service.get_card_by_id(card.id)).number == "4111"
    assert (await card_service.get_card_by_number("4111")).id == card.id
    assert await card_service.get_card_by_number("0000") is None
    with pytest.raises(NotFoundError):
        await card_service.get_card_by_id(uuid4())


async def test_cards_of_unknown_user_is_empty_list(card_service):
    assert await card_service.get_cards_by_user_id(uuid4()) == []


async def test_expired_cards_strictly_before_today(card_service, card_repository):
    owner_id = uuid4()
    yesterday = CardInfo(user_id=owner_id, number="1", holder="H", expiration_date=TODAY - timedelta(days=1))
    long_ago = CardInfo(user_id=owner_id, number="2", holder="H", expiration_date=date(2020, 1, 1))
    today = CardInfo(user_id=owner_id, number="3", holder="H", expiration_date=TODAY)
    tomorrow = CardInfo(user_id=owner_id, number="4", holder="H", expiration_date=TODAY + timedelta(days=1))
    for card in (yesterday, long_ago, today, tomorrow):
        await card_repository.save(card)

    result = await card_service.get_expired_cards()

    assert [c.id for c in result] == [long_ago.id, yesterday.id]


async def test_expired_cards_are_cached(card_service, card_repository):
    await card_service.get_expired_cards()
    await card_service.get_expired_cards()

    assert card_repository.calls["find_expired_cards"] == 1


async def test_unreadable_expired_card_cache_is_a_miss(card_service, card_repository, cache):
    await cache.put(CacheConfig.EXPIRED_CARDS, CacheConfig.SHARED_KEY, [{"number": "1"}])

    assert await card_service.get_expired_cards() == []
    assert card_repository.calls["find_expired_cards"] == 1
    assert cache.entries[(CacheConfig.EXPIRED_CARDS, CacheConfig.SHARED_KEY)] == []
