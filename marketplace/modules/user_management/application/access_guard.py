# 📄 File: marketplace/modules/user_management/application/access_guard.py
# 🧭 Purpose (Layman Explanation):
# The doorman in front of every user and card operation: it checks the rule book before
# any work is done and turns people away who are not allowed in.
# 🧪 Purpose (Technical Summary):
# Applies the pure access policy before a service call. Resolves card ownership by loading
# the card (a missing card is treated as not owned, so callers never learn whether it exists)
# and raises AuthenticationError for anonymous callers or AuthorizationError on deny.
# 🔗 Dependencies:
# access_policy (evaluate, Operation), CardRepository, shared exceptions, Principal
# 🔄 Connected Modules / Calls From:
# presentation/api/v1 routers via presentation/dependencies.py

import logging
from typing import Optional
from uuid import UUID

from marketplace.shared.core.exceptions import AuthenticationError, AuthorizationError
from marketplace.shared.core.security import Principal
from marketplace.modules.user_management.domain.repositories.card_repository import CardRepository
from marketplace.modules.user_management.domain.services.access_policy import (
    Operation,
    Rule,
    evaluate,
    rule_for,
)

logger = logging.getLogger(__name__)


class AccessGuard:
    """Runs the access policy for an operation and raises on deny."""

    def __init__(self, card_repository: CardRepository):
        self.card_repository = card_repository

    def check(
        self,
        operation: Operation,
        principal: Optional[Principal],
        owner_id: Optional[UUID] = None
    ) -> None:
        """
        Enforce the rule of ``operation``.

        Raises:
            AuthenticationError: If the operation is protected and the caller is anonymous
            AuthorizationError: If the policy denies the caller
        """
        if principal is None and rule_for(operation) is not Rule.PUBLIC:
            raise AuthenticationError()

        decision = evaluate(operation, principal, owner_id)
        if not decision.allowed:
            logger.warning(f"Access denied: {operation.value} for user {principal.user_id}")
            raise AuthorizationError(operation=operation.value, user_id=str(principal.user_id))

    async def check_card(
        self,
        operation: Operation,
        principal: Optional[Principal],
        card_id: UUID
    ) -> None:
        """Enforce an owner-or-admin rule on a card, loading the card only when needed."""
        if principal is None:
            raise AuthenticationError()

        owner_id = None
        if not principal.is_admin:
            card = await self.card_repository.find_by_id(card_id)
            owner_id = card.user_id if card is not None else None

        self.check(operation, principal, owner_id)
