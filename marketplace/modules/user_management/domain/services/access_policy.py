# 📄 File: marketplace/modules/user_management/domain/services/access_policy.py
# 🧭 Purpose (Layman Explanation):
# The rule book that says who may do what: people can manage their own account and cards,
# administrators can look across all users and cards, and anyone may sign up.
# 🧪 Purpose (Technical Summary):
# Pure access-control policy. Every protected operation has a rule (public, self, admin,
# owner-or-admin); evaluate() turns (operation, principal, resource owner id) into allow/deny
# without touching transport or storage.
# 🔗 Dependencies:
# marketplace.shared.core.security (Principal, Role), enum, uuid
# 🔄 Connected Modules / Calls From:
# application/access_guard.py, presentation routers (through the guard), tests

from enum import Enum
from typing import Dict, Optional
from uuid import UUID

from marketplace.shared.core.security import Principal


class Rule(str, Enum):
    PUBLIC = "public"
    SELF = "self"
    ADMIN = "admin"
    OWNER_OR_ADMIN = "owner_or_admin"


class Operation(str, Enum):
    """Every operation exposed by the user and card endpoints."""

    CREATE_USER = "create_user"
    REGISTER_USER = "register_user"
    UPDATE_USER = "update_user"
    DELETE_USER = "delete_user"
    GET_USER = "get_user"
    GET_USER_BY_EMAIL = "get_user_by_email"
    LIST_USERS = "list_users"
    SEARCH_USERS = "search_users"
    LIST_BIRTHDAYS = "list_birthdays"
    CREATE_CARD = "create_card"
    LIST_USER_CARDS = "list_user_cards"
    GET_CARD = "get_card"
    DELETE_CARD = "delete_card"
    GET_CARD_BY_NUMBER = "get_card_by_number"
    LIST_EXPIRED_CARDS = "list_expired_cards"


RULES: Dict[Operation, Rule] = {
    Operation.CREATE_USER: Rule.PUBLIC,
    Operation.REGISTER_USER: Rule.PUBLIC,
    Operation.UPDATE_USER: Rule.SELF,
    Operation.DELETE_USER: Rule.SELF,
    Operation.GET_USER: Rule.SELF,
    Operation.LIST_USER_CARDS: Rule.SELF,
    Operation.CREATE_CARD: Rule.SELF,
    Operation.GET_USER_BY_EMAIL: Rule.ADMIN,
    Operation.LIST_USERS: Rule.ADMIN,
    Operation.SEARCH_USERS: Rule.ADMIN,
    Operation.LIST_BIRTHDAYS: Rule.ADMIN,
    Operation.GET_CARD_BY_NUMBER: Rule.ADMIN,
    Operation.LIST_EXPIRED_CARDS: Rule.ADMIN,
    Operation.GET_CARD: Rule.OWNER_OR_ADMIN,
    Operation.DELETE_CARD: Rule.OWNER_OR_ADMIN,
}


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"

    @property
    def allowed(self) -> bool:
        return self is Decision.ALLOW


def rule_for(operation: Operation) -> Rule:
    return RULES[operation]


def evaluate(
    operation: Operation,
    principal: Optional[Principal],
    owner_id: Optional[UUID] = None
) -> Decision:
    """
    Decide whether ``principal`` may run ``operation``.

    Args:
        operation: Operation being attempted
        principal: Authenticated caller, or None for anonymous requests
        owner_id: Id of the user owning the target resource. For self rules this
            is the user id from the path; for card rules it is the card's owner,
            or None when the card does not exist.

    Returns:
        Decision.ALLOW or Decision.DENY
    """
    rule = RULES[operation]

    if rule is Rule.PUBLIC:
        return Decision.ALLOW

    if principal is None:
        return Decision.DENY

    if rule is Rule.ADMIN:
        return Decision.ALLOW if principal.is_admin else Decision.DENY

    is_owner = owner_id is not None and principal.user_id == owner_id

    if rule is Rule.SELF:
        return Decision.ALLOW if is_owner else Decision.DENY

    # OWNER_OR_ADMIN
    return Decision.ALLOW if (principal.is_admin or is_owner) else Decision.DENY
