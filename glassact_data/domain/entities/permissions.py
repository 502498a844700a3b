"""Permission/role predicate table — pure, stateless action gating."""

from collections.abc import Mapping
from enum import Enum
from typing import Any


class PermissionAction(str, Enum):
    """Actions the UI and API gate on."""

    # Dealership actions
    CREATE_PROJECT = "create_project"
    APPROVE_PROOF = "approve_proof"
    PLACE_ORDER = "place_order"
    PAY_INVOICE = "pay_invoice"
    MANAGE_DEALERSHIP_USERS = "manage_dealership_users"
    VIEW_PROJECTS = "view_projects"
    VIEW_INVOICES = "view_invoices"

    # Internal staff actions
    CREATE_PROOF = "create_proof"
    MANAGE_KANBAN = "manage_kanban"
    CREATE_BLOCKER = "create_blocker"
    CREATE_INVOICE = "create_invoice"
    MANAGE_INTERNAL_USERS = "manage_internal_users"
    VIEW_ALL = "view_all"


class DealershipUserRole(str, Enum):
    VIEWER = "viewer"
    SUBMITTER = "submitter"
    APPROVER = "approver"
    ADMIN = "admin"


class InternalUserRole(str, Enum):
    DESIGNER = "designer"
    PRODUCTION = "production"
    BILLING = "billing"
    ADMIN = "admin"


_D = DealershipUserRole
_I = InternalUserRole

DEALERSHIP_POLICY: dict[PermissionAction, frozenset[DealershipUserRole]] = {
    PermissionAction.VIEW_PROJECTS: frozenset({_D.VIEWER, _D.SUBMITTER, _D.APPROVER, _D.ADMIN}),
    PermissionAction.CREATE_PROJECT: frozenset({_D.SUBMITTER, _D.APPROVER, _D.ADMIN}),
    PermissionAction.APPROVE_PROOF: frozenset({_D.APPROVER, _D.ADMIN}),
    PermissionAction.PLACE_ORDER: frozenset({_D.APPROVER, _D.ADMIN}),
    PermissionAction.VIEW_INVOICES: frozenset({_D.APPROVER, _D.ADMIN}),
    PermissionAction.PAY_INVOICE: frozenset({_D.ADMIN}),
    PermissionAction.MANAGE_DEALERSHIP_USERS: frozenset({_D.ADMIN}),
}

INTERNAL_POLICY: dict[PermissionAction, frozenset[InternalUserRole]] = {
    PermissionAction.CREATE_PROOF: frozenset({_I.DESIGNER, _I.ADMIN}),
    PermissionAction.MANAGE_KANBAN: frozenset({_I.PRODUCTION, _I.ADMIN}),
    PermissionAction.CREATE_BLOCKER: frozenset({_I.PRODUCTION, _I.ADMIN}),
    PermissionAction.CREATE_INVOICE: frozenset({_I.BILLING, _I.ADMIN}),
    PermissionAction.MANAGE_INTERNAL_USERS: frozenset({_I.ADMIN}),
    PermissionAction.VIEW_ALL: frozenset({_I.ADMIN}),
}


def _attr(actor: Any, name: str) -> Any:
    if isinstance(actor, Mapping):
        return actor.get(name)
    return getattr(actor, name, None)


def _has(actor: Any, name: str) -> bool:
    if isinstance(actor, Mapping):
        return name in actor
    return hasattr(actor, name)


def is_dealership_user(actor: Any) -> bool:
    """A user is dealership-affiliated when it carries a ``dealership_id``."""
    return actor is not None and _has(actor, "dealership_id")


def is_internal_user(actor: Any) -> bool:
    return actor is not None and not _has(actor, "dealership_id")


def _parse(enum_cls, raw: Any):
    try:
        return enum_cls(raw)
    except ValueError:
        return None


def can(actor: Any, action: str | PermissionAction) -> bool:
    """Return True if ``actor`` may perform ``action``.

    ``actor`` may be a mapping (a GET-shaped user payload) or any object with
    the same attributes. Fails closed: no actor, an unknown action, an unknown
    role, an inactive user, or an action belonging to the other user kind all
    yield False.
    """
    if actor is None:
        return False
    parsed_action = _parse(PermissionAction, action)
    if parsed_action is None:
        return False
    if _attr(actor, "is_active") is False:
        return False

    if is_dealership_user(actor):
        role = _parse(DealershipUserRole, _attr(actor, "role"))
        allowed = DEALERSHIP_POLICY.get(parsed_action, frozenset())
    else:
        role = _parse(InternalUserRole, _attr(actor, "role"))
        allowed = INTERNAL_POLICY.get(parsed_action, frozenset())

    return role is not None and role in allowed


def allowed_actions(actor: Any) -> list[PermissionAction]:
    """List every action ``actor`` may perform, in declaration order."""
    return [action for action in PermissionAction if can(actor, action)]
