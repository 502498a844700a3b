"""Permissions API controller — evaluates the role predicate table."""

from fastapi import APIRouter

from glassact_data.application.schemas.shapes import (
    AllowedActionsResponse,
    PermissionCheckRequest,
    PermissionCheckResponse,
)
from glassact_data.domain.entities import (
    PermissionAction,
    allowed_actions,
    can,
    is_dealership_user,
    is_internal_user,
)

router = APIRouter(prefix="/permissions", tags=["permissions"])


def _actor_kind(actor: dict | None) -> str | None:
    if is_dealership_user(actor):
        return "dealership"
    if is_internal_user(actor):
        return "internal"
    return None


@router.post("/check", response_model=PermissionCheckResponse)
async def check_permission(body: PermissionCheckRequest) -> PermissionCheckResponse:
    """Unknown actions and roles are answered with ``allowed: false``, not an error."""
    return PermissionCheckResponse(
        action=body.action,
        allowed=can(body.actor, body.action),
        actor_kind=_actor_kind(body.actor),
    )


@router.get("/actions", response_model=AllowedActionsResponse)
async def list_actions() -> AllowedActionsResponse:
    return AllowedActionsResponse(actions=[a.value for a in PermissionAction])


@router.post("/allowed", response_model=AllowedActionsResponse)
async def list_allowed_actions(body: dict) -> AllowedActionsResponse:
    """Every action the posted actor may perform."""
    return AllowedActionsResponse(actions=[a.value for a in allowed_actions(body)])
