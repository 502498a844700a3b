from .shapes import (
    AllowedActionsResponse,
    EntitySummarySchema,
    FieldDescriptionSchema,
    PermissionCheckRequest,
    PermissionCheckResponse,
    ShapeSchema,
    ValidationErrorSchema,
    ValidationResultSchema,
)

__all__ = [
    "AllowedActionsResponse",
    "EntitySummarySchema",
    "FieldDescriptionSchema",
    "PermissionCheckRequest",
    "PermissionCheckResponse",
    "ShapeSchema",
    "ValidationErrorSchema",
    "ValidationResultSchema",
]
