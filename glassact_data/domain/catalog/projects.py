"""Projects — a dealership's order of one or more inlays."""

from dataclasses import replace

from glassact_data.domain.entities import (
    INTEGER,
    STRING,
    TIMESTAMP,
    Field,
    ObjectType,
    array_of,
    canonical,
    enum,
    nullable,
)
from glassact_data.domain.catalog.inlays import Inlay

PROJECT_STATUS = enum(
    "draft",
    "designing",
    "pending-approval",
    "approved",
    "ordered",
    "in-production",
    "shipped",
    "delivered",
    "invoiced",
    "completed",
    "cancelled",
    name="ProjectStatus",
)

PROJECT_CHAT_MESSAGE_TYPE = enum("text", "image", "system", name="ProjectChatMessageType")

Project = canonical(
    ObjectType.of(
        "Project",
        dealership_id=INTEGER,
        name=STRING,
        status=PROJECT_STATUS,
        ordered_at=nullable(TIMESTAMP),
        ordered_by=nullable(INTEGER),
    )
)

# Read shape of ``GET /project?expand=inlays`` and body of ``POST /project/with-inlays``.
ProjectWithInlays = canonical(
    replace(
        Project,
        name="ProjectWithInlays",
        fields=Project.intrinsic_fields + (Field("inlays", array_of(Inlay)),),
    )
)

# Back-references the server fills in when creating a project with its inlays.
PROJECT_WITH_INLAYS_REQUEST_OMIT = (
    "inlays.project_id",
    "inlays.catalog_info.inlay_id",
    "inlays.custom_info.inlay_id",
)

ProjectChat = canonical(
    ObjectType.of(
        "ProjectChat",
        project_id=INTEGER,
        dealership_user_id=nullable(INTEGER),
        internal_user_id=nullable(INTEGER),
        message_type=PROJECT_CHAT_MESSAGE_TYPE,
        message=STRING,
        attachment_url=nullable(STRING),
    )
)
