"""Inlays and everything attached to them through design and production."""

from glassact_data.domain.entities import (
    INTEGER,
    JSON,
    NUMBER,
    STRING,
    TIMESTAMP,
    MapType,
    ObjectType,
    canonical,
    enum,
    nullable,
    optional,
)

INLAY_TYPE = enum("catalog", "custom", name="InlayType")

MANUFACTURING_STEP = enum(
    "ordered",
    "materials-prep",
    "cutting",
    "fire-polish",
    "packaging",
    "shipped",
    "delivered",
    name="ManufacturingStep",
)

MILESTONE_EVENT_TYPE = enum("entered", "exited", "reverted", name="MilestoneEventType")

PROOF_STATUS = enum("pending", "approved", "declined", "superseded", name="ProofStatus")

BLOCKER_TYPE = enum("soft", "hard", name="BlockerType")

CHAT_MESSAGE_TYPE = enum(
    "text",
    "image",
    "proof_sent",
    "proof_approved",
    "proof_declined",
    "system",
    name="ChatMessageType",
)

InlayCatalogInfo = canonical(
    ObjectType.of(
        "InlayCatalogInfo",
        inlay_id=INTEGER,
        catalog_item_id=INTEGER,
        customization_notes=STRING,
    )
)

InlayCustomInfo = canonical(
    ObjectType.of(
        "InlayCustomInfo",
        inlay_id=INTEGER,
        description=STRING,
        requested_width=NUMBER,
        requested_height=NUMBER,
    )
)

Inlay = canonical(
    ObjectType.of(
        "Inlay",
        project_id=INTEGER,
        name=STRING,
        preview_url=STRING,
        approved_proof_id=optional(nullable(INTEGER)),
        manufacturing_step=optional(nullable(MANUFACTURING_STEP)),
    ).with_variants(
        "type",
        catalog={"catalog_info": InlayCatalogInfo},
        custom={"custom_info": InlayCustomInfo},
    )
)

InlayMilestone = canonical(
    ObjectType.of(
        "InlayMilestone",
        inlay_id=INTEGER,
        step=MANUFACTURING_STEP,
        event_type=MILESTONE_EVENT_TYPE,
        performed_by=INTEGER,
        event_time=TIMESTAMP,
    )
)

InlayProof = canonical(
    ObjectType.of(
        "InlayProof",
        inlay_id=INTEGER,
        version_number=INTEGER,
        design_asset_url=STRING,
        width=NUMBER,
        height=NUMBER,
        price_group_id=nullable(INTEGER),
        price_cents=nullable(INTEGER),
        scale_factor=NUMBER,
        color_overrides=MapType(JSON),
        status=PROOF_STATUS,
        approved_at=nullable(TIMESTAMP),
        approved_by=nullable(INTEGER),
        declined_at=nullable(TIMESTAMP),
        declined_by=nullable(INTEGER),
        decline_reason=nullable(STRING),
        sent_in_chat_id=INTEGER,
    )
)

InlayBlocker = canonical(
    ObjectType.of(
        "InlayBlocker",
        inlay_id=INTEGER,
        blocker_type=BLOCKER_TYPE,
        reason=STRING,
        step_blocked=STRING,
        created_by=nullable(INTEGER),
        resolved_at=nullable(TIMESTAMP),
        resolved_by=nullable(INTEGER),
        resolution_notes=nullable(STRING),
    )
)

InlayChat = canonical(
    ObjectType.of(
        "InlayChat",
        inlay_id=INTEGER,
        dealership_user_id=nullable(INTEGER),
        internal_user_id=nullable(INTEGER),
        message_type=CHAT_MESSAGE_TYPE,
        message=STRING,
        attachment_url=nullable(STRING),
    )
)
