from glassact_data.domain.entities import (
    INTEGER,
    STRING,
    TIMESTAMP,
    ObjectType,
    canonical,
    enum,
    nullable,
)

NOTIFICATION_EVENT_TYPE = enum(
    "proof_ready",
    "proof_approved",
    "proof_declined",
    "order_placed",
    "inlay_step_changed",
    "inlay_blocked",
    "inlay_unblocked",
    "project_shipped",
    "project_delivered",
    "invoice_sent",
    "payment_received",
    "chat_message",
    name="NotificationEventType",
)

Notification = canonical(
    ObjectType.of(
        "Notification",
        dealership_user_id=nullable(INTEGER),
        internal_user_id=nullable(INTEGER),
        event_type=NOTIFICATION_EVENT_TYPE,
        title=STRING,
        body=STRING,
        project_id=nullable(INTEGER),
        inlay_id=nullable(INTEGER),
        read_at=nullable(TIMESTAMP),
        email_sent_at=nullable(TIMESTAMP),
    )
)
