"""Invoices and the price snapshots taken when an order is placed."""

from glassact_data.domain.entities import (
    INTEGER,
    NUMBER,
    STRING,
    TIMESTAMP,
    ObjectType,
    array_of,
    canonical,
    enum,
    nullable,
    optional,
)

INVOICE_STATUS = enum("draft", "sent", "paid", "void", name="InvoiceStatus")

InvoiceLineItem = canonical(
    ObjectType.of(
        "InvoiceLineItem",
        invoice_id=INTEGER,
        inlay_id=nullable(INTEGER),
        description=STRING,
        quantity=INTEGER,
        unit_price_cents=INTEGER,
        total_cents=INTEGER,
        sort_order=INTEGER,
    )
)

Invoice = canonical(
    ObjectType.of(
        "Invoice",
        project_id=INTEGER,
        invoice_number=STRING,
        subtotal_cents=INTEGER,
        tax_cents=INTEGER,
        total_cents=INTEGER,
        status=INVOICE_STATUS,
        sent_at=nullable(TIMESTAMP),
        sent_to_email=nullable(STRING),
        paid_at=nullable(TIMESTAMP),
        notes=nullable(STRING),
        line_items=optional(array_of(InvoiceLineItem)),
    )
)

OrderSnapshot = canonical(
    ObjectType.of(
        "OrderSnapshot",
        project_id=INTEGER,
        inlay_id=INTEGER,
        proof_id=INTEGER,
        price_group_id=INTEGER,
        price_cents=INTEGER,
        width=NUMBER,
        height=NUMBER,
    )
)
