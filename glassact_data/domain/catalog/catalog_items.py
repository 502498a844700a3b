"""Catalog entities — browsable inlay designs and their pricing groups."""

from glassact_data.domain.entities import (
    BOOLEAN,
    INTEGER,
    NUMBER,
    STRING,
    ObjectType,
    canonical,
    nullable,
)

CatalogItem = canonical(
    ObjectType.of(
        "CatalogItem",
        catalog_code=STRING,
        name=STRING,
        description=nullable(STRING),
        category=STRING,
        default_width=NUMBER,
        default_height=NUMBER,
        min_width=NUMBER,
        min_height=NUMBER,
        default_price_group_id=INTEGER,
        svg_url=STRING,
        is_active=BOOLEAN,
    )
)

CatalogItemTag = canonical(
    ObjectType.of(
        "CatalogItemTag",
        catalog_item_id=INTEGER,
        tag=STRING,
    )
)

CatalogItemImage = canonical(
    ObjectType.of(
        "CatalogItemImage",
        catalog_item_id=INTEGER,
        image_url=STRING,
    )
)

PriceGroup = canonical(
    ObjectType.of(
        "PriceGroup",
        name=STRING,
        base_price_cents=INTEGER,
        description=nullable(STRING),
        is_active=BOOLEAN,
    )
)
