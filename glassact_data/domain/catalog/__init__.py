"""Built-in canonical entity catalog."""

from .billing import Invoice, InvoiceLineItem, OrderSnapshot
from .catalog_items import CatalogItem, CatalogItemImage, CatalogItemTag, PriceGroup
from .inlays import (
    Inlay,
    InlayBlocker,
    InlayCatalogInfo,
    InlayChat,
    InlayCustomInfo,
    InlayMilestone,
    InlayProof,
)
from .notifications import Notification
from .projects import (
    PROJECT_WITH_INLAYS_REQUEST_OMIT,
    Project,
    ProjectChat,
    ProjectWithInlays,
)
from .users import (
    Address,
    Dealership,
    DealershipAccount,
    DealershipUser,
    InternalAccount,
    InternalUser,
)

BUILTIN_ENTITIES = (
    CatalogItem,
    CatalogItemTag,
    CatalogItemImage,
    PriceGroup,
    Dealership,
    DealershipUser,
    DealershipAccount,
    InternalUser,
    InternalAccount,
    Project,
    ProjectWithInlays,
    ProjectChat,
    Inlay,
    InlayCatalogInfo,
    InlayCustomInfo,
    InlayMilestone,
    InlayProof,
    InlayBlocker,
    InlayChat,
    Invoice,
    InvoiceLineItem,
    OrderSnapshot,
    Notification,
)

__all__ = [
    "BUILTIN_ENTITIES",
    "PROJECT_WITH_INLAYS_REQUEST_OMIT",
    "Address",
    "CatalogItem",
    "CatalogItemImage",
    "CatalogItemTag",
    "Dealership",
    "DealershipAccount",
    "DealershipUser",
    "Inlay",
    "InlayBlocker",
    "InlayCatalogInfo",
    "InlayChat",
    "InlayCustomInfo",
    "InlayMilestone",
    "InlayProof",
    "InternalAccount",
    "InternalUser",
    "Invoice",
    "InvoiceLineItem",
    "Notification",
    "OrderSnapshot",
    "PriceGroup",
    "Project",
    "ProjectChat",
    "ProjectWithInlays",
]
