"""Dealerships, their users, and internal staff."""

from glassact_data.domain.entities import (
    BOOLEAN,
    INTEGER,
    NUMBER,
    STRING,
    ObjectType,
    canonical,
    enum,
)
from glassact_data.domain.entities.permissions import DealershipUserRole, InternalUserRole

# Plain value object embedded in Dealership; never carries identity.
Address = ObjectType.of(
    "Address",
    street=STRING,
    street_ext=STRING,
    city=STRING,
    state=STRING,
    postal_code=STRING,
    country=STRING,
    latitude=NUMBER,
    longitude=NUMBER,
)

Dealership = canonical(
    ObjectType.of(
        "Dealership",
        name=STRING,
        address=Address,
    )
)

DEALERSHIP_USER_ROLE = enum(*(r.value for r in DealershipUserRole), name="DealershipUserRole")
INTERNAL_USER_ROLE = enum(*(r.value for r in InternalUserRole), name="InternalUserRole")

DealershipUser = canonical(
    ObjectType.of(
        "DealershipUser",
        dealership_id=INTEGER,
        name=STRING,
        email=STRING,
        avatar=STRING,
        role=DEALERSHIP_USER_ROLE,
        is_active=BOOLEAN,
    )
)

DealershipAccount = canonical(
    ObjectType.of(
        "DealershipAccount",
        dealership_user_id=INTEGER,
        type=STRING,
        provider=STRING,
        provider_account_id=STRING,
    )
)

InternalUser = canonical(
    ObjectType.of(
        "InternalUser",
        name=STRING,
        email=STRING,
        avatar=STRING,
        role=INTERNAL_USER_ROLE,
        is_active=BOOLEAN,
    )
)

InternalAccount = canonical(
    ObjectType.of(
        "InternalAccount",
        internal_user_id=INTEGER,
        type=STRING,
        provider=STRING,
        provider_account_id=STRING,
    )
)
