"""Shapes API controller — inspect canonical entities and their derived wire shapes."""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from glassact_data.application.schemas.shapes import (
    EntitySummarySchema,
    FieldDescriptionSchema,
    ShapeSchema,
    ValidationErrorSchema,
    ValidationResultSchema,
)
from glassact_data.application.services import Method, ShapeService
from glassact_data.domain.exceptions import EntityNotFoundError, ProjectionAmbiguityError
from glassact_data.infrastructure.dependencies import get_shape_service

router = APIRouter(prefix="/entities", tags=["shapes"])


# ── Helpers ──────────────────────────────────────────────────────────

def _parse_method(raw: str) -> Method:
    try:
        return Method(raw.upper())
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown method '{raw}'; expected one of get, post, patch, put",
        )


def _resolve(service: ShapeService, name: str, method: Method) -> None:
    """Fail fast with 404/422 before any model work happens."""
    try:
        service.derive(name, method)
    except EntityNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except ProjectionAmbiguityError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            detail=str(exc),
        )


# ── Endpoints ────────────────────────────────────────────────────────

@router.get("", response_model=list[EntitySummarySchema])
async def list_entities(
    service: ShapeService = Depends(get_shape_service),
) -> list[EntitySummarySchema]:
    """List every canonical entity known to the registry."""
    return [
        EntitySummarySchema(
            name=e.name,
            description=e.description,
            field_count=len(e.intrinsic_fields),
            has_variants=bool(e.variants),
            discriminator=e.discriminator,
        )
        for e in service.list_entities()
    ]


@router.get("/{name}/shapes/{method}", response_model=ShapeSchema)
async def get_shape(
    name: str,
    method: str,
    service: ShapeService = Depends(get_shape_service),
) -> ShapeSchema:
    """Field table and JSON Schema of ``name``'s derived shape for ``method``."""
    parsed = _parse_method(method)
    _resolve(service, name, parsed)
    return ShapeSchema(
        entity=name,
        method=parsed.value,
        fields=[FieldDescriptionSchema.model_validate(row) for row in service.describe(name, parsed)],
        json_schema=service.json_schema(name, parsed),
    )


@router.post("/{name}/shapes/{method}/validate", response_model=ValidationResultSchema)
async def validate_payload(
    name: str,
    method: str,
    payload: Any = Body(...),
    service: ShapeService = Depends(get_shape_service),
) -> ValidationResultSchema:
    """Validate a JSON body against the derived shape; bad payloads are not HTTP errors."""
    parsed = _parse_method(method)
    _resolve(service, name, parsed)
    report = service.validate(name, parsed, payload)
    return ValidationResultSchema(
        entity=name,
        method=parsed.value,
        valid=report.valid,
        errors=[ValidationErrorSchema(**err) for err in report.errors],
    )
