from .entity_compiler import EntityCompiler
from .model_builder import ModelBuilder, build_model, json_schema
from .projection import Method, derive_all, extend, omit_paths, project, to_get, to_patch, to_post, to_put
from .shape_service import FieldDescription, ShapeService, ValidationReport

__all__ = [
    "EntityCompiler",
    "ModelBuilder",
    "build_model",
    "json_schema",
    "Method",
    "derive_all",
    "extend",
    "omit_paths",
    "project",
    "to_get",
    "to_patch",
    "to_post",
    "to_put",
    "FieldDescription",
    "ShapeService",
    "ValidationReport",
]
