"""Tree walking primitives for OpenAPI documents."""

from .walker import (
    JsonNode,
    RefObject,
    SchemaObject,
    RefVisitor,
    SchemaVisitor,
    is_ref,
    walk_object,
    visit_ref_objects,
    visit_schema_objects,
    walk_nested_schemas,
)

__all__ = [
    "JsonNode",
    "RefObject",
    "SchemaObject",
    "RefVisitor",
    "SchemaVisitor",
    "is_ref",
    "walk_object",
    "visit_ref_objects",
    "visit_schema_objects",
    "walk_nested_schemas",
]
