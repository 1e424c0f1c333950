"""Type inference and nullable unions for JSON Schemas inside a document."""

import copy
from typing import Any, Dict, List, Optional, Set

from ..walker import SchemaObject, is_ref

COMPONENT_SCHEMAS_PREFIX = '#/components/schemas/'
COMPOSITION_KEYWORDS = ('allOf', 'anyOf', 'oneOf')


def is_null_marker(member: Any) -> bool:
    """Return True for the ``{type: 'null'}`` branch of a nullable union."""
    return isinstance(member, dict) and list(member.keys()) == ['type'] and member['type'] == 'null'


class SchemaResolver:
    """
    Resolves local schema references and infers schema types.

    Only ``#/components/schemas/<name>`` references of the owning document
    are resolved. External references resolve to ``None``.
    """

    def __init__(self, document: Dict[str, Any]):
        self.document = document

    def find_schema(self, ref: str) -> Optional[SchemaObject]:
        """
        Find a schema object in ``components.schemas``.

        Args:
            ref: The ``$ref`` value

        Returns:
            The referenced schema, or None if it is not a local component schema.
        """
        if not isinstance(ref, str) or not ref.startswith(COMPONENT_SCHEMAS_PREFIX):
            return None
        name = ref[len(COMPONENT_SCHEMAS_PREFIX):]
        if not name or '/' in name:
            return None
        name = name.replace('~1', '/').replace('~0', '~')

        components = self.document.get('components')
        schemas = components.get('schemas') if isinstance(components, dict) else None
        if not isinstance(schemas, dict):
            return None
        schema = schemas.get(name)
        return schema if isinstance(schema, dict) else None

    def infer_type(self, schema: SchemaObject, _resolving: Optional[Set[str]] = None) -> Optional[str]:
        """
        Deduce the type of a schema, walking through compositions and references.

        Returns the schema's own ``type`` when present. Otherwise the members
        of its first ``allOf``/``anyOf``/``oneOf`` are inferred and the type is
        returned only if they agree. Otherwise a reference is resolved and
        inferred. A reference cycle yields None.
        """
        if not isinstance(schema, dict):
            return None
        if 'type' in schema:
            return schema['type']

        for keyword in COMPOSITION_KEYWORDS:
            if keyword in schema:
                variants = schema[keyword]
                if not isinstance(variants, list):
                    return None
                types: List[Any] = []
                for variant in variants:
                    variant_type = self.infer_type(variant, _resolving)
                    if variant_type is not None and variant_type not in types:
                        types.append(variant_type)
                return types[0] if len(types) == 1 else None

        if is_ref(schema):
            ref = schema['$ref']
            resolving = _resolving or set()
            if ref in resolving:
                return None
            resolved = self.find_schema(ref)
            if resolved is not None:
                return self.infer_type(resolved, resolving | {ref})
        return None

    def merge_nullable_one_of(self, schema: SchemaObject) -> bool:
        """
        Merge a ``oneOf`` with a ``{type: 'null'}`` branch into ``nullable: true``.

        An array union with a single other branch is inlined, since an
        OpenAPI 3.0 ``type: array`` needs a sibling ``items``. Any other union
        with one inferable type becomes ``allOf: [{nullable, type}, {oneOf}]``.
        Nothing changes when the type cannot be inferred.

        Returns:
            True if the schema was rewritten.
        """
        one_of = schema.get('oneOf')
        if not isinstance(one_of, list):
            return False
        non_null = [variant for variant in one_of if not is_null_marker(variant)]
        if len(non_null) == len(one_of):
            return False

        schema_type = self.infer_type({'oneOf': non_null})
        if schema_type == 'array' and len(non_null) == 1:
            array_schema = non_null[0]
            if is_ref(array_schema):
                array_schema = self.find_schema(array_schema['$ref'])
            if array_schema is None:
                return False
            del schema['oneOf']
            for key, value in array_schema.items():
                schema[key] = copy.deepcopy(value)
            schema['nullable'] = True
            return True

        if schema_type:
            del schema['oneOf']
            schema['allOf'] = [{'nullable': True, 'type': schema_type}, {'oneOf': non_null}]
            return True
        return False
