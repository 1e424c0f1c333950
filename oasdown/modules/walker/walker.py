"""Generic walkers over JSON-like OpenAPI documents.

A document is a tree of dicts, lists and scalars as produced by a YAML or
JSON loader. The functions here locate the two structural elements the
converter cares about:

* reference objects, i.e. dicts carrying a ``$ref`` key, anywhere in the tree
* JSON Schema entry points, i.e. the value of a ``schema`` key and the members
  of a ``schemas`` mapping

Schema visitors do their own recursion through :func:`walk_nested_schemas`,
which only follows JSON Schema structural keywords. Data keywords such as
``example`` or ``default`` are never mistaken for nested schemas.
"""

from typing import Any, Callable, Dict, List, Set, Union

JsonNode = Any
RefObject = Dict[str, Any]
SchemaObject = Dict[str, Any]

Transform = Callable[[Dict[str, Any]], JsonNode]
RefVisitor = Callable[[RefObject], JsonNode]
SchemaVisitor = Callable[[SchemaObject], SchemaObject]

# keywords whose value is a single schema
SCHEMA_KEYWORDS = (
    'additionalProperties',
    'unevaluatedProperties',
    'unevaluatedItems',
    'propertyNames',
    'contains',
    'not',
    'if',
    'then',
    'else',
    'contentSchema',
    'additionalItems',
)

# keywords whose value is a list of schemas
SCHEMA_LIST_KEYWORDS = ('allOf', 'anyOf', 'oneOf', 'prefixItems')

# keywords whose value maps a name to a schema
SCHEMA_MAP_KEYWORDS = ('properties', 'patternProperties', '$defs', 'definitions', 'dependentSchemas')


def is_ref(node: JsonNode) -> bool:
    """Return True if ``node`` is a reference object."""
    return isinstance(node, dict) and '$ref' in node


def walk_object(node: JsonNode, transform: Transform) -> JsonNode:
    """
    Walk ``node`` depth first and apply ``transform`` to every dict.

    Children are walked before their parent, and the value returned by
    ``transform`` replaces the dict in its parent.

    Args:
        node: Any JSON-like value
        transform: Called with each dict; returns the dict or a replacement

    Returns:
        The walked node, or the replacement returned for it.
    """
    if isinstance(node, dict):
        for key, value in node.items():
            if isinstance(value, (dict, list)):
                node[key] = walk_object(value, transform)
        return transform(node)
    if isinstance(node, list):
        for index, item in enumerate(node):
            if isinstance(item, (dict, list)):
                node[index] = walk_object(item, transform)
    return node


def visit_ref_objects(root: JsonNode, ref_visitor: RefVisitor) -> JsonNode:
    """Replace every reference object under ``root`` with ``ref_visitor(node)``."""

    def transform(node: Dict[str, Any]) -> JsonNode:
        if is_ref(node):
            return ref_visitor(node)
        return node

    return walk_object(root, transform)


def visit_schema_objects(root: JsonNode, schema_visitor: SchemaVisitor) -> JsonNode:
    """
    Apply ``schema_visitor`` to every JSON Schema entry point under ``root``.

    Entry points are the value of any ``schema`` key and each member of any
    ``schemas`` mapping (such as ``components.schemas``). The visitor is
    responsible for recursing into nested schemas. Name-to-schema maps
    (``properties``, ``components.schemas`` and the like) are never entry
    points themselves, so a property or component named ``schema`` or
    ``schemas`` is only visited once.
    """
    name_maps = _collect_name_maps(root)

    def transform(node: Dict[str, Any]) -> JsonNode:
        if id(node) in name_maps:
            return node
        schema = node.get('schema')
        if isinstance(schema, dict):
            node['schema'] = schema_visitor(schema)
        schemas = node.get('schemas')
        if isinstance(schemas, dict):
            for name, member in schemas.items():
                if isinstance(member, dict):
                    schemas[name] = schema_visitor(member)
        return node

    return walk_object(root, transform)


def walk_nested_schemas(schema: SchemaObject, schema_visitor: SchemaVisitor) -> SchemaObject:
    """
    Apply ``schema_visitor`` to each direct sub-schema of ``schema``.

    Only JSON Schema structural keywords are followed. The results are
    stored back in place and ``schema`` is returned.
    """
    for key in SCHEMA_KEYWORDS:
        sub_schema = schema.get(key)
        if isinstance(sub_schema, dict):
            schema[key] = schema_visitor(sub_schema)

    items = schema.get('items')
    if isinstance(items, dict):
        schema['items'] = schema_visitor(items)
    elif isinstance(items, list):
        _visit_schema_list(items, schema_visitor)

    for key in SCHEMA_LIST_KEYWORDS:
        members = schema.get(key)
        if isinstance(members, list):
            _visit_schema_list(members, schema_visitor)

    for key in SCHEMA_MAP_KEYWORDS:
        named = schema.get(key)
        if isinstance(named, dict):
            for name, sub_schema in named.items():
                if isinstance(sub_schema, dict):
                    named[name] = schema_visitor(sub_schema)

    return schema


def _visit_schema_list(members: List[Union[SchemaObject, Any]], schema_visitor: SchemaVisitor) -> None:
    for index, member in enumerate(members):
        if isinstance(member, dict):
            members[index] = schema_visitor(member)


def _collect_name_maps(root: JsonNode) -> Set[int]:
    name_maps: Set[int] = set()

    def collect(node: Dict[str, Any]) -> JsonNode:
        for key in SCHEMA_MAP_KEYWORDS + ('schemas',):
            named = node.get(key)
            if isinstance(named, dict):
                name_maps.add(id(named))
        return node

    walk_object(root, collect)
    return name_maps
