"""Down-convert an OpenAPI 3.1 document to OpenAPI 3.0."""

import copy
import json
from typing import Any, Dict, List, Optional

from ..logging import BaseLogger, PlainLogger
from ..walker import (
    JsonNode,
    RefObject,
    SchemaObject,
    SchemaVisitor,
    is_ref,
    visit_ref_objects,
    visit_schema_objects,
    walk_nested_schemas,
)
from .errors import ConversionError
from .options import ConverterOptions
from .schema_types import SchemaResolver

OPENAPI_30_VERSION = '3.0.3'


class Converter:
    """
    Converts one OpenAPI 3.1 document to OpenAPI 3.0.

    The input document is deep-copied on construction and never modified.
    :meth:`convert` runs every pass in :attr:`PASSES` order over the copy.
    Warnings and errors are accumulated across all passes; if any error was
    recorded, :class:`ConversionError` is raised once all passes have run.
    """

    HTTP_METHODS = ('delete', 'get', 'head', 'options', 'patch', 'post', 'put', 'trace')

    UNSUPPORTED_SCHEMA_KEYWORDS = (
        '$id',
        '$schema',
        'unevaluatedProperties',
        'contentMediaType',
        'patternProperties',
        'propertyNames',
    )

    PASSES = (
        'set_openapi_version',
        'remove_license_identifier',
        'convert_schema_ref',
        'simplify_non_schema_ref',
        'convert_security_schemes',
        'convert_json_schema_examples',
        'convert_json_schema_content_encoding',
        'convert_json_schema_content_media_type',
        'convert_const_to_enum',
        'convert_nullable_type_array',
        'convert_nullable_one_of',
        'remove_webhooks_object',
        'remove_unsupported_schema_keywords',
        'process_schema_comments',
    )

    def __init__(
        self,
        document: Dict[str, Any],
        options: Optional[ConverterOptions] = None,
        logger: Optional[BaseLogger] = None
    ):
        """
        Initialize the converter.

        Args:
            document: The OpenAPI 3.1 document; it is copied, not modified
            options: Conversion options
            logger: Logger instance
        """
        self.openapi30: Dict[str, Any] = copy.deepcopy(document)
        self.options = options or ConverterOptions()
        self.logger = logger or PlainLogger()
        self.resolver = SchemaResolver(self.openapi30)
        self.warnings: List[str] = []
        self.errors: List[str] = []

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @staticmethod
    def _warning_text(message: str) -> str:
        if not message.startswith('Warning'):
            message = f"Warning: {message}"
        return message

    def warn(self, message: str):
        """Record a warning and always write it out."""
        message = self._warning_text(message)
        self.warnings.append(message)
        self.logger.log_warning(message)

    def log(self, message: str):
        """Record a change; it is only written out when verbose is set."""
        if self.options.verbose:
            self.warn(message)
        else:
            self.warnings.append(self._warning_text(message))

    def error(self, message: str):
        """Record an error; the conversion fails once all passes have run."""
        if not message.startswith('Error'):
            message = f"Error: {message}"
        self.errors.append(message)
        self.logger.log_error(message)

    @staticmethod
    def _json(node: JsonNode) -> str:
        return json.dumps(node, indent=2, default=str)

    def convert(self) -> Dict[str, Any]:
        """
        Convert the document to OpenAPI 3.0.

        Returns:
            The converted document. The input document is not modified.

        Raises:
            ConversionError: If any pass recorded an error
        """
        if self.options.verbose:
            self.logger.log_info("Converting from OpenAPI 3.1 to 3.0")
        for pass_number, name in enumerate(self.PASSES, start=1):
            self.logger.log_pass(pass_number, name)
            getattr(self, name)()

        self.logger.log_summary(self.warning_count, self.error_count)
        if self.errors:
            raise ConversionError("Cannot down convert this OpenAPI definition.")
        return self.openapi30

    def _visit_schemas(self, schema_visitor: SchemaVisitor):
        visit_schema_objects(self.openapi30, schema_visitor)

    def set_openapi_version(self):
        self.openapi30['openapi'] = OPENAPI_30_VERSION

    def remove_license_identifier(self):
        info = self.openapi30.get('info')
        license_object = info.get('license') if isinstance(info, dict) else None
        if isinstance(license_object, dict) and license_object.get('identifier'):
            self.log(f"Removed info.license.identifier: {license_object['identifier']}")
            del license_object['identifier']

    def convert_schema_ref(self):
        """
        In JSON Schemas, replace ``{siblings..., $ref: uri}`` with
        ``{siblings..., allOf: [{$ref: uri}]}``.

        Only runs when ``all_of_transform`` is set; some SDK generators do not
        cope with the resulting allOf.
        """
        if not self.options.all_of_transform:
            return

        def schema_visitor(schema: SchemaObject) -> SchemaObject:
            if is_ref(schema) and len(schema) > 1:
                self.log(f"Converting JSON Schema $ref {self._json(schema)} to allOf: [ $ref ]")
                schema['allOf'] = [{'$ref': schema.pop('$ref')}]
            return walk_nested_schemas(schema, schema_visitor)

        self._visit_schemas(schema_visitor)

    def simplify_non_schema_ref(self):
        """
        Reduce every remaining reference object to a JSON Reference that has
        only a ``$ref`` property.
        """

        def ref_visitor(node: RefObject) -> JsonNode:
            if len(node) == 1:
                return node
            self.log(f"Down convert reference object to JSON Reference:\n{self._json(node)}")
            for key in [key for key in node if key != '$ref']:
                del node[key]
            return node

        visit_ref_objects(self.openapi30, ref_visitor)

    def _oauth2_scopes(self, scheme_name: str) -> Dict[str, str]:
        """Collect the scopes every operation security requirement asks of ``scheme_name``."""
        requirements: List[Any] = []
        paths = self.openapi30.get('paths')
        if isinstance(paths, dict):
            for path_item in paths.values():
                if not isinstance(path_item, dict):
                    continue
                for method in self.HTTP_METHODS:
                    operation = path_item.get(method)
                    if isinstance(operation, dict):
                        requirements.extend(operation.get('security') or [])

        descriptions = self.options.scope_descriptions or {}
        scopes: Dict[str, str] = {}
        for requirement in requirements:
            if not isinstance(requirement, dict):
                continue
            for scope in requirement.get(scheme_name) or []:
                scopes[scope] = descriptions.get(scope) or f"TODO: describe the '{scope}' scope"
        return scopes

    def convert_security_schemes(self):
        """
        Down-convert ``openIdConnect`` security schemes to ``oauth2`` with an
        authorization code flow.

        The flow lists every scope used by a security requirement for the
        scheme. Only runs when scope descriptions were supplied.
        """
        if self.options.scope_descriptions is None:
            return
        components = self.openapi30.get('components')
        schemes = components.get('securitySchemes') if isinstance(components, dict) else None
        if not isinstance(schemes, dict):
            return

        for scheme_name, scheme in schemes.items():
            if not isinstance(scheme, dict) or scheme.get('type') != 'openIdConnect':
                continue
            self.log(f"Converting openIdConnect security scheme {scheme_name} to oauth2/authorizationCode")
            open_id_connect_url = scheme.pop('openIdConnectUrl', None)
            scheme['type'] = 'oauth2'
            scheme['description'] = (
                "OAuth2 Authorization Code Flow. The client may GET the OpenID Connect "
                f"configuration JSON from `{open_id_connect_url}` to get the correct "
                "`authorizationUrl` and `tokenUrl`."
            )
            scheme['flows'] = {
                'authorizationCode': {
                    'authorizationUrl': self.options.authorization_url,
                    'tokenUrl': self.options.token_url,
                    'scopes': self._oauth2_scopes(scheme_name),
                }
            }

    def convert_json_schema_examples(self):
        """
        Replace JSON Schema ``examples`` with ``example: examples[0]``.

        With ``delete_example_with_id``, a first example that is an object
        with an ``id`` is dropped instead.
        """

        def schema_visitor(schema: SchemaObject) -> SchemaObject:
            examples = schema.get('examples')
            if isinstance(examples, list) and examples:
                del schema['examples']
                first = examples[0]
                if self.options.delete_example_with_id and isinstance(first, dict) and 'id' in first:
                    self.log(f"Deleted schema example with `id` property:\n{self._json(examples)}")
                else:
                    schema['example'] = first
                    self.log(f"Replaced examples with examples[0]. Old examples:\n{self._json(examples)}")
            return walk_nested_schemas(schema, schema_visitor)

        self._visit_schemas(schema_visitor)

    def convert_json_schema_content_encoding(self):
        """
        Replace ``contentEncoding: base64`` with ``format: byte`` in string
        schemas. Any other encoding, or a conflicting format, is an error.
        """

        def schema_visitor(schema: SchemaObject) -> SchemaObject:
            if schema.get('type') == 'string' and 'contentEncoding' in schema:
                encoding = schema['contentEncoding']
                if encoding != 'base64':
                    self.error(f"Unable to down-convert contentEncoding: {encoding}")
                elif 'format' not in schema:
                    del schema['contentEncoding']
                    schema['format'] = 'byte'
                    self.log("Converted schema: 'contentEncoding: base64' to 'format: byte'")
                elif schema['format'] == 'byte':
                    del schema['contentEncoding']
                    self.log("Deleted schema contentEncoding: base64 (leaving format: byte)")
                else:
                    self.error(
                        "Unable to down-convert schema contentEncoding: base64 to format: byte "
                        f"because the schema already has a format ({schema['format']})"
                    )
            return walk_nested_schemas(schema, schema_visitor)

        self._visit_schemas(schema_visitor)

    def convert_json_schema_content_media_type(self):
        """
        Replace ``contentMediaType: application/octet-stream`` with
        ``format: binary`` in string schemas. A conflicting format is an error.
        """

        def schema_visitor(schema: SchemaObject) -> SchemaObject:
            if schema.get('type') == 'string' and schema.get('contentMediaType') == 'application/octet-stream':
                if 'format' not in schema:
                    del schema['contentMediaType']
                    schema['format'] = 'binary'
                    self.log("Converted schema contentMediaType: application/octet-stream to format: binary")
                elif schema['format'] == 'binary':
                    del schema['contentMediaType']
                    self.log("Deleted schema contentMediaType: application/octet-stream (leaving format: binary)")
                else:
                    self.error(
                        "Unable to down-convert schema with contentMediaType: application/octet-stream "
                        f"to format: binary because the schema already has a format ({schema['format']})"
                    )
            return walk_nested_schemas(schema, schema_visitor)

        self._visit_schemas(schema_visitor)

    def convert_const_to_enum(self):
        """Replace ``const: value`` with ``enum: [value]``."""

        def schema_visitor(schema: SchemaObject) -> SchemaObject:
            if 'const' in schema:
                constant = schema.pop('const')
                schema['enum'] = [constant]
                self.log(f"Converted const: {constant} to enum")
            return walk_nested_schemas(schema, schema_visitor)

        self._visit_schemas(schema_visitor)

    def convert_nullable_type_array(self):
        """Replace ``type: [T, 'null']`` with ``type: T, nullable: true``."""

        def schema_visitor(schema: SchemaObject) -> SchemaObject:
            schema_type = schema.get('type')
            if isinstance(schema_type, list) and len(schema_type) == 2 and 'null' in schema_type:
                non_null = [t for t in schema_type if t != 'null']
                if non_null:
                    schema['type'] = non_null[0]
                    schema['nullable'] = True
                    self.log("Converted schema type array to nullable")
            return walk_nested_schemas(schema, schema_visitor)

        self._visit_schemas(schema_visitor)

    def convert_nullable_one_of(self):
        """
        Merge ``oneOf: [{type: 'null'}, ...]`` unions into ``nullable: true``.

        See :meth:`SchemaResolver.merge_nullable_one_of`.
        """

        def schema_visitor(schema: SchemaObject) -> SchemaObject:
            if 'oneOf' in schema:
                before = self._json(schema)
                if self.resolver.merge_nullable_one_of(schema):
                    self.log(f"Converted nullable oneOf to nullable type:\n{before}")
            return walk_nested_schemas(schema, schema_visitor)

        self._visit_schemas(schema_visitor)

    def remove_webhooks_object(self):
        if 'webhooks' in self.openapi30:
            del self.openapi30['webhooks']
            self.log("Deleted webhooks object")

    def remove_unsupported_schema_keywords(self):
        def schema_visitor(schema: SchemaObject) -> SchemaObject:
            for key in self.UNSUPPORTED_SCHEMA_KEYWORDS:
                if key in schema:
                    del schema[key]
                    self.log(f"Removed unsupported schema keyword {key}")
            return walk_nested_schemas(schema, schema_visitor)

        self._visit_schemas(schema_visitor)

    def process_schema_comments(self):
        if self.options.convert_schema_comments:
            self.rename_schema_comment()
        else:
            self.delete_schema_comment()

    def rename_schema_comment(self):
        def schema_visitor(schema: SchemaObject) -> SchemaObject:
            if '$comment' in schema:
                schema['x-comment'] = schema.pop('$comment')
                self.log("schema $comment renamed to x-comment")
            return walk_nested_schemas(schema, schema_visitor)

        self._visit_schemas(schema_visitor)

    def delete_schema_comment(self):
        def schema_visitor(schema: SchemaObject) -> SchemaObject:
            if '$comment' in schema:
                comment = schema.pop('$comment')
                self.log(f"schema $comment deleted: {comment}")
            return walk_nested_schemas(schema, schema_visitor)

        self._visit_schemas(schema_visitor)
