"""OpenAPI 3.1 to 3.0 down-conversion."""

from .converter import Converter, OPENAPI_30_VERSION
from .errors import ConversionError
from .options import ConverterOptions
from .schema_types import SchemaResolver, is_null_marker

__all__ = [
    "Converter",
    "ConversionError",
    "ConverterOptions",
    "SchemaResolver",
    "OPENAPI_30_VERSION",
    "is_null_marker",
]
