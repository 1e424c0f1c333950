"""oasdown: down-convert OpenAPI 3.1 documents to OpenAPI 3.0."""

from oasdown.modules.converter import Converter, ConverterOptions, ConversionError

__all__ = ["Converter", "ConverterOptions", "ConversionError"]
