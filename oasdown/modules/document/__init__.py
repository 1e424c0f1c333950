"""Reading and writing OpenAPI documents."""

from .loader import DocumentLoader, DocumentLoaderError

__all__ = ["DocumentLoader", "DocumentLoaderError"]
