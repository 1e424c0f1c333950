"""Loading and saving of OpenAPI documents."""

import os
import json
import yaml
import requests
from pathlib import Path
from typing import Dict, Any
from urllib.parse import urlparse


class DocumentLoaderError(Exception):
    """Error raised while loading or saving a document."""
    pass


class DocumentLoader:
    """Reads OpenAPI documents and scope files, and writes converted documents."""

    FORMATS = ('json', 'yaml')

    def __init__(self, timeout: int = 30):
        """
        Initialize the loader.

        Args:
            timeout: Timeout in seconds when fetching a document from a URL
        """
        self.timeout = timeout

    @staticmethod
    def is_url(source: str) -> bool:
        return urlparse(source).scheme in ('http', 'https')

    @classmethod
    def format_for(cls, name: str) -> str:
        """Pick the output format from a file name or URL: json or yaml."""
        return 'json' if urlparse(name).path.lower().endswith('json') else 'yaml'

    def load(self, source: str) -> Dict[str, Any]:
        """
        Load an OpenAPI document.

        Args:
            source: Path to a local file or URL to a remote document

        Returns:
            Dict[str, Any]: The deserialized document

        Raises:
            DocumentLoaderError: If loading or parsing fails
        """
        try:
            content = self._read(source)
        except (OSError, UnicodeDecodeError, requests.exceptions.RequestException) as e:
            raise DocumentLoaderError(f"Failed to load OpenAPI document from {source}: {str(e)}")

        document = self._parse(content, source)
        if not isinstance(document, dict):
            raise DocumentLoaderError(f"OpenAPI document {source} is not a mapping")
        return document

    def load_scope_descriptions(self, source: str) -> Dict[str, str]:
        """
        Load a scope description file.

        The file is a YAML or JSON mapping ``{scope: description, ...}``.

        Raises:
            DocumentLoaderError: If the file cannot be read or is not a mapping
        """
        try:
            content = self._read(source)
        except (OSError, UnicodeDecodeError, requests.exceptions.RequestException) as e:
            raise DocumentLoaderError(f"Failed to load scope descriptions from {source}: {str(e)}")

        scopes = self._parse(content, source)
        if scopes is None:
            return {}
        if not isinstance(scopes, dict):
            raise DocumentLoaderError(f"Scope descriptions in {source} must be a mapping")
        # an empty description falls back to the generated placeholder
        return {
            str(scope): str(description)
            for scope, description in scopes.items()
            if description is not None
        }

    def _read(self, source: str) -> str:
        if self.is_url(source):
            response = requests.get(source, timeout=self.timeout)
            response.raise_for_status()
            return response.text

        if not os.path.exists(source):
            raise FileNotFoundError(f"File not found: {source}")

        with open(source, 'r', encoding='utf-8') as f:
            return f.read()

    @staticmethod
    def _parse(content: str, source: str) -> Any:
        # Try to parse as JSON, fall back to YAML
        try:
            return json.loads(content)
        except json.JSONDecodeError:
            try:
                return yaml.safe_load(content)
            except yaml.YAMLError as e:
                raise DocumentLoaderError(f"Invalid YAML/JSON in {source}: {str(e)}")

    def dump(self, document: Dict[str, Any], fmt: str = 'yaml') -> str:
        """
        Serialize a document.

        Args:
            document: The document
            fmt: ``json`` or ``yaml``

        Returns:
            str: The serialized text
        """
        if fmt not in self.FORMATS:
            raise ValueError(f"Invalid format: {fmt}. Must be one of: {', '.join(self.FORMATS)}")
        if fmt == 'json':
            return json.dumps(document, indent=2, default=str)
        return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)

    def save(self, document: Dict[str, Any], path: str) -> str:
        """
        Write a document to ``path``, creating parent directories.

        The format follows the file extension: ``.json`` is written as JSON,
        anything else as YAML.

        Returns:
            str: The path written
        """
        filepath = Path(path)
        try:
            filepath.parent.mkdir(parents=True, exist_ok=True)
            with open(filepath, 'w', encoding='utf-8') as f:
                f.write(self.dump(document, self.format_for(str(filepath))))
        except OSError as e:
            raise DocumentLoaderError(f"Failed to write {path}: {str(e)}")
        return str(filepath)
