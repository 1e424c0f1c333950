from typing import Dict, Optional
from urllib.parse import urlparse
from pydantic import BaseModel, model_validator

DEFAULT_AUTHORIZATION_URL = "https://www.example.com/oauth2/authorize"
DEFAULT_TOKEN_URL = "https://www.example.com/oauth2/token"


class ConverterOptions(BaseModel):
    verbose: bool = False  # log every rewrite that is applied
    delete_example_with_id: bool = False  # drop schema examples that have an `id` property
    all_of_transform: bool = False  # turn schema $ref objects with siblings into allOf
    authorization_url: str = DEFAULT_AUTHORIZATION_URL
    token_url: str = DEFAULT_TOKEN_URL
    scope_descriptions: Optional[Dict[str, str]] = None  # enables openIdConnect -> oauth2
    convert_schema_comments: bool = False  # rename $comment to x-comment instead of deleting it

    @model_validator(mode='after')
    def validate_oauth2_urls(self) -> 'ConverterOptions':
        """Validate that the oauth2 flow URLs are absolute http(s) URLs."""
        for name in ('authorization_url', 'token_url'):
            parsed = urlparse(getattr(self, name))
            if parsed.scheme not in ('http', 'https') or not parsed.netloc:
                raise ValueError(f"{name} must be an absolute http(s) URL")
        return self
