import sys
import click
from typing import Optional
from pydantic import ValidationError

from ...logging import BaseLogger
from ...document import DocumentLoader, DocumentLoaderError
from ..converter import Converter
from ..errors import ConversionError
from ..options import ConverterOptions, DEFAULT_AUTHORIZATION_URL, DEFAULT_TOKEN_URL


class ConvertCommand:
    """Command class for down-converting an OpenAPI document.

    This class handles:
    - Loading the source document and the optional scope description file
    - Running the converter with the requested options
    - Writing the converted document to a file or stdout
    """

    def __init__(self, logger: BaseLogger, loader: Optional[DocumentLoader] = None):
        """
        Initialize the convert command.

        Args:
            logger: Logger instance
            loader: Document loader, a default one is created when omitted
        """
        self.logger = logger
        self.loader = loader or DocumentLoader()

    def build_options(
        self,
        verbose: bool = False,
        delete_examples_with_id: bool = False,
        all_of: bool = False,
        authorization_url: Optional[str] = None,
        token_url: Optional[str] = None,
        scopes: Optional[str] = None,
        convert_schema_comments: bool = False
    ) -> ConverterOptions:
        """Build converter options, loading the scope description file if given."""
        scope_descriptions = self.loader.load_scope_descriptions(scopes) if scopes else None
        return ConverterOptions(
            verbose=verbose,
            delete_example_with_id=delete_examples_with_id,
            all_of_transform=all_of,
            authorization_url=authorization_url or DEFAULT_AUTHORIZATION_URL,
            token_url=token_url or DEFAULT_TOKEN_URL,
            scope_descriptions=scope_descriptions,
            convert_schema_comments=convert_schema_comments
        )

    def run(self, input_file: str, output_file: Optional[str] = None, **option_values):
        """
        Run the convert command.

        Args:
            input_file: Path or URL of the OpenAPI 3.1 document
            output_file: Output path; the document goes to stdout when omitted
            option_values: Keyword arguments for :meth:`build_options`
        """
        try:
            options = self.build_options(**option_values)
            document = self.loader.load(input_file)
            converted = Converter(document, options, self.logger).convert()

            if output_file:
                path = self.loader.save(converted, output_file)
                self.logger.log_info(f"Wrote OpenAPI 3.0 document to {path}")
            else:
                click.echo(self.loader.dump(converted, self.loader.format_for(input_file)), nl=False)
        except DocumentLoaderError as err:
            self.logger.log_error(str(err))
            sys.exit(1)
        except ValidationError as err:
            self.logger.log_error(f"Invalid options: {str(err)}")
            sys.exit(1)
        except ConversionError as err:
            self.logger.log_error(str(err))
            sys.exit(1)
