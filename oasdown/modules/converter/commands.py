import click
from typing import Optional
from .command.convert import ConvertCommand


def create_convert_commands() -> click.Command:
    """Create the convert command."""

    @click.command(name='convert')
    @click.option('-i', '--input', 'input_file', default='openapi.yaml', show_default=True,
                  help='An OpenAPI 3.1 file name or URL')
    @click.option('-o', '--output', 'output_file', help='The output file, defaults to stdout if omitted')
    @click.option('-a', '--allOf', 'all_of', is_flag=True,
                  help='If set, convert complex $ref in JSON schemas to allOf')
    @click.option('--authorizationUrl', 'authorization_url',
                  help='The authorizationUrl for openIdConnect -> oauth2 transformation')
    @click.option('--tokenUrl', 'token_url', help='The tokenUrl for openIdConnect -> oauth2 transformation')
    @click.option('-d', '--delete-examples-with-id', is_flag=True,
                  help='If set, delete any JSON Schema examples that have an `id` property')
    @click.option('--oidc-to-oauth2', '-s', '--scopes', 'scopes', type=click.Path(dir_okay=False),
                  help='Scope description file; converts openIdConnect security to oauth2')
    @click.option('--convert-schema-comments', is_flag=True,
                  help='Rename schema $comment to x-comment instead of deleting it')
    @click.option('-v', '--verbose', is_flag=True, help='Log every change made to the document')
    @click.pass_context
    def convert(
        ctx,
        input_file: str,
        output_file: Optional[str],
        all_of: bool,
        authorization_url: Optional[str],
        token_url: Optional[str],
        delete_examples_with_id: bool,
        scopes: Optional[str],
        convert_schema_comments: bool,
        verbose: bool
    ):
        """Convert an OpenAPI 3.1 document to OpenAPI 3.0.

        The converted document is written to --output, or to stdout as YAML
        or JSON following the input file name.

        Examples:
            oasdown convert -i openapi.yaml -o openapi-3.0.yaml

            oasdown convert -i openapi.json --allOf --scopes scopes.yaml
        """
        command = ConvertCommand(logger=ctx.obj.logger)
        command.run(
            input_file,
            output_file,
            verbose=verbose,
            delete_examples_with_id=delete_examples_with_id,
            all_of=all_of,
            authorization_url=authorization_url,
            token_url=token_url,
            scopes=scopes,
            convert_schema_comments=convert_schema_comments
        )

    return convert
