import click
from oasdown.modules.converter.commands import create_convert_commands
from oasdown.modules.logging import create_logger


class OasdownContext:
    """Context object to store CLI state."""
    def __init__(self):
        self.logger = None

pass_context = click.make_pass_decorator(OasdownContext, ensure=True)

@click.group()
@click.version_option(package_name='oasdown')
@click.option('--output', '-o',
              type=click.Choice(['colorful', 'plain', 'json']),
              default='colorful',
              help='Log format (colorful for CLI, plain for CI/file, json for machine parsing)',
              envvar='OASDOWN_OUTPUT')
@click.option('--log-level', '-l',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
              default='INFO',
              help='Set the logging level',
              envvar='OASDOWN_LOG_LEVEL')
@pass_context
def cli(ctx, output, log_level):
    """oasdown: down-convert OpenAPI 3.1 documents to OpenAPI 3.0."""
    ctx.logger = create_logger(output, log_level)

# Add commands
cli.add_command(create_convert_commands())

def main():
    cli()

if __name__ == '__main__':
    main()
