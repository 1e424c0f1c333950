import click
from .base import BaseLogger
import sys


class ColorfulLogger(BaseLogger):
    """Logger that outputs colorful text for CLI usage."""

    def __init__(self, log_level: str = "INFO"):
        super().__init__(log_level)
        # stdout may carry the converted document
        self.logger.configure(
            handlers=[{
                "sink": sys.stderr,
                "colorize": True,
                "format": "<cyan>{time:YYYY-MM-DD HH:mm:ss.SSS}</cyan> | "
                         "<level>{level: <8}</level> | "
                         "<white>{message}</white>",
                "level": log_level
            }]
        )

    def log_pass(self, pass_number: int, name: str):
        self.logger.debug(click.style(f"Pass {pass_number}: {name}", fg="cyan", bold=True))

    def log_summary(self, warnings: int, errors: int):
        if errors:
            color = "red"
        elif warnings:
            color = "yellow"
        else:
            color = "green"

        self.logger.info(click.style(f"Conversion finished: {warnings} warning(s), {errors} error(s)", fg=color, bold=True))

    def log_error(self, message: str):
        self.logger.error(click.style(message, fg="red", bold=True))

    def log_warning(self, message: str):
        self.logger.warning(click.style(message, fg="yellow", bold=True))

    def log_info(self, message: str):
        self.logger.info(click.style(message, fg="white"))

    def log_debug(self, message: str):
        self.logger.debug(click.style(message, fg="blue"))
