import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from .providers import select_provider
from .reporter import HostNameReporter
from .settings import Settings

logger = logging.getLogger(__name__)


def setup_logging(level: str):
    """
    Send log records to stderr, stdout is reserved for the name.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True))],
    )


def load_settings() -> Settings:
    """
    Load settings, using the defaults if the configuration is invalid.
    """
    try:
        settings = Settings()
    except (ValueError, TypeError) as e:
        # ValidationError for bad values, JSONDecodeError or TypeError for broken config files
        settings = Settings.model_construct()
        setup_logging(settings.LOG_LEVEL)
        logger.warning("Invalid configuration, using defaults: %s", e)
        return settings

    setup_logging(settings.LOG_LEVEL)
    return settings


@click.command(
    context_settings=dict(ignore_unknown_options=True, allow_extra_args=True),
    add_help_option=False,
)
@click.pass_context
def cli(ctx: click.Context):
    """
    Print the computer name in double quotes.

    Takes no arguments, anything given on the command line is ignored.
    """
    settings = load_settings()

    if ctx.args:
        logger.debug("Ignoring arguments %r", ctx.args)

    reporter = HostNameReporter(select_provider(settings))

    ctx.exit(reporter.run())

