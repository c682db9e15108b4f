"""
Report the computer name on standard output.

The name is printed in double quotes on a single line. An unavailable name
prints as ``""``, and the exit code is always success.
"""

import logging
from typing import IO

import click

from .providers import HostNameProvider
from .utils import NameUnavailable, to_text

logger = logging.getLogger(__name__)

EXIT_OK = 0


def format_name(name: str | None) -> str:
    """Quote the name for output. ``None`` becomes ``""``."""
    return f'"{name or ""}"'


class HostNameReporter:
    """Prints the name returned by a provider."""

    def __init__(self, provider: HostNameProvider, file: IO | None = None):
        self.provider = provider
        self.file = file

    def lookup(self) -> str | None:
        """
        Ask the provider for the computer name.

        Providers report missing names as ``None``; anything they return is
        checked once more so the printed value is always valid text.
        """
        name = self.provider.get_computer_name()
        if name is None:
            return None

        try:
            return to_text(name)
        except NameUnavailable as e:
            logger.debug("Discarding name from %r: %s", self.provider, e)
            return None

    def run(self) -> int:
        """
        Print the computer name and return the exit code.
        """
        name = self.lookup()
        line = format_name(name)

        # Write bytes so the output is UTF-8 whatever the locale says.
        click.echo(line.encode("utf-8"), file=self.file)

        return EXIT_OK
