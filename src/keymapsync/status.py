"""Status reporting for the command-line runner."""
import logging

import click

logger = logging.getLogger(__name__)


class EchoStatusReporter:
    """StatusReporter that prints each message to stderr.

    A terminal has no transient status bar, so hide_after_ms is ignored.
    """

    def show_status_message(self, message: str, hide_after_ms: int = 5000) -> None:
        logger.debug("Status: %s", message)
        click.echo(message, err=True)
