import logging
import sys
import os

import click
from rich.console import Console
from rich.markup import escape

from clientforge import __version__
from clientforge.models import ClientConfig
from clientforge.targets import default_preparers
from clientforge.utils.config import ClientForgeConfig

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)


def setup_logging():
    """Setup structured logging format based on debug mode setting."""
    debug_enabled = ClientForgeConfig.is_debug_mode()

    if debug_enabled:
        # Structured debug logging format for easy parsing
        logging.basicConfig(
            level=logging.DEBUG,
            format='[%(asctime)s] [%(levelname)-8s] [%(name)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        if not os.environ.get("CLIENTFORGE_SUPPRESS_HEADER"):
            logging.info("=" * 60)
            logging.info(f"ClientForge v{__version__} - Debug Log")
            logging.info("=" * 60)
            logging.info(f"Python: {sys.version}")
            logging.info(f"Platform: {sys.platform}")
    else:
        logging.basicConfig(level=logging.INFO, format='%(message)s')


def run(config: ClientConfig, update_client: bool = False):
    """Runs every platform preparer in order, stopping at the first failure."""
    for preparer in default_preparers():
        if update_client:
            console.print(f"\n[bold green]=== Updating {preparer.name} target ===[/bold green]", soft_wrap=True)
            preparer.update(config)
        else:
            console.print(f"\n[bold green]=== Preparing {preparer.name} target ===[/bold green]", soft_wrap=True)
            preparer.prepare(config)


@click.command()
@click.option('--update-client', 'update_client', is_flag=True,
              help="Regenerate assets of an existing client instead of creating a new one.")
@click.version_option(__version__, message='ClientForge, version %(version)s')
def cli(update_client):
    """ClientForge: Scaffold per-client React Native, Android and iOS configurations."""
    setup_logging()

    try:
        config = ClientForgeConfig.load()

        if update_client:
            console.print(f"\n[bright_blue]Updating existing client: {escape(config.client_name)}[/bright_blue]", soft_wrap=True)
        else:
            console.print(f"\n[bright_blue]Creating new client: {escape(config.client_name)}[/bright_blue]", soft_wrap=True)

        run(config, update_client)
    except Exception as e:
        logger.debug("Operation failed", exc_info=True)
        err_console.print(f"[bold red]An error occurred: {escape(str(e))}[/bold red]", soft_wrap=True, highlight=False)
        sys.exit(1)

    console.print("\n[bold black on green]Operation completed successfully[/bold black on green]", soft_wrap=True)
