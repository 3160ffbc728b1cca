"""
Main CLI entry point for the translation patcher.

This module defines the Click command group and registers all subcommands.
"""

import click

from translation_patcher.cli.patch import patch
from translation_patcher.utils.logger_setup import setup_logging

__version__ = "0.1.0"


@click.group()
@click.version_option(version=__version__, prog_name="translation-patcher")
@click.option("--debug", is_flag=True, help="Log debug output, including prompts.")
def cli(debug: bool) -> None:
    """Translation patcher - keep per-language JSON files in sync with English.

    Compares two versions of the English translation file and translates only
    the keys that changed into every language file of a folder.
    """
    setup_logging(debug=debug)


# Register subcommands
cli.add_command(patch)


if __name__ == "__main__":
    cli()
