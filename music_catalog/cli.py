import logging
from pathlib import Path
import click

from .catalog import build_catalog
from .report import emit

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbose):
    """Send log records to stderr, DEBUG when verbose and WARNING otherwise."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)


@click.command()
@click.version_option()
@click.argument("directory", nargs=1, envvar="MUSIC_CATALOG_ROOT")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Log every skipped file to stderr",
)
def cli(directory, verbose):
    """Generate a catalog of the music in DIRECTORY.

    Walks the directory tree, reads the tags of every file mutagen
    understands (ID3 in MP3, Vorbis comments in Ogg and FLAC, MP4 atoms and
    others) and prints one CSV line per artist and album with the formats
    found for it.
    """
    configure_logging(verbose)

    catalog = {}
    try:
        # Path("") would silently become the current directory
        if not directory:
            raise FileNotFoundError("Directory path is empty")
        build_catalog(Path(directory), catalog)
    except OSError as e:
        click.echo(f"Error reading files: {e}", err=True)

    for line in emit(catalog):
        click.echo(line)
