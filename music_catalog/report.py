"""Rendering of a catalog as CSV-like lines."""

from typing import Iterable, List

from .catalog import Catalog


def quote_field(value: str) -> str:
    """Wrap a field in double quotes, doubling any quote inside it."""
    return '"' + value.replace('"', '""') + '"'


def format_line(artist: str, album: str, formats: Iterable[str]) -> str:
    """Format one catalog line: artist, album, then each format.

    Args:
        artist: Effective artist name
        album: Album name
        formats: Distinct format identifiers for the pair

    Returns:
        Comma-separated line with every field quoted
    """
    fields = [artist, album] + sorted(formats)
    return ",".join(quote_field(field) for field in fields)


def emit(catalog: Catalog) -> List[str]:
    """Render one line per (artist, album) pair in the catalog."""
    lines = []
    for album, artists in catalog.items():
        for artist, formats in artists.items():
            lines.append(format_line(artist, album, formats))
    return lines
