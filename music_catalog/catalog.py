"""Catalog building: walk a directory tree and group tags by album and artist."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Set

from .tag_reader import TagReadError, TagRecord, read_tags

logger = logging.getLogger(__name__)

# album -> effective artist -> formats
Catalog = Dict[str, Dict[str, Set[str]]]


def effective_artist(record: TagRecord) -> str:
    """Album artist when present, otherwise the track artist."""
    return record.album_artist or record.artist


def add_record(catalog: Catalog, record: TagRecord) -> None:
    """Fold a single tag record into the catalog.

    Adding the same album, artist and file type twice leaves the catalog
    unchanged.
    """
    artists = catalog.setdefault(record.album, {})
    formats = artists.setdefault(effective_artist(record), set())
    formats.add(record.file_type)


def visit(catalog: Catalog, path: Path) -> bool:
    """Read one filesystem entry into the catalog.

    Args:
        catalog: Catalog to update in place
        path: Path of the entry to visit

    Returns:
        True if the file's tags were added, False if the entry was not a
        regular file or could not be read
    """
    if not path.is_file():
        return False

    try:
        with open(path, "rb") as fileobj:
            record = read_tags(fileobj)
    except OSError as e:
        logger.debug("opening %s: %s", path, e)
        return False
    except TagReadError as e:
        logger.debug("reading tags %s: %s", path, e)
        return False

    add_record(catalog, record)
    return True


def build_catalog(root_path: Path, catalog: Optional[Catalog] = None) -> Dict[str, Any]:
    """Walk a directory tree and collect the tags of every file in it.

    Args:
        root_path: Root directory to scan
        catalog: Catalog to fill; a new one is created when omitted

    Returns:
        Dict with the catalog, the number of files processed and skipped, and
        the subdirectories that could not be listed

    Raises:
        FileNotFoundError: If root_path does not exist
        NotADirectoryError: If root_path is not a directory
        PermissionError: If root_path cannot be listed
    """
    root_path = Path(root_path)
    if catalog is None:
        catalog = {}

    if not root_path.exists():
        raise FileNotFoundError(f"Directory does not exist: {root_path}")

    if not root_path.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {root_path}")

    # Fail on the root before walking, os.walk would hide it
    os.listdir(root_path)

    result = {"catalog": catalog, "processed": 0, "skipped": 0, "errors": []}

    def on_error(error: OSError) -> None:
        logger.warning("Cannot list %s: %s", error.filename, error.strerror)
        result["errors"].append(f"{error.filename}: {error.strerror}")

    for dirpath, _, filenames in os.walk(root_path, onerror=on_error):
        directory = Path(dirpath)
        for name in filenames:
            file_path = directory / name
            if not file_path.is_file():
                continue
            if visit(catalog, file_path):
                result["processed"] += 1
            else:
                result["skipped"] += 1

    logger.info(
        "Scanned %s: %d processed, %d skipped",
        root_path,
        result["processed"],
        result["skipped"],
    )
    return result
