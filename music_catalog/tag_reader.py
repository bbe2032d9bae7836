"""Tag reading for catalog building, using mutagen."""

from dataclasses import dataclass
from typing import Any, BinaryIO, Dict

import mutagen
from mutagen.mp3 import MP3
from mutagen.mp4 import MP4
from mutagen.flac import FLAC
from mutagen.ogg import OggFileType


class TagReadError(ValueError):
    """Raised when a file has no readable tags."""


@dataclass
class TagRecord:
    artist: str
    album_artist: str
    album: str
    file_type: str


def read_tags(fileobj: BinaryIO) -> TagRecord:
    """Read the catalog fields from an open audio file.

    Args:
        fileobj: Binary file object positioned at the start of the file

    Returns:
        TagRecord with artist, album artist, album and file type. Fields are
        empty when a recognised file carries no tags.

    Raises:
        TagReadError: If the format is not recognised, the file cannot be
            parsed, or it is an MP3 without any ID3 tag
    """
    try:
        audio_file = mutagen.File(fileobj)
        if audio_file is None:
            raise TagReadError("Unrecognized audio format")
        return _record_from(audio_file)
    except TagReadError:
        raise
    except mutagen.MutagenError as e:
        raise TagReadError(f"Could not parse audio file: {e}") from e
    except Exception as e:
        # mutagen parsers raise plain IndexError, struct.error etc. on damaged headers
        raise TagReadError(f"Could not parse audio file: {e!r}") from e


def _record_from(audio_file: Any) -> TagRecord:
    if audio_file.tags is None:
        if isinstance(audio_file, MP3):
            raise TagReadError("No tags found")
        return TagRecord("", "", "", file_type(audio_file))

    if isinstance(audio_file, MP3):
        metadata = _read_mp3_metadata(audio_file)
    elif isinstance(audio_file, MP4):
        metadata = _read_mp4_metadata(audio_file)
    elif isinstance(audio_file, (OggFileType, FLAC)):
        metadata = _read_vorbis_metadata(audio_file)
    else:
        metadata = _read_generic_metadata(audio_file)

    return TagRecord(
        artist=metadata.get("artist", ""),
        album_artist=metadata.get("albumartist", ""),
        album=metadata.get("album", ""),
        file_type=file_type(audio_file),
    )


def file_type(audio_file: Any) -> str:
    """Return the format identifier for a loaded mutagen file.

    Every Ogg container reports as OGG, MP4 splits into ALAC and M4A by codec,
    anything else falls back to its mutagen class name.
    """
    if isinstance(audio_file, MP3):
        return "MP3"
    if isinstance(audio_file, FLAC):
        return "FLAC"
    if isinstance(audio_file, OggFileType):
        return "OGG"
    if isinstance(audio_file, MP4):
        codec = getattr(audio_file.info, "codec", "")
        return "ALAC" if codec == "alac" else "M4A"
    return type(audio_file).__name__.upper()


def _read_mp3_metadata(audio_file: MP3) -> Dict[str, str]:
    """Read metadata from MP3 file using ID3 tags."""
    metadata = {}

    tag_mapping = {
        "TPE1": "artist",
        "TALB": "album",
        "TPE2": "albumartist",
    }

    for frame_id, field in tag_mapping.items():
        if frame_id in audio_file.tags:
            frame = audio_file.tags[frame_id]
            text = getattr(frame, "text", None)
            metadata[field] = str(text[0]) if text else str(frame)

    return metadata


def _read_vorbis_metadata(audio_file: Any) -> Dict[str, str]:
    """Read metadata from Vorbis comments (Ogg Vorbis, Opus, FLAC)."""
    metadata = {}

    tag_mapping = {
        "ARTIST": "artist",
        "ALBUM": "album",
        "ALBUMARTIST": "albumartist",
    }

    for vorbis_tag, field in tag_mapping.items():
        if vorbis_tag in audio_file.tags:
            values = audio_file.tags[vorbis_tag]
            if values:
                metadata[field] = str(values[0])

    return metadata


def _read_mp4_metadata(audio_file: MP4) -> Dict[str, str]:
    """Read metadata from MP4/AAC file using iTunes-style tags."""
    metadata = {}

    tag_mapping = {
        "©ART": "artist",
        "©alb": "album",
        "aART": "albumartist",
    }

    for mp4_tag, field in tag_mapping.items():
        if mp4_tag in audio_file.tags:
            values = audio_file.tags[mp4_tag]
            if values:
                metadata[field] = str(values[0])

    return metadata


def _read_generic_metadata(audio_file: Any) -> Dict[str, str]:
    """Read metadata using generic mutagen approach."""
    metadata = {}

    tag_mapping = {
        "artist": ["ARTIST", "TPE1"],
        "album": ["ALBUM", "TALB"],
        "albumartist": ["ALBUMARTIST", "TPE2"],
    }

    for field, possible_tags in tag_mapping.items():
        for tag in possible_tags:
            try:
                value = audio_file.tags[tag]
            except (KeyError, ValueError):
                continue
            # ID3 frames carry .text, Vorbis-style containers hold lists
            if hasattr(value, "text"):
                value = value.text[0] if value.text else ""
            elif isinstance(value, list):
                value = value[0] if value else ""
            metadata[field] = str(value)
            break

    return metadata
