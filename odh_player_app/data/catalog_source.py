"""
Loads the startup track list.

The catalog is a static JSON list; the bundled ``catalog.json`` is used
unless a path is given or ``ODH_CATALOG_PATH`` is set.
"""
import json
import logging
import typing as t
from pathlib import Path

from pydantic import TypeAdapter

from odh_player_app.config import CATALOG_PATH
from odh_player_app.core.catalog import TrackCatalog, title_from_filename
from odh_player_app.core.models import Track

logger = logging.getLogger(__name__)

BUNDLED_CATALOG = Path(__file__).parent / "catalog.json"

# TypeAdapters for efficient validation
_entries_adapter = TypeAdapter(t.List[t.Dict[str, t.Any]])
_tracks_adapter = TypeAdapter(t.List[Track])


def parse_tracks(entries: t.Any) -> t.List[Track]:
    """Validate raw catalog entries.

    Entries without a ``title`` get one derived from their ``audio_src``
    file name.

    Args:
        entries: Decoded JSON, expected to be a list of objects

    Returns:
        List of Track models

    Raises:
        pydantic.ValidationError: If the list or an entry is malformed
    """
    prepared = []
    for entry in _entries_adapter.validate_python(entries):
        if not entry.get("title") and isinstance(entry.get("audio_src"), str):
            entry = {**entry, "title": title_from_filename(entry["audio_src"])}
        prepared.append(entry)
    return _tracks_adapter.validate_python(prepared)


def load_catalog(path: t.Union[str, Path, None] = None) -> TrackCatalog:
    """Load the catalog from a JSON file.

    Args:
        path: Catalog file; defaults to ODH_CATALOG_PATH, then the bundled file

    Returns:
        TrackCatalog in file order
    """
    catalog_path = Path(path or CATALOG_PATH or BUNDLED_CATALOG)
    with open(catalog_path, encoding="utf-8") as f:
        entries = json.load(f)

    tracks = parse_tracks(entries)
    logger.info("Loaded %d tracks from %s", len(tracks), catalog_path)
    return TrackCatalog(tracks)
