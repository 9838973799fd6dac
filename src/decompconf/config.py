"""Loading and saving a parameters document on disk (caller side; Parameters itself does no I/O)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from decompconf import serdes
from decompconf.parameters import Parameters

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


def load_document(path: Path | str) -> Any:
    """Load JSON from path; return None if file missing, unreadable or invalid."""
    path = Path(path)
    if not path.is_file():
        return None
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        logger.debug("Cannot read %s", path)
        return None
    return serdes.load_document(text)


def load_parameters(path: Path | str, fix_paths: bool = True) -> Parameters:
    """
    Read Parameters from a JSON document at path.

    A missing or malformed document yields default Parameters (logged, not raised).
    With fix_paths, relative paths in the document are anchored on the
    document's own directory.
    """
    path = Path(path)
    params = Parameters()
    document = load_document(path)
    if document is None:
        logger.warning("No usable parameters document at %s; using defaults", path)
    params.deserialize(document)
    if fix_paths:
        params.fix_relative_paths(str(path.absolute()))
    logger.debug("Loaded parameters from %s: %s", path, params.describe())
    return params


def save_parameters(path: Path | str, params: Parameters, pretty: bool = True) -> None:
    """Write the serialized parameters to path, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(params.to_json(pretty=pretty) + "\n", encoding="utf-8")
    logger.debug("Saved parameters to %s", path)
