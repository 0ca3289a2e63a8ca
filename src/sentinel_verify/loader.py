"""
Bulk loading of a transparency log checkout.

Everything is read up front; verification never touches the filesystem.
Environment and structural problems raise here, before any check runs.
"""

import json
import logging
from pathlib import Path
from typing import Any

from .config import VerifierConfig
from .errors import AnchorSourceMissingError, MalformedRecordError
from .models import Anchor, Key
from .registry import KeyRegistry

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise MalformedRecordError(
            f"Invalid JSON in {path.name}: {exc.msg}",
            {"source": str(path), "line": exc.lineno},
        ) from exc
    except UnicodeDecodeError as exc:
        raise MalformedRecordError(f"{path.name} is not UTF-8 text", {"source": str(path)}) from exc


def load_anchors(directory: str | Path, sort_by_sequence: bool = False) -> list[Anchor]:
    """
    Load every ``*.json`` anchor in a directory.

    File-name order stands in for publication order. With
    ``sort_by_sequence`` the parsed anchor_sequence is used instead, which
    protects against inconsistent zero-padding in file names.

    Raises:
        AnchorSourceMissingError: Directory missing or holds no anchor files
        MalformedRecordError: A file is not a valid anchor record
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise AnchorSourceMissingError(
            "No anchors directory found",
            {"path": str(directory)},
        )

    files = sorted(p for p in directory.iterdir() if p.suffix == ".json" and p.is_file())
    if not files:
        raise AnchorSourceMissingError(
            "No anchor files found",
            {"path": str(directory)},
        )

    anchors = [Anchor.from_dict(_read_json(path), source=path.name) for path in files]

    if sort_by_sequence:
        anchors.sort(key=lambda a: a.anchor_sequence)
    elif any(a.anchor_sequence > b.anchor_sequence for a, b in zip(anchors, anchors[1:])):
        logger.warning(
            "Anchor file names are not in anchor_sequence order; "
            "sequence checks use file-name order"
        )

    logger.info("Loaded %d anchors from %s", len(anchors), directory)
    return anchors


def load_registry(path: str | Path) -> KeyRegistry:
    """
    Load the public-key registry file (``{"keys": [...]}``).

    A missing file yields an empty registry: every anchor will then report
    its key as not found.

    Raises:
        MalformedRecordError: Invalid JSON, bad key record or duplicate key_id
    """
    path = Path(path)
    if not path.exists():
        logger.warning("Key registry not found at %s; no keys loaded", path)
        return KeyRegistry()

    data = _read_json(path)
    if not isinstance(data, dict):
        raise MalformedRecordError(
            "Key registry must be a JSON object",
            {"source": str(path), "received": type(data).__name__},
        )

    records = data.get("keys", [])
    if not isinstance(records, list):
        raise MalformedRecordError(
            "Key registry 'keys' must be an array",
            {"source": str(path)},
        )

    registry = KeyRegistry(
        Key.from_dict(record, source=f"{path.name}[{i}]")
        for i, record in enumerate(records)
    )
    logger.info("Loaded %d keys from %s", len(registry), path)
    return registry


def load_log(
    root: str | Path,
    config: VerifierConfig | None = None,
) -> tuple[list[Anchor], KeyRegistry]:
    """Load anchors and keys from a transparency log checkout rooted at ``root``."""
    config = config or VerifierConfig()
    root = Path(root)
    anchors = load_anchors(root / config.anchors_dir, sort_by_sequence=config.sort_by_sequence)
    registry = load_registry(root / config.keys_file)
    return anchors, registry
