"""Reading and atomically writing the Railway config file.

Loading never fails because of the file's contents: a missing file gives
an empty document and an unparseable one is replaced in memory by an
empty document (the file itself is left alone until the next write).
The outcome is reported as a :class:`LoadResult` so callers can tell
which path was taken.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from railway_cli.config.schema import RailwayConfig
from railway_cli.errors import ConfigWriteError, HomeDirectoryError

logger = logging.getLogger(__name__)


class LoadStatus(Enum):
    LOADED = "loaded"
    CREATED = "created"  # no file on disk yet
    REGENERATED = "regenerated"  # file present but unparseable


@dataclass(frozen=True)
class LoadResult:
    config: RailwayConfig
    status: LoadStatus
    reason: Optional[str] = None

    @property
    def regenerated(self) -> bool:
        return self.status is LoadStatus.REGENERATED


def resolve_home_dir(home: Optional[str] = None) -> Path:
    """Return the user's home directory, or *home* when given.

    Raises :class:`HomeDirectoryError` if it cannot be determined.
    """
    if home:
        return Path(home)
    try:
        return Path.home()
    except RuntimeError as exc:
        raise HomeDirectoryError("Unable to get home directory") from exc


def _format_validation_errors(exc: ValidationError) -> str:
    lines: List[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"])
        lines.append(f"{loc}: {err['msg']}")
    return "; ".join(lines)


def load_config(path: Path) -> LoadResult:
    """Load the document at *path*.

    A file that cannot be opened is treated as absent; an error while
    reading an opened file propagates.
    """
    try:
        fh = open(path, "rb")
    except OSError as exc:
        logger.debug("No readable config file at %s (%s), starting empty", path, exc)
        return LoadResult(RailwayConfig.empty(), LoadStatus.CREATED)
    with fh:
        raw = fh.read()

    try:
        config = RailwayConfig.model_validate_json(raw)
    except ValidationError as exc:
        reason = _format_validation_errors(exc)
        logger.warning("Unable to parse config file %s: %s", path, reason)
        return LoadResult(RailwayConfig.empty(), LoadStatus.REGENERATED, reason)

    logger.debug("Config file %s loaded (%d linked project(s))", path, len(config.projects))
    return LoadResult(config, LoadStatus.LOADED)


def temp_path_for(path: Path) -> Path:
    """Sibling temporary file used while writing *path* (``config.json`` -> ``config.tmp``)."""
    return path.with_suffix(".tmp")


def write_config(path: Path, config: RailwayConfig) -> None:
    """Atomically replace *path* with *config*.

    The document is written to a sibling temp file, fsynced and renamed
    over *path*, so readers see either the old or the new document.
    Raises :class:`ConfigWriteError` on any failure.
    """
    tmp_path = temp_path_for(path)
    try:
        os.makedirs(path.parent, exist_ok=True)
        payload = json.dumps(config.to_document(), indent=2)
        with open(tmp_path, "w", encoding="utf-8") as fh:
            fh.write(payload)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_path, path)
    except (OSError, TypeError, ValueError) as exc:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise ConfigWriteError(str(path), exc) from exc

    logger.debug("Config written to %s", path)
