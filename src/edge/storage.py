"""Read access to the asset storage volume."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from constants import Constants
from versioning.errors import ReadFailure
from versioning.models import CatalogEntry

logger = logging.getLogger(__name__)


class VolumeStorage:
    """Assets stored as ``<root>/<name>@<major>.<minor>.<patch>/...``."""

    def __init__(self, root: Union[str, Path]):
        """Initialize storage.

        Args:
            root: Volume mount path.
        """
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        """Resolved volume mount path."""
        return self._root

    def list_stored_assets(self) -> List[CatalogEntry]:
        """List the asset directories on the volume.

        Every top-level directory is reported; names that are not valid
        storage names are left for the resolver to skip.
        """
        try:
            with os.scandir(self._root) as it:
                children = list(it)
        except OSError as e:
            logger.error("Cannot list volume %s: %s", self._root, e)
            return []

        entries = []
        for child in children:
            if not child.is_dir() or child.name.startswith("."):
                continue
            entries.append(
                CatalogEntry(
                    storage_name=child.name,
                    default_path=self._read_default_path(Path(child.path)),
                )
            )
        return entries

    def _read_default_path(self, asset_dir: Path) -> Optional[str]:
        """Default path from the asset's package.json ("main", then "style")."""
        manifest = asset_dir / Constants.PACKAGE_JSON_FILE
        if not manifest.is_file():
            return None
        try:
            with open(manifest, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Unreadable %s: %s", manifest, e)
            return None
        if not isinstance(data, dict):
            return None

        for field_name in Constants.DEFAULT_PATH_FIELDS:
            value = data.get(field_name)
            if isinstance(value, str) and value.strip():
                return _normalize_relative(value)
        return None

    def resolve_file(self, uri_path: str) -> Optional[Path]:
        """Map a URI path to an existing file inside the volume, else None."""
        relative = uri_path.lstrip("/")
        if not relative:
            return None
        target = (self._root / relative).resolve()
        try:
            target.relative_to(self._root)
        except ValueError:
            return None
        if not target.is_file():
            return None
        return target

    def read_file(self, uri_path: str) -> bytes:
        """Read a file addressed by its URI path.

        Raises:
            ReadFailure: the file does not exist, is outside the volume or
                cannot be read.
        """
        target = self.resolve_file(uri_path)
        if target is None:
            raise ReadFailure(f"No such file: {uri_path}")
        try:
            return target.read_bytes()
        except OSError as e:
            raise ReadFailure(f"Cannot read {uri_path}: {e}") from e


def _normalize_relative(value: str) -> str:
    value = value.strip()
    while value.startswith("./"):
        value = value[2:]
    return value.lstrip("/")
