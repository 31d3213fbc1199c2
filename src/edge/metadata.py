"""Generation of per-directory file listings for zip downloads.

Each directory below the volume root receives a ``.directory.txt`` file
listing every file beneath it, one per line::

    - 20 /bob@1.3.3/dist/index.css dist/index.css

that is: size in bytes, URI path on the volume, path relative to the
directory (the format expected by nginx mod_zip).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional, Union

from constants import AutoExpandInit, Constants

logger = logging.getLogger(__name__)


def directory_entries(root: Path, directory: Path) -> List[str]:
    """Listing lines for every file below ``directory``."""
    lines = []
    for path in sorted(_walk_files(directory)):
        if path.name == Constants.DIRECTORY_METADATA_FILE:
            continue
        uri_path = "/" + path.relative_to(root).as_posix()
        relative = path.relative_to(directory).as_posix()
        lines.append(f"- {path.stat().st_size} {uri_path} {relative}")
    return lines


def _walk_files(directory: Path) -> Iterator[Path]:
    for current, _dirs, files in os.walk(directory):
        for name in files:
            yield Path(current) / name


def generate_directory_metadata(
    root: Union[str, Path], mode: Optional[str]
) -> List[Path]:
    """Write ``.directory.txt`` into every directory below ``root``.

    Args:
        root: Volume mount path.
        mode: "true" writes missing files only, "always" rewrites every file;
            any other value skips generation.

    Returns:
        Paths of the metadata files written.
    """
    if mode not in (AutoExpandInit.MISSING.value, AutoExpandInit.ALWAYS.value):
        logger.info(
            "%s set to %r; skipping directory metadata generation",
            Constants.ENV_PATH_AUTO_EXPAND_INIT, mode,
        )
        return []

    root = Path(root).resolve()
    written = []
    logger.info("Generating metadata files...")
    for current, dirs, _files in os.walk(root):
        dirs.sort()
        for name in dirs:
            directory = Path(current) / name
            metadata_path = directory / Constants.DIRECTORY_METADATA_FILE
            if mode == AutoExpandInit.MISSING.value and metadata_path.exists():
                continue
            logger.debug("   %s", directory)
            lines = directory_entries(root, directory)
            metadata_path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
            written.append(metadata_path)
    logger.info("All metadata files generated (%d written).", len(written))
    return written
