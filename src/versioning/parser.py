"""Parsing and serialization of asset identifiers.

Request URIs look like ``/{name}[@{major}[.{minor}[.{patch}]]][/{subpath}]``;
storage names look like ``{name}@{major}.{minor}.{patch}``.
"""

import logging
import re
import urllib.parse
from typing import List, Optional, Tuple

import semantic_version

from .errors import IncompleteIdentifier, UnparsableCatalogEntry
from .models import AssetIdentifier, Version

logger = logging.getLogger(__name__)

_NUMERIC_TOKEN = re.compile(r"^[0-9]+$")


def split_name_and_version(segment: str) -> Tuple[str, Optional[str]]:
    """Split ``name@version`` on the first ``@``; version is None without one."""
    if "@" not in segment:
        return segment, None
    name, version = segment.split("@", 1)
    return name, version


def parse_version(raw: Optional[str]) -> Version:
    """Parse a dot-separated, possibly partial, version string.

    The first token that is not a non-negative integer makes that component
    and every following one absent. Tokens past the third are ignored.
    """
    if not raw:
        return Version()

    components: List[Optional[int]] = [None, None, None]
    for index, token in enumerate(raw.split(".")[:3]):
        if not _NUMERIC_TOKEN.match(token):
            logger.debug("Malformed version token %r in %r, treating as absent", token, raw)
            break
        components[index] = int(token)
    return Version(*components)


def parse_from_url(uri: str) -> AssetIdentifier:
    """Parse a request URI into a (possibly partial) asset identifier.

    ``uri`` is percent-encoded, as sent on the wire. It is split first and
    each piece decoded once, so an encoded ``%40`` or ``%2F`` never acts as
    a separator. The query string and fragment are dropped. An empty name is
    returned as is; callers decide that nothing can be resolved from it.
    """
    path = urllib.parse.urlsplit(uri).path
    path = path[1:] if path.startswith("/") else path

    segment, _, remainder = path.partition("/")
    name, raw_version = split_name_and_version(segment)
    unquote = urllib.parse.unquote

    return AssetIdentifier(
        name=unquote(name),
        version=parse_version(unquote(raw_version) if raw_version else None),
        path=unquote(remainder) or None,
    )


def parse_from_storage_name(storage_name: str) -> AssetIdentifier:
    """Parse a catalog storage name into a fully precise identifier.

    Raises:
        UnparsableCatalogEntry: the name is empty or the version is not a
            plain ``major.minor.patch`` triple.
    """
    name, raw_version = split_name_and_version(storage_name.strip())
    if not name or not raw_version:
        raise UnparsableCatalogEntry(f"Not a versioned storage name: {storage_name!r}")

    try:
        parsed = semantic_version.Version(raw_version)
    except ValueError as e:
        raise UnparsableCatalogEntry(f"Invalid version in {storage_name!r}: {e}") from e

    if parsed.prerelease or parsed.build:
        raise UnparsableCatalogEntry(f"Pre-release or build metadata not supported: {storage_name!r}")

    return AssetIdentifier(
        name=name,
        version=Version(parsed.major, parsed.minor, parsed.patch),
    )


def serialize_asset_name(identifier: AssetIdentifier) -> str:
    """Serialize a fully precise identifier to ``name@major.minor.patch``.

    Raises:
        IncompleteIdentifier: the name is empty or a version component is absent.
    """
    if not identifier.name or not identifier.version.is_precise:
        raise IncompleteIdentifier(
            f"Cannot serialize partial identifier {identifier.name!r}@{identifier.version}"
        )
    version = identifier.version
    return f"{identifier.name}@{version.major}.{version.minor}.{version.patch}"
