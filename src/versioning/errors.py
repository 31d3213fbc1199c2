"""Error types raised while resolving assets.

None of these reach a client: the expansion layer converts every one of them
into a not-found answer.
"""


class AssetResolutionError(Exception):
    """Base class for asset resolution failures."""


class UnparsableCatalogEntry(AssetResolutionError):
    """A storage name does not follow the ``name@major.minor.patch`` grammar."""


class IncompleteIdentifier(AssetResolutionError):
    """Serialization was attempted on an identifier with a partial version."""


class NoMatch(AssetResolutionError):
    """No stored asset satisfies the requested version constraint."""


class ReadFailure(AssetResolutionError):
    """A file could not be read from the storage volume."""
