"""Data models for asset versions, identifiers and catalog entries."""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Version:
    """Up to three version components; ``None`` means the component is absent.

    Absent is distinct from zero: ``Version(1, 0)`` only constrains major and
    minor, and leaves patch open.
    """
    major: Optional[int] = None
    minor: Optional[int] = None
    patch: Optional[int] = None

    @property
    def components(self) -> Tuple[Optional[int], Optional[int], Optional[int]]:
        """Return (major, minor, patch)."""
        return (self.major, self.minor, self.patch)

    @property
    def is_precise(self) -> bool:
        """True when major, minor and patch are all present."""
        return all(c is not None for c in self.components)

    @property
    def is_unconstrained(self) -> bool:
        """True when no component is present (i.e. "latest")."""
        return all(c is None for c in self.components)

    def ordering_key(self) -> Tuple[int, int, int]:
        """Integer triple used for ordering; absent components sort lowest."""
        return tuple(-1 if c is None else c for c in self.components)  # type: ignore[return-value]

    def __str__(self) -> str:
        return ".".join(str(c) for c in self.components if c is not None)


@dataclass(frozen=True)
class AssetIdentifier:
    """A requested or stored asset: name, (partial) version and sub-path."""
    name: str
    version: Version = Version()
    path: Optional[str] = None  # sub-path inside the asset, no leading slash

    @property
    def is_version_precise(self) -> bool:
        """True when the version carries all three components."""
        return self.version.is_precise

    @property
    def is_uri_complete(self) -> bool:
        """True when nothing needs resolving: precise version and explicit path."""
        return bool(self.path) and self.is_version_precise

    def same_family(self, other: "AssetIdentifier") -> bool:
        """Two identifiers belong to the same asset family when names are equal."""
        return self.name == other.name


@dataclass(frozen=True)
class CatalogEntry:
    """One stored asset as listed by the storage volume."""
    storage_name: str  # "name@major.minor.patch"
    default_path: Optional[str] = None


@dataclass(frozen=True)
class ResolutionOutcome:
    """Result of a resolution; ``best_match`` is None when nothing matched."""
    best_match: Optional[AssetIdentifier]
    candidate_count: int = 0

    @property
    def found(self) -> bool:
        """True when a best match exists."""
        return self.best_match is not None
