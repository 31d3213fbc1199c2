"""Asset version model, parsing and resolution."""

from .compare import AssetPredicate, compare_descending, sort_newest_first
from .errors import (
    AssetResolutionError,
    IncompleteIdentifier,
    NoMatch,
    ReadFailure,
    UnparsableCatalogEntry,
)
from .models import AssetIdentifier, CatalogEntry, ResolutionOutcome, Version
from .parser import (
    parse_from_storage_name,
    parse_from_url,
    parse_version,
    serialize_asset_name,
)
from .resolver import compute_uri_path, default_path_for, find_best_matching_candidate

__all__ = [
    "AssetIdentifier",
    "AssetPredicate",
    "AssetResolutionError",
    "CatalogEntry",
    "IncompleteIdentifier",
    "NoMatch",
    "ReadFailure",
    "ResolutionOutcome",
    "UnparsableCatalogEntry",
    "Version",
    "compare_descending",
    "compute_uri_path",
    "default_path_for",
    "find_best_matching_candidate",
    "parse_from_storage_name",
    "parse_from_url",
    "parse_version",
    "serialize_asset_name",
    "sort_newest_first",
]
