"""Resolution of a requested asset against the stored catalog."""

import logging
import urllib.parse
from typing import List, Optional, Sequence

from .compare import AssetPredicate, sort_newest_first
from .errors import UnparsableCatalogEntry
from .models import AssetIdentifier, CatalogEntry, ResolutionOutcome
from .parser import parse_from_storage_name, serialize_asset_name

logger = logging.getLogger(__name__)


def eligible_candidates(
    requested: AssetIdentifier, catalog: Sequence[CatalogEntry]
) -> List[AssetIdentifier]:
    """Parse the catalog and keep entries named like the request, newest first."""
    candidates = []
    for entry in catalog:
        try:
            asset = parse_from_storage_name(entry.storage_name)
        except UnparsableCatalogEntry as e:
            logger.debug("Skipping catalog entry: %s", e)
            continue
        if asset.same_family(requested):
            candidates.append(asset)
    return sort_newest_first(candidates)


def find_best_matching_candidate(
    requested: AssetIdentifier, catalog: Sequence[CatalogEntry]
) -> ResolutionOutcome:
    """Find the newest stored asset satisfying the requested version.

    Candidates are ordered before filtering, so the first survivor is always
    the newest match.
    """
    ordered = eligible_candidates(requested, catalog)
    predicate = AssetPredicate(requested)
    best_match = next((asset for asset in ordered if predicate.matches(asset)), None)

    if best_match is not None:
        logger.info(
            "Found best match for %s@%s: %s",
            requested.name, requested.version, serialize_asset_name(best_match),
        )
    else:
        logger.warning(
            "Did not find best match for %s@%s among %d candidates",
            requested.name, requested.version, len(ordered),
        )
    return ResolutionOutcome(best_match=best_match, candidate_count=len(ordered))


def default_path_for(
    catalog: Sequence[CatalogEntry], identifier: AssetIdentifier
) -> Optional[str]:
    """Default path registered for the exact (precise) asset, if any."""
    if not identifier.name or not identifier.is_version_precise:
        return None
    storage_name = serialize_asset_name(identifier)
    for entry in catalog:
        if entry.storage_name == storage_name:
            return entry.default_path or None
    return None


def compute_uri_path(
    requested: AssetIdentifier,
    candidate: AssetIdentifier,
    catalog: Sequence[CatalogEntry],
) -> Optional[str]:
    """Canonical URI for a resolved candidate.

    Uses the requested sub-path when given, else the candidate's default
    path. Returns None when neither exists.
    """
    serialize_asset_name(candidate)  # raises IncompleteIdentifier for partial candidates
    path = requested.path or default_path_for(catalog, candidate)
    if not path:
        return None
    return canonical_uri(candidate, path)


def canonical_uri(identifier: AssetIdentifier, path: str) -> str:
    """Percent-encoded ``/name@x.y.z/path`` for a precise identifier."""
    storage_name = urllib.parse.quote(serialize_asset_name(identifier), safe="@")
    return "/" + storage_name + "/" + urllib.parse.quote(path, safe="/")
