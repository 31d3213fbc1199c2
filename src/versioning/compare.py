"""Ordering and matching of asset versions."""

import functools
from typing import Iterable, List

import semantic_version

from .models import AssetIdentifier, Version


def _as_semver(version: Version) -> semantic_version.Version:
    return semantic_version.Version(
        major=version.major, minor=version.minor, patch=version.patch
    )


def compare_descending(left: AssetIdentifier, right: AssetIdentifier) -> int:
    """Comparator putting newer versions first.

    Only meaningful for identifiers sharing a name. Catalog versions are
    always precise; partial versions fall back to ordering keys where an
    absent component sorts lowest.
    """
    if left.version.is_precise and right.version.is_precise:
        lhs, rhs = _as_semver(left.version), _as_semver(right.version)
    else:
        lhs, rhs = left.version.ordering_key(), right.version.ordering_key()

    if lhs > rhs:
        return -1
    if lhs < rhs:
        return 1
    return 0


def sort_newest_first(assets: Iterable[AssetIdentifier]) -> List[AssetIdentifier]:
    """Stable sort, newest version first; ties keep their listing order."""
    return sorted(assets, key=functools.cmp_to_key(compare_descending))


class AssetPredicate:
    """Decides whether a stored asset satisfies a requested version constraint."""

    def __init__(self, requested: AssetIdentifier):
        self._requested = requested

    def matches(self, candidate: AssetIdentifier) -> bool:
        """True when every present requested component equals the candidate's.

        Absent requested components accept any candidate value, so an
        unconstrained request matches every version.
        """
        if not self._requested.same_family(candidate):
            return False
        return all(
            wanted is None or wanted == actual
            for wanted, actual in zip(
                self._requested.version.components, candidate.version.components
            )
        )
