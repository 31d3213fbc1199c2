"""Expansion of asset request URIs into serve, redirect or not-found answers.

The expansion supports:
- versioning: ``/bob@1`` is answered with the newest stored ``bob@1.x.y``
- default paths: ``/bob@1.3.4`` points at the asset's default file
- on-the-fly minification of ``.min.js``, ``.min.mjs`` and ``.min.css``
- optional wildcard CORS headers on redirects
- 302 or internal redirects
"""

from __future__ import annotations

import logging
import urllib.parse
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Protocol, Sequence, Union

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants
from versioning.errors import NoMatch, ReadFailure
from versioning.models import CatalogEntry
from versioning.parser import parse_from_url, serialize_asset_name
from versioning.resolver import (
    canonical_uri,
    compute_uri_path,
    default_path_for,
    find_best_matching_candidate,
)

from .config import EdgeConfig
from .minify import compute_etag, is_minification_requested, minify_for_uri, resolve_non_minified_uri

logger = logging.getLogger(__name__)


class AssetStorage(Protocol):
    """What the expander needs from the storage volume."""

    def list_stored_assets(self) -> Sequence[CatalogEntry]: ...

    def read_file(self, uri_path: str) -> bytes: ...


@dataclass(frozen=True)
class Serve:
    """Answer with a body."""
    body: bytes
    status: int = 200
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Redirect:
    """Send the client (or the server itself, when ``internal``) to ``uri``."""
    uri: str
    status: int = 302
    internal: bool = False
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class NotFound:
    """Nothing to serve; answered with the not-found page."""
    uri: str = Constants.NOT_FOUND_PATH


Outcome = Union[Serve, Redirect, NotFound]


class Expander:
    """Decides, for one request URI, whether to serve, redirect or 404."""

    def __init__(
        self,
        storage: AssetStorage,
        config: EdgeConfig,
        catalog: Optional[Callable[[], Sequence[CatalogEntry]]] = None,
    ):
        """Initialize the expander.

        Args:
            storage: Storage volume used for file reads.
            config: Edge configuration (CORS, redirect and serving flags).
            catalog: Source of catalog snapshots; defaults to listing the storage.
        """
        self._storage = storage
        self._config = config
        self._catalog = catalog or storage.list_stored_assets

    def expand(self, uri: str) -> Outcome:
        """Expand a percent-encoded request URI. Never raises; failures become NotFound."""
        logger.info("----- expand: %s -----", uri)
        try:
            return self._expand(uri)
        except NoMatch as e:
            logger.warning("%s", e)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Expansion of %s failed: %s", uri, e, exc_info=True)
        return self._not_found()

    def _expand(self, uri: str) -> Outcome:
        uri_path = urllib.parse.unquote(urllib.parse.urlsplit(uri).path)
        requested = parse_from_url(uri)
        if not requested.name:
            return self._not_found()

        if is_debug_enabled(logger):
            logger.debug(
                "Expansion decision inputs",
                extra=extra_context(
                    event="decision",
                    component="expand",
                    uri=uri_path,
                    version_precise=requested.is_version_precise,
                    uri_complete=requested.is_uri_complete,
                ),
            )

        if requested.is_uri_complete:
            return self._serve_complete(uri_path)

        catalog = self._catalog()

        if not requested.is_version_precise:
            outcome = find_best_matching_candidate(requested, catalog)
            if outcome.best_match is None:
                raise NoMatch(f"No stored version of {requested.name!r} matches {str(requested.version) or 'latest'}")
            target = compute_uri_path(requested, outcome.best_match, catalog)
            if not target:
                logger.warning("No path to serve for %s", serialize_asset_name(outcome.best_match))
                return self._not_found()
            return self._redirect(target)

        if not requested.path:
            default_path = default_path_for(catalog, requested)
            if not default_path:
                return self._not_found()
            return self._redirect(canonical_uri(requested, default_path))

        return self._not_found()

    def _serve_complete(self, uri_path: str) -> Outcome:
        """Precise version and explicit path: no resolution, only serving."""
        if is_minification_requested(uri_path):
            logger.info("Minification requested")
            return self._serve_minified(uri_path)

        # Normally the server answered existing files before expanding.
        if self._config.serve_files:
            try:
                return Serve(body=self._storage.read_file(uri_path))
            except ReadFailure as e:
                logger.warning("%s", e)
        return self._not_found()

    def _serve_minified(self, uri_path: str) -> Serve:
        try:
            existing = self._storage.read_file(uri_path)
        except ReadFailure:
            existing = b""
        if existing:
            return Serve(body=existing)

        source = b""
        source_path = resolve_non_minified_uri(uri_path)
        try:
            source = self._storage.read_file(source_path)
        except ReadFailure as e:
            logger.warning("No source to minify for %s: %s", uri_path, e)

        minified = minify_for_uri(uri_path, source.decode("utf-8", errors="replace"))
        return Serve(
            body=minified.encode("utf-8"),
            headers={
                Constants.HEADER_CACHE_TAG: Constants.MINIFIED_CACHE_TAG,
                Constants.HEADER_ETAG: compute_etag(minified),
            },
        )

    def _redirect(self, target: str) -> Redirect:
        headers = {}
        if self._config.cors_all:
            headers["access-control-allow-origin"] = "*"
            headers["access-control-allow-headers"] = "*"

        if self._config.path_auto_resolve:
            logger.info("internal redirect: %s", target)
            return Redirect(uri=target, internal=True, headers=headers)
        logger.info("302: %s", target)
        return Redirect(uri=target, headers=headers)

    @staticmethod
    def _not_found() -> NotFound:
        logger.warning("internal 404")
        return NotFound()
