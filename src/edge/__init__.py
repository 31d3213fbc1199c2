"""A7 edge package.

This package serves versioned assets from a storage volume and expands
partial requests (``/name@1``, ``/name``) into canonical URIs.
"""

from .cache import CatalogCache
from .config import EdgeConfig
from .expand import Expander, NotFound, Redirect, Serve
from .server import AssetEdgeServer
from .storage import VolumeStorage

__all__ = [
    "AssetEdgeServer",
    "CatalogCache",
    "EdgeConfig",
    "Expander",
    "NotFound",
    "Redirect",
    "Serve",
    "VolumeStorage",
]
