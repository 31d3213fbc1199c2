"""On-the-fly minification of scripts and stylesheets."""

import base64
import hashlib
import re

import rcssmin
import rjsmin

_MINIFIED_URI = re.compile(r"\.min\.(?:js|mjs|css)$")
_JS_URI = re.compile(r"\.m?js$")
_CSS_URI = re.compile(r"\.css$")


def is_minification_requested(uri: str) -> bool:
    """True for ``.min.js``, ``.min.mjs`` and ``.min.css`` URIs."""
    return bool(_MINIFIED_URI.search(uri))


def is_js_uri(uri: str) -> bool:
    return bool(_JS_URI.search(uri))


def is_css_uri(uri: str) -> bool:
    return bool(_CSS_URI.search(uri))


def resolve_non_minified_uri(uri: str) -> str:
    """``/a@1.0.0/x.min.js`` -> ``/a@1.0.0/x.js``."""
    return re.sub(r"\.min\.(js|mjs|css)$", r".\1", uri)


def minify_js(source: str) -> str:
    return rjsmin.jsmin(source)


def minify_css(source: str) -> str:
    return rcssmin.cssmin(source)


def minify_for_uri(uri: str, source: str) -> str:
    """Minify ``source`` according to the kind the URI names; other kinds pass through."""
    if is_js_uri(uri):
        return minify_js(source)
    if is_css_uri(uri):
        return minify_css(source)
    return source


def compute_etag(body: str) -> str:
    """Strong ETag: hex length and a truncated base64 SHA-1, quoted."""
    data = body.encode("utf-8")
    digest = base64.b64encode(hashlib.sha1(data).digest()).decode("ascii")[:27]
    return f'"{len(data):x}-{digest}"'
