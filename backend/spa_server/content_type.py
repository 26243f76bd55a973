"""Content-type classification for bundle assets.

``content_type_for`` is the canonical extension table. ``resolve_content_type``
is what the server uses for assets it actually serves: the table wins for the
extensions it knows, the ``mimetypes`` sniff (the same one Starlette's
``FileResponse`` uses) covers the rest, and octet-stream is the last resort.
"""

import mimetypes

OCTET_STREAM = "application/octet-stream"

CONTENT_TYPES = {
    "html": "text/html",
    "css": "text/css",
    "js": "application/javascript",
    "json": "application/json",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "svg": "image/svg+xml",
    "txt": "text/plain",
}


def extension_of(path: str) -> str:
    """Lower-cased text after the last dot, or '' when there is no dot."""
    if "." not in path:
        return ""
    return path.rsplit(".", 1)[1].lower()


def content_type_for(path: str) -> str:
    return CONTENT_TYPES.get(extension_of(path), OCTET_STREAM)


def resolve_content_type(path: str) -> str:
    """Content type for a served asset.

    The table is checked before the sniff, so served types never disagree
    with ``content_type_for`` (``mimetypes`` reports ``.js`` as
    ``text/javascript`` on recent Pythons).
    """
    known = content_type_for(path)
    if known != OCTET_STREAM:
        return known
    guessed, _ = mimetypes.guess_type(path, strict=False)
    return guessed or OCTET_STREAM
