"""Catch-all handler that serves the bundle with SPA fallback."""

from fastapi import Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from spa_server.assets import AssetIndex

NOT_FOUND_BODY = "404 Not Found"


class FallbackRouter:
    """Decide between a bundle asset, the entry document, or a 404.

    - ``/`` and ``/index.html`` serve the entry document.
    - A path found in the index serves that asset.
    - A missing path containing a dot looks like a file and gets a 404.
    - Any other missing path is a client-side route and gets the entry
      document, so the frontend router can take over.

    A route with a dot in it (``/v1.0/page``) is treated as a file and 404s.
    """

    def __init__(self, index: AssetIndex, entry_document: str = "index.html"):
        self.index = index
        self.entry_document_name = entry_document

    def resolve(self, path: str) -> Response:
        path = path.lstrip("/")

        if not path or path == self.entry_document_name:
            return self.entry_document()

        asset = self.index.lookup(path)
        if asset is not None:
            return Response(content=asset.data, media_type=asset.content_type)

        if "." in path:
            return self.not_found()
        return self.entry_document()

    def entry_document(self) -> Response:
        entry = self.index.lookup(self.entry_document_name)
        if entry is None:
            return self.not_found()
        return HTMLResponse(content=entry.data)

    def not_found(self) -> Response:
        return PlainTextResponse(NOT_FOUND_BODY, status_code=404)

    async def handle(self, request: Request) -> Response:
        return self.resolve(request.url.path)
