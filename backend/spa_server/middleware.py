"""Response header layer forcing a Cache-Control directive."""

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send


class CacheControlMiddleware:
    """Override Cache-Control on every HTTP response, replacing any existing value."""

    def __init__(self, app: ASGIApp, value: str = "public, max-age=86400, immutable"):
        self.app = app
        self.value = value

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_cache_control(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers["Cache-Control"] = self.value
            await send(message)

        await self.app(scope, receive, send_with_cache_control)
