"""HTTP method override middleware.

Server-side counterpart of form method emulation: a POST carrying a
``_method`` form field (or an X-HTTP-Method-Override header) is dispatched
as that verb. Only urlencoded bodies are inspected; the body is buffered
and replayed unchanged to the wrapped application, in the order it arrived.

Wrap the outermost application so routing sees the rewritten method:

    app = MethodOverrideMiddleware(Litestar(route_handlers=[...]))
"""

import logging
from collections.abc import Iterable
from urllib.parse import parse_qs

from litestar.types import ASGIApp, Message, Receive, Scope, Send

from boundform.config import Settings, get_settings
from boundform.forms.methods import METHOD_FIELD_NAME

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = b"application/x-www-form-urlencoded"


class MethodOverrideMiddleware:
    """ASGI middleware that rewrites POST requests to the verb they emulate.

    Args:
        app: The ASGI application to wrap.
        methods: Verbs a request may be overridden to.
        field_name: Form field carrying the verb.
        header: Header carrying the verb (lowercase), or None to ignore headers.
        max_body_size: Buffering stops past this many bytes; the rest of the
            body streams through unparsed.
    """

    def __init__(
        self,
        app: ASGIApp,
        methods: Iterable[str] = ("PUT", "PATCH", "DELETE"),
        field_name: str = METHOD_FIELD_NAME,
        header: str | None = "x-http-method-override",
        max_body_size: int = 1024 * 1024,
    ) -> None:
        self.app = app
        self.methods = frozenset(m.upper() for m in methods)
        self.field_name = field_name
        self.header = header.lower().encode() if header else None
        self.max_body_size = max_body_size

    @classmethod
    def from_settings(cls, app: ASGIApp, settings: Settings | None = None) -> "MethodOverrideMiddleware":
        settings = settings or get_settings()
        return cls(
            app,
            methods=settings.override_methods,
            field_name=settings.method_field,
            header=settings.override_header or None,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope.get("method") != "POST":
            await self.app(scope, receive, send)
            return

        headers = {name.lower(): value for name, value in scope.get("headers", [])}
        requested: str | None = None

        if self.header and self.header in headers:
            requested = headers[self.header].decode("latin-1")

        content_type = headers.get(b"content-type", b"")
        if content_type.split(b";")[0].strip().lower() == FORM_CONTENT_TYPE:
            body, complete, receive = await self._buffer_body(receive)
            if complete and len(body) <= self.max_body_size:
                fields = parse_qs(body.decode("utf-8", errors="replace"), keep_blank_values=True)
                values = fields.get(self.field_name)
                if values:
                    requested = values[0]

        if requested:
            verb = requested.strip().upper()
            if verb in self.methods:
                logger.debug("Overriding POST %s as %s", scope.get("path", ""), verb)
                scope = {**scope, "method": verb}
            else:
                logger.warning("Ignoring method override to %r", requested)

        await self.app(scope, receive, send)

    async def _buffer_body(self, receive: Receive) -> tuple[bytes, bool, Receive]:
        """Buffer the request body up to max_body_size.

        Returns the buffered bytes, whether they are the whole body, and a
        receive that replays them before any held back message and the rest
        of the stream.
        """
        chunks = []
        size = 0
        complete = False
        pending: list[Message] = []
        while True:
            message = await receive()
            if message["type"] != "http.request":
                # Disconnected mid-body; deliver it after what was buffered
                pending.append(message)
                break
            chunk = message.get("body", b"")
            chunks.append(chunk)
            size += len(chunk)
            if not message.get("more_body", False):
                complete = True
                break
            if size > self.max_body_size:
                logger.debug("Request body exceeds %d bytes; not inspecting it", self.max_body_size)
                break

        body = b"".join(chunks)
        queued: list[Message] = []
        if chunks:
            queued.append({"type": "http.request", "body": body, "more_body": not complete})
        queued.extend(pending)

        async def replay() -> Message:
            if queued:
                return queued.pop(0)
            return await receive()

        return body, complete, replay
