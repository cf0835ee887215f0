"""JSON request body parsing middleware.

Requests declaring ``Content-Type: application/json`` have their body read,
size-checked and decoded before routing takes place. Bodies that cannot be
parsed are answered with a client error regardless of the target path, so a
bad payload never reaches a route handler.

The parsed value is left on ``request.state.json_body`` and the raw bytes are
replayed downstream unchanged.
"""

import codecs
import json
import logging
from typing import Any, Optional, Tuple

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"
DEFAULT_LIMIT = 100 * 1024
STRICT_FIRST_CHARS = ("{", "[")


class BodyParseError(Exception):
    """Raised when a JSON request body is rejected."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


def parse_content_type(value: str) -> Tuple[str, dict]:
    """Split a Content-Type header into its media type and parameters."""
    media_type, _, rest = value.partition(";")
    params = {}
    for item in rest.split(";"):
        key, sep, val = item.strip().partition("=")
        if sep:
            params[key.strip().lower()] = val.strip().strip('"')
    return media_type.strip().lower(), params


def decode_json_body(body: bytes, charset: Optional[str] = None) -> Any:
    """Decode a raw request body the way the JSON body parser accepts it.

    Empty bodies become an empty object. Only objects and arrays are accepted
    at the top level.
    """
    charset = (charset or "utf-8").lower()
    if not charset.startswith("utf-"):
        raise BodyParseError(415, f'unsupported charset "{charset.upper()}"')
    try:
        codec = codecs.lookup(charset)
    except LookupError:
        raise BodyParseError(415, f'unsupported charset "{charset.upper()}"')

    if not body:
        return {}

    try:
        text = body.decode(codec.name)
    except UnicodeDecodeError:
        raise BodyParseError(400, "Request body is not valid " + charset)

    # A leading BOM is tolerated, anything else must open an object or array.
    text = text.lstrip("\ufeff")
    stripped = text.lstrip(" \t\n\r")
    if not stripped:
        return {}
    if not stripped.startswith(STRICT_FIRST_CHARS):
        raise BodyParseError(400, "JSON body must be an object or an array")

    try:
        return json.loads(text)
    except ValueError as e:
        raise BodyParseError(400, f"Malformed JSON body: {e}")


class JSONBodyParserMiddleware:
    """ASGI middleware rejecting unparsable JSON bodies with 4xx responses."""

    def __init__(self, app: ASGIApp, limit: int = DEFAULT_LIMIT) -> None:
        self.app = app
        self.limit = limit

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        media_type, params = parse_content_type(headers.get("content-type", ""))
        if media_type != JSON_MEDIA_TYPE:
            await self.app(scope, receive, send)
            return

        try:
            body = await self._read_body(headers, receive)
            parsed = decode_json_body(body, params.get("charset"))
        except BodyParseError as e:
            logger.debug(f"Rejected JSON body for {scope.get('method')} {scope.get('path')}: {e.detail}")
            response = JSONResponse({"detail": e.detail}, status_code=e.status_code)
            await response(scope, receive, send)
            return

        scope.setdefault("state", {})["json_body"] = parsed
        await self.app(scope, self._replay(body, receive), send)

    async def _read_body(self, headers: Headers, receive: Receive) -> bytes:
        declared = headers.get("content-length")
        if declared is not None and declared.isdigit() and int(declared) > self.limit:
            raise BodyParseError(413, "request entity too large")

        chunks = []
        received = 0
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                break
            chunk = message.get("body", b"")
            received += len(chunk)
            if received > self.limit:
                raise BodyParseError(413, "request entity too large")
            chunks.append(chunk)
            more_body = message.get("more_body", False)
        return b"".join(chunks)

    @staticmethod
    def _replay(body: bytes, receive: Receive) -> Receive:
        sent = False

        async def replay_receive() -> Message:
            nonlocal sent
            if not sent:
                sent = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        return replay_receive
