"""ASGI response sending — translates a snapstatic Response to ASGI messages.

Bodies are always fully buffered; one start message, one body message.
"""

from snapstatic._internal.asgi import Send
from snapstatic.http.response import Response


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send, *, include_body: bool = True) -> None:
    """Translate a Response into ASGI ``send()`` calls.

    ``include_body=False`` is used for HEAD: headers (including an
    explicit ``Content-Length``) are sent as for GET, the body is not.
    A ``Content-Length`` header is added only when the response does
    not already carry one and its status allows a body.
    """
    body = response.body if _body_allowed(response.status) else b""

    raw_headers: list[tuple[bytes, bytes]] = [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in response.headers
    ]
    has_length = any(name == b"content-length" for name, _ in raw_headers)
    if _body_allowed(response.status) and not has_length:
        raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body if include_body else b"",
        }
    )
