"""ASGI handler — translates ASGI scope/messages to groute types.

The only component that touches raw HTTP ASGI messages. Builds the
Request, hands it to the multiplexer, and sends the Response back.
"""

from groute._internal.asgi import Receive, Scope, Send
from groute.errors import HTTPError
from groute.http.request import Request
from groute.routing.protocol import Multiplexer
from groute.server.errors import http_error_response, internal_error_response
from groute.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    mux: Multiplexer,
    debug: bool = False,
) -> None:
    """Process a single HTTP request through the multiplexer."""
    request = Request.from_asgi(scope, receive)
    try:
        response = await mux.dispatch(request)
    except HTTPError as exc:
        response = http_error_response(exc, request)
    except Exception as exc:
        response = internal_error_response(exc, request, debug=debug)
    await send_response(response, send, method=request.method)


async def handle_lifespan(receive: Receive, send: Send) -> None:
    """Acknowledge the ASGI lifespan protocol.

    A router tree has nothing to start or stop; it only has to tell the
    server it is ready and that it shut down.
    """
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return


async def handle_websocket(receive: Receive, send: Send) -> None:
    """Refuse a WebSocket connection.

    Routes serve HTTP only. Closing before accepting makes the server
    reject the handshake with a 403.
    """
    message = await receive()
    if message["type"] == "websocket.connect":
        await send({"type": "websocket.close", "code": 1000})
