"""Disconnect Cancellation — abort in-flight requests whose client has gone away.

Invariants:
    - An HTTP request whose client disconnects before the response is sent has its
      handler task cancelled; the CancelledError unwinds the awaited store call and
      the request's session closes in its finally block
    - Nothing is sent for a cancelled request
    - A handler that finishes first is unaffected: its result or exception propagates
    - Once the response has started the handler runs to completion (servers report
      a disconnect as soon as the response body is sent, before dependency cleanup)
    - Non-HTTP scopes (lifespan) pass straight through

Design Decisions:
    - Pure ASGI middleware over BaseHTTPMiddleware: the handler runs as a task the
      middleware owns, so it can be cancelled (uvicorn only flags the disconnect)
    - receive() drained by a pump task into a queue; the handler reads the same
      messages from the queue, so request bodies are unaffected
"""

import asyncio
import contextlib
import logging

from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class CancelOnDisconnectMiddleware:
    """Race each HTTP request against its client's disconnect."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        inbox: asyncio.Queue[Message] = asyncio.Queue()
        disconnected = asyncio.Event()

        async def pump() -> None:
            while True:
                message = await receive()
                await inbox.put(message)
                if message["type"] == "http.disconnect":
                    disconnected.set()
                    return

        pump_task = asyncio.create_task(pump())
        watcher = asyncio.create_task(disconnected.wait())
        response_started = False

        async def tracked_send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        handler = asyncio.create_task(self.app(scope, inbox.get, tracked_send))
        try:
            done, _ = await asyncio.wait(
                {handler, watcher}, return_when=asyncio.FIRST_COMPLETED,
            )
            if handler in done or response_started:
                await handler
                return
            handler.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await handler
            logger.info(
                "Request cancelled (client disconnect)",
                extra={"method": scope.get("method"), "path": scope.get("path")},
            )
        finally:
            for task in (handler, watcher, pump_task):
                if not task.done():
                    task.cancel()
