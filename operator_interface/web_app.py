"""
Web App - HTTP observer endpoint

Routes:
- GET /            status page with an EventSource subscriber
- GET /qrcode.svg  latest QR challenge (empty before the first scan)
- GET /logout      log the bot account out
- GET /events      server-sent events mirrored from the broadcast hub
"""

import logging
from typing import Awaitable, Callable

from fastapi import FastAPI
from fastapi.responses import HTMLResponse, PlainTextResponse, Response, StreamingResponse

from core.broadcast_hub import BroadcastHub, Observer
from core.event_log import EventLog, ERROR_MARKER
from chat_interface.states import SessionState

from .page import render_page

logger = logging.getLogger(__name__)

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


class ObserverStream:
    """
    SSE frames for one client.

    The observer is released exactly once: when the hub closes it, when the
    stream is closed, or when the read is cancelled by a disconnect.
    """

    def __init__(self, hub: BroadcastHub, observer: Observer, event_log: EventLog):
        self.hub = hub
        self.observer = observer
        self.event_log = event_log
        self._frames = observer.stream()
        self._released = False

    def __aiter__(self):
        return self

    async def __anext__(self) -> str:
        try:
            return await self._frames.__anext__()
        except BaseException:
            # End of stream, cancellation on disconnect, or a failed read
            self._release()
            raise

    async def aclose(self):
        self._release()
        await self._frames.aclose()

    def _release(self):
        if self._released:
            return
        self._released = True
        self.hub.unsubscribe(self.observer)
        self.event_log.server(
            f"事件订阅者 {self.observer.observer_id} 已断开（剩余 {self.hub.observer_count}）"
        )


class ObserverStreamingResponse(StreamingResponse):
    """StreamingResponse that always releases its observer, even on a failed write"""

    async def __call__(self, scope, receive, send):
        try:
            await super().__call__(scope, receive, send)
        finally:
            await self.body_iterator.aclose()


def create_app(
    state: SessionState,
    event_log: EventLog,
    hub: BroadcastHub,
    request_logout: Callable[[], Awaitable[None]],
    title: str = "Greeter Bot"
) -> FastAPI:
    """
    Build the operator FastAPI application.

    Args:
        state: Session state (read only)
        event_log: Journal for server-side entries
        hub: Broadcast hub the SSE stream subscribes to
        request_logout: Coroutine that logs the bot account out
        title: Page title (bot name)
    """
    app = FastAPI(title=title, docs_url=None, redoc_url=None, openapi_url=None)

    @app.get("/", response_class=HTMLResponse)
    async def index():
        return render_page(
            title=title,
            logged_in_name=state.logged_in_name,
            has_qrcode=state.current_qr_svg is not None,
            error_marker=ERROR_MARKER
        )

    @app.get("/qrcode.svg")
    async def qrcode_svg():
        return Response(content=state.current_qr_svg or "", media_type="image/svg+xml")

    @app.get("/logout", response_class=PlainTextResponse)
    async def logout():
        event_log.server("收到 HTTP 登出请求")
        try:
            await request_logout()
        except Exception as e:
            event_log.server_error(f"登出失败：{e}")
            return PlainTextResponse(f"Logout failed: {e}", status_code=500)
        return "Logged out"

    @app.get("/events")
    async def events():
        observer = hub.subscribe()
        event_log.server(f"事件订阅者 {observer.observer_id} 已连接（共 {hub.observer_count}）")
        return ObserverStreamingResponse(
            ObserverStream(hub, observer, event_log),
            media_type="text/event-stream",
            headers=SSE_HEADERS
        )

    return app
