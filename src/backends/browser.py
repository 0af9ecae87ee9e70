from __future__ import annotations
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Tuple

import zendriver
from zendriver import cdp

from ..errors import BackendError
from ..geometry import Position

# Installs a capture-phase mousemove listener so synthetic and human moves
# inside the tab are both reflected in the position we read back. A reload or
# navigation drops it, so every read re-runs this first; the fresh tracker
# starts at the viewport centre and the agent sees that as a manual jump.
_ENSURE_TRACKER_JS = """
  if (!window.__lazypeonPointer) {
    window.__lazypeonPointer = {
      x: Math.floor((window.innerWidth || 0) / 2),
      y: Math.floor((window.innerHeight || 0) / 2),
    };
    document.addEventListener('mousemove', (e) => {
      window.__lazypeonPointer = {x: e.clientX, y: e.clientY};
    }, true);
  }
"""

_TRACKER_JS = "(() => {" + _ENSURE_TRACKER_JS + "  return true;\n})()"

_READ_JS = (
    "(() => {"
    + _ENSURE_TRACKER_JS
    + "  return [window.__lazypeonPointer.x, window.__lazypeonPointer.y];\n})()"
)


def get_send_lock(page) -> asyncio.Lock:
    """Get or create a per-page lock serializing CDP input events."""
    if not hasattr(page, "_lazypeon_send_lock"):
        page._lazypeon_send_lock = asyncio.Lock()
    return page._lazypeon_send_lock


def _unwrap_evaluate(resp: Any) -> Any:
    """Return the plain value of a Runtime.evaluate response.

    zendriver returns ``(RemoteObject, ExceptionDetails | None)``; older builds
    hand back a dict.
    """
    details = None
    if isinstance(resp, tuple):
        resp, details = (resp[0], resp[1]) if len(resp) > 1 else (resp[0], None)
    if details is not None:
        raise RuntimeError(f"page script raised: {details}")
    if isinstance(resp, dict):
        result = resp.get("result", resp)
        return result.get("value") if isinstance(result, dict) else result
    return getattr(resp, "value", None)


async def _evaluate(page, expression: str) -> Any:
    resp = await page.send(
        cdp.runtime.evaluate(
            expression=expression, return_by_value=True, await_promise=False
        )
    )
    return _unwrap_evaluate(resp)


async def install_pointer_tracker(page) -> None:
    try:
        await _evaluate(page, _TRACKER_JS)
    except Exception as exc:
        raise BackendError("install_tracker", BrowserPointerBackend.name, exc) from exc


class BrowserPointerBackend:
    """Pointer backend driving a zendriver tab over CDP.

    Coordinates are viewport pixels of the tab, not screen pixels.
    """

    name = "browser"

    def __init__(self, page):
        self.page = page

    async def read_position(self) -> Position:
        try:
            value = await _evaluate(self.page, _READ_JS)
            x, y = value
        except Exception as exc:
            raise BackendError("read_position", self.name, exc) from exc
        return Position.of(x, y)

    async def move_to(self, position: Position) -> None:
        x, y = int(position.x), int(position.y)
        try:
            async with get_send_lock(self.page):
                await self.page.send(
                    cdp.input_.dispatch_mouse_event(
                        type_="mouseMoved", x=float(x), y=float(y)
                    )
                )
        except Exception as exc:
            raise BackendError("move_to", self.name, exc) from exc

    def __str__(self) -> str:
        return self.name


class BrowserKeystrokeBackend:
    """Keystroke backend sending keyDown/keyUp pairs to a zendriver tab."""

    name = "browser"

    def __init__(self, page):
        self.page = page

    async def press(self, character: str) -> None:
        try:
            async with get_send_lock(self.page):
                await self.page.send(
                    cdp.input_.dispatch_key_event(
                        type_="keyDown", key=character, text=character
                    )
                )
                await self.page.send(
                    cdp.input_.dispatch_key_event(type_="keyUp", key=character)
                )
        except Exception as exc:
            raise BackendError("press", self.name, exc) from exc

    def __str__(self) -> str:
        return self.name


@asynccontextmanager
async def open_browser_backends(
    url: str, *, headless: bool = False
) -> AsyncIterator[Tuple[BrowserPointerBackend, BrowserKeystrokeBackend]]:
    """Start a browser on ``url`` and yield backends bound to its tab."""
    logger = logging.getLogger(__name__)
    try:
        browser = await zendriver.start(headless=headless)
        page = await browser.get(url)
    except Exception as exc:
        raise BackendError("start", BrowserPointerBackend.name, exc) from exc
    try:
        await install_pointer_tracker(page)
        logger.info("Browser backend attached to %s", url)
        yield BrowserPointerBackend(page), BrowserKeystrokeBackend(page)
    finally:
        await browser.stop()
