import asyncio
import time
from types import SimpleNamespace

import pytest

from lazypeon.backends import KeystrokeBackend, PointerBackend, open_backends
from lazypeon.backends.pynput_backend import PynputKeystrokeBackend, PynputPointerBackend
from lazypeon.backends.pyautogui_backend import (
    PyAutoGUIKeystrokeBackend,
    PyAutoGUIPointerBackend,
)
from lazypeon.errors import BackendError
from lazypeon.geometry import Position


class FakeGui:
    def __init__(self):
        self.pos = (10, 20)
        self.calls = []
        self.fail = None

    def position(self):
        if self.fail:
            raise self.fail
        return self.pos

    def moveTo(self, x, y, _pause=True):
        if self.fail:
            raise self.fail
        self.calls.append(("moveTo", x, y, _pause))

    def press(self, key, _pause=True):
        if self.fail:
            raise self.fail
        self.calls.append(("press", key, _pause))


class FakeController:
    def __init__(self):
        self.position = (7, 8)
        self.tapped = []

    def tap(self, key):
        self.tapped.append(key)


def test_pyautogui_pointer_truncates_and_skips_pause():
    gui = FakeGui()
    backend = PyAutoGUIPointerBackend(gui)
    assert isinstance(backend, PointerBackend)
    assert asyncio.run(backend.read_position()) == Position(10.0, 20.0)
    asyncio.run(backend.move_to(Position(100.9, 55.2)))
    assert gui.calls == [("moveTo", 100, 55, False)]
    assert str(backend) == "pyautogui"


def test_pyautogui_failures_become_backend_errors():
    gui = FakeGui()
    gui.fail = RuntimeError("fail-safe triggered")
    backend = PyAutoGUIPointerBackend(gui)
    with pytest.raises(BackendError) as err:
        asyncio.run(backend.move_to(Position(0, 0)))
    assert err.value.operation == "move_to"
    assert err.value.backend == "pyautogui"
    assert isinstance(err.value.__cause__, RuntimeError)
    assert isinstance(err.value, OSError)

    with pytest.raises(BackendError, match="read_position failed on pyautogui"):
        asyncio.run(backend.read_position())


def test_pyautogui_keystrokes():
    gui = FakeGui()
    backend = PyAutoGUIKeystrokeBackend(gui)
    assert isinstance(backend, KeystrokeBackend)
    asyncio.run(backend.press("k"))
    assert gui.calls == [("press", "k", False)]
    gui.fail = OSError("no display")
    with pytest.raises(BackendError, match="press failed on pyautogui: no display"):
        asyncio.run(backend.press("k"))


def test_pynput_backends():
    controller = FakeController()
    pointer = PynputPointerBackend(controller)
    assert asyncio.run(pointer.read_position()) == Position(7.0, 8.0)
    asyncio.run(pointer.move_to(Position(-3.7, 4.2)))
    assert controller.position == (-3, 4)

    keys = PynputKeystrokeBackend(controller)
    asyncio.run(keys.press("m"))
    assert controller.tapped == ["m"]


def test_pynput_read_failure():
    pointer = PynputPointerBackend(SimpleNamespace())
    with pytest.raises(BackendError, match="read_position failed on pynput"):
        asyncio.run(pointer.read_position())


@pytest.mark.parametrize(
    "name,kwargs", [("telepathy", {}), ("browser", {"url": None})]
)
def test_open_backends_rejects_bad_selection(name, kwargs):
    async def _open():
        async with open_backends(name, **kwargs):
            pass

    with pytest.raises(ValueError):
        asyncio.run(_open())


class FakePage:
    def __init__(self, responses=()):
        self.responses = list(responses)
        self.sent = []

    async def send(self, command):
        self.sent.append(command)
        return self.responses.pop(0) if self.responses else None


def test_browser_backends_round_trip():
    browser = pytest.importorskip("lazypeon.backends.browser")
    page = FakePage([(SimpleNamespace(value=[12, 34]), None)])
    pointer = browser.BrowserPointerBackend(page)

    assert asyncio.run(pointer.read_position()) == Position(12.0, 34.0)
    asyncio.run(pointer.move_to(Position(40.6, 50.1)))
    assert len(page.sent) == 2

    keys = browser.BrowserKeystrokeBackend(page)
    asyncio.run(keys.press("a"))
    assert len(page.sent) == 4


def test_browser_script_error_is_backend_error():
    browser = pytest.importorskip("lazypeon.backends.browser")
    page = FakePage([(SimpleNamespace(value=None), "ReferenceError")])
    with pytest.raises(BackendError, match="read_position failed on browser"):
        asyncio.run(browser.BrowserPointerBackend(page).read_position())


def test_unwrap_evaluate_accepts_dict_responses():
    browser = pytest.importorskip("lazypeon.backends.browser")
    assert browser._unwrap_evaluate({"result": {"value": [1, 2]}}) == [1, 2]
    assert browser._unwrap_evaluate((SimpleNamespace(value=True),)) is True


class SlowGui(FakeGui):
    def position(self):
        time.sleep(0.3)
        return super().position()


class SlowController(FakeController):
    def tap(self, key):
        time.sleep(0.3)
        super().tap(key)


@pytest.mark.parametrize(
    "call",
    [
        lambda: PyAutoGUIPointerBackend(SlowGui()).read_position(),
        lambda: PynputKeystrokeBackend(SlowController()).press("q"),
    ],
)
def test_slow_native_call_leaves_event_loop_running(call):
    async def _run():
        pending = asyncio.create_task(call())
        ticks = 0
        while not pending.done():
            await asyncio.sleep(0.01)
            ticks += 1
        await pending
        return ticks

    assert asyncio.run(_run()) >= 10


def test_pyautogui_failsafe_switch():
    gui = FakeGui()
    PyAutoGUIPointerBackend(gui)
    assert gui.FAILSAFE is True
    PyAutoGUIPointerBackend(gui, failsafe=False)
    assert gui.FAILSAFE is False


def test_browser_read_reinstalls_tracker_after_reload():
    browser = pytest.importorskip("lazypeon.backends.browser")
    page = FakePage([(SimpleNamespace(value=[5, 6]), None)])
    pointer = browser.BrowserPointerBackend(page)
    assert asyncio.run(pointer.read_position()) == Position(5.0, 6.0)

    request = next(page.sent[0])
    assert request["method"] == "Runtime.evaluate"
    expression = request["params"]["expression"]
    assert "if (!window.__lazypeonPointer)" in expression
    assert "addEventListener('mousemove'" in expression
    assert expression.index("addEventListener") < expression.index("return [")
