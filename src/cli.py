from __future__ import annotations
import argparse
import asyncio
import logging
import random
import signal
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .backends import BACKEND_NAMES, open_backends
from .errors import BackendError
from .keyboard import KeystrokeAgent, RandomKeyGenerator, summarize_keystrokes
from .keyboard import recorder as keystroke_recorder
from .keyboard.config import kcfg
from .pointer import PointerAgent, RandomWalk, summarize_moves
from .pointer import recorder as pointer_recorder
from .pointer.config import pcfg
from .pointer.render import save_pointer_trajectory_jpeg
from .scheduler import Delay, FixedInterval, JitterInterval, pointer_interval, run_agents
from .utils import HiResTimer

LOG_LEVELS = {"debug": logging.DEBUG, "info": logging.INFO}
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@dataclass(frozen=True)
class Settings:
    """Command-line configuration, read once at startup."""

    step_size_px: float = pcfg.STEP_SIZE_PX
    updates_per_sec: float = pcfg.UPDATES_PER_SEC
    key_interval_s: Optional[float] = None
    key_min_ms: int = kcfg.MIN_INTERVAL_MS
    key_max_ms: int = kcfg.MAX_INTERVAL_MS
    keyboard_enabled: bool = True
    backend: str = "pyautogui"
    url: Optional[str] = None
    headless: bool = False
    failsafe: bool = True
    seed: Optional[int] = None
    log_level: str = "info"
    trajectory_out: Optional[str] = None
    summary: bool = False

    def rng(self, stream: int) -> random.Random:
        """Independent random source per consumer; reproducible when seeded."""
        if self.seed is None:
            return random.Random()
        return random.Random(self.seed * 1000 + stream)

    def key_interval(self) -> Delay:
        if self.key_interval_s is not None:
            return FixedInterval(self.key_interval_s)
        return JitterInterval(self.key_min_ms, self.key_max_ms, self.rng(2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazypeon",
        description="Keep a session awake by drifting the pointer and pressing keys.",
    )
    parser.add_argument(
        "-s",
        "--step-size-px",
        type=float,
        default=pcfg.STEP_SIZE_PX,
        help="Random-walk step per pointer update, in pixels.",
    )
    parser.add_argument(
        "-u",
        "--updates-per-sec",
        type=float,
        default=pcfg.UPDATES_PER_SEC,
        help="Pointer updates per second.",
    )
    parser.add_argument(
        "--key-interval-s",
        type=float,
        default=None,
        help=(
            "Fixed seconds between key presses "
            f"(e.g. {kcfg.FIXED_INTERVAL_S}). Overrides the min/max jitter."
        ),
    )
    parser.add_argument(
        "--key-min-ms",
        type=int,
        default=kcfg.MIN_INTERVAL_MS,
        help="Minimum jittered milliseconds between key presses.",
    )
    parser.add_argument(
        "--key-max-ms",
        type=int,
        default=kcfg.MAX_INTERVAL_MS,
        help="Maximum jittered milliseconds between key presses.",
    )
    parser.add_argument(
        "--no-keyboard",
        action="store_true",
        help="Only move the pointer; never press keys.",
    )
    parser.add_argument(
        "-b",
        "--backend",
        choices=BACKEND_NAMES,
        default="pyautogui",
        help="Input injection backend.",
    )
    parser.add_argument("--url", help="Page to open with the browser backend.")
    parser.add_argument(
        "--headless", action="store_true", help="Run the browser backend headless."
    )
    parser.add_argument(
        "--no-failsafe",
        action="store_true",
        help="Disable the pyautogui corner fail-safe, which the walk can trip "
        "on its own during long unattended runs.",
    )
    parser.add_argument("--seed", type=int, help="Seed for reproducible runs.")
    parser.add_argument(
        "-l", "--log-level", choices=sorted(LOG_LEVELS), default="info"
    )
    parser.add_argument(
        "--trajectory-out",
        metavar="PATH",
        help="Write a JPEG of the pointer trajectory here on exit.",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Log pointer and keystroke summaries on exit.",
    )
    return parser


def parse_settings(argv: Optional[Sequence[str]] = None) -> Settings:
    """Parse and validate arguments; exits with status 2 on bad input."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.step_size_px > 0:
        parser.error("--step-size-px must be positive")
    if not args.updates_per_sec > 0:
        parser.error("--updates-per-sec must be positive")
    if args.key_interval_s is not None and args.key_interval_s < 0:
        parser.error("--key-interval-s must not be negative")
    if args.key_min_ms < 0 or args.key_max_ms < 0:
        parser.error("--key-min-ms/--key-max-ms must not be negative")
    if args.key_min_ms > args.key_max_ms:
        parser.error("--key-min-ms must not exceed --key-max-ms")
    if args.backend == "browser" and not args.url:
        parser.error("--url is required with --backend browser")

    return Settings(
        step_size_px=args.step_size_px,
        updates_per_sec=args.updates_per_sec,
        key_interval_s=args.key_interval_s,
        key_min_ms=args.key_min_ms,
        key_max_ms=args.key_max_ms,
        keyboard_enabled=not args.no_keyboard,
        backend=args.backend,
        url=args.url,
        headless=args.headless,
        failsafe=not args.no_failsafe,
        seed=args.seed,
        log_level=args.log_level,
        trajectory_out=args.trajectory_out,
        summary=args.summary,
    )


def configure_logging(level: str) -> None:
    """Process-wide logging setup; call once before anything runs."""
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    # Library loggers stay at INFO; only ours follow --log-level.
    logging.getLogger("lazypeon").setLevel(LOG_LEVELS[level])


def _stop_on_signal(
    loop: asyncio.AbstractEventLoop, sig: int, stop: asyncio.Event
) -> None:
    logger = logging.getLogger(__name__)
    logger.info("Received %s, stopping", signal.Signals(sig).name)
    stop.set()
    # A repeated signal kills the process even if shutdown itself hangs.
    loop.remove_signal_handler(sig)
    signal.signal(sig, signal.SIG_DFL)


def _install_signal_handlers(stop: asyncio.Event) -> List[signal.Signals]:
    loop = asyncio.get_running_loop()
    installed = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _stop_on_signal, loop, sig, stop)
            installed.append(sig)
        except (NotImplementedError, RuntimeError):
            # Windows: Ctrl+C arrives as KeyboardInterrupt instead
            pass
    return installed


async def run(settings: Settings, *, stop: Optional[asyncio.Event] = None) -> None:
    """Open the backends and drive both agents until stopped or failed."""
    logger = logging.getLogger(__name__)
    stop = stop if stop is not None else asyncio.Event()
    pointer_recorder.reset()
    keystroke_recorder.reset(seed=settings.seed)

    async with open_backends(
        settings.backend,
        url=settings.url,
        headless=settings.headless,
        failsafe=settings.failsafe,
    ) as (pointer_backend, keystroke_backend):
        logger.info("Pointer backend: %s", pointer_backend)

        walk = RandomWalk(settings.step_size_px, settings.rng(0))
        pointer_agent = await PointerAgent.create(
            pointer_backend, walk, recorder=pointer_recorder
        )
        pointer_delay = pointer_interval(settings.updates_per_sec)
        logger.info("Pointer update period: %.1f ms", pointer_delay.seconds * 1000.0)
        logger.info("Pointer step size: %s px", settings.step_size_px)

        keystroke_agent = None
        keystroke_delay = None
        if settings.keyboard_enabled:
            keystroke_agent = KeystrokeAgent(
                keystroke_backend,
                RandomKeyGenerator(settings.rng(1)),
                recorder=keystroke_recorder,
            )
            keystroke_delay = settings.key_interval()
            logger.info("Keystroke interval: %s", keystroke_delay)
        else:
            logger.info("Keystrokes disabled")

        installed = _install_signal_handlers(stop)
        logger.info("Starting loop")
        try:
            with HiResTimer():
                await run_agents(
                    pointer_agent, pointer_delay, keystroke_agent, keystroke_delay, stop
                )
        finally:
            loop = asyncio.get_running_loop()
            for sig in installed:
                loop.remove_signal_handler(sig)

        logger.info(
            "Stopped after %d pointer ticks (%d moves, %d manual resets)",
            pointer_agent.ticks,
            pointer_agent.moves,
            pointer_agent.manual_resets,
        )

    if settings.summary:
        logger.info(summarize_moves(pointer_recorder))
        if settings.keyboard_enabled:
            logger.info(summarize_keystrokes(keystroke_recorder))
    if settings.trajectory_out:
        await save_pointer_trajectory_jpeg(settings.trajectory_out, pointer_recorder)


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = parse_settings(argv)
    configure_logging(settings.log_level)
    logger = logging.getLogger(__name__)
    try:
        asyncio.run(run(settings))
    except BackendError as exc:
        logger.error("%s", exc)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
    return 0
