from __future__ import annotations
import logging
from typing import Optional

from ..backends.base import KeystrokeBackend
from .generator import KeyGenerator
from .telemetry import KeystrokeRecorder


class KeystrokeAgent:
    """Presses one generated key per tick."""

    def __init__(
        self,
        backend: KeystrokeBackend,
        key_generator: KeyGenerator,
        *,
        recorder: Optional[KeystrokeRecorder] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.backend = backend
        self.key_generator = key_generator
        self.recorder = recorder
        self.logger = logger or logging.getLogger(__name__)
        self.presses = 0

    async def update(self) -> None:
        key = self.key_generator.next_key()
        await self.backend.press(key)
        self.presses += 1
        self.logger.debug("Pressed key: %r", key)
        if self.recorder is not None:
            self.recorder.log(key)
