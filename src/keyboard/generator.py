from __future__ import annotations
import random
from typing import Optional, Protocol

from .config import kcfg


class KeyGenerator(Protocol):
    def next_key(self) -> str: ...


class RandomKeyGenerator:
    """Uniformly random single characters, lowercase ASCII letters by default."""

    def __init__(
        self, rng: Optional[random.Random] = None, alphabet: str = kcfg.ALPHABET
    ):
        if not alphabet:
            raise ValueError("alphabet must not be empty")
        self.rng = rng if rng is not None else random.Random()
        self.alphabet = alphabet

    def next_key(self) -> str:
        return self.rng.choice(self.alphabet)
