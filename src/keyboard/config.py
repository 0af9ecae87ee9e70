from __future__ import annotations
import string


class kcfg:
    # Keys drawn by the random key generator
    ALPHABET = string.ascii_lowercase

    # Jittered interval between key presses (milliseconds, inclusive bounds)
    MIN_INTERVAL_MS = 100
    MAX_INTERVAL_MS = 1000

    # Fixed interval alternative (seconds), used when explicitly requested
    FIXED_INTERVAL_S = 5.0
