from __future__ import annotations
from collections import Counter
from typing import List, Optional

from .telemetry import KeystrokeRecorder, recorder as global_recorder


def summarize_keystrokes(rec: Optional[KeystrokeRecorder] = None) -> str:
    """
    Reports:
      - Key presses and distinct keys
      - Most common key
      - Mean / min / max interval between presses
      - Seed used
    """
    rec = rec or global_recorder
    evs = rec.events
    if not evs:
        return "No keystroke data"

    counts = Counter(ev.value for ev in evs)
    top_key, top_count = counts.most_common(1)[0]

    intervals: List[float] = [
        evs[i].t - evs[i - 1].t for i in range(1, len(evs)) if evs[i].t >= evs[i - 1].t
    ]
    if intervals:
        mean_dt = sum(intervals) / len(intervals)
        interval_line = (
            f"{mean_dt * 1000.0:.0f} / {min(intervals) * 1000.0:.0f} / "
            f"{max(intervals) * 1000.0:.0f} ms"
        )
    else:
        interval_line = "N/A"

    return (
        "Keystroke Summary:\n"
        f"  Presses: {len(evs)}\n"
        f"  Distinct keys: {len(counts)}\n"
        f"  Most common: {top_key!r} x{top_count}\n"
        f"  Interval (mean/min/max): {interval_line}\n"
        f"  Random seed: {rec.seed if rec.seed is not None else 'N/A'}"
    )
