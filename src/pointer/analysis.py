from __future__ import annotations
import math
from typing import Optional

from .telemetry import TrajectoryRecorder, recorder as global_recorder


def summarize_moves(rec: Optional[TrajectoryRecorder] = None) -> str:
    """Summarize the pointer agent's recorded moves.

    Reports move and manual-reset counts, net displacement between the first
    and last move, and the furthest any move strayed from the first one.
    """
    rec = rec or global_recorder
    moves = [event for event in rec.events if event.kind == "move"]
    manual = sum(1 for event in rec.events if event.kind == "manual")
    if not moves:
        return f"No move data (manual resets={manual})"
    first, last = moves[0], moves[-1]
    net = math.hypot(last.x - first.x, last.y - first.y)
    furthest = max(math.hypot(e.x - first.x, e.y - first.y) for e in moves)
    duration = max(0.0, last.t - first.t)
    rate = (len(moves) / duration) if duration > 0 else 0.0
    return (
        f"pointer: moves={len(moves)}, manual resets={manual}, "
        f"net={net:.1f}px, furthest={furthest:.1f}px, "
        f"rate={rate:.2f} moves/s over {duration:.1f}s"
    )
