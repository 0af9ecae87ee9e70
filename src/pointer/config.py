from __future__ import annotations


class pcfg:
    """Pointer agent tuning."""

    # --- Random walk ---
    STEP_SIZE_PX = 1.0
    UPDATES_PER_SEC = 60.0

    # --- Reconciliation ---
    # A read that moved further than this since the last read was a human.
    MANUAL_MOVE_THRESHOLD_PX = 1.0
    # Accumulated drift must exceed this before a real move is sent.
    VISIBILITY_THRESHOLD_PX = 1.0

    # --- Trajectory rendering ---
    RENDER_MARGIN_PX = 20
    RENDER_MIN_SIZE_PX = 200
    RENDER_MAX_SIZE_PX = 2000
