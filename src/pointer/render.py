from __future__ import annotations
import asyncio
import logging
from typing import Optional, Tuple
from PIL import Image, ImageDraw

from .config import pcfg
from .telemetry import TrajectoryRecorder, recorder as global_recorder


def _progress_to_rgb(t: float) -> Tuple[int, int, int]:
    """
    Map session progress (0..1) to RGB:
      - start => blue (0, 120, 255)
      - mid   => green (60, 205, 60)
      - end   => red  (255, 60, 60)
    Uses two-segment interpolation: blue->green->red.
    """
    t = max(0.0, min(1.0, t))
    if t <= 0.5:
        u = t / 0.5
        c0, c1 = (0, 120, 255), (60, 205, 60)
    else:
        u = (t - 0.5) / 0.5
        c0, c1 = (60, 205, 60), (255, 60, 60)
    return tuple(int(a + (b - a) * u) for a, b in zip(c0, c1))  # type: ignore[return-value]


async def save_pointer_trajectory_jpeg(
    outfile: str = "pointer_trajectory.jpg",
    rec: Optional[TrajectoryRecorder] = None,
    *,
    background_color: Tuple[int, int, int] = (12, 12, 14),
    point_radius: int = 2,
    manual_ring_radius: int = 6,
    annotate: bool = True,
) -> str:
    """
    Render the session's pointer moves into a JPEG image, colouring each point
    by when it happened (blue first, red last) and ringing every position where
    a manual movement took over. The canvas is the bounding box of the events,
    scaled down if it would exceed the configured maximum size.
    Rendering is offloaded to a worker thread to avoid blocking the event loop.
    """
    rec = rec or global_recorder
    events_snapshot = list(rec.events)
    margin = pcfg.RENDER_MARGIN_PX

    def _render() -> str:
        if not events_snapshot:
            image = Image.new(
                "RGB", (pcfg.RENDER_MIN_SIZE_PX, pcfg.RENDER_MIN_SIZE_PX), background_color
            )
            if annotate:
                ImageDraw.Draw(image).text(
                    (margin, margin), "No pointer events recorded", fill=(180, 180, 180)
                )
            image.save(outfile, format="JPEG", quality=92, optimize=True)
            return outfile

        min_x = min(e.x for e in events_snapshot)
        max_x = max(e.x for e in events_snapshot)
        min_y = min(e.y for e in events_snapshot)
        max_y = max(e.y for e in events_snapshot)
        span = max(max_x - min_x, max_y - min_y, 1.0)
        inner = pcfg.RENDER_MAX_SIZE_PX - 2 * margin
        scale = min(1.0, inner / span)
        width = max(pcfg.RENDER_MIN_SIZE_PX, int((max_x - min_x) * scale) + 2 * margin)
        height = max(
            pcfg.RENDER_MIN_SIZE_PX, int((max_y - min_y) * scale) + 2 * margin + 16
        )

        image = Image.new("RGB", (width, height), background_color)
        draw = ImageDraw.Draw(image)

        def to_canvas(x: float, y: float) -> Tuple[float, float]:
            return margin + (x - min_x) * scale, margin + (y - min_y) * scale

        moves = [e for e in events_snapshot if e.kind == "move"]
        n = len(moves)
        for i, ev in enumerate(moves):
            px, py = to_canvas(ev.x, ev.y)
            color = _progress_to_rgb(i / max(1, n - 1))
            draw.ellipse(
                [px - point_radius, py - point_radius, px + point_radius, py + point_radius],
                fill=color,
                outline=None,
            )

        for ev in events_snapshot:
            if ev.kind == "manual":
                x, y = to_canvas(ev.x, ev.y)
                draw.ellipse(
                    [
                        x - manual_ring_radius,
                        y - manual_ring_radius,
                        x + manual_ring_radius,
                        y + manual_ring_radius,
                    ],
                    outline=(255, 200, 80),
                    width=2,
                )

        if annotate:
            manual = len(events_snapshot) - n
            summary = (
                f"Moves: {n} | Manual resets: {manual} | "
                f"Span {max_x - min_x:.0f}x{max_y - min_y:.0f}px | scale {scale:.2f}"
            )
            draw.text((margin, height - margin), summary, fill=(200, 200, 200))

        image.save(outfile, format="JPEG", quality=92, optimize=True)
        return outfile

    outfile_path = await asyncio.to_thread(_render)
    logging.getLogger(__name__).info("Pointer trajectory saved to %s", outfile_path)
    return outfile_path
