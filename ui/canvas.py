"""
canvas.py — SVG Bar Renderer
=============================
Pure rendering function: Sequence snapshot + active indices → SVG string.

The renderer consumes:
  • values   – the snapshot to draw (one bar per element)
  • active   – indices touched by the current step (drawn in the highlight color)
  • color    – the bar color scheme picked in the UI
  • config   – visual config (bar size, gaps, fonts, …)

Design decisions:
  - NO mutation.  The caller passes in everything and gets back a string.
  - Bar height is value * `scale` px, so a value of 100 is always the
    tallest possible bar regardless of array size.
"""

from typing import Dict, Iterable, Optional, Sequence


# ---------------------------------------------------------------------------
# Visual Config — color palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    bg:      str = "#0d1117"

    # color scheme name → bar fill
    bar_colors: Dict[str, str] = {
        "Blue":   "#0ea5e9",
        "Green":  "#10b981",
        "Purple": "#a855f7",
        "Orange": "#f59e0b",
    }
    default_color:   str = "Blue"
    highlight_color: str = "#f43f5e"   # red: compared, swapped or written

    # bar geometry
    bar_width:   int = 25
    bar_gap:     int = 4
    scale:       int = 3
    padding:     int = 20

    # value labels
    label_color: str = "#ffffff"
    label_size:  int = 11
    label_weight: str = "700"


CONFIG = CanvasConfig()


def bar_fill(color: Optional[str], config: CanvasConfig = CONFIG) -> str:
    """Resolve a color-scheme name; unknown names fall back to the default."""
    return config.bar_colors.get(color or "", config.bar_colors[config.default_color])


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_bars(
    values: Sequence[int],
    active: Iterable[int] = (),
    color: str = "Blue",
    config: CanvasConfig = CONFIG,
    max_value: int = 100,
) -> str:
    """
    Returns an SVG string.

    Args:
        values    : Snapshot of the Sequence.
        active    : Indices to highlight.
        color     : Color-scheme name ("Blue", "Green", …).
        config    : Visual config.
        max_value : Value that maps to the tallest bar.
    """
    active = set(active)
    fill   = bar_fill(color, config)
    pitch  = config.bar_width + config.bar_gap
    width  = max(1, len(values)) * pitch + 2 * config.padding
    height = max_value * config.scale + 2 * config.padding
    floor  = height - config.padding

    svg_parts = [
        f'<svg width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
        f'<rect width="{width}" height="{height}" fill="{config.bg}"/>',
    ]

    for i, v in enumerate(values):
        h = v * config.scale
        x = config.padding + i * pitch
        y = floor - h
        bar = config.highlight_color if i in active else fill
        svg_parts.append(
            f'<g class="bar{" active" if i in active else ""}" data-index="{i}">'
            f'<rect x="{x}" y="{y}" width="{config.bar_width}" height="{h}" fill="{bar}"/>'
            f'<text x="{x + config.bar_width / 2}" y="{floor - 4}" text-anchor="middle" '
            f'font-size="{config.label_size}" font-weight="{config.label_weight}" '
            f'fill="{config.label_color}">{v}</text>'
            f'</g>'
        )

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)
