"""
ui/
---
Presentation layer.

    from ui import render_bars
    from ui import playback_controls, speed_selector, …
"""

from ui.canvas import render_bars, CanvasConfig

from ui.controls import (
    playback_controls,
    size_control,
    speed_selector,
    color_selector,
    analytics_panel,
    pseudocode_viewer,
)

__all__ = [
    "render_bars",
    "CanvasConfig",
    "playback_controls",
    "size_control",
    "speed_selector",
    "color_selector",
    "analytics_panel",
    "pseudocode_viewer",
]
