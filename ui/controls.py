"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls   – randomize / sort / cancel + run status badge
  • size_control        – array size slider [3, 50]
  • speed_selector      – Fast / Medium / Slow
  • color_selector      – bar color scheme
  • analytics_panel     – comparisons, swaps, writes, steps, wall time
  • pseudocode_viewer   – with live line highlighting

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from typing import List, Optional

from engine import RunMetrics, SPEED_PRESETS
from sequence import MIN_SIZE, MAX_SIZE
from ui.canvas import CONFIG


def _escape(text: str) -> str:
    return text.replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(status: str = "idle", algo_label: str = "") -> str:
    running = status == "running"
    disabled = "disabled" if running else ""
    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Playback</h3>
      <div class="button-row">
        <button id="btn-randomize" {disabled}>Randomize Array</button>
        <button id="btn-sort" class="btn-primary" {disabled}>▶ {_escape(algo_label) or 'Sort'}</button>
        <button id="btn-cancel" {'' if running else 'disabled'}>■ Cancel</button>
      </div>
      <div class="step-info">
        Status: <span id="run-status" class="badge badge-{status}">{status.upper()}</span>
        &nbsp; Step <span id="current-step">0</span>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Size / Speed / Color
# ---------------------------------------------------------------------------
def size_control(size: int, disabled: bool = False) -> str:
    return f"""
    <div class="panel size-control">
      <label>Array Size:</label>
      <input id="size-slider" type="range" min="{MIN_SIZE}" max="{MAX_SIZE}"
             value="{size}" {'disabled' if disabled else ''}>
      <span id="size-value">{size}</span>
    </div>
    """


def speed_selector(selected: Optional[str] = None, disabled: bool = False) -> str:
    options = []
    for name, ms in SPEED_PRESETS.items():
        sel = 'selected' if selected and selected.lower() == name else ''
        options.append(f'<option value="{name}" {sel}>{name.capitalize()} ({ms} ms)</option>')
    return f"""
    <div class="panel speed-control">
      <label>Speed:</label>
      <select id="speed-selector" {'disabled' if disabled else ''}>
        {''.join(options)}
      </select>
    </div>
    """


def color_selector(selected: str = "Blue", disabled: bool = False) -> str:
    options = []
    for name in CONFIG.bar_colors:
        sel = 'selected' if name == selected else ''
        options.append(f'<option value="{name}" {sel}>{name}</option>')
    return f"""
    <div class="panel color-control">
      <label>Bar Color:</label>
      <select id="color-selector" {'disabled' if disabled else ''}>
        {''.join(options)}
      </select>
    </div>
    """


# ---------------------------------------------------------------------------
# Analytics
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional[RunMetrics] = None) -> str:
    if not metrics:
        return """
        <div class="panel analytics-panel">
          <h3>📊 Analytics</h3>
          <p class="placeholder">Run an algorithm to see metrics.</p>
        </div>
        """

    verdict = "✅ Sorted" if metrics.sorted_ok else "❌ Not sorted"
    return f"""
    <div class="panel analytics-panel">
      <h3>📊 Analytics — {metrics.algo_label}</h3>
      <table>
        <tr><td>Elements:</td><td><strong>{metrics.size}</strong></td></tr>
        <tr><td>Comparisons:</td><td><strong>{metrics.comparisons}</strong></td></tr>
        <tr><td>Swaps:</td><td><strong>{metrics.swaps}</strong></td></tr>
        <tr><td>Writes:</td><td><strong>{metrics.overwrites}</strong></td></tr>
        <tr><td>Total Steps:</td><td><strong>{metrics.total_steps}</strong></td></tr>
        <tr><td>Wall Time:</td><td><strong>{metrics.wall_time_ms:.2f} ms</strong></td></tr>
        <tr><td>Result:</td><td><strong>{verdict}</strong></td></tr>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
def pseudocode_viewer(
    pseudocode_lines: List[str],
    current_line: int = -1,
    algo_label: str = "",
    explanation: str = "",
) -> str:
    """
    The page re-highlights `data-line` and refills #step-explanation from
    each streamed frame's `line` / `explanation`.
    """
    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        highlight = 'highlight' if i == current_line else ''
        lines_html.append(f'<div class="code-line {highlight}" data-line="{i}">{_escape(line)}</div>')

    return f"""
    <div class="code-block">
      <h3>{_escape(algo_label)}</h3>
      {''.join(lines_html)}
      <p id="step-explanation" class="explanation">{_escape(explanation)}</p>
    </div>
    """
