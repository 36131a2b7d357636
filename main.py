"""
main.py — Sorting Visualizer Flask App
=======================================
The web server that puts the playback engine in a browser.

Routes:
  GET  /                       – main UI  (?algorithm=heap|insertion|merge|quick)
  GET  /api/state              – current controller state + bars  (?color=)
  POST /api/array/generate     – new random array  {size, seed?}
  POST /api/array/load         – user-supplied array  {array: "5, 3, 8, 1" | [5, 3, 8, 1]}
  POST /api/config/speed       – {speed: Fast|Medium|Slow} or {delay_ms: int}
  POST /api/run                – start a run, streams frames as NDJSON
  POST /api/cancel             – cancel the active run
  POST /api/record             – run to completion without pacing, return trace + metrics

State management:
  One PlaybackController per app, kept in app.extensions["playback"].
  It enforces the single-active-run rule itself: a second /api/run while
  one is streaming gets HTTP 409 and the first run carries on.
"""

import json
import logging
import random

from flask import Flask, Response, current_app, jsonify, render_template_string, request

from algorithms import get_algorithm, REGISTRY
from engine import PlaybackController, Recorder, DEFAULT_DELAY_MS
from engine.config import DEFAULT_ALGORITHM, PlaybackConfig
from errors import InvalidConfiguration, InvalidInput
from logging_config import setup_logging
from sequence import parse_array
from ui import (
    render_bars,
    playback_controls,
    size_control,
    speed_selector,
    color_selector,
    analytics_panel,
    pseudocode_viewer,
)


log = logging.getLogger("main")


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config=None) -> Flask:
    app = Flask(__name__)
    app.config.update(
        DEFAULT_DELAY_MS=DEFAULT_DELAY_MS,
        ARRAY_SEED=None,
    )
    if config:
        app.config.update(config)

    seed = app.config["ARRAY_SEED"]
    app.extensions["playback"] = PlaybackController(
        delay_ms=app.config["DEFAULT_DELAY_MS"],
        rng=random.Random(seed),
    )

    app.register_error_handler(InvalidConfiguration, _bad_request)
    app.register_error_handler(InvalidInput, _bad_request)
    register_routes(app)
    return app


def get_controller() -> PlaybackController:
    return current_app.extensions["playback"]


def _bad_request(err):
    log.warning("rejected request: %s", err)
    return jsonify({"error": str(err)}), 400


def _busy():
    return jsonify({
        "error": "A run is already active",
        "outcome": "concurrent_run_rejected",
    }), 409


def _load_array(raw) -> list:
    """Accept either "5, 3, 8, 1" or [5, 3, 8, 1]."""
    if isinstance(raw, str):
        return parse_array(raw)
    if isinstance(raw, list):
        return parse_array(" ".join(str(v) for v in raw))
    raise InvalidConfiguration("array must be a list of integers or a string")


def get_state(ctrl: PlaybackController) -> dict:
    return {
        "status":      ctrl.status.value,
        "array":       ctrl.sequence,
        "delay_ms":    ctrl.state.delay_ms,
        "steps_taken": ctrl.state.steps_taken,
        "active":      sorted(ctrl.state.active_indices),
        "algorithm":   ctrl.algorithm.key if ctrl.algorithm else None,
    }


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
def register_routes(app: Flask) -> None:

    @app.route("/")
    def index():
        ctrl  = get_controller()
        info  = get_algorithm(request.args.get("algorithm", DEFAULT_ALGORITHM)) or REGISTRY[DEFAULT_ALGORITHM]
        color = request.args.get("color", "Blue")
        busy  = ctrl.is_running

        return render_template_string(
            INDEX_TEMPLATE,
            algo_key=info.key,
            svg=render_bars(ctrl.sequence, (), color),
            playback=playback_controls(status=ctrl.status.value, algo_label=info.label),
            size=size_control(len(ctrl.sequence), disabled=busy),
            speed=speed_selector(disabled=busy),
            color=color_selector(color, disabled=busy),
            analytics=analytics_panel(),
            pseudocode=pseudocode_viewer(info.pseudocode, algo_label=info.label),
        )

    @app.route("/api/state")
    def api_state():
        ctrl  = get_controller()
        state = get_state(ctrl)
        state["svg"] = render_bars(ctrl.sequence, state["active"], request.args.get("color", "Blue"))
        return jsonify(state)

    # -- array --
    @app.route("/api/array/generate", methods=["POST"])
    def api_array_generate():
        data = request.get_json(silent=True) or {}
        ctrl = get_controller()
        cfg  = PlaybackConfig.from_options(data)

        values = ctrl.generate(cfg.size, seed=cfg.seed)
        if values is None:
            return _busy()
        return jsonify({"array": values, "svg": render_bars(values, (), data.get("color", "Blue"))})

    @app.route("/api/array/load", methods=["POST"])
    def api_array_load():
        data = request.get_json(silent=True) or {}
        ctrl = get_controller()
        values = _load_array(data.get("array", ""))
        if not ctrl.load(values):
            return _busy()
        return jsonify({"array": values, "svg": render_bars(values, (), data.get("color", "Blue"))})

    # -- config --
    @app.route("/api/config/speed", methods=["POST"])
    def api_config_speed():
        data = request.get_json(silent=True) or {}
        ctrl = get_controller()
        if data.get("delay_ms") is not None:
            ok = ctrl.set_delay(data["delay_ms"])
        else:
            ok = ctrl.set_speed(data.get("speed"))
        if not ok:
            return _busy()
        return jsonify({"delay_ms": ctrl.state.delay_ms})

    # -- runs --
    @app.route("/api/run", methods=["POST"])
    def api_run():
        data  = request.get_json(silent=True) or {}
        ctrl  = get_controller()
        cfg   = PlaybackConfig.from_options(data)
        color = data.get("color", "Blue")

        values = _load_array(data["array"]) if "array" in data else None
        # without delay_ms / speed the run keeps the controller's current cadence
        sets_delay = any(data.get(k) is not None for k in ("delay_ms", "speed", "delay_preset"))
        delay = cfg.delay_ms if sets_delay else None

        if not ctrl.start(cfg.algorithm, values=values, delay_ms=delay):
            return _busy()

        def stream():
            for frame in ctrl.frames():
                payload = frame.to_dict()
                payload["svg"] = render_bars(frame.snapshot, frame.active_indices, color)
                yield json.dumps(payload) + "\n"

        return Response(stream(), mimetype="application/x-ndjson")

    @app.route("/api/cancel", methods=["POST"])
    def api_cancel():
        return jsonify({"cancelled": get_controller().cancel()})

    @app.route("/api/record", methods=["POST"])
    def api_record():
        data = request.get_json(silent=True) or {}
        ctrl = get_controller()
        values = _load_array(data["array"]) if "array" in data else ctrl.sequence

        rec = Recorder()
        rec.start(data.get("algorithm", DEFAULT_ALGORITHM), values)
        metrics = rec.run_to_completion()

        export = rec.export()
        export["analytics"] = analytics_panel(metrics)
        export["svg"] = render_bars(rec.final_snapshot, (), data.get("color", "Blue"))
        return jsonify(export)


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Sorting Visualizer</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    :root {
      --bg-dark: #0d1117;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
      --accent-rose: #f43f5e;
    }
    body {
      font-family: -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-dark);
      color: var(--text-primary);
      display: flex;
      flex-direction: column;
      align-items: center;
      gap: 16px;
      padding: 24px;
    }
    .panel, .code-block {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 12px 16px;
    }
    .controls { display: flex; gap: 12px; flex-wrap: wrap; justify-content: center; }
    .button-row { display: flex; gap: 8px; margin: 8px 0; }
    button { padding: 6px 12px; border-radius: 6px; border: 1px solid var(--border); cursor: pointer; }
    button:disabled { opacity: 0.4; cursor: default; }
    .btn-primary { background: var(--accent-cyan); color: white; }
    .badge-running { color: var(--accent-cyan); }
    .badge-cancelled { color: var(--accent-rose); }
    .code-line { font-family: monospace; white-space: pre; color: var(--text-secondary); }
    .code-line.highlight { color: var(--text-primary); background: rgba(14, 165, 233, 0.2); }
    .explanation { margin-top: 8px; color: var(--text-secondary); font-size: 13px; min-height: 1em; }
  </style>
</head>
<body>
  <h1>Sorting Visualizer</h1>
  <div id="canvas-svg">{{ svg|safe }}</div>
  <div class="controls">
    <div id="playback">{{ playback|safe }}</div>
    {{ size|safe }}
    {{ speed|safe }}
    {{ color|safe }}
  </div>
  <div class="controls">
    <div id="analytics">{{ analytics|safe }}</div>
    <div id="pseudocode">{{ pseudocode|safe }}</div>
  </div>

  <script>
    const ALGORITHM = "{{ algo_key }}";

    // API helpers
    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data),
      });
      return await res.json();
    }

    function color() { return document.getElementById('color-selector').value; }

    function setBusy(busy, status) {
      ['btn-randomize', 'btn-sort', 'size-slider', 'speed-selector', 'color-selector']
        .forEach(id => { const el = document.getElementById(id); if (el) el.disabled = busy; });
      document.getElementById('btn-cancel').disabled = !busy;
      const badge = document.getElementById('run-status');
      badge.textContent = status.toUpperCase();
      badge.className = 'badge badge-' + status;
    }

    async function randomize() {
      const data = await post('/api/array/generate', {
        size: +document.getElementById('size-slider').value,
        color: color(),
      });
      if (data.svg) document.getElementById('canvas-svg').innerHTML = data.svg;
    }

    document.getElementById('size-slider')?.addEventListener('input', e => {
      document.getElementById('size-value').textContent = e.target.value;
    });
    document.getElementById('size-slider')?.addEventListener('change', randomize);
    document.getElementById('btn-randomize')?.addEventListener('click', randomize);

    function highlightLine(line, explanation) {
      document.querySelectorAll('#pseudocode .code-line').forEach(el => {
        el.classList.toggle('highlight', +el.dataset.line === line);
      });
      document.getElementById('step-explanation').textContent = explanation || '';
    }

    document.getElementById('color-selector')?.addEventListener('change', async () => {
      const state = await (await fetch('/api/state?color=' + encodeURIComponent(color()))).json();
      document.getElementById('canvas-svg').innerHTML = state.svg;
    });

    document.getElementById('speed-selector')?.addEventListener('change', async e => {
      await post('/api/config/speed', {speed: e.target.value});
    });

    document.getElementById('btn-cancel')?.addEventListener('click', async () => {
      await post('/api/cancel', {});
    });

    // Sorting: read the NDJSON frame stream and repaint per frame
    document.getElementById('btn-sort')?.addEventListener('click', async () => {
      const input = (await (await fetch('/api/state')).json()).array;
      const res = await fetch('/api/run', {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify({algorithm: ALGORITHM, color: color()}),
      });
      if (!res.ok) return;
      setBusy(true, 'running');

      const reader = res.body.getReader();
      const decoder = new TextDecoder();
      let buffered = '';
      let last = null;
      while (true) {
        const {value, done} = await reader.read();
        if (done) break;
        buffered += decoder.decode(value, {stream: true});
        const lines = buffered.split('\\n');
        buffered = lines.pop();
        for (const line of lines) {
          if (!line) continue;
          last = JSON.parse(line);
          document.getElementById('canvas-svg').innerHTML = last.svg;
          document.getElementById('current-step').textContent = last.step;
          highlightLine(last.line, last.explanation);
        }
      }
      setBusy(false, last && last.outcome ? last.outcome : 'idle');

      const rec = await post('/api/record', {algorithm: ALGORITHM, array: input});
      if (rec.analytics) document.getElementById('analytics').innerHTML = rec.analytics;
    });
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    setup_logging()
    log.info("Sorting Visualizer: open http://localhost:5000")
    create_app().run(debug=True, host="0.0.0.0", port=5000, threaded=True)
