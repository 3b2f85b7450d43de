#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ASCII Morph - preview server
Run: asciimorph-preview  (or python -m asciimorph.web)
Opens http://localhost:5000
"""
from __future__ import annotations

import logging
import webbrowser
from threading import Timer

from flask import Flask, jsonify, render_template_string, request

from .config import EngineSettings, configure_logging, default_settings
from .core.errors import AsciiMorphError
from .core.generators import STYLES, generate_sequence
from .core.options import GeneratorOptions
from .core.overlays import Pointer, RippleConfig, apply_ripple
from .core.palettes import CHARACTER_SETS
from .utils.grid_ops import clamp_size

logger = logging.getLogger(__name__)

MAX_CELLS = 200 * 100
MAX_FRAMES = 240
PORT = 5000

HTML_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>ASCII Morph</title>
    <style>
        body { background: #0b0b0b; color: #fff; font-family: 'Helvetica Neue', Arial, sans-serif; }
        #asciiCanvas { font-family: 'Courier New', monospace; line-height: 1; white-space: pre; font-size: 12px; }
        .toolbar { display: flex; gap: 10px; margin-bottom: 16px; }
    </style>
</head>
<body>
    <div class="toolbar">
        <select id="style">{% for s in styles %}<option>{{ s }}</option>{% endfor %}</select>
        <input id="seed" value="preview">
        <button id="go">Generate</button>
    </div>
    <pre id="asciiCanvas"></pre>
    <script>
        let frames = [], idx = 0, pointer = null;
        const canvas = document.getElementById('asciiCanvas');
        async function show() {
            if (!frames.length) return;
            const frame = frames[idx];
            if (!pointer) { canvas.textContent = frame; return; }
            const r = await fetch('/render', {method: 'POST', headers: {'Content-Type': 'application/json'},
                body: JSON.stringify({frame: frame, pointer: pointer})});
            const data = await r.json();
            canvas.textContent = data.success ? data.frame : frame;
        }
        document.getElementById('go').onclick = async () => {
            const r = await fetch('/generate', {method: 'POST', headers: {'Content-Type': 'application/json'},
                body: JSON.stringify({style: document.getElementById('style').value,
                                      seed: document.getElementById('seed').value,
                                      width: 80, height: 30, frame_count: 40})});
            const data = await r.json();
            if (data.success) { frames = data.frames; idx = 0; }
        };
        canvas.onmousemove = (e) => {
            const rect = canvas.getBoundingClientRect();
            pointer = {x: (e.clientX - rect.left) / rect.width, y: (e.clientY - rect.top) / rect.height};
        };
        canvas.onmouseleave = () => { pointer = null; };
        setInterval(() => { if (frames.length) { idx = (idx + 1) % frames.length; show(); } }, 150);
    </script>
</body>
</html>
"""


def _json_body() -> dict:
    data = request.get_json(force=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError("request body must be a JSON object")
    return data


def _options_from_json(data: dict) -> GeneratorOptions:
    width, height = clamp_size(data.get("width", 40), data.get("height", 20))
    if width * height > MAX_CELLS:
        raise ValueError(f"grid too large: {width}x{height}")
    return GeneratorOptions(
        width=width,
        height=height,
        character_set=data.get("character_set", "box-drawing"),
        density=float(data.get("density", 0.3)),
        seed=data.get("seed") or None,
    )


def create_app(settings: EngineSettings | None = None) -> Flask:
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = 1 * 1024 * 1024
    app.config["ENGINE_SETTINGS"] = settings or default_settings()

    @app.route("/")
    def index():
        return render_template_string(HTML_TEMPLATE, styles=list(STYLES) + ["density"])

    @app.route("/palettes")
    def palettes():
        return jsonify({name: list(glyphs) for name, glyphs in CHARACTER_SETS.items() if glyphs})

    @app.route("/generate", methods=["POST"])
    def generate():
        try:
            data = _json_body()
            options = _options_from_json(data)
            frame_count = min(int(data.get("frame_count", 10)), MAX_FRAMES)
            sequence = generate_sequence(
                options,
                frame_count,
                style=data.get("style"),
                name=data.get("name"),
                settings=app.config["ENGINE_SETTINGS"],
            )
            return jsonify({"success": True, **sequence.to_dict()})
        except (KeyError, TypeError, ValueError, AsciiMorphError) as e:
            logger.warning("Generate error: %s", e)
            return jsonify({"success": False, "error": str(e)}), 400

    @app.route("/render", methods=["POST"])
    def render():
        try:
            data = _json_body()
            frame = data["frame"]
            if not isinstance(frame, str):
                raise TypeError("frame must be a string")
            raw = data.get("pointer")
            pointer = Pointer.clamped(float(raw["x"]), float(raw["y"])) if raw else None
            ripple = RippleConfig.from_dict(data.get("ripple") or {})
            return jsonify({"success": True, "frame": apply_ripple(frame, pointer, ripple)})
        except (KeyError, TypeError, ValueError, AsciiMorphError) as e:
            logger.warning("Render error: %s", e)
            return jsonify({"success": False, "error": str(e)}), 400

    return app


def open_browser():
    """Open browser after short delay"""
    webbrowser.open(f"http://localhost:{PORT}")


def main():
    configure_logging()
    logger.info("ASCII Morph preview on http://localhost:%d (Ctrl+C to stop)", PORT)
    Timer(1.5, open_browser).start()
    create_app().run(debug=False, port=PORT, threaded=True)


if __name__ == "__main__":
    main()
