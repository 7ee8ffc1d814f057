#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
QR Engine - Flask Web Application
"""

import logging
from io import BytesIO
from typing import Tuple

from flask import Flask, Response, render_template_string, request, send_file

from qrengine import (
    QRError, encode, get_plan, render_ascii, render_colored_png_from_plan,
    render_colored_svg_from_plan, render_png, render_svg,
)
from qrengine.tables import normalize_level

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'QR_BORDER': 4,
    'QR_SCALE': 10,
    'QR_DEFAULT_LEVEL': 'M',
}

TEMPLATE = """
<!doctype html>
<html>
<head>
  <meta charset="utf-8">
  <title>QR Engine</title>
  <style>
    body{font-family:Inter, Arial, sans-serif; padding:18px; background:#fff; color:#222}
    .row{display:flex; flex-wrap:wrap; gap:16px; align-items:flex-end}
    .field{display:flex; flex-direction:column; font-size:14px}
    input[type="text"], select, input[type="number"]{padding:6px 8px; font-family:monospace; border:1px solid #ccc; border-radius:6px}
    label{font-weight:600; margin-bottom:4px}
    button{padding:10px 16px; border-radius:8px; border:1px solid #333; background:#111; color:#fff; cursor:pointer}
    .card{margin-top:18px; border:1px solid #ddd; border-radius:10px; padding:14px}
    img{display:block; margin:8px 0; border:1px solid #ccc}
    .metrics{font-size:13px; color:#333; line-height:1.4}
    .error{color:#b00; font-weight:700}
  </style>
</head>
<body>
  <h1>QR Engine</h1>

  <form method="post">
    <div class="row">
      <div class="field" style="flex:1 1 100%">
        <label>Text</label>
        <input type="text" name="text" value="{{text|e}}" placeholder="Text to encode">
      </div>
    </div>
    <div class="row">
      <div class="field">
        <label>ECC</label>
        <select name="ecc">
          {% for v in ['L','M','Q','H'] %}
            <option value="{{v}}" {% if ecc==v %}selected{% endif %}>{{v}}</option>
          {% endfor %}
        </select>
      </div>
      <div class="field">
        <label>Border</label>
        <input type="number" name="border" min="0" max="20" value="{{border}}">
      </div>
      <button type="submit">Encode</button>
    </div>
  </form>

  {% if error %}<p class="error">{{error}}</p>{% endif %}

  {% if qr %}
  <div class="card">
    <img alt="qr" src="data:image/png;base64,{{qr.img_b64}}">
    <div class="metrics">
      Version {{qr.version}} ({{qr.size}}x{{qr.size}}), ECC {{qr.ecc}}, mask {{qr.mask}}<br>
      Modules: {{qr.modules}}, dark: {{qr.dark_modules}}, functional: {{qr.functional_modules}}<br>
      Data: {{qr.data_modules}}, check: {{qr.check_modules}}, remainder: {{qr.extra_modules}}
    </div>
  </div>
  {% endif %}
</body>
</html>
"""


def _clamp(value, default: int, low: int, high: int) -> int:
    try:
        value = int(value)
    except (ValueError, TypeError):
        return default
    if value < low or value > high:
        return default
    return value


def _read_params(req) -> Tuple[str, str, int, int]:
    """Extract and validate QR generation parameters from Flask request."""
    text = (req.values.get('text') or "").strip()
    ecc = (req.values.get('ecc') or app.config['QR_DEFAULT_LEVEL']).strip().upper()
    border = _clamp(req.values.get('border'), app.config['QR_BORDER'], 0, 20)
    scale = _clamp(req.values.get('scale'), app.config['QR_SCALE'], 1, 40)
    return text, ecc, border, scale


app = Flask(__name__)
app.config.from_mapping(DEFAULT_CONFIG)
app.config.from_prefixed_env('QRENGINE')


@app.errorhandler(QRError)
def handle_qr_error(ex):
    logger.warning(f"QR generation failed: {ex}")
    return f"Cannot encode: {ex}", 400


@app.errorhandler(ValueError)
def handle_bad_param(ex):
    logger.warning(f"Invalid parameter: {ex}")
    return str(ex), 400


def _encode_request():
    text, ecc, border, scale = _read_params(request)
    if not text:
        return None, border, scale
    logger.info(f"Encoding {len(text)} characters at level {ecc}")
    return encode(text, normalize_level(ecc)), border, scale


@app.route('/', methods=['GET', 'POST'])
def index():
    text, ecc, border, _ = _read_params(request)
    qr_view = None
    error = None

    if request.method == 'POST':
        if not text:
            error = "Enter the text to encode."
        else:
            try:
                code = encode(text, normalize_level(ecc))
                logger.info(f"Successfully generated QR code version {code.version}")
            except (QRError, ValueError) as ex:
                error = f"Cannot encode the text with the chosen parameters: {ex}"
                logger.error(f"QR generation failed: {ex}")
                code = None

            if code:
                plan = get_plan(code.version, code.level, code.mask)
                b64, metrics = render_colored_png_from_plan(code, plan, border=border, scale=6)
                qr_view = dict(metrics, version=code.version, ecc=str(code.level),
                               mask=code.mask, img_b64=b64)

    return render_template_string(TEMPLATE, text=text, ecc=ecc, border=border,
                                  qr=qr_view, error=error)


@app.route('/export/png', methods=['GET'])
def export_png_bw():
    code, border, scale = _encode_request()
    if code is None:
        return "Missing text", 400
    buf = BytesIO(render_png(code, scale=scale, border=border))
    return send_file(buf, as_attachment=True, download_name='qr_bw.png', mimetype='image/png')


@app.route('/export/svg', methods=['GET'])
def export_svg_bw():
    code, border, scale = _encode_request()
    if code is None:
        return "Missing text", 400
    buf = BytesIO(render_svg(code, scale=scale, border=border))
    return send_file(buf, as_attachment=True, download_name='qr_bw.svg', mimetype='image/svg+xml')


@app.route('/export/svg-colored', methods=['GET'])
def export_svg_colored():
    code, border, scale = _encode_request()
    if code is None:
        return "Missing text", 400
    plan = get_plan(code.version, code.level, code.mask)
    svg_bytes = render_colored_svg_from_plan(code, plan, border=border, scale=scale)
    return send_file(BytesIO(svg_bytes), as_attachment=True,
                     download_name='qr_colored_roles.svg',
                     mimetype='image/svg+xml')


@app.route('/export/ascii', methods=['GET'])
def export_ascii():
    code, border, _ = _encode_request()
    if code is None:
        return "Missing text", 400
    return Response(render_ascii(code, border=min(border, 4)), mimetype='text/plain')


if __name__ == "__main__":
    app.run(debug=True)
