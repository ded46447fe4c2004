from __future__ import annotations

import html
import json
import math
from pathlib import Path
from typing import Dict, List, Sequence

from race_data_reporter.analysis.summary import aligned_pairs, decimate, decimation_step, summary_frame
from race_data_reporter.models.telemetry import TelemetryRun


DEFAULT_REPORT_FILENAME = "report.html"
DEFAULT_MAX_POINTS = 1000
CHART_JS_URL = "https://cdn.jsdelivr.net/npm/chart.js"

COLORS: Sequence[str] = (
    "rgba(255,99,132,0.8)", "rgba(54,162,235,0.8)", "rgba(255,206,86,0.8)",
    "rgba(75,192,192,0.8)", "rgba(153,102,255,0.8)", "rgba(255,159,64,0.8)",
    "rgba(199,199,199,0.8)", "rgba(83,102,255,0.8)", "rgba(255,99,71,0.8)",
    "rgba(60,179,113,0.8)", "rgba(238,130,238,0.8)", "rgba(30,144,255,0.8)",
    "rgba(255,215,0,0.8)", "rgba(255,105,180,0.8)", "rgba(0,206,209,0.8)",
)

_STYLE = (
    "body{font-family:Arial,sans-serif;margin:20px;}"
    "table{border-collapse:collapse;width:100%;margin-bottom:40px;}"
    "th,td{border:1px solid #ddd;padding:8px;text-align:right;}"
    "th{text-align:center;background-color:#f2f2f2;}"
    "tr:nth-child(even){background-color:#f9f9f9;}"
    ".chart-wrapper{width:100%;height:300px;margin-bottom:40px;position:relative;}"
    ".chart-wrapper canvas{width:100%!important;height:100%!important;}"
)

TITLE = "Relatório de Dados de Corrida"


def sanitize_identifier(name: str) -> str:
    """Map every character that is not an ASCII letter or digit to '_'."""
    return "".join(c if (c.isascii() and c.isalnum()) else "_" for c in name)


def _fmt2(v: float) -> str:
    if not math.isfinite(v):
        return "-"
    return f"{v:.2f}"


def _unique_ids(names: Sequence[str]) -> List[str]:
    seen: Dict[str, int] = {}
    out: List[str] = []
    for name in names:
        base = sanitize_identifier(name) + "Chart"
        n = seen.get(base, 0)
        seen[base] = n + 1
        out.append(base if n == 0 else f"{base}_{n}")
    return out


def _stats_table(run: TelemetryRun) -> str:
    parts = [
        "<h2>Resumo Estatístico</h2><table>"
        "<tr><th>Canal</th><th>Média</th><th>Mínimo</th><th>Máximo</th></tr>"
    ]
    table = summary_frame(run)[["channel", "mean", "min", "max"]]
    for rec in table.itertuples(index=False):
        parts.append(
            f'<tr><td style="text-align:left;">{html.escape(rec.channel)}</td>'
            f"<td>{_fmt2(rec.mean)}</td><td>{_fmt2(rec.min)}</td><td>{_fmt2(rec.max)}</td></tr>"
        )
    parts.append("</table>")
    return "".join(parts)


def _chart_script(run: TelemetryRun, name: str, canvas_id: str, color: str, max_points: int) -> str:
    x, y = aligned_pairs(run, name)
    k = decimation_step(x.size, max_points)
    x = decimate(x, k)
    y = decimate(y, k)
    pts = [{"x": float(a), "y": float(b)} for a, b in zip(x, y)]
    config = {
        "type": "scatter",
        "data": {
            "datasets": [
                {
                    "label": name,
                    "data": pts,
                    "showLine": False,
                    "borderColor": color,
                    "pointRadius": 2,
                }
            ]
        },
        "options": {
            "plugins": {"legend": {"display": False}},
            "scales": {
                "x": {"title": {"display": True, "text": f"{run.reference_name} (km/h)"}},
                "y": {"title": {"display": True, "text": name}},
            },
            "responsive": True,
            "maintainAspectRatio": False,
        },
    }
    # "</" must not appear verbatim inside a <script> element
    payload = json.dumps(config, ensure_ascii=False, separators=(",", ":")).replace("</", "<\\/")
    return (
        "{"
        f"const ctx=document.getElementById({json.dumps(canvas_id)}).getContext('2d');"
        f"new Chart(ctx,{payload});"
        "}"
    )


def render_report(run: TelemetryRun, *, max_points: int = DEFAULT_MAX_POINTS) -> str:
    """
    Build the complete HTML document for one telemetry run.

    The document is self-contained except for Chart.js, loaded from a CDN.
    Each plotted channel gets one scatter chart against the reference column,
    decimated to at most ``max_points`` points.
    """
    names = run.plotted_channels()
    ids = _unique_ids(names)
    ref = html.escape(run.reference_name)

    parts: List[str] = [
        '<!DOCTYPE html><html lang="pt"><head><meta charset="UTF-8">',
        f"<title>{TITLE}</title>",
        f"<style>{_STYLE}</style>",
        f'<script src="{CHART_JS_URL}"></script>',
        "</head><body>",
        f"<h1>{TITLE}</h1>",
        _stats_table(run),
        f"<h2>Gráficos: cada canal vs {ref}</h2>",
    ]
    for name, canvas_id in zip(names, ids):
        parts.append(
            '<div class="chart-wrapper">'
            f"<h3>{html.escape(name)} vs {ref}</h3>"
            f'<canvas id="{canvas_id}"></canvas>'
            "</div>"
        )

    parts.append("<script>")
    for i, (name, canvas_id) in enumerate(zip(names, ids)):
        parts.append(_chart_script(run, name, canvas_id, COLORS[i % len(COLORS)], max_points))
    parts.append("</script>")
    parts.append("</body></html>")
    return "".join(parts)


def write_report(
    run: TelemetryRun,
    path: str | Path = DEFAULT_REPORT_FILENAME,
    *,
    max_points: int = DEFAULT_MAX_POINTS,
) -> Path:
    """Render and write the report in one call. Returns the output path."""
    out = Path(path).expanduser()
    document = render_report(run, max_points=max_points)
    out.write_text(document, encoding="utf-8")
    return out
