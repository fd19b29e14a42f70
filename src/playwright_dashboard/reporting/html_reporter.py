"""
Static HTML dashboard for an aggregated test run.

The document is self-contained: styles are inlined and the pass-rate ring
is plain SVG, so it can be opened from disk or served as a static file.
"""

import html
import math
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from ..models import DashboardSummary, GroupTotals, StatusKind, TestRecord, Totals
from ..results import pass_rate, pass_rate_tier
from .base import ReportGenerator

DEFAULT_TITLE = "Test Dashboard"

RING_RADIUS = 55

TIER_COLORS = {
    "full": "var(--green)",
    "warn": "var(--yellow)",
    "low": "var(--red)",
}

# Badge class and label per status; unknown is shown as skipped
STATUS_BADGES = {
    StatusKind.PASSED: ("pass", "PASS"),
    StatusKind.FAILED: ("fail", "FAIL"),
    StatusKind.FLAKY: ("flaky", "FLAKY"),
    StatusKind.SKIPPED: ("skip", "SKIP"),
    StatusKind.UNKNOWN: ("skip", "SKIP"),
}

FooterLink = Tuple[str, str]

_STYLES = """
  :root {
    --bg: #0d1117;
    --surface: #161b22;
    --border: #30363d;
    --text: #e6edf3;
    --muted: #8b949e;
    --green: #3fb950;
    --red: #f85149;
    --yellow: #d29922;
    --blue: #58a6ff;
    --purple: #bc8cff;
  }
  *, *::before, *::after { box-sizing: border-box; margin: 0; padding: 0; }
  body {
    font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Helvetica, Arial, sans-serif;
    background: var(--bg);
    color: var(--text);
    line-height: 1.5;
    padding: 2rem;
    max-width: 1100px;
    margin: 0 auto;
  }
  a { color: var(--blue); text-decoration: none; }
  a:hover { text-decoration: underline; }
  .header { text-align: center; margin-bottom: 2rem; }
  .header h1 { font-size: 1.75rem; margin-bottom: .25rem; }
  .meta { color: var(--muted); font-size: .85rem; }
  .cards { display: grid; grid-template-columns: repeat(auto-fit, minmax(140px, 1fr)); gap: 1rem; margin-bottom: 2rem; }
  .card { background: var(--surface); border: 1px solid var(--border); border-radius: 8px; padding: 1.25rem; text-align: center; }
  .card .value { font-size: 2rem; font-weight: 700; }
  .card .label { color: var(--muted); font-size: .8rem; text-transform: uppercase; letter-spacing: .05em; }
  .card.passed .value { color: var(--green); }
  .card.failed .value { color: var(--red); }
  .card.skipped .value { color: var(--yellow); }
  .card.flaky .value { color: var(--purple); }
  .card.duration .value { color: var(--blue); }
  .pass-rate { text-align: center; margin-bottom: 2rem; }
  .progress-ring { display: inline-block; position: relative; width: 140px; height: 140px; }
  .progress-ring svg { transform: rotate(-90deg); }
  .progress-ring .track { fill: none; stroke: var(--border); stroke-width: 10; }
  .progress-ring .fill { fill: none; stroke-width: 10; stroke-linecap: round; }
  .progress-ring .pct { position: absolute; top: 50%; left: 50%; transform: translate(-50%, -50%); font-size: 1.6rem; font-weight: 700; }
  .tier-full .pct { color: var(--green); }
  .tier-warn .pct { color: var(--yellow); }
  .tier-low .pct { color: var(--red); }
  .section { margin-bottom: 2rem; }
  .section h2 { font-size: 1.15rem; margin-bottom: .75rem; border-bottom: 1px solid var(--border); padding-bottom: .35rem; }
  .suite-row { display: flex; align-items: center; gap: .75rem; margin-bottom: .5rem; }
  .suite-name { width: 130px; font-size: .85rem; text-align: right; flex-shrink: 0; overflow-wrap: anywhere; }
  .suite-bar { flex: 1; height: 22px; background: var(--border); border-radius: 4px; overflow: hidden; display: flex; }
  .suite-bar .seg { height: 100%; }
  .suite-bar .seg.p { background: var(--green); }
  .suite-bar .seg.f { background: var(--red); }
  .suite-bar .seg.s { background: var(--yellow); }
  .suite-count { font-size: .8rem; color: var(--muted); width: 50px; flex-shrink: 0; }
  table { width: 100%; border-collapse: collapse; font-size: .85rem; }
  th { text-align: left; color: var(--muted); font-weight: 600; border-bottom: 2px solid var(--border); padding: .5rem .75rem; }
  td { padding: .5rem .75rem; border-bottom: 1px solid var(--border); }
  tr:hover { background: rgba(88,166,255,.04); }
  .badge { display: inline-block; padding: 2px 8px; border-radius: 10px; font-size: .75rem; font-weight: 600; }
  .badge.pass { background: rgba(63,185,80,.15); color: var(--green); }
  .badge.fail { background: rgba(248,81,73,.15); color: var(--red); }
  .badge.skip { background: rgba(210,153,34,.15); color: var(--yellow); }
  .badge.flaky { background: rgba(188,140,255,.15); color: var(--purple); }
  .footer { text-align: center; color: var(--muted); font-size: .75rem; margin-top: 2rem; padding-top: 1rem; border-top: 1px solid var(--border); }
"""


def _esc(value: object) -> str:
    return html.escape(str(value), quote=True)


def _format_percent(value: float) -> str:
    """Format a percentage without trailing zeros: 50.0 -> "50", 33.333 -> "33.33"."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return text or "0"


def format_timestamp(moment: datetime) -> str:
    """Format a generation timestamp, e.g. ``October 19, 2026, 11:36 AM UTC``.

    Day and hour are not zero-padded: ``January 2, 2026, 3:04 PM``.
    """
    hour = moment.hour % 12 or 12
    stamp = f"{moment:%B} {moment.day}, {moment.year}, {hour}:{moment:%M %p} {moment:%Z}"
    return stamp.strip()


def _render_header(title: str, generated_at: datetime) -> str:
    return f"""
<div class="header">
  <h1>{_esc(title)}</h1>
  <p class="meta">Last run: {_esc(format_timestamp(generated_at))}</p>
</div>"""


def _render_cards(totals: Totals) -> str:
    return f"""
<div class="cards">
  <div class="card total"><div class="value">{totals.total}</div><div class="label">Total Tests</div></div>
  <div class="card passed"><div class="value">{totals.passed}</div><div class="label">Passed</div></div>
  <div class="card failed"><div class="value">{totals.failed}</div><div class="label">Failed</div></div>
  <div class="card skipped"><div class="value">{totals.skipped}</div><div class="label">Skipped</div></div>
  <div class="card flaky"><div class="value">{totals.flaky}</div><div class="label">Flaky</div></div>
  <div class="card duration"><div class="value">{totals.duration_seconds:.1f}s</div><div class="label">Duration</div></div>
</div>"""


def _render_pass_rate(totals: Totals) -> str:
    pct = pass_rate(totals.passed, totals.total)
    tier = pass_rate_tier(pct)
    circumference = 2 * math.pi * RING_RADIUS
    offset = circumference - (pct / 100) * circumference
    return f"""
<div class="pass-rate tier-{tier}" data-pass-rate="{pct}">
  <div class="progress-ring">
    <svg width="140" height="140" viewBox="0 0 140 140">
      <circle class="track" cx="70" cy="70" r="{RING_RADIUS}" />
      <circle class="fill" cx="70" cy="70" r="{RING_RADIUS}" stroke="{TIER_COLORS[tier]}" stroke-dasharray="{circumference:.3f}" stroke-dashoffset="{offset:.3f}" />
    </svg>
    <span class="pct">{pct}%</span>
  </div>
  <p class="meta">Pass Rate</p>
</div>"""


def _render_group_row(name: str, group: GroupTotals) -> str:
    segments = []
    for css, count in (("p", group.passed), ("f", group.failed), ("s", group.skipped)):
        if count:
            width = _format_percent(count / group.total * 100)
            segments.append(f'<div class="seg {css}" style="width:{width}%"></div>')
    bar = "".join(segments)
    return f"""
  <div class="suite-row">
    <span class="suite-name">{_esc(name)}</span>
    <div class="suite-bar">{bar}</div>
    <span class="suite-count">{group.passed}/{group.total}</span>
  </div>"""


def _render_groups(groups: Dict[str, GroupTotals]) -> str:
    rows = "".join(_render_group_row(name, group) for name, group in groups.items())
    return f"""
<div class="section">
  <h2>Suite Breakdown</h2>{rows}
</div>"""


def _render_test_row(record: TestRecord) -> str:
    css, label = STATUS_BADGES[record.status]
    return (
        f"<tr><td>{_esc(record.group)}</td><td>{_esc(record.title)}</td>"
        f'<td><span class="badge {css}">{label}</span></td>'
        f"<td>{record.duration_seconds:.2f}s</td></tr>"
    )


def _render_tests(records: Sequence[TestRecord]) -> str:
    rows = "\n      ".join(_render_test_row(r) for r in records)
    return f"""
<div class="section">
  <h2>Test Details</h2>
  <table>
    <thead><tr><th>Suite</th><th>Test</th><th>Status</th><th>Duration</th></tr></thead>
    <tbody>
      {rows}
    </tbody>
  </table>
</div>"""


def _render_footer(links: Sequence[FooterLink]) -> str:
    if not links:
        return ""
    anchors = " &middot; ".join(
        f'<a href="{_esc(url)}">{_esc(label)}</a>' for label, url in links
    )
    return f"""
<div class="footer">
  {anchors}
</div>"""


def render_dashboard(
    totals: Totals,
    groups: Dict[str, GroupTotals],
    records: Sequence[TestRecord],
    generated_at: Optional[datetime] = None,
    title: str = DEFAULT_TITLE,
    footer_links: Sequence[FooterLink] = (),
) -> str:
    """
    Render the dashboard document.

    Args:
        totals: Run totals
        groups: Per-group totals, rendered in mapping order
        records: Test records, rendered in sequence order
        generated_at: Timestamp shown in the header (default: now, local time)
        title: Page and header title
        footer_links: (label, url) pairs shown in the footer

    Returns:
        Complete HTML document as a string
    """
    if generated_at is None:
        generated_at = datetime.now().astimezone()

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8" />
<meta name="viewport" content="width=device-width, initial-scale=1.0" />
<title>{_esc(title)}</title>
<style>{_STYLES}</style>
</head>
<body>
{_render_header(title, generated_at)}
{_render_cards(totals)}
{_render_pass_rate(totals)}
{_render_groups(groups)}
{_render_tests(records)}
{_render_footer(footer_links)}
</body>
</html>
"""


class HTMLReporter(ReportGenerator):
    """Generate the static HTML dashboard."""

    format_name = "html"

    def __init__(
        self,
        title: str = DEFAULT_TITLE,
        generated_at: Optional[datetime] = None,
        footer_links: Optional[List[FooterLink]] = None,
    ) -> None:
        self.title = title
        self.generated_at = generated_at
        self.footer_links = footer_links or []

    def generate(self, summary: DashboardSummary) -> str:
        """Generate HTML dashboard."""
        return render_dashboard(
            summary.totals,
            summary.groups,
            summary.records,
            generated_at=self.generated_at,
            title=self.title,
            footer_links=self.footer_links,
        )
