# obsportal/render/page.py
from __future__ import annotations

from obsportal.core.config import CONFIG
from obsportal.utils.text_tools import esc

BOOTSTRAP_CSS = "https://cdn.jsdelivr.net/npm/bootstrap@4.6.2/dist/css/bootstrap.min.css"


def flash(kind: str, msg: str) -> str:
    """Inline status banner; an empty message clears the banner."""
    if not msg:
        return ""
    return (
        f'<div class="alert alert-{esc(kind)}" role="alert" aria-live="polite">'
        f"{esc(msg)}</div>"
    )


def render_page(
    content: str = "",
    table: str = "",
    flash_html: str = "",
    redirect_to: str | None = None,
    redirect_delay_ms: int | None = None,
) -> str:
    """
    Host page: #flash-messages on top, then #content-block, then #obs-table.
    `redirect_to` adds a meta refresh so the browser moves on after the delay.
    """
    refresh = ""
    if redirect_to:
        delay = CONFIG.REDIRECT_DELAY_MS if redirect_delay_ms is None else redirect_delay_ms
        refresh = (
            f'<meta http-equiv="refresh" content="{delay / 1000:g};url={esc(redirect_to)}"/>'
        )

    return f"""<!doctype html>
<html><head><meta charset="utf-8"/>{refresh}
<title>{esc(CONFIG.APP_TITLE)}</title>
<link rel="stylesheet" href="{BOOTSTRAP_CSS}"/>
<style>
body{{margin:20px}}
.container{{max-width:980px}}
form.inline{{display:inline}}
</style></head>
<body>
<div class="container">
  <nav class="mb-3">
    <a href="/" class="btn btn-link">Observations</a>
    <a href="/new_observation" class="btn btn-primary">New Observation</a>
  </nav>
  <div id="flash-messages">{flash_html}</div>
  <div id="content-block">{content}</div>
  <div id="obs-table">{table}</div>
</div>
</body></html>"""
