"""Landing page and single-page app shell.

Every GET outside /api serves the same static page, so client-side routes
such as /dashboard resolve on reload. Unknown /api paths get a JSON 404
instead of HTML.
"""

from __future__ import annotations

import html
from functools import lru_cache
from string import Template

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from app.core.errors import NotFoundAppError

router = APIRouter(tags=["Pages"])

FEATURES: tuple[tuple[str, str], ...] = (
    (
        "AI-Powered Coaching",
        "Context-aware therapeutic support for personalized mental health guidance.",
    ),
    (
        "Wellness Analytics",
        "User-centric tracking and insights to monitor your therapeutic progress.",
    ),
    (
        "HIPAA Compliant",
        "Enterprise-grade security with encryption for your data privacy and protection.",
    ),
    (
        "Responsive Design",
        "Modern UI with performance optimization across all devices and platforms.",
    ),
)

_PAGE = Template(
    """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>$site_name</title>
  <meta name="description" content="$tagline">
  <style>
    body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
           margin: 0; padding: 40px; min-height: 100vh; display: flex;
           align-items: center; justify-content: center;
           background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }
    .container { background: white; padding: 40px; border-radius: 12px; max-width: 800px;
                 box-shadow: 0 20px 40px rgba(0,0,0,0.1); text-align: center; }
    h1 { color: #333; margin-bottom: 20px; font-size: 2.5em; }
    p { color: #666; line-height: 1.6; }
    .features { display: grid; grid-template-columns: repeat(auto-fit, minmax(250px, 1fr));
                gap: 20px; margin-top: 30px; }
    .feature { background: #f8f9fa; padding: 20px; border-radius: 8px; }
    .status { background: #e8f5e8; color: #2d5a2d; padding: 10px; border-radius: 6px;
              margin-bottom: 20px; font-weight: bold; }
    .cta { background: #667eea; color: white; padding: 15px 30px; border-radius: 8px;
           text-decoration: none; display: inline-block; margin-top: 20px; font-weight: bold; }
  </style>
</head>
<body>
  <div class="container">
    <div class="status">System Operational</div>
    <h1>$site_name</h1>
    <p>$tagline</p>
    <div class="features">
$features
    </div>
    <a href="/health" class="cta">Check System Health</a>
  </div>
</body>
</html>
"""
)

TAGLINE = (
    "Advanced mental health platform delivering personalized, trauma-informed "
    "therapeutic experiences through intelligent digital coaching technologies."
)


@lru_cache(maxsize=8)
def render_landing_page(site_name: str) -> str:
    """Render the landing page for a site name (escaped)."""

    features = "\n".join(
        f'      <div class="feature"><h3>{html.escape(title)}</h3>'
        f"<p>{html.escape(body)}</p></div>"
        for title, body in FEATURES
    )
    return _PAGE.substitute(
        site_name=html.escape(site_name),
        tagline=html.escape(TAGLINE),
        features=features,
    )


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
@router.get("/{full_path:path}", response_class=HTMLResponse, include_in_schema=False)
async def landing_page(request: Request, full_path: str = "") -> HTMLResponse:
    """Serve the landing page for any non-API path.

    Raises:
        NotFoundAppError: For unmatched /api paths.
    """
    if full_path == "api" or full_path.startswith("api/"):
        raise NotFoundAppError(
            code="not_found",
            message="Not found",
            details={"path": request.url.path},
        )
    return HTMLResponse(render_landing_page(request.app.state.settings.app.site_name))
