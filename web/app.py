"""FastAPI shell for the public site's server-side routes."""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI
from fastapi.responses import Response
from pydantic import BaseModel

from backend_client.config import BackendSettings, get_settings
from sitemap.render import SITEMAP_CACHE_CONTROL, SITEMAP_MEDIA_TYPE, render_sitemap

logger = logging.getLogger(__name__)

app = FastAPI(title="Typavibe", description="Server routes for the public site")


class BackendStatus(BaseModel):
    url_present: bool
    anon_key_present: bool


@app.get("/sitemap.xml")
async def sitemap_xml(settings: BackendSettings = Depends(get_settings)) -> Response:
    body = render_sitemap(settings.site_base_url)
    return Response(
        content=body,
        media_type=SITEMAP_MEDIA_TYPE,
        headers={"Cache-Control": SITEMAP_CACHE_CONTROL},
    )


@app.get("/api/backend/status", response_model=BackendStatus)
async def backend_status(settings: BackendSettings = Depends(get_settings)) -> BackendStatus:
    status = BackendStatus(
        url_present=bool(settings.public_supabase_url),
        anon_key_present=bool(settings.public_supabase_anon_key),
    )
    if not (status.url_present and status.anon_key_present):
        logger.warning("Backend credentials incomplete: %s", status.model_dump())
    return status
