"""Sitemap XML serialization."""

from datetime import datetime, timezone
from typing import Iterable, Optional
from xml.sax.saxutils import escape

from .pages import DEFAULT_PAGES, SitemapPage

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
SITEMAP_MEDIA_TYPE = "application/xml"
SITEMAP_CACHE_CONTROL = "public, max-age=3600"


def render_sitemap(
    base_url: str,
    pages: Iterable[SitemapPage] = DEFAULT_PAGES,
    lastmod: Optional[str] = None,
) -> str:
    """Render ``pages`` as a sitemaps.org document rooted at ``base_url``.

    Every entry shares one ``lastmod``, the generation time unless given.
    """
    stamp = lastmod or datetime.now(timezone.utc).isoformat()
    root = base_url.rstrip("/")
    entries = "".join(_render_entry(root, page, stamp) for page in pages)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<urlset xmlns="{SITEMAP_NAMESPACE}">\n'
        f"{entries}"
        "</urlset>\n"
    )


def _render_entry(root: str, page: SitemapPage, lastmod: str) -> str:
    if not 0.0 <= page.priority <= 1.0:
        raise ValueError(f"Sitemap priority out of range for {page.url}: {page.priority}")
    return (
        "  <url>\n"
        f"    <loc>{escape(root + page.url)}</loc>\n"
        f"    <lastmod>{escape(lastmod)}</lastmod>\n"
        f"    <changefreq>{escape(page.changefreq)}</changefreq>\n"
        f"    <priority>{page.priority:.1f}</priority>\n"
        "  </url>\n"
    )
