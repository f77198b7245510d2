from .pages import DEFAULT_PAGES, SitemapPage
from .render import SITEMAP_CACHE_CONTROL, SITEMAP_MEDIA_TYPE, render_sitemap

__all__ = [
    "DEFAULT_PAGES",
    "SITEMAP_CACHE_CONTROL",
    "SITEMAP_MEDIA_TYPE",
    "SitemapPage",
    "render_sitemap",
]
