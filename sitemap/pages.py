"""Static route metadata published in the sitemap."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SitemapPage:
    url: str
    changefreq: str
    priority: float


DEFAULT_PAGES: Tuple[SitemapPage, ...] = (
    SitemapPage(url="/", changefreq="daily", priority=1.0),
    SitemapPage(url="/explore", changefreq="daily", priority=0.8),
    SitemapPage(url="/create", changefreq="monthly", priority=0.7),
    SitemapPage(url="/auth", changefreq="monthly", priority=0.5),
)
