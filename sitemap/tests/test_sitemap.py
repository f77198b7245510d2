"""Tests for sitemap rendering."""

import unittest
import xml.etree.ElementTree as ET

from sitemap.pages import DEFAULT_PAGES, SitemapPage
from sitemap.render import SITEMAP_NAMESPACE, render_sitemap

NS = {"sm": SITEMAP_NAMESPACE}


class SitemapRenderTests(unittest.TestCase):
    def test_default_pages_rendered_in_order(self) -> None:
        xml = render_sitemap("https://typavibe.netlify.app", lastmod="2024-01-01T00:00:00+00:00")
        root = ET.fromstring(xml.encode("utf-8"))

        locs = [node.text for node in root.findall("sm:url/sm:loc", NS)]
        self.assertEqual(
            locs,
            [
                "https://typavibe.netlify.app/",
                "https://typavibe.netlify.app/explore",
                "https://typavibe.netlify.app/create",
                "https://typavibe.netlify.app/auth",
            ],
        )
        priorities = [node.text for node in root.findall("sm:url/sm:priority", NS)]
        self.assertEqual(priorities, ["1.0", "0.8", "0.7", "0.5"])
        freqs = [node.text for node in root.findall("sm:url/sm:changefreq", NS)]
        self.assertEqual(freqs, ["daily", "daily", "monthly", "monthly"])

    def test_lastmod_shared_and_defaults_to_now(self) -> None:
        root = ET.fromstring(render_sitemap("https://example.com").encode("utf-8"))
        stamps = {node.text for node in root.findall("sm:url/sm:lastmod", NS)}
        self.assertEqual(len(stamps), 1)
        self.assertTrue(stamps.pop().startswith("20"))

    def test_trailing_slash_on_base_url(self) -> None:
        xml = render_sitemap("https://example.com/", pages=DEFAULT_PAGES[:1], lastmod="x")
        self.assertIn("<loc>https://example.com/</loc>", xml)

    def test_values_escaped(self) -> None:
        pages = (SitemapPage(url="/search?a=1&b=2", changefreq="weekly", priority=0.3),)
        xml = render_sitemap("https://example.com", pages=pages, lastmod="x")
        self.assertIn("/search?a=1&amp;b=2", xml)
        ET.fromstring(xml.encode("utf-8"))

    def test_priority_out_of_range_rejected(self) -> None:
        pages = (SitemapPage(url="/", changefreq="daily", priority=1.5),)
        with self.assertRaises(ValueError):
            render_sitemap("https://example.com", pages=pages)


if __name__ == "__main__":
    unittest.main()
