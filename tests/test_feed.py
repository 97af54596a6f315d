"""Tests for RSS and Atom feed rendering."""

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from sitefeed.core.context import Context
from sitefeed.core.renderable import create_custom_page, create_page
from sitefeed.errors import TemplateResolutionError
from sitefeed.feed import (
    FeedConfiguration,
    create_feed_with,
    render_atom,
    render_atom_with,
    render_feed_with,
    render_rss,
    render_rss_with,
)

CONFIG = FeedConfiguration(
    feed_url="rss.xml",
    feed_title="Blog",
    feed_description="Posts",
    feed_author_name="A. Writer",
)


def _item(title: str, description: str, url: str, timestamp: str | None = None):
    fields = [("title", title), ("description", description)]
    if timestamp is not None:
        fields.append(("timestamp", timestamp))
    return create_custom_page(url, fields)


def _items():
    return [
        _item("Second", "d2", "/2", "2020-02-02"),
        _item("First", "d1", "/1", "2020-01-01"),
    ]


def test_render_rss_end_to_end(site, tmp_path: Path):
    path = render_rss(site, CONFIG, _items())
    text = path.read_text(encoding="utf-8")

    assert path == tmp_path / "_site" / "rss.xml"
    assert text.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert "<title>Blog</title>" in text
    assert "<![CDATA[Posts]]>" in text
    assert "<lastBuildDate>Sun, 02 Feb 2020 00:00:00 UT</lastBuildDate>" in text
    assert text.index("<title>Second</title>") < text.index("<title>First</title>")
    assert "<pubDate>Sun, 02 Feb 2020 00:00:00 UT</pubDate>" in text
    assert "<pubDate>Wed, 01 Jan 2020 00:00:00 UT</pubDate>" in text
    assert '<atom:link href="https://example.com/rss.xml"' in text
    assert "<link>https://example.com/2</link>" in text
    assert "<guid>https://example.com/1</guid>" in text
    assert "example.com//" not in text


def test_render_atom_end_to_end(site):
    config = FeedConfiguration("atom.xml", "Blog", "Posts", "A. Writer")

    text = render_atom(site, config, _items()).read_text(encoding="utf-8")

    assert "<name>A. Writer</name>" in text
    assert "<updated>2020-02-02T00:00:00Z</updated>" in text
    assert "<updated>2020-01-01T00:00:00Z</updated>" in text
    assert text.index("<title>Second</title>") < text.index("<title>First</title>")
    assert text.rstrip().endswith("</feed>")


def test_item_order_is_never_changed(site):
    items = [
        _item("Old", "d", "/old", "2001-01-01"),
        _item("New", "d", "/new", "2030-01-01"),
    ]

    text = render_rss(site, CONFIG, items).read_text(encoding="utf-8")

    assert text.index("<title>Old</title>") < text.index("<title>New</title>")
    assert "<lastBuildDate>Mon, 01 Jan 2001 00:00:00 UT</lastBuildDate>" in text


def test_feed_metadata_overrides_item_fields(site):
    feed = create_feed_with(
        lambda context: context,
        CONFIG,
        [_item("Item title", "Item description", "/i", "2020-01-01")],
        "rss.xml",
        "rss-item.xml",
    )

    listing_context = feed.source.produce_context(site)

    assert listing_context["title"] == "Blog"
    assert listing_context["description"] == "Posts"
    assert listing_context["authorName"] == "A. Writer"
    assert listing_context["url"] == "rss.xml"


def test_missing_timestamps_use_fallbacks(site):
    items = [_item("Second", "d2", "/2"), _item("First", "d1", "/1")]

    text = render_rss(site, CONFIG, items).read_text(encoding="utf-8")

    assert text.count("<pubDate>No date found.</pubDate>") == 2
    assert "<lastBuildDate>foo</lastBuildDate>" in text


def test_feed_timestamp_comes_from_first_item_only(site):
    items = [_item("Second", "d2", "/2"), _item("First", "d1", "/1", "2020-01-01")]

    text = render_atom(site, CONFIG, items).read_text(encoding="utf-8")

    assert "<updated>foo</updated>" in text
    assert "<updated>2020-01-01T00:00:00Z</updated>" in text


def test_zero_items_still_renders(site):
    text = render_rss(site, CONFIG, []).read_text(encoding="utf-8")

    assert "<title>Blog</title>" in text
    assert "<item>" not in text
    assert "<lastBuildDate></lastBuildDate>" in text


def test_with_variant_runs_before_date_formatting(site):
    def stamp(context: Context) -> Context:
        return context.merge([("timestamp", "2021-03-03"), ("description", "changed")])

    items = [_item("Only", "original", "/only")]

    text = render_rss_with(site, stamp, CONFIG, items).read_text(encoding="utf-8")

    assert "<![CDATA[changed]]>" in text
    assert "<pubDate>Wed, 03 Mar 2021 00:00:00 UT</pubDate>" in text
    assert "<lastBuildDate>Wed, 03 Mar 2021 00:00:00 UT</lastBuildDate>" in text


def test_atom_with_identity_matches_atom(site, tmp_path: Path):
    first = render_atom(site, CONFIG, _items()).read_text(encoding="utf-8")
    second = render_atom_with(site, lambda context: context, CONFIG, _items()).read_text(
        encoding="utf-8"
    )

    assert first == second


def test_feed_from_page_files(site, tmp_path: Path):
    posts = tmp_path / "posts"
    posts.mkdir()
    (posts / "second.md").write_text(
        "---\ntitle: Second\ndescription: d2\ntimestamp: 2020-02-02\n---\nBody two\n",
        encoding="utf-8",
    )
    (posts / "first.md").write_text(
        "---\ntitle: First\ndescription: d1\ntimestamp: 2020-01-01\n---\nBody one\n",
        encoding="utf-8",
    )

    pages = [create_page(posts / "second.md"), create_page(posts / "first.md")]
    text = render_rss(site, CONFIG, pages).read_text(encoding="utf-8")

    assert text.index("<title>Second</title>") < text.index("<title>First</title>")
    assert "second.html</link>" in text


def test_missing_feed_template_writes_nothing(site, tmp_path: Path):
    with pytest.raises(TemplateResolutionError):
        render_feed_with(site, lambda context: context, CONFIG, _items(), "nope.xml", "rss-item.xml")

    assert not (tmp_path / "_site" / "rss.xml").exists()


def test_site_templates_override_packaged_ones(site, write_template):
    write_template("rss.xml", "custom {{ title }}|{{ body }}")
    write_template("rss-item.xml", "<{{ title }}>")

    text = render_rss(site, CONFIG, _items()).read_text(encoding="utf-8")

    assert text == "custom Blog|<Second><First>"


def test_rss_links_are_escaped_xml(site):
    items = [_item("Query", "q", "/p?a=1&b=2", "2020-02-02")]

    root = ET.fromstring(render_rss(site, CONFIG, items).read_bytes())

    item = root.find("channel/item")
    assert item.findtext("link") == "https://example.com/p?a=1&b=2"
    assert item.findtext("guid") == "https://example.com/p?a=1&b=2"


def test_atom_links_are_escaped_xml(site):
    config = FeedConfiguration("atom.xml", "Blog", "Posts", "A. Writer")
    items = [_item("Query", "q", "/p?a=1&b=2", "2020-02-02")]
    ns = {"atom": "http://www.w3.org/2005/Atom"}

    root = ET.fromstring(render_atom(site, config, items).read_bytes())

    entry = root.find("atom:entry", ns)
    assert entry.find("atom:link", ns).get("href") == "https://example.com/p?a=1&b=2"
    assert entry.findtext("atom:id", namespaces=ns) == "https://example.com/p?a=1&b=2"
    assert root.findtext("atom:id", namespaces=ns) == "https://example.com/atom.xml"
