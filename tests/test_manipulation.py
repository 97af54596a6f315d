"""Tests for context manipulations."""

from sitefeed.core.context import Context, Deferred, Fallback
from sitefeed.core.manipulation import (
    chain,
    change_extension,
    change_url,
    compose,
    copy_value,
    identity,
    parse_date,
    render_date,
    render_value,
)

RSS_FORMAT = "%a, %d %b %Y %H:%M:%S UT"
ATOM_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def _append(key: str, suffix: str):
    def manipulation(context: Context) -> Context:
        return context.with_field(key, context.get(key, "") + suffix)

    return manipulation


def test_compose_runs_first_manipulation_first():
    manipulation = compose(_append("trail", "a"), _append("trail", "b"))

    assert manipulation(Context())["trail"] == "ab"


def test_compose_is_associative():
    f, g, h = _append("x", "f"), _append("x", "g"), _append("x", "h")
    left = compose(compose(f, g), h)
    right = compose(f, compose(g, h))

    assert left(Context())["x"] == right(Context())["x"] == "fgh"


def test_identity_is_neutral():
    m = _append("x", "m")
    context = Context({"x": "start-"})

    assert compose(identity, m)(context).resolve() == m(context).resolve()
    assert compose(m, identity)(context).resolve() == m(context).resolve()
    assert compose(identity, m) is m


def test_empty_chain_is_identity():
    assert chain([]) is identity


def test_render_date_formats_rss_date():
    manipulation = render_date("timestamp", RSS_FORMAT, "No date found.")

    context = manipulation(Context({"timestamp": "2020-02-02"}))

    assert context["timestamp"] == "Sun, 02 Feb 2020 00:00:00 UT"


def test_render_date_converts_offsets_to_utc():
    manipulation = render_date("timestamp", ATOM_FORMAT, "No date found.")

    context = manipulation(Context({"timestamp": "2020-02-02T10:30:00+02:00"}))

    assert context["timestamp"] == "2020-02-02T08:30:00Z"


def test_render_date_reads_a_separate_source_field():
    manipulation = render_date("published", ATOM_FORMAT, "none", source="path")

    context = manipulation(Context({"path": "2009-01-31-hello-world.md"}))

    assert context["published"] == "2009-01-31T00:00:00Z"
    assert context["path"] == "2009-01-31-hello-world.md"


def test_render_date_missing_field_writes_fallback():
    manipulation = render_date("timestamp", RSS_FORMAT, "No date found.")

    context = manipulation(Context({"title": "Untitled"}))

    assert context["timestamp"] == "No date found."
    assert isinstance(context.field("timestamp"), Fallback)


def test_render_date_unparseable_value_writes_default():
    manipulation = render_date("timestamp", RSS_FORMAT, "No date found.")

    context = manipulation(Context({"timestamp": "last tuesday"}))

    assert context["timestamp"] == "No date found."
    assert not isinstance(context.field("timestamp"), Fallback)


def test_parse_date_accepts_zulu_suffix():
    parsed = parse_date("2021-03-04T05:06:07Z")

    assert parsed is not None
    assert parsed.strftime(ATOM_FORMAT) == "2021-03-04T05:06:07Z"
    assert parse_date("not a date") is None


def test_render_value_keeps_deferred_sources_lazy():
    calls = []

    def compute() -> str:
        calls.append(1)
        return "hello"

    manipulation = render_value("greeting", "shout", str.upper)
    context = manipulation(Context([("greeting", Deferred(compute))]))

    assert calls == []
    assert context["shout"] == "HELLO"
    assert len(calls) == 1


def test_render_value_missing_source_leaves_context_unchanged():
    context = Context({"title": "x"})

    assert render_value("missing", "out", str.upper)(context) is context


def test_copy_value_and_url_helpers():
    context = Context({"url": "posts/first.html", "title": "First"})

    copied = copy_value("title", "heading")(context)
    moved = change_url(lambda url: "/" + url)(context)
    renamed = change_extension("xml")(context)

    assert copied["heading"] == "First"
    assert moved["url"] == "/posts/first.html"
    assert renamed["url"] == "posts/first.xml"
