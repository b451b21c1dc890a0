"""Tests for import-target classification and relative URL resolution."""

import pytest

from remote_import.urls import Local, Remote, classify, is_remote, resolve_relative

ORIGIN = "http://localhost:1234/fixture-3/style.css"


# ---------------------------------------------------------------------------
# classify
# ---------------------------------------------------------------------------


class TestClassifyWithoutOrigin:
    @pytest.mark.parametrize(
        "target",
        [
            "http://fonts.googleapis.com/css?family=Tangerine",
            "https://example.com/a.css",
            "HTTPS://EXAMPLE.COM/a.css",
        ],
    )
    def test_scheme_targets_are_remote(self, target):
        assert classify(target) == Remote(target)

    @pytest.mark.parametrize("target", ["a.css", "../a.css", "./a/b.css", "/abs/a.css"])
    def test_paths_are_local(self, target):
        assert classify(target) == Local(target)

    def test_scheme_relative_uses_default_scheme(self):
        assert classify("//example.com/a.css") == Remote("https://example.com/a.css")

    def test_scheme_relative_custom_scheme(self):
        result = classify("//example.com/a.css", default_scheme="http")
        assert result == Remote("http://example.com/a.css")

    def test_data_uri_is_local(self):
        assert isinstance(classify("data:text/css,a{}"), Local)

    @pytest.mark.parametrize("target", ["file:///tmp/a.css", "ftp://files.test/a.css"])
    def test_any_scheme_with_authority_is_remote(self, target):
        assert classify(target) == Remote(target)


class TestClassifyWithOrigin:
    def test_relative_resolves_against_remote_origin(self):
        assert classify("a/a.css", "http://h/fixture-1/style.css") == Remote(
            "http://h/fixture-1/a/a.css"
        )

    def test_scheme_relative_inherits_origin_scheme(self):
        assert classify("//cdn.test/x.css", "http://h/s.css") == Remote("http://cdn.test/x.css")

    def test_non_http_origin_keeps_paths_local(self):
        assert classify("a.css", "file:///tmp/style.css") == Local("a.css")

    def test_is_remote(self):
        assert is_remote("//x")
        assert is_remote("http://x")
        assert not is_remote("x.css")


# ---------------------------------------------------------------------------
# resolve_relative
# ---------------------------------------------------------------------------


class TestResolveRelative:
    @pytest.mark.parametrize(
        "reference, expected",
        [
            ("http://example.com/absolute.png", "http://example.com/absolute.png"),
            ("/root-relative.png", "http://localhost:1234/root-relative.png"),
            ("implicit-sibling.png", "http://localhost:1234/fixture-3/implicit-sibling.png"),
            ("./sibling.png", "http://localhost:1234/fixture-3/sibling.png"),
            ("../parent.png", "http://localhost:1234/parent.png"),
            ("../../grandparent.png", "http://localhost:1234/grandparent.png"),
            ("./font.woff", "http://localhost:1234/fixture-3/font.woff"),
        ],
    )
    def test_reference_forms(self, reference, expected):
        assert resolve_relative(reference, ORIGIN) == expected

    def test_parent_segments_inside_deep_origin(self):
        origin = "http://h/a/b/c/style.css"
        assert resolve_relative("x.png", origin) == "http://h/a/b/c/x.png"
        assert resolve_relative("../x.png", origin) == "http://h/a/b/x.png"
        assert resolve_relative("../../x.png", origin) == "http://h/a/x.png"

    def test_query_and_fragment_kept(self):
        assert resolve_relative("f.woff?v=2#iefix", ORIGIN) == (
            "http://localhost:1234/fixture-3/f.woff?v=2#iefix"
        )

    def test_data_uri_passes_through(self):
        assert resolve_relative("data:image/png;base64,AAAA", ORIGIN) == "data:image/png;base64,AAAA"
