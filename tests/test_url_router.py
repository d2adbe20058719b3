import os

import pytest

from gemview.url_router import (
    URLRouter,
    absolute_url,
    clean_url_path,
    dir_of,
    encode_spaces,
    make_file_url,
    normalize_path,
)

# --- Path normalization ---

@pytest.mark.parametrize("path, expected", [
    ("/a/b/../c", "/a/c"),
    ("/a/./b", "/a/b"),
    ("/a/b/", "/a/b/"),
    ("/../a", "/a"),
    ("../a", "a"),
    ("a/../b", "b"),
    ("/a//b", "/a/b"),
    ("/", "/"),
    ("", ""),
    ("/a/b/..", "/a"),
    ("/a/b/../", "/a/"),
])
def test_normalize_path(path, expected):
    assert normalize_path(path) == expected


@pytest.mark.parametrize("path", [
    "/a/b/../../c/./d/", "./", "../../x", "a/./b/../../c", "//x//y//", "/.", "/..", ".", "a/..",
])
def test_normalize_is_idempotent(path):
    once = normalize_path(path)
    assert normalize_path(once) == once


def test_clean_url_path_leaves_clean_url_alone():
    url = "gemini://h/a/b?x"
    assert clean_url_path(url) is url


def test_clean_url_path_keeps_query():
    assert clean_url_path("gemini://h/a/../b?x=/../") == "gemini://h/b?x=/../"


def test_dir_of():
    assert dir_of("/a/b") == "/a"
    assert dir_of("/a/") == "/a/"
    assert dir_of("b") == ""


# --- Resolution ---

def test_resolve_parent_directory():
    assert absolute_url("scheme://h/a/b", "../c") == "scheme://h/c"


def test_resolve_current_directory():
    assert absolute_url("scheme://h/a/b", "./d") == "scheme://h/a/d"


def test_resolve_against_directory():
    assert absolute_url("scheme://h/a/", "d") == "scheme://h/a/d"


def test_resolve_new_query():
    assert absolute_url("scheme://h/a/b?x", "?y") == "scheme://h/a/b?y"


def test_resolve_opaque_schemes_untouched():
    for ref in ["data:text/plain,../x", "about:blank", "MAILTO:someone@example.com"]:
        assert absolute_url("gemini://h/a/b", ref) == ref


def test_resolve_absolute_path_is_not_merged():
    assert absolute_url("gemini://h/a/b", "/c/d") == "gemini://h/c/d"
    # percent-encoded slash still makes it absolute
    assert absolute_url("gemini://h/a/b", "%2Fc") == "gemini://h/%2Fc"


def test_resolve_full_url():
    assert absolute_url("gemini://h/a/b", "gemini://other.org/x") == "gemini://other.org/x"
    assert absolute_url("gemini://h/a/b", "gemini://other.org") == "gemini://other.org/"


def test_resolve_keeps_port():
    assert absolute_url("gemini://h:1966/a/b", "c") == "gemini://h:1966/a/c"


def test_resolve_host_only_reference_uses_default_scheme():
    assert absolute_url("titan://h/a", "//other.org/x") == "gemini://other.org/x"


def test_resolve_fragment_only_keeps_base():
    assert absolute_url("gemini://h/a/b?x", "#frag") == "gemini://h/a/b?x"
    assert absolute_url("gemini://h/a/b?x", "") == "gemini://h/a/b?x"


def test_resolve_hostless_reference_keeps_base_authority():
    assert absolute_url("gemini://h:1965/a/b", "gemini:/x") == "gemini://h:1965/x"
    # the scheme comes from the reference, the host from the base
    assert absolute_url("gemini://h/a/b", "file:///tmp/x.gmi") == "file://h/tmp/x.gmi"


def test_resolve_relative_to_hostless_base():
    assert absolute_url("gemini://h", "x") == "gemini://h/x"


# --- File URLs ---

def test_make_file_url_encodes():
    assert make_file_url("/tmp/a b/c.gmi") == "file:///tmp/a%20b/c.gmi"
    assert make_file_url("/tmp/x/../y.gmi") == "file:///tmp/y.gmi"


def test_encode_spaces():
    assert encode_spaces("gemini://h/a b c") == "gemini://h/a%20b%20c"


# --- Address bar text ---

def test_router_passes_full_urls():
    router = URLRouter()
    assert router.from_user_text("  gemini://example.org/x ") == "gemini://example.org/x"
    assert router.from_user_text("about:blank") == "about:blank"


def test_router_host_heuristic():
    router = URLRouter()
    assert router.from_user_text("example.org/x") == "gemini://example.org/x"


def test_router_local_path(tmp_path):
    page = tmp_path / "page.gmi"
    page.write_text("# hi\n")
    router = URLRouter()
    assert router.from_user_text(str(page)) == make_file_url(str(page))


def test_router_relative_to_base():
    router = URLRouter()
    assert router.from_user_text("sub", base="gemini://h/a/b") == "gemini://h/a/sub"


def test_router_to_text_decodes_file_urls():
    router = URLRouter()
    assert router.to_text("file:///tmp/a%20b") == "file:///tmp/a b"
    assert router.to_text("gemini://h/a%20b") == "gemini://h/a%20b"


def test_router_empty_text_keeps_base():
    assert URLRouter().from_user_text("   ", base="gemini://h/") == "gemini://h/"
