"""PathResolver: the template directory cascade."""

import pytest

from larabake.exceptions import MissingTemplateRootException
from larabake.view import PathResolver


@pytest.fixture
def roots(tmp_path):
    app = tmp_path / "app"
    core = tmp_path / "core"
    blog = tmp_path / "plugins" / "Blog"
    for path in (app, core, blog):
        path.mkdir(parents=True)
    return app, core, blog


def touch(path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("x", encoding="utf-8")
    return path


def test_no_roots_raises():
    resolver = PathResolver([], [], {}, extension=".tpl")
    with pytest.raises(MissingTemplateRootException):
        resolver.paths()


def test_plugins_only_cascade_has_no_first_path(roots):
    _, _, blog = roots
    resolver = PathResolver([], [], {"Blog": blog}, extension=".tpl")

    assert resolver.paths() == []
    assert resolver.first_path("Blog") == blog
    with pytest.raises(MissingTemplateRootException):
        resolver.first_path()
    with pytest.raises(MissingTemplateRootException):
        resolver.default_path("Layout/default")


def test_app_paths_then_core(roots):
    app, core, _ = roots
    resolver = PathResolver([app], [core], {}, extension=".tpl")
    assert resolver.paths() == [app, core]


def test_plugin_paths(roots):
    app, core, blog = roots
    resolver = PathResolver([app], [core], {"Blog": blog}, extension=".tpl")

    assert resolver.paths("Blog") == [app / "Plugin" / "Blog", blog, app, core]


def test_theme_and_plugin_paths(roots):
    app, core, blog = roots
    resolver = PathResolver([app], [core], {"Blog": blog}, theme="Dark", extension=".tpl")

    assert resolver.paths("Blog") == [
        app / "Themed" / "Dark" / "Plugin" / "Blog",
        app / "Themed" / "Dark",
        app / "Plugin" / "Blog",
        blog,
        app,
        core,
    ]


def test_theme_name_is_studly_cased(roots):
    app, core, _ = roots
    resolver = PathResolver([app], [core], {}, theme="dark_blue", extension=".tpl")
    assert resolver.paths()[0] == app / "Themed" / "DarkBlue"


def test_theme_registered_as_plugin_uses_plugin_directory(roots, tmp_path):
    app, core, _ = roots
    dark = tmp_path / "plugins" / "Dark"
    resolver = PathResolver([app], [core], {"Dark": dark}, theme="Dark", extension=".tpl")
    assert resolver.paths() == [dark, app, core]


def test_duplicates_keep_first_occurrence(roots):
    app, core, _ = roots
    resolver = PathResolver([app, core, app], [core], {}, extension=".tpl")
    assert resolver.paths() == [app, core]


def test_theme_file_wins_over_core(roots):
    app, core, _ = roots
    themed = touch(app / "Themed" / "Dark" / "Pages" / "home.tpl")
    touch(core / "Pages" / "home.tpl")

    resolver = PathResolver([app], [core], {}, theme="Dark", extension=".tpl")
    assert resolver.find("Pages/home") == themed


def test_configured_extension_is_tried_in_every_path_first(roots):
    app, core, _ = roots
    touch(app / "Pages" / "home.tpl")
    html = touch(core / "Pages" / "home.html")

    resolver = PathResolver([app], [core], {}, extension=".html")
    assert resolver.find("Pages/home") == html


def test_falls_back_to_default_extension(roots):
    app, core, _ = roots
    tpl = touch(core / "Pages" / "home.tpl")

    resolver = PathResolver([app], [core], {}, extension=".html")
    assert resolver.extensions() == [".html", ".tpl"]
    assert resolver.find("Pages/home") == tpl


def test_find_returns_none_when_missing(roots):
    app, core, _ = roots
    resolver = PathResolver([app], [core], {}, extension=".tpl")
    assert resolver.find("Pages/nope") is None


def test_paths_are_cached_until_theme_changes(roots):
    app, core, _ = roots
    resolver = PathResolver([app], [core], {}, extension=".tpl")

    first = resolver.paths()
    assert resolver.paths() is first

    resolver.theme = "Dark"
    assert resolver.paths()[0] == app / "Themed" / "Dark"


def test_default_path(roots):
    app, core, blog = roots
    resolver = PathResolver([app], [core], {"Blog": blog}, extension=".tpl")

    assert resolver.default_path("Pages/home") == app / "Pages" / "home.tpl"
    assert resolver.default_path("Element/side", "Blog") == blog / "Element" / "side.tpl"
