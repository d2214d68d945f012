"""View rendering: views, extension chains, blocks and layouts."""

import pytest

from larabake.exceptions import (
    ExtensionCycleException,
    FrameworkException,
    MissingLayoutException,
    MissingViewException,
    SelfExtensionException,
    UnclosedBlockException,
)


async def test_plain_template_renders_raw_text(write_template, make_view):
    write_template("Pages/home.tpl", "Hello {{ name }}")
    view = make_view(view_path="Pages", layout=False)
    view.set("name", "World")

    assert await view.render("home") == "Hello World"


async def test_view_variables_are_escaped(write_template, make_view):
    write_template("Pages/home.tpl", "{{ name }}")
    view = make_view(view_path="Pages", layout=False, view_vars={"name": "<b>"})

    assert await view.render("home") == "&lt;b&gt;"


async def test_camel_cased_view_name_is_underscored(write_template, make_view):
    write_template("Posts/view_all.tpl", "all")
    view = make_view(view_path="Posts", layout=False)

    assert await view.render("viewAll") == "all"


async def test_extension_chain_substitutes_content(write_template, make_view):
    write_template("Pages/child.tpl", "{% do view.extend('/Common/parent') %}child")
    write_template("Common/parent.tpl", "{% do view.extend('/Common/grand') %}<p>{{ view.fetch('content') }}</p>")
    write_template("Common/grand.tpl", "<div>{{ view.fetch('content') }}</div>")
    view = make_view(view_path="Pages", layout=False)

    assert await view.render("child") == "<div><p>child</p></div>"


async def test_self_extension_raises(write_template, make_view):
    write_template("Pages/loop.tpl", "{% do view.extend('loop') %}x")
    view = make_view(view_path="Pages", layout=False)

    with pytest.raises(SelfExtensionException):
        await view.render("loop")


async def test_extension_cycle_raises(write_template, make_view):
    write_template("Pages/a.tpl", "{% do view.extend('b') %}a")
    write_template("Pages/b.tpl", "{% do view.extend('a') %}b")
    view = make_view(view_path="Pages", layout=False)

    with pytest.raises(ExtensionCycleException):
        await view.render("a")


async def test_transitive_extension_cycle_raises(write_template, make_view):
    write_template("Pages/a.tpl", "{% do view.extend('b') %}a")
    write_template("Pages/b.tpl", "{% do view.extend('c') %}b")
    write_template("Pages/c.tpl", "{% do view.extend('a') %}c")
    view = make_view(view_path="Pages", layout=False)

    with pytest.raises(ExtensionCycleException):
        await view.render("a")


async def test_block_left_open_raises(write_template, make_view):
    write_template("Pages/open.tpl", "{% do view.start('x') %}never closed")
    view = make_view(view_path="Pages", layout=False)

    with pytest.raises(UnclosedBlockException) as info:
        await view.render("open")

    assert info.value.block == "x"


async def test_block_started_twice_raises(write_template, make_view):
    write_template("Pages/twice.tpl", "{% do view.start('x') %}{% do view.start('x') %}")
    view = make_view(view_path="Pages", layout=False)

    with pytest.raises(FrameworkException):
        await view.render("twice")


async def test_missing_view_raises_with_first_candidate(template_root, make_view):
    view = make_view(view_path="Pages", layout=False)

    with pytest.raises(MissingViewException) as info:
        await view.render("nope")

    assert info.value.file == str(template_root / "Pages" / "nope.tpl")


async def test_layout_wraps_content(write_template, make_view):
    write_template("Pages/home.tpl", "{% do view.start('css') %}<link>{% do view.end() %}Body")
    write_template(
        "Layout/default.tpl",
        "<title>{{ title_for_layout }}</title>{{ scripts_for_layout }}<main>{{ content_for_layout }}</main>",
    )
    view = make_view(view_path="Pages")

    assert await view.render("home") == "<title>Pages</title><link><main>Body</main>"


async def test_registered_scripts_come_before_blocks(write_template, make_view):
    write_template(
        "Pages/home.tpl",
        "{% do view.add_script('<script a>') %}{% do view.add_script('<script b>') %}"
        "{% do view.add_script('<script a>') %}{% do view.start('meta') %}<meta>{% do view.end() %}Body",
    )
    write_template("Layout/default.tpl", "{{ scripts_for_layout }}")
    view = make_view(view_path="Pages")

    assert await view.render("home") == "<script a>\n\t<script b><meta>"


async def test_title_block_wins_over_default_title(write_template, make_view):
    write_template("Pages/home.tpl", "{% do view.assign('title', 'Welcome') %}Body")
    write_template("Layout/default.tpl", "{{ title_for_layout }}|{{ view.fetch('title') }}")
    view = make_view(view_path="Pages")

    assert await view.render("home") == "Welcome|Welcome"


async def test_assigned_block_values_are_escaped(write_template, make_view):
    write_template(
        "Pages/home.tpl",
        "{% do view.assign('title', name) %}{% do view.append('css', '<link>'|safe) %}"
        "{% do view.prepend('css', '<style>') %}Body",
    )
    write_template("Layout/default.tpl", "{{ title_for_layout }}|{{ view.fetch('title') }}|{{ view.fetch('css') }}")
    view = make_view(view_path="Pages", view_vars={"name": "<b>"})

    assert await view.render("home") == "&lt;b&gt;|&lt;b&gt;|&lt;style&gt;<link>"


def test_assign_then_fetch_escapes_plain_strings(make_view):
    view = make_view()
    view.assign("t", "<b>")

    assert view.fetch("t") == "&lt;b&gt;"


def test_assign_keeps_raw_text_without_autoescape(make_view):
    view = make_view(autoescape=False)
    view.assign("t", "<b>")

    assert view.fetch("t") == "<b>"


async def test_title_for_layout_variable(write_template, make_view):
    write_template("Pages/home.tpl", "Body")
    write_template("Layout/default.tpl", "{{ title_for_layout }}")
    view = make_view(view_path="Pages", view_vars={"title_for_layout": "Custom"})

    assert await view.render("home") == "Custom"


async def test_captured_block_is_available_in_layout(write_template, make_view):
    write_template("Pages/home.tpl", "{% do view.start('sidebar') %}<aside>{% do view.end() %}main")
    write_template("Layout/default.tpl", "{{ view.fetch('sidebar') }}|{{ content_for_layout }}")
    view = make_view(view_path="Pages")

    assert await view.render("home") == "<aside>|main"


async def test_named_layout_from_layout_path(write_template, make_view):
    write_template("Pages/home.tpl", "Body")
    write_template("Layout/admin/wide.tpl", "[{{ content_for_layout }}]")
    view = make_view(view_path="Pages", layout="wide", layout_path="admin")

    assert await view.render("home") == "[Body]"


async def test_layout_argument_false_disables_layout(write_template, make_view):
    write_template("Pages/home.tpl", "Body")
    view = make_view(view_path="Pages")

    assert await view.render("home", layout=False) == "Body"


async def test_disabled_layout_injects_no_layout_variables(write_template, make_view):
    write_template("Pages/home.tpl", "{% do view.start('script') %}<script>{% do view.end() %}Body")
    write_template("Layout/default.tpl", "[{{ content_for_layout }}]")
    view = make_view(view_path="Pages", auto_layout=False)

    assert await view.render("home") == "Body"
    assert "title_for_layout" not in view.get_vars()
    assert "scripts_for_layout" not in view.get_vars()
    assert "content_for_layout" not in view.get_vars()


async def test_missing_layout_raises(write_template, make_view):
    write_template("Pages/home.tpl", "Body")
    view = make_view(view_path="Pages", layout="nope")

    with pytest.raises(MissingLayoutException):
        await view.render("home")


async def test_layout_extends_another_layout(write_template, make_view):
    write_template("Pages/home.tpl", "Body")
    write_template("Layout/default.tpl", "{% do view.extend('base') %}<main>{{ content_for_layout }}</main>")
    write_template("Layout/base.tpl", "<html>{{ view.fetch('content') }}</html>")
    view = make_view(view_path="Pages")

    assert await view.render("home") == "<html><main>Body</main></html>"


async def test_second_render_returns_none(write_template, make_view):
    write_template("Pages/home.tpl", "Body")
    view = make_view(view_path="Pages", layout=False)

    assert await view.render("home") == "Body"
    assert await view.render("home") is None


async def test_render_without_view_file_renders_layout_only(write_template, make_view):
    write_template("Layout/default.tpl", "<{{ content_for_layout }}>")
    view = make_view(view_path="Pages")
    view.assign("content", "given")

    assert await view.render(False) == "<given>"


async def test_theme_template_wins(write_template, template_root, tmp_path, make_view):
    core = tmp_path / "core"
    write_template("Pages/home.tpl", "core", root=core)
    write_template("Themed/Dark/Pages/home.tpl", "dark")
    view = make_view(view_path="Pages", layout=False, theme="Dark", core_paths=[core])

    assert await view.render("home") == "dark"


async def test_plugin_view(write_template, tmp_path, make_view):
    blog = tmp_path / "Blog"
    write_template("Posts/index.tpl", "plugin index", root=blog)
    view = make_view(view_path="Posts", layout=False, plugins={"Blog": blog}, plugin="Blog")

    assert await view.render("index") == "plugin index"


async def test_app_overrides_plugin_view(write_template, tmp_path, make_view):
    blog = tmp_path / "Blog"
    write_template("Posts/index.tpl", "plugin index", root=blog)
    write_template("Plugin/Blog/Posts/index.tpl", "app override")
    view = make_view(view_path="Posts", layout=False, plugins={"Blog": blog})

    assert await view.render("Blog.index") == "app override"


async def test_after_render_file_listener_replaces_output(write_template, make_view):
    write_template("Pages/home.tpl", "original")
    view = make_view(view_path="Pages", layout=False)
    view.get_event_manager().on("View.afterRenderFile", lambda event: event.data[1].upper())

    assert await view.render("home") == "ORIGINAL"


async def test_render_events_are_dispatched_in_order(write_template, make_view):
    write_template("Pages/home.tpl", "Body")
    write_template("Layout/default.tpl", "{{ content_for_layout }}")
    view = make_view(view_path="Pages")

    seen = []
    for name in (
        "View.beforeRender",
        "View.afterRender",
        "View.beforeRenderFile",
        "View.afterRenderFile",
        "View.beforeLayout",
        "View.afterLayout",
    ):
        view.get_event_manager().on(name, lambda event: seen.append(event.name))

    await view.render("home")

    assert seen == [
        "View.beforeRender",
        "View.beforeRenderFile",
        "View.afterRenderFile",
        "View.afterRender",
        "View.beforeLayout",
        "View.beforeRenderFile",
        "View.afterRenderFile",
        "View.afterLayout",
    ]


def test_view_variables(make_view):
    view = make_view()
    view.set({"a": 1, "b": None})
    view.set("c", 3)

    assert view.get("a") == 1
    assert view.get("b", "default") == "default"
    assert view.get_vars() == ["a", "b", "c"]


def test_uuid_is_unique_per_view(make_view):
    view = make_view()
    first = view.uuid("form", "/posts/add")
    second = view.uuid("form", "/posts/add")

    assert first.startswith("form")
    assert first != second
