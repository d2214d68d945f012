"""Rendering views into Sanic responses."""

import pytest
from sanic.response import HTTPResponse

from larabake import email, view
from larabake.http import ViewResponseBuilder
from larabake.mailer import Email
from larabake.support import Storage


@pytest.fixture
def options(template_root, write_template):
    write_template("Pages/home.tpl", "<h1>{{ title }}</h1>")
    write_template("Layout/default.tpl", "<main>{{ content_for_layout }}</main>")
    return {"template_paths": [template_root], "core_paths": [], "plugins": {}, "extension": ".tpl"}


async def test_awaiting_view_returns_html_response(options):
    response = await view("Pages/home", {"title": "Home"}, **options)

    assert isinstance(response, HTTPResponse)
    assert response.status == 200
    assert response.body == b"<main><h1>Home</h1></main>"
    assert response.content_type.startswith("text/html")


async def test_builder_chains_context_headers_and_status(options):
    builder = view("Pages/home", layout=False, **options)
    assert isinstance(builder, ViewResponseBuilder)

    response = await builder.with_context("title", "<Missing>").status(404).header("X-Frame-Options", "DENY")

    assert response.status == 404
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.body == b"<h1>&lt;Missing&gt;</h1>"


def test_email_helper_builds_composer():
    composer = email({"from": "app@example.com", "subject": "Hi"})

    assert isinstance(composer, Email)
    assert composer.subject() == "Hi"


async def test_framework_layout_is_the_fallback(template_root, write_template):
    write_template("Pages/about.tpl", "About us")

    response = await view(
        "Pages/about",
        template_paths=[template_root],
        core_paths=[Storage.core_templates()],
        plugins={},
        extension=".tpl",
    )

    body = response.body.decode()
    assert body.startswith("<!DOCTYPE html>")
    assert "About us" in body


def test_view_helper_survives_view_subpackage_import():
    import larabake
    from larabake.view import View  # noqa: F401

    assert larabake.view is view
    assert callable(larabake.view)
